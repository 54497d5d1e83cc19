"""Waiter account administration endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from restodesk.auth import WAITERS_MANAGE, require_capability
from restodesk.db.session import get_db
from restodesk.models.user import Profile
from restodesk.schemas.auth import WaiterCreate, WaiterRead
from restodesk.services import account_service

router: APIRouter = APIRouter()


def _serialize_waiter(profile: Profile) -> WaiterRead:
    return WaiterRead(
        id=profile.user_id,
        email=profile.email,
        full_name=profile.full_name,
        role=profile.role,
        created_at=profile.created_at,
    )


@router.get("", response_model=list[WaiterRead])
def list_waiters(
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(WAITERS_MANAGE)),
) -> list[WaiterRead]:
    return [_serialize_waiter(profile) for profile in account_service.list_waiters(db)]


@router.post("", response_model=WaiterRead, status_code=status.HTTP_201_CREATED)
def create_waiter(
    payload: WaiterCreate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(WAITERS_MANAGE)),
) -> WaiterRead:
    profile = account_service.create_waiter(db, email=payload.email, password=payload.password, full_name=payload.full_name)
    return _serialize_waiter(profile)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_waiter(
    user_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(WAITERS_MANAGE)),
) -> Response:
    account_service.delete_waiter(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
