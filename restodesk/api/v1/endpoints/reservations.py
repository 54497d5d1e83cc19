"""Reservation endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from restodesk.auth import RESERVATIONS_MANAGE, require_capability
from restodesk.db.session import get_db
from restodesk.models.user import Profile
from restodesk.schemas.reservation import ReservationCreate, ReservationRead, ReservationUpdate
from restodesk.services import reservation_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ReservationRead])
def list_reservations(
    date_value: date | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(RESERVATIONS_MANAGE)),
) -> list[ReservationRead]:
    return [ReservationRead.model_validate(row) for row in reservation_service.list_reservations(db, on_date=date_value)]


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    payload: ReservationCreate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(RESERVATIONS_MANAGE)),
) -> ReservationRead:
    return ReservationRead.model_validate(reservation_service.create_reservation(db, payload.model_dump()))


@router.patch("/{reservation_id}", response_model=ReservationRead)
def update_reservation(
    reservation_id: int,
    payload: ReservationUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(RESERVATIONS_MANAGE)),
) -> ReservationRead:
    reservation = reservation_service.get_reservation(db, reservation_id)
    updated = reservation_service.update_reservation(db, reservation, payload.model_dump(exclude_unset=True))
    return ReservationRead.model_validate(updated)


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(RESERVATIONS_MANAGE)),
) -> Response:
    reservation_service.delete_reservation(db, reservation_service.get_reservation(db, reservation_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
