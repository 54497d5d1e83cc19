"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from restodesk.auth import capabilities_for
from restodesk.core.security import bearer_scheme, create_access_token, get_current_profile, revoke_token
from restodesk.db.session import get_db
from restodesk.models.user import Profile
from restodesk.schemas.auth import LoginRequest, ProfileResponse, SignUpRequest, TokenResponse
from restodesk.services.account_service import authenticate_user, sign_up
from restodesk.services.user_service import ensure_profile

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


def serialize_profile(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.user_id,
        email=profile.email,
        full_name=profile.full_name,
        role=profile.role,
        capabilities=sorted(capabilities_for(profile.role)),
        created_at=profile.created_at,
    )


@router.post("/signup", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignUpRequest, db: Session = Depends(get_db)) -> ProfileResponse:
    user = sign_up(db, email=payload.email, password=payload.password, full_name=payload.full_name)
    return serialize_profile(ensure_profile(db, user))


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    user = authenticate_user(db, email=payload.email, password=payload.password)
    if user is None:
        logger.info("[AUTH] Failed login for %s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    return TokenResponse(access_token=create_access_token(data={"sub": str(user.id)}))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> Response:
    revoke_token(credentials.credentials)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=ProfileResponse)
def me(profile: Profile = Depends(get_current_profile)) -> ProfileResponse:
    return serialize_profile(profile)
