"""Authentication and staff account schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    """Payload for self sign-up."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    full_name: str | None = None


class LoginRequest(BaseModel):
    """Payload for user login."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    """Current staff profile with the capabilities its role grants."""

    id: int
    email: str
    full_name: str | None
    role: str
    capabilities: list[str]
    created_at: datetime


class WaiterCreate(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)


class WaiterRead(BaseModel):
    id: int
    email: str
    full_name: str | None
    role: str
    created_at: datetime
