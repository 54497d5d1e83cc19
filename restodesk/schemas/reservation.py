"""Reservation API schemas."""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from restodesk.schemas.partial import reject_explicit_nulls

ReservationStatus = Literal["confirmed", "cancelled", "completed"]


class ReservationCreate(BaseModel):
    table_id: int
    customer_name: str = Field(min_length=1)
    customer_phone: str | None = None
    customer_email: str | None = None
    guests: int = Field(ge=1)
    date: dt.date
    time: dt.time
    duration: str = "02:00"
    notes: str | None = None


class ReservationUpdate(BaseModel):
    table_id: int | None = None
    customer_name: str | None = Field(default=None, min_length=1)
    customer_phone: str | None = None
    customer_email: str | None = None
    guests: int | None = Field(default=None, ge=1)
    date: dt.date | None = None
    time: dt.time | None = None
    duration: str | None = None
    notes: str | None = None
    status: ReservationStatus | None = None

    @model_validator(mode="after")
    def _no_null_required(self) -> "ReservationUpdate":
        reject_explicit_nulls(self, ("table_id", "customer_name", "guests", "date", "time", "duration", "status"))
        return self


class ReservationRead(ReservationCreate):
    id: int
    status: str
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)
