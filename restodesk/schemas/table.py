"""Table API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TableStatus = Literal["free", "occupied", "reserved"]


class TableCreate(BaseModel):
    number: int = Field(gt=0)
    capacity: int = Field(gt=0)
    notes: str | None = None
    location: str | None = None


class TableUpdate(BaseModel):
    number: int = Field(gt=0)
    capacity: int = Field(gt=0)
    location: str | None = None


class TableStatusUpdate(BaseModel):
    status: TableStatus


class TablePositionUpdate(BaseModel):
    x: float
    y: float


class TableNotesUpdate(BaseModel):
    notes: str | None = None


class TableMergeRequest(BaseModel):
    member_ids: list[int]


class TableRead(BaseModel):
    """Serialized table with its merge relation."""

    id: int
    number: int
    capacity: int
    status: str
    notes: str | None
    location: str | None
    last_occupied_at: datetime | None
    x_position: float | None
    y_position: float | None
    merged_with: list[int]
    merged_into_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
