"""Dining table ORM model."""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restodesk.db.base import Base

TABLE_STATUSES = ("free", "occupied", "reserved")


class DiningTable(Base):
    """Physical table on the floor plan.

    Merges are stored on the member side: every member points at its primary
    through ``merged_into_id`` and the primary exposes the member set as
    ``merged_with``.
    """

    __tablename__ = "tables"
    __table_args__ = (
        CheckConstraint("number > 0", name="ck_tables_number_positive"),
        CheckConstraint("capacity > 0", name="ck_tables_capacity_positive"),
        CheckConstraint("merged_into_id IS NULL OR merged_into_id <> id", name="ck_tables_not_merged_into_self"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(Enum(*TABLE_STATUSES, name="table_status"), nullable=False, default="free")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_occupied_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    x_position: Mapped[float | None] = mapped_column(Float, nullable=True)
    y_position: Mapped[float | None] = mapped_column(Float, nullable=True)
    merged_into_id: Mapped[int | None] = mapped_column(ForeignKey("tables.id"), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    merged_into: Mapped["DiningTable | None"] = relationship(back_populates="members", remote_side="DiningTable.id")
    members: Mapped[list["DiningTable"]] = relationship(back_populates="merged_into", order_by="DiningTable.number")
    orders: Mapped[list["Order"]] = relationship(back_populates="table")
    reservations: Mapped[list["Reservation"]] = relationship(back_populates="table", cascade="all, delete-orphan")

    @property
    def merged_with(self) -> list[int]:
        return [member.id for member in self.members]
