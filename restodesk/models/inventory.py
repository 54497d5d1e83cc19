"""Inventory ORM models."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restodesk.db.base import Base

MOVEMENT_TYPES = ("in", "out")


class InventoryItem(Base):
    """Stocked ingredient or supply."""

    __tablename__ = "inventory_items"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity_non_negative"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False, default=Decimal("0"))
    unit: Mapped[str] = mapped_column(String(32), nullable=False)
    minimum_quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False, default=Decimal("0"))
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

    movements: Mapped[list["InventoryMovement"]] = relationship(
        back_populates="inventory_item",
        cascade="all, delete-orphan",
    )
    recipe_lines: Mapped[list["MenuItemIngredient"]] = relationship(
        back_populates="inventory_item",
        cascade="all, delete-orphan",
    )

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.minimum_quantity


class InventoryMovement(Base):
    """Append-only stock ledger entry."""

    __tablename__ = "inventory_movements"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_inventory_movements_quantity_positive"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    inventory_item_id: Mapped[int] = mapped_column(
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(Enum(*MOVEMENT_TYPES, name="movement_type"), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    inventory_item: Mapped[InventoryItem] = relationship(back_populates="movements")
    creator: Mapped["User | None"] = relationship()

    @property
    def creator_name(self) -> str | None:
        if self.creator is None or self.creator.profile is None:
            return None
        return self.creator.profile.full_name
