"""Reservation bookkeeping."""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from restodesk.models.reservation import Reservation
from restodesk.models.table import DiningTable
from restodesk.services.change_feed import change_feed
from restodesk.services.errors import NotFoundError
from restodesk.utils.time import utcnow


def list_reservations(db: Session, on_date: date | None = None) -> list[Reservation]:
    query = select(Reservation)
    if on_date is not None:
        query = query.where(Reservation.date == on_date)
    return list(db.scalars(query.order_by(Reservation.date.asc(), Reservation.time.asc(), Reservation.id.asc())).all())


def get_reservation(db: Session, reservation_id: int) -> Reservation:
    reservation = db.get(Reservation, reservation_id)
    if reservation is None:
        raise NotFoundError(f"Reservation {reservation_id} not found")
    return reservation


def _require_table(db: Session, table_id: int) -> None:
    if db.get(DiningTable, table_id) is None:
        raise NotFoundError(f"Table {table_id} not found")


def create_reservation(db: Session, fields: dict[str, Any]) -> Reservation:
    """Create a confirmed reservation."""
    _require_table(db, fields["table_id"])
    reservation = Reservation(**fields, status="confirmed")
    db.add(reservation)
    db.commit()
    db.refresh(reservation)
    change_feed.publish("reservations")
    return reservation


def update_reservation(db: Session, reservation: Reservation, changes: dict[str, Any]) -> Reservation:
    if "table_id" in changes:
        _require_table(db, changes["table_id"])
    for field, value in changes.items():
        setattr(reservation, field, value)
    reservation.updated_at = utcnow()
    db.commit()
    db.refresh(reservation)
    change_feed.publish("reservations")
    return reservation


def delete_reservation(db: Session, reservation: Reservation) -> None:
    db.delete(reservation)
    db.commit()
    change_feed.publish("reservations")
