"""Table layout, occupancy and merge operations."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from restodesk.models.table import TABLE_STATUSES, DiningTable
from restodesk.services.change_feed import change_feed
from restodesk.services.errors import ConflictError, NotFoundError, ValidationError
from restodesk.utils.time import utcnow

logger = logging.getLogger(__name__)


def _commit(db: Session, table: DiningTable | None = None) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Table number already in use") from exc
    if table is not None:
        db.refresh(table)
    change_feed.publish("tables")


def list_tables(db: Session) -> list[DiningTable]:
    """Return all tables ordered by display number."""
    return list(db.scalars(select(DiningTable).options(selectinload(DiningTable.members)).order_by(DiningTable.number)).all())


def get_table(db: Session, table_id: int) -> DiningTable:
    table = db.get(DiningTable, table_id)
    if table is None:
        raise NotFoundError(f"Table {table_id} not found")
    return table


def _ensure_number_free(db: Session, number: int, exclude_id: int | None = None) -> None:
    query = select(DiningTable.id).where(DiningTable.number == number)
    if exclude_id is not None:
        query = query.where(DiningTable.id != exclude_id)
    if db.scalar(query.limit(1)) is not None:
        raise ConflictError(f"Table number {number} already in use")


def create_table(
    db: Session,
    *,
    number: int,
    capacity: int,
    notes: str | None = None,
    location: str | None = None,
) -> DiningTable:
    """Create a free table."""
    _ensure_number_free(db, number)
    table = DiningTable(number=number, capacity=capacity, notes=notes, location=location, status="free")
    db.add(table)
    _commit(db, table)
    logger.info("[TABLES] Created table id=%s number=%s", table.id, table.number)
    return table


def update_table(
    db: Session,
    table: DiningTable,
    *,
    number: int,
    capacity: int,
    location: str | None = None,
) -> DiningTable:
    _ensure_number_free(db, number, exclude_id=table.id)
    table.number = number
    table.capacity = capacity
    table.location = location
    table.updated_at = utcnow()
    _commit(db, table)
    return table


def delete_table(db: Session, table: DiningTable) -> None:
    """Delete a table, releasing any tables merged into it."""
    if table.orders:
        raise ConflictError(f"Table {table.number} still has orders")
    table_id = table.id
    for member in list(table.members):
        member.merged_into = None
        member.updated_at = utcnow()
    db.delete(table)
    _commit(db)
    logger.info("[TABLES] Deleted table id=%s", table_id)


def set_status(db: Session, table: DiningTable, new_status: str, now: datetime | None = None) -> DiningTable:
    """Write any table status; entering ``occupied`` stamps the occupancy time."""
    if new_status not in TABLE_STATUSES:
        raise ValidationError(f"Unknown table status: {new_status}")
    moment = now or utcnow()
    table.status = new_status
    table.last_occupied_at = moment if new_status == "occupied" else None
    table.updated_at = moment
    _commit(db, table)
    return table


def move(db: Session, table: DiningTable, x: float, y: float) -> DiningTable:
    """Persist floor-plan coordinates; overlapping tables are allowed."""
    table.x_position = x
    table.y_position = y
    table.updated_at = utcnow()
    _commit(db, table)
    return table


def update_notes(db: Session, table: DiningTable, notes: str | None) -> DiningTable:
    table.notes = notes
    table.updated_at = utcnow()
    _commit(db, table)
    return table


def merge(db: Session, primary: DiningTable, member_ids: list[int]) -> DiningTable:
    """Replace the primary's member set with ``member_ids``.

    A table can belong to at most one merge, a primary cannot itself be a
    member, and a member cannot be a primary holding members of its own.
    Members dropped from the set are released.
    """
    wanted: list[int] = list(dict.fromkeys(member_ids))
    if primary.id in wanted:
        raise ValidationError("A table cannot be merged with itself")
    if primary.merged_into_id is not None:
        raise ConflictError(f"Table {primary.number} is already merged into another table")

    members: list[DiningTable] = []
    if wanted:
        found = {
            table.id: table
            for table in db.scalars(
                select(DiningTable)
                .where(DiningTable.id.in_(wanted))
                .options(selectinload(DiningTable.members))
                .with_for_update()
            ).all()
        }
        missing = [table_id for table_id in wanted if table_id not in found]
        if missing:
            raise NotFoundError(f"Tables not found: {missing}")
        for table_id in wanted:
            member = found[table_id]
            if member.merged_into_id not in (None, primary.id):
                raise ConflictError(f"Table {member.number} is already merged into another table")
            if member.members:
                raise ConflictError(f"Table {member.number} has merged tables of its own")
            members.append(member)

    now = utcnow()
    for previous in list(primary.members):
        if previous.id not in wanted:
            previous.merged_into = None
            previous.updated_at = now
    for member in members:
        if member.merged_into_id != primary.id:
            member.merged_into = primary
            member.updated_at = now
    primary.updated_at = now
    _commit(db, primary)
    logger.info("[TABLES] Table id=%s merged with %s", primary.id, primary.merged_with)
    return primary


def unmerge(db: Session, table: DiningTable) -> DiningTable:
    """Clear the member set; member rows only lose their back-reference."""
    now = utcnow()
    for member in list(table.members):
        member.merged_into = None
        member.updated_at = now
    table.updated_at = now
    _commit(db, table)
    return table
