"""Table layout and occupancy endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from restodesk.auth import TABLES_MANAGE, TABLES_OPERATE, TABLES_READ, require_capability
from restodesk.db.session import get_db
from restodesk.models.user import Profile
from restodesk.schemas.table import (
    TableCreate,
    TableMergeRequest,
    TableNotesUpdate,
    TablePositionUpdate,
    TableRead,
    TableStatusUpdate,
    TableUpdate,
)
from restodesk.services import table_service
from restodesk.services.live_cache import collection_cache

router: APIRouter = APIRouter()


@router.get("", response_model=list[TableRead])
def list_tables(
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_READ)),
) -> list[TableRead]:
    return collection_cache.fetch(
        "tables",
        lambda: [TableRead.model_validate(table) for table in table_service.list_tables(db)],
    )


@router.post("", response_model=TableRead, status_code=status.HTTP_201_CREATED)
def create_table(
    payload: TableCreate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_MANAGE)),
) -> TableRead:
    table = table_service.create_table(db, **payload.model_dump())
    return TableRead.model_validate(table)


@router.put("/{table_id}", response_model=TableRead)
def update_table(
    table_id: int,
    payload: TableUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_MANAGE)),
) -> TableRead:
    table = table_service.get_table(db, table_id)
    return TableRead.model_validate(table_service.update_table(db, table, **payload.model_dump()))


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_table(
    table_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_MANAGE)),
) -> Response:
    table_service.delete_table(db, table_service.get_table(db, table_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{table_id}/status", response_model=TableRead)
def set_table_status(
    table_id: int,
    payload: TableStatusUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_OPERATE)),
) -> TableRead:
    table = table_service.get_table(db, table_id)
    return TableRead.model_validate(table_service.set_status(db, table, payload.status))


@router.put("/{table_id}/position", response_model=TableRead)
def move_table(
    table_id: int,
    payload: TablePositionUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_OPERATE)),
) -> TableRead:
    table = table_service.get_table(db, table_id)
    return TableRead.model_validate(table_service.move(db, table, payload.x, payload.y))


@router.put("/{table_id}/notes", response_model=TableRead)
def update_table_notes(
    table_id: int,
    payload: TableNotesUpdate,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_OPERATE)),
) -> TableRead:
    table = table_service.get_table(db, table_id)
    return TableRead.model_validate(table_service.update_notes(db, table, payload.notes))


@router.post("/{table_id}/merge", response_model=TableRead)
def merge_tables(
    table_id: int,
    payload: TableMergeRequest,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_OPERATE)),
) -> TableRead:
    primary = table_service.get_table(db, table_id)
    return TableRead.model_validate(table_service.merge(db, primary, payload.member_ids))


@router.delete("/{table_id}/merge", response_model=TableRead)
def unmerge_table(
    table_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(require_capability(TABLES_OPERATE)),
) -> TableRead:
    table = table_service.get_table(db, table_id)
    return TableRead.model_validate(table_service.unmerge(db, table))
