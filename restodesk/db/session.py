"""Database engine and session management."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from restodesk.core.config import settings


def create_db_engine(database_url: str) -> Engine:
    """Build an engine; SQLite connections are shared with request worker threads."""
    connect_args: dict[str, bool] = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args)


engine: Engine = create_db_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; the services commit or roll back themselves."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
