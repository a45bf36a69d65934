"""
Database Session Management
Engine, session factory and the per-request session dependency.

PostgreSQL is the production target. SQLite URLs are accepted for local
runs; foreign keys are switched on for them because item history and
household data rely on ON DELETE CASCADE / SET NULL.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from whereisit.core.config import settings


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the engine for a database URL.

    - PostgreSQL: pooled connections, checked before use, recycled hourly
    - SQLite: connection usable from FastAPI's worker threads, foreign keys on
    """
    if not _is_sqlite(url):
        return create_engine(url, echo=echo, pool_pre_ping=True, pool_recycle=3600)

    sqlite_engine = create_engine(url, echo=echo, connect_args={"check_same_thread": False})

    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite_engine


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Services only flush; endpoints commit
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Anything not committed by the endpoint is discarded when the session
    closes, including partial work left by a raised domain error.

    Usage:
        @router.get("/locations")
        def get_locations(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
