"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from the
application settings and provides small helpers used by the
application and tests. Postgres is the deployment target; without any
database variables a local SQLite file `app.db` next to the package is
used instead.
"""

import logging

from sqlalchemy import text
from sqlmodel import SQLModel, create_engine, Session

from .config import settings, mask_url
from . import models  # noqa: F401  (registers the task table on the metadata)

log = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False):
    """Create an engine with the connection options suited to `url`."""
    if url.startswith("sqlite"):
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    return create_engine(url, echo=echo, pool_pre_ping=True, pool_recycle=1800)


engine = build_engine(settings.database_url, echo=settings.DB_ECHO)
log.info("DB URL: %s", mask_url(settings.database_url))


def create_db_and_tables():
    """Create database tables using SQLModel metadata.

    Called at application start while `DB_SYNCHRONIZE` is enabled.
    Deployments that turn it off should apply `migrations/*.sql` with
    `run_migrations.py` instead.
    """
    SQLModel.metadata.create_all(engine)


def check_connection() -> None:
    """Run a trivial query; raises whatever the driver raises on failure."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
