"""Database engine setup for SQLite with WAL mode.

The ledger file defaults to ``{root}/default.db`` (see ``[database] file``).

Every transaction opens with ``BEGIN IMMEDIATE`` so the write lock is held
from the first read. That makes each read-check-write sequence in the
ledger (withdraw, transfer) atomic against any other writer on the file.

SQLAlchemy Core (not ORM) is used because bankctl is a short-lived
CLI process — no benefit from session management or identity maps.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine

from bankctl.infrastructure.database.schema import metadata

logger = logging.getLogger(__name__)


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and immediate write locking."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        # Hand transaction control to SQLAlchemy; pysqlite would otherwise
        # emit its own deferred BEGIN before the first DML statement.
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def init_database(db_path: Path) -> Engine:
    """Initialize the ledger database at *db_path*.

    Creates the parent directory and all tables from
    :data:`schema.metadata`. Idempotent — safe to call on an existing file.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    logger.debug("Ledger database ready at %s", db_path)
    return engine
