"""SQLite database engine and schema via SQLAlchemy Core."""

from bankctl.infrastructure.database.engine import create_db_engine, init_database
from bankctl.infrastructure.database.schema import DecimalText, accounts, metadata

__all__ = [
    "DecimalText",
    "accounts",
    "create_db_engine",
    "init_database",
    "metadata",
]
