"""SQLAlchemy Core table definitions for the bankctl database.

Balances are stored as exact decimal text through :class:`DecimalText`.
SQLite's NUMERIC affinity would coerce values to REAL, and binary floats
cannot represent cents exactly.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text
from sqlalchemy.types import TypeDecorator


class DecimalText(TypeDecorator[Decimal]):
    """Round-trip :class:`~decimal.Decimal` through a TEXT column."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, float):
            msg = f"Refusing to store binary float {value!r} as money"
            raise TypeError(msg)
        return str(Decimal(value))

    def process_result_value(self, value: Any, dialect: Any) -> Decimal | None:
        if value is None:
            return None
        return Decimal(value)


metadata = MetaData()

accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("number", Text, nullable=False, unique=True),
    Column("pin", Text, nullable=False),
    Column("balance", DecimalText, nullable=False, default=Decimal("0.00"), server_default="0.00"),
    Column("holder_name", Text, nullable=False),
    Column("created_at", Text, nullable=False),  # ISO 8601, immutable
)

Index("ix_accounts_number_pin", accounts.c.number, accounts.c.pin)
