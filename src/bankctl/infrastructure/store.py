"""AccountStore — repository over the ``accounts`` table.

The store is the single persistence collaborator injected into the ledger.
It is addressed purely by account number and knows nothing about Luhn
checks, PIN rules, or funds policy; those live in the service layer.

:meth:`AccountStore.transaction` yields a :class:`StoreTransaction` bound to
one ``BEGIN IMMEDIATE`` transaction. Services that read a balance and then
write it must do both through the same transaction. The single-call
methods on :class:`AccountStore` each open (and commit) their own.

Database errors are not caught here; they propagate as
``sqlalchemy.exc.SQLAlchemyError``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from bankctl.domain.errors import UnknownAccount
from bankctl.infrastructure.database.engine import init_database
from bankctl.infrastructure.database.schema import accounts

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from bankctl.config.settings import BankSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# StoreTransaction — yielded to callers within transaction()
# ---------------------------------------------------------------------------


@dataclass
class StoreTransaction:
    """Account operations bound to one open database transaction."""

    conn: Connection

    def exists(self, number: str) -> bool:
        row = self.conn.execute(
            select(accounts.c.id).where(accounts.c.number == number)
        ).first()
        return row is not None

    def get_account(self, number: str) -> dict[str, Any] | None:
        """Return the full row as a plain dict, or None."""
        row = self.conn.execute(
            select(
                accounts.c.number,
                accounts.c.pin,
                accounts.c.holder_name,
                accounts.c.created_at,
                accounts.c.balance,
            ).where(accounts.c.number == number)
        ).first()
        if row is None:
            return None
        data = dict(row._mapping)
        data["created_at"] = datetime.fromisoformat(data["created_at"])
        return data

    def get_balance(self, number: str) -> Decimal:
        """Current balance of *number*.

        Raises:
            UnknownAccount: If the account does not exist.
        """
        row = self.conn.execute(
            select(accounts.c.balance).where(accounts.c.number == number)
        ).first()
        if row is None:
            raise UnknownAccount(number)
        balance: Decimal = row.balance
        return balance

    def adjust_balance(self, number: str, delta: Decimal) -> Decimal:
        """Add *delta* (may be negative) to the balance. Returns the new balance.

        The arithmetic happens in Python on exact decimals; the surrounding
        immediate transaction keeps the read and the write together.
        """
        new_balance = self.get_balance(number) + delta
        self.conn.execute(
            update(accounts).where(accounts.c.number == number).values(balance=new_balance)
        )
        return new_balance

    def transfer_atomic(self, sender: str, receiver: str, amount: Decimal) -> None:
        """Debit *sender* and credit *receiver* by *amount* in this transaction."""
        self.adjust_balance(sender, -amount)
        self.adjust_balance(receiver, amount)

    def insert_account(
        self,
        number: str,
        pin: str,
        holder_name: str,
        created_at: datetime,
    ) -> None:
        self.conn.execute(
            insert(accounts).values(
                number=number,
                pin=pin,
                holder_name=holder_name,
                created_at=created_at.isoformat(),
            )
        )

    def delete_account(self, number: str) -> bool:
        """Hard-delete the row. Returns True if a row was removed."""
        result = self.conn.execute(delete(accounts).where(accounts.c.number == number))
        return result.rowcount > 0

    def check_credentials(self, number: str, pin: str) -> bool:
        row = self.conn.execute(
            select(accounts.c.id).where(accounts.c.number == number, accounts.c.pin == pin)
        ).first()
        return row is not None


# ---------------------------------------------------------------------------
# AccountStore — the repository
# ---------------------------------------------------------------------------


class AccountStore:
    """Repository encapsulating the ledger database.

    Constructed lazily by the CLI context from :class:`BankSettings`.
    """

    def __init__(self, settings: BankSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.db_path)

    @property
    def db_path(self) -> Path:
        return self._settings.db_path

    @property
    def settings(self) -> BankSettings:
        return self._settings

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Open one immediate transaction; commit on success, roll back on error.

        Usage::

            with store.transaction() as txn:
                if txn.get_balance(number) >= amount:
                    txn.adjust_balance(number, -amount)
        """
        with self._engine.begin() as conn:
            try:
                yield StoreTransaction(conn=conn)
            except BaseException:
                logger.debug("Rolling back ledger transaction", exc_info=True)
                raise

    # ------------------------------------------------------------------
    # Single-call collaborator contract
    # ------------------------------------------------------------------

    def exists(self, number: str) -> bool:
        with self.transaction() as txn:
            return txn.exists(number)

    def get_account(self, number: str) -> dict[str, Any] | None:
        with self.transaction() as txn:
            return txn.get_account(number)

    def get_balance(self, number: str) -> Decimal:
        with self.transaction() as txn:
            return txn.get_balance(number)

    def adjust_balance(self, number: str, delta: Decimal) -> Decimal:
        with self.transaction() as txn:
            return txn.adjust_balance(number, delta)

    def transfer_atomic(self, sender: str, receiver: str, amount: Decimal) -> None:
        with self.transaction() as txn:
            txn.transfer_atomic(sender, receiver, amount)

    def insert_account(
        self,
        number: str,
        pin: str,
        holder_name: str,
        created_at: datetime,
    ) -> None:
        with self.transaction() as txn:
            txn.insert_account(number, pin, holder_name, created_at)

    def delete_account(self, number: str) -> bool:
        with self.transaction() as txn:
            return txn.delete_account(number)

    def check_credentials(self, number: str, pin: str) -> bool:
        with self.transaction() as txn:
            return txn.check_credentials(number, pin)
