"""Ledger — balance-mutating operations and their invariants.

INVARIANTS:
- A deposit never uses an amount <= 0.
- Withdraw and transfer never leave a balance negative.
- A transfer changes both rows or neither.

Every read-check-write sequence runs inside one ``store.transaction()``
so it is atomic against concurrent writers. Rule violations raise
:class:`~bankctl.domain.errors.LedgerError` subclasses; persistence
errors propagate untouched. The one exception to "raise on failure" is
:meth:`Ledger.transfer`, which reports insufficient funds by returning
``False`` so callers can branch on it.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol

from bankctl.domain.accounts import Account
from bankctl.domain.errors import (
    InsufficientFunds,
    InvalidAccountNumber,
    InvalidHolderName,
    NonZeroBalance,
    SameAccount,
    UnknownAccount,
    UnknownDestination,
)
from bankctl.domain.money import require_positive
from bankctl.domain.types import ClosePolicy
from bankctl.services._helpers import mask_number, now_utc
from bankctl.services.audit import AuditSink, StructlogAuditSink
from bankctl.services.identifiers import IdentifierService


class LedgerOps(Protocol):
    """Persistence operations the ledger needs, addressed by account number."""

    def exists(self, number: str) -> bool: ...

    def get_account(self, number: str) -> dict[str, Any] | None: ...

    def get_balance(self, number: str) -> Decimal: ...

    def adjust_balance(self, number: str, delta: Decimal) -> Decimal: ...

    def transfer_atomic(self, sender: str, receiver: str, amount: Decimal) -> None: ...

    def insert_account(
        self, number: str, pin: str, holder_name: str, created_at: datetime
    ) -> None: ...

    def delete_account(self, number: str) -> bool: ...

    def check_credentials(self, number: str, pin: str) -> bool: ...


class LedgerStore(LedgerOps, Protocol):
    """A :class:`LedgerOps` that can also group operations in one transaction."""

    def transaction(self) -> AbstractContextManager[LedgerOps]: ...


class Ledger:
    """Account lifecycle and money movement over a :class:`LedgerStore`."""

    def __init__(
        self,
        store: LedgerStore,
        identifiers: IdentifierService | None = None,
        *,
        audit: AuditSink | None = None,
        close_policy: ClosePolicy = ClosePolicy.ALLOW,
    ) -> None:
        self._store = store
        self._identifiers = identifiers or IdentifierService(store)
        self._audit: AuditSink = audit or StructlogAuditSink()
        self._close_policy = close_policy

    @property
    def identifiers(self) -> IdentifierService:
        return self._identifiers

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def open_account(self, holder_name: str) -> Account:
        """Create an account with a fresh number and PIN and a zero balance."""
        name = holder_name.strip()
        if not name:
            raise InvalidHolderName("Holder name must not be empty")

        pin = self._identifiers.create_pin()
        created_at = now_utc()
        with self._store.transaction() as txn:
            number = self._identifiers.generate_unique_account_number(txn)
            txn.insert_account(number, pin, name, created_at)

        self._audit.info("account.opened", account=number, holder_name=name)
        return Account(number=number, pin=pin, holder_name=name, created_at=created_at)

    def get_account(self, number: str) -> Account:
        row = self._store.get_account(number)
        if row is None:
            raise UnknownAccount(number)
        return Account.model_validate(row)

    def validate_login(self, number: str, pin: str) -> bool:
        if not self._store.check_credentials(number, pin):
            self._audit.warning("login.failed", account=mask_number(number))
            return False
        return True

    def get_balance(self, number: str) -> Decimal:
        return self._store.get_balance(number)

    def close_account(self, number: str) -> Decimal:
        """Hard-delete the account. Returns the balance that was discarded.

        Under ``ClosePolicy.REQUIRE_ZERO`` a nonzero balance raises
        :class:`NonZeroBalance` and nothing is deleted.
        """
        with self._store.transaction() as txn:
            remainder = txn.get_balance(number)
            if remainder != 0 and self._close_policy is ClosePolicy.REQUIRE_ZERO:
                raise NonZeroBalance(
                    f"Account still holds {remainder}; withdraw or transfer it first"
                )
            txn.delete_account(number)

        if remainder != 0:
            self._audit.warning("account.closed_with_balance", account=number, discarded=remainder)
        self._audit.info("account.closed", account=number)
        return remainder

    # ------------------------------------------------------------------
    # Money movement
    # ------------------------------------------------------------------

    def deposit(self, number: str, amount: Decimal) -> Decimal:
        """Credit *amount*. Returns the new balance."""
        require_positive(amount)
        new_balance = self._store.adjust_balance(number, amount)
        self._audit.info("deposit", account=number, amount=amount)
        return new_balance

    def withdraw(self, number: str, amount: Decimal) -> Decimal:
        """Debit *amount* if funds allow. Returns the new balance."""
        require_positive(amount)
        with self._store.transaction() as txn:
            available = txn.get_balance(number)
            if available < amount:
                self._audit.warning(
                    "withdraw.insufficient_funds",
                    account=number,
                    attempted=amount,
                    available=available,
                )
                raise InsufficientFunds("Insufficient funds")
            new_balance = txn.adjust_balance(number, -amount)

        self._audit.info("withdraw", account=number, amount=amount)
        return new_balance

    def is_transfer_allowed(self, sender: str, receiver: str) -> bool:
        """Gate a transfer. Returns True or raises; never mutates.

        Checks run in order: same account, Luhn checksum of the receiver,
        receiver existence. The sender is assumed to exist (logged in).
        """
        if sender == receiver:
            raise SameAccount(
                "Transfer failed: source and destination accounts must be different."
            )
        if not self._identifiers.validate_checksum(receiver):
            raise InvalidAccountNumber("Transfer failed: invalid account number.")
        if not self._store.exists(receiver):
            raise UnknownDestination("Transfer failed: the destination account does not exist.")
        return True

    def transfer(self, sender: str, receiver: str, amount: Decimal) -> bool:
        """Move *amount* from *sender* to *receiver*.

        Assumes :meth:`is_transfer_allowed` already passed. Returns False,
        without touching either balance, when the sender cannot cover
        *amount*; returns True once both rows are committed.
        """
        require_positive(amount)
        with self._store.transaction() as txn:
            available = txn.get_balance(sender)
            if available < amount:
                self._audit.warning(
                    "transfer.insufficient_funds",
                    sender=sender,
                    receiver=receiver,
                    amount=amount,
                    available=available,
                )
                return False
            txn.transfer_atomic(sender, receiver, amount)

        self._audit.info("transfer", sender=sender, receiver=receiver, amount=amount)
        return True
