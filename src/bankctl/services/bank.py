"""BankService — the ServiceResult façade over the ledger.

This is what CLI commands and the interactive shell call. Amount text is
parsed here (``MalformedAmount`` on garbage), rule violations come back as
failed results carrying the ledger error code, and money in ``data`` is
always a decimal string so JSON output stays exact.
"""

from __future__ import annotations

from decimal import Decimal
from random import Random
from typing import TYPE_CHECKING

from bankctl.domain.errors import AuthenticationFailed, InsufficientFunds
from bankctl.domain.money import parse_amount
from bankctl.services.audit import AuditSink
from bankctl.services.base import BaseService, failure, guarded
from bankctl.services.identifiers import IdentifierService
from bankctl.services.ledger import Ledger
from bankctl.services.result import ServiceResult
from bankctl.services.timing import step, timed

if TYPE_CHECKING:
    from bankctl.infrastructure.store import AccountStore


class BankService(BaseService):
    """Account operations for one configured bank."""

    def __init__(
        self,
        store: AccountStore,
        *,
        audit: AuditSink | None = None,
        rng: Random | None = None,
    ) -> None:
        super().__init__(store)
        settings = store.settings
        identifiers = IdentifierService(store, rng=rng, bin_prefix=settings.bank.bin_prefix)
        self._ledger = Ledger(
            store,
            identifiers,
            audit=audit,
            close_policy=settings.accounts.close_policy,
        )

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    @timed
    @guarded("open_account")
    def open_account(self, holder_name: str) -> ServiceResult:
        """Create an account; the result carries the new number and PIN."""
        account = self._ledger.open_account(holder_name)
        data = account.to_dict(include_pin=True)
        data["created_display"] = account.created_display
        data["bank"] = self._store.settings.bank.name
        return ServiceResult(ok=True, op="open_account", data=data)

    @timed
    @guarded("login")
    def login(self, number: str, pin: str) -> ServiceResult:
        if not self._ledger.validate_login(number, pin):
            raise AuthenticationFailed("Login failed: incorrect account number or PIN.")
        return ServiceResult(ok=True, op="login", data={"number": number})

    @timed
    @guarded("balance")
    def balance(self, number: str) -> ServiceResult:
        account = self._ledger.get_account(number)
        return ServiceResult(
            ok=True,
            op="balance",
            data={
                "number": account.number,
                "holder_name": account.holder_name,
                "balance": str(account.balance),
            },
        )

    @timed
    @guarded("close_account")
    def close_account(self, number: str) -> ServiceResult:
        discarded = self._ledger.close_account(number)
        warnings: list[str] = []
        if discarded != 0:
            warnings.append(f"Closed with a remaining balance of {discarded}; it was discarded")
        return ServiceResult(
            ok=True,
            op="close_account",
            data={"number": number, "discarded": str(discarded)},
            warnings=warnings,
        )

    @timed
    @guarded("validate_number")
    def validate_number(self, number: str) -> ServiceResult:
        valid = self._ledger.identifiers.validate_checksum(number)
        return ServiceResult(
            ok=True,
            op="validate_number",
            data={"number": number, "valid": valid},
        )

    # ------------------------------------------------------------------
    # Money movement
    # ------------------------------------------------------------------

    @timed
    @guarded("deposit")
    def deposit(self, number: str, amount: str | Decimal) -> ServiceResult:
        value = parse_amount(amount)
        new_balance = self._ledger.deposit(number, value)
        return ServiceResult(
            ok=True,
            op="deposit",
            data={"number": number, "amount": str(value), "balance": str(new_balance)},
        )

    @timed
    @guarded("withdraw")
    def withdraw(self, number: str, amount: str | Decimal) -> ServiceResult:
        value = parse_amount(amount)
        new_balance = self._ledger.withdraw(number, value)
        return ServiceResult(
            ok=True,
            op="withdraw",
            data={"number": number, "amount": str(value), "balance": str(new_balance)},
        )

    @timed
    @guarded("check_transfer")
    def check_transfer(self, sender: str, receiver: str) -> ServiceResult:
        """Run the transfer gate only (used by the shell before asking for an amount)."""
        self._ledger.is_transfer_allowed(sender, receiver)
        return ServiceResult(
            ok=True,
            op="check_transfer",
            data={"sender": sender, "receiver": receiver, "allowed": True},
        )

    @timed
    @guarded("transfer")
    def transfer(self, sender: str, receiver: str, amount: str | Decimal) -> ServiceResult:
        """Gate, then move money. Insufficient funds yields ``ok=False``."""
        with step("gate"):
            self._ledger.is_transfer_allowed(sender, receiver)
        value = parse_amount(amount)

        with step("move"):
            moved = self._ledger.transfer(sender, receiver, value)
        data = {
            "sender": sender,
            "receiver": receiver,
            "amount": str(value),
            "transferred": moved,
        }
        if not moved:
            result = failure(
                "transfer",
                InsufficientFunds.code,
                "Transfer failed: insufficient funds.",
            )
            return result.model_copy(update={"data": data})

        data["balance"] = str(self._ledger.get_balance(sender))
        return ServiceResult(ok=True, op="transfer", data=data)
