"""Ledger error hierarchy.

Every error is a caller-correctable input problem, never a resource failure.
Each class carries a stable ``code`` that the service façade copies into
``ServiceError.code`` so CLI and JSON consumers can branch on it.
Persistence failures are *not* part of this hierarchy; they propagate
from the store as ``sqlalchemy.exc.SQLAlchemyError``.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all business-rule violations."""

    code: str = "LEDGER_ERROR"


class InvalidAmount(LedgerError):
    """Amount is zero or negative."""

    code = "INVALID_AMOUNT"


class MalformedAmount(LedgerError):
    """Amount text could not be parsed as a finite decimal."""

    code = "INVALID_FORMAT"


class InsufficientFunds(LedgerError):
    """Withdrawal would leave the account negative."""

    code = "INSUFFICIENT_FUNDS"


class SameAccount(LedgerError):
    """Transfer source and destination are the same account."""

    code = "SAME_ACCOUNT"


class InvalidAccountNumber(LedgerError):
    """Account number fails the Luhn check."""

    code = "INVALID_ACCOUNT_NUMBER"


class MalformedAccountNumber(LedgerError):
    """Account number is not a 16-digit string."""

    code = "MALFORMED_ACCOUNT_NUMBER"


class UnknownDestination(LedgerError):
    """Transfer destination does not exist in the store."""

    code = "UNKNOWN_DESTINATION"


class NonZeroBalance(LedgerError):
    """Closing was refused because money would be discarded."""

    code = "NON_ZERO_BALANCE"


class AuthenticationFailed(LedgerError):
    """Account number and PIN do not match a stored account."""

    code = "AUTH_FAILED"


class UnknownAccount(LedgerError, LookupError):
    """No stored account has the requested number."""

    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, number: str) -> None:
        super().__init__(f"Account {number} does not exist")
        self.number = number


class InvalidHolderName(LedgerError):
    """Holder name is empty or whitespace."""

    code = "INVALID_HOLDER_NAME"
