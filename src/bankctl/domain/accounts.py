"""Account value object.

The store owns the row; services pass these frozen snapshots around for
display (account creation, balance lookups). Mutations never go through
this model — balances change only via ledger operations.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, field_validator

from bankctl.domain.errors import MalformedAccountNumber
from bankctl.domain.ids import ensure_account_number, is_valid_pin
from bankctl.domain.money import ZERO

CREATED_AT_DISPLAY_FORMAT = "%d %b %Y %H:%M"


class Account(BaseModel):
    """Snapshot of a stored bank account."""

    model_config = {"frozen": True}

    number: str
    pin: str
    holder_name: str
    created_at: datetime
    balance: Decimal = ZERO

    @field_validator("number")
    @classmethod
    def _check_number(cls, value: str) -> str:
        try:
            return ensure_account_number(value)
        except MalformedAccountNumber as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("pin")
    @classmethod
    def _check_pin(cls, value: str) -> str:
        if not is_valid_pin(value):
            raise ValueError("PIN must be 4 digits")
        return value

    @property
    def created_display(self) -> str:
        """Creation time formatted like ``05 Mar 2025 14:02``."""
        return self.created_at.strftime(CREATED_AT_DISPLAY_FORMAT)

    def to_dict(self, *, include_pin: bool = False) -> dict[str, Any]:
        """Serialize for ``ServiceResult.data`` (balance as a string)."""
        data: dict[str, Any] = {
            "number": self.number,
            "holder_name": self.holder_name,
            "created_at": self.created_at.isoformat(),
            "balance": str(self.balance),
        }
        if include_pin:
            data["pin"] = self.pin
        return data
