"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bankctl.toml only contains overrides.
A fresh install needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

from bankctl.domain.ids import BIN_PATTERN, DEFAULT_BIN_PREFIX
from bankctl.domain.types import ClosePolicy

# --- bankctl.toml sections ---


class BankConfig(BaseModel):
    """[bank] section."""

    model_config = {"frozen": True}

    name: str = "Fake Bank"
    bin_prefix: str = DEFAULT_BIN_PREFIX
    currency_symbol: str = "€"

    @field_validator("bin_prefix")
    @classmethod
    def _six_digits(cls, value: str) -> str:
        if BIN_PATTERN.fullmatch(value) is None:
            raise ValueError("bin_prefix must be exactly 6 digits")
        return value


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    file: str = "default.db"


class AccountsConfig(BaseModel):
    """[accounts] section."""

    model_config = {"frozen": True}

    close_policy: ClosePolicy = ClosePolicy.ALLOW


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    file: Path | None = None
