"""Tests for config section models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bankctl.config.models import AccountsConfig, BankConfig, DatabaseConfig, LoggingConfig
from bankctl.domain.types import ClosePolicy


class TestDefaults:
    def test_bank(self) -> None:
        bank = BankConfig()
        assert bank.name == "Fake Bank"
        assert bank.bin_prefix == "400000"
        assert bank.currency_symbol == "€"

    def test_database(self) -> None:
        assert DatabaseConfig().file == "default.db"

    def test_accounts(self) -> None:
        assert AccountsConfig().close_policy is ClosePolicy.ALLOW

    def test_logging(self) -> None:
        assert LoggingConfig().file is None


class TestValidation:
    @pytest.mark.parametrize("bad", ["40000", "4000000", "abcdef"])
    def test_bin_prefix(self, bad: str) -> None:
        with pytest.raises(ValidationError, match="bin_prefix must be exactly 6 digits"):
            BankConfig(bin_prefix=bad)

    def test_close_policy_from_string(self) -> None:
        assert AccountsConfig(close_policy="require_zero").close_policy is ClosePolicy.REQUIRE_ZERO  # type: ignore[arg-type]

    def test_close_policy_unknown(self) -> None:
        with pytest.raises(ValidationError):
            AccountsConfig(close_policy="keep")  # type: ignore[arg-type]
