"""Shared pytest fixtures and test helpers for bankctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from random import Random
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from bankctl.config.settings import BankSettings
from bankctl.domain.errors import UnknownAccount
from bankctl.infrastructure.database.engine import init_database
from bankctl.infrastructure.store import AccountStore
from bankctl.services.timing import disable_timing


@pytest.fixture(autouse=True)
def _reset_global_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep timing, logging, and BANKCTL_* env vars from leaking between tests."""
    for name in ("BANKCTL_CONFIG", "BANKCTL_DB_FILE"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    bank = logging.getLogger("bankctl")
    bank_level = bank.level
    yield
    disable_timing()
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
    bank.setLevel(bank_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with the accounts table created."""
    engine = init_database(tmp_path / "ledger.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def bank_root(tmp_path: Path) -> Path:
    """Temporary directory that holds the ledger file (and any bankctl.toml)."""
    return tmp_path


@pytest.fixture
def settings(bank_root: Path) -> BankSettings:
    return BankSettings.from_cli(root=bank_root)


@pytest.fixture
def store(settings: BankSettings) -> Generator[AccountStore]:
    """AccountStore over a fresh ``default.db`` in the temp bank root."""
    s = AccountStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_bank(bank_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp bank root so the CLI writes ``default.db`` there.

    Use via ``@pytest.mark.usefixtures("_isolated_bank")`` on command test
    classes.
    """
    monkeypatch.chdir(bank_root)


# ---------------------------------------------------------------------------
# Shared test doubles
# ---------------------------------------------------------------------------


class MemoryStore:
    """In-memory ledger store with the same contract as AccountStore.

    ``transaction()`` snapshots the rows and restores them if the block
    raises, so rollback behaviour can be asserted without SQLite.
    """

    def __init__(self, taken: set[str] | None = None) -> None:
        self.rows: dict[str, dict[str, Any]] = {}
        self.exists_calls: list[str] = []
        self.transactions = 0
        for number in taken or ():
            self.insert_account(number, "0000", "Existing", datetime(2025, 1, 1))

    @contextmanager
    def transaction(self) -> Iterator[MemoryStore]:
        self.transactions += 1
        snapshot = {number: dict(row) for number, row in self.rows.items()}
        try:
            yield self
        except BaseException:
            self.rows = snapshot
            raise

    def exists(self, number: str) -> bool:
        self.exists_calls.append(number)
        return number in self.rows

    def get_account(self, number: str) -> dict[str, Any] | None:
        row = self.rows.get(number)
        return dict(row) if row is not None else None

    def get_balance(self, number: str) -> Decimal:
        if number not in self.rows:
            raise UnknownAccount(number)
        balance: Decimal = self.rows[number]["balance"]
        return balance

    def adjust_balance(self, number: str, delta: Decimal) -> Decimal:
        new_balance = self.get_balance(number) + delta
        self.rows[number]["balance"] = new_balance
        return new_balance

    def transfer_atomic(self, sender: str, receiver: str, amount: Decimal) -> None:
        self.adjust_balance(sender, -amount)
        self.adjust_balance(receiver, amount)

    def insert_account(
        self, number: str, pin: str, holder_name: str, created_at: datetime
    ) -> None:
        self.rows[number] = {
            "number": number,
            "pin": pin,
            "holder_name": holder_name,
            "created_at": created_at,
            "balance": Decimal("0.00"),
        }

    def delete_account(self, number: str) -> bool:
        return self.rows.pop(number, None) is not None

    def check_credentials(self, number: str, pin: str) -> bool:
        row = self.rows.get(number)
        return row is not None and row["pin"] == pin

    def set_balance(self, number: str, amount: str) -> None:
        self.rows[number]["balance"] = Decimal(amount)


class RecordingAuditSink:
    """Collects audit records as ``(level, event, fields)`` tuples."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def info(self, event: str, **fields: Any) -> None:
        self.records.append(("info", event, fields))

    def warning(self, event: str, **fields: Any) -> None:
        self.records.append(("warning", event, fields))

    def events(self, level: str | None = None) -> list[str]:
        return [event for lvl, event, _ in self.records if level is None or lvl == level]


def seeded_rng(seed: int = 42) -> Random:
    return Random(seed)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service and command test modules)
# ---------------------------------------------------------------------------


def open_account(service: Any, holder_name: str = "Ada Lovelace") -> dict[str, Any]:
    """Open an account via BankService, asserting success."""
    result = service.open_account(holder_name)
    assert result.ok, result.error
    return result.data


def fund(service: Any, number: str, amount: str) -> None:
    """Deposit via BankService, asserting success."""
    result = service.deposit(number, amount)
    assert result.ok, result.error
