"""Tests for AccountStore — the SQLite persistence collaborator."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from bankctl.config.settings import BankSettings
from bankctl.domain.errors import UnknownAccount
from bankctl.infrastructure.store import AccountStore

ALICE = "4000001234567899"
BOB = "4000009876543219"
CREATED = datetime(2025, 3, 5, 14, 2, tzinfo=UTC)


@pytest.fixture
def seeded(store: AccountStore) -> AccountStore:
    store.insert_account(ALICE, "1111", "Alice", CREATED)
    store.insert_account(BOB, "2222", "Bob", CREATED)
    return store


class TestConstruction:
    def test_creates_default_db(self, store: AccountStore, settings: BankSettings) -> None:
        assert store.db_path == settings.root / "default.db"
        assert store.db_path.is_file()

    def test_db_override(self, tmp_path: Path) -> None:
        settings = BankSettings.from_cli(root=tmp_path, db_file=tmp_path / "other.db")
        s = AccountStore(settings)
        try:
            assert s.db_path == tmp_path / "other.db"
            assert s.db_path.is_file()
        finally:
            s.close()


class TestReads:
    def test_exists(self, seeded: AccountStore) -> None:
        assert seeded.exists(ALICE)
        assert not seeded.exists("4000005555555557")

    def test_get_account(self, seeded: AccountStore) -> None:
        row = seeded.get_account(ALICE)
        assert row is not None
        assert row["holder_name"] == "Alice"
        assert row["pin"] == "1111"
        assert row["created_at"] == CREATED
        assert row["balance"] == Decimal("0.00")

    def test_get_account_missing(self, seeded: AccountStore) -> None:
        assert seeded.get_account("4000005555555557") is None

    def test_get_balance_missing(self, seeded: AccountStore) -> None:
        with pytest.raises(UnknownAccount):
            seeded.get_balance("4000005555555557")

    def test_check_credentials(self, seeded: AccountStore) -> None:
        assert seeded.check_credentials(ALICE, "1111")
        assert not seeded.check_credentials(ALICE, "2222")
        assert not seeded.check_credentials("4000005555555557", "1111")


class TestWrites:
    def test_adjust_balance(self, seeded: AccountStore) -> None:
        assert seeded.adjust_balance(ALICE, Decimal("10.10")) == Decimal("10.10")
        assert seeded.adjust_balance(ALICE, Decimal("-0.10")) == Decimal("10.00")
        assert seeded.get_balance(ALICE) == Decimal("10.00")

    def test_adjust_many_small_amounts_stays_exact(self, seeded: AccountStore) -> None:
        for _ in range(30):
            seeded.adjust_balance(ALICE, Decimal("0.10"))
        assert seeded.get_balance(ALICE) == Decimal("3.00")

    def test_transfer_atomic(self, seeded: AccountStore) -> None:
        seeded.adjust_balance(ALICE, Decimal("50"))
        seeded.transfer_atomic(ALICE, BOB, Decimal("20"))
        assert seeded.get_balance(ALICE) == Decimal("30")
        assert seeded.get_balance(BOB) == Decimal("20")

    def test_transfer_to_missing_rolls_back(self, seeded: AccountStore) -> None:
        seeded.adjust_balance(ALICE, Decimal("50"))
        with pytest.raises(UnknownAccount):
            seeded.transfer_atomic(ALICE, "4000005555555557", Decimal("20"))
        assert seeded.get_balance(ALICE) == Decimal("50")

    def test_delete(self, seeded: AccountStore) -> None:
        assert seeded.delete_account(ALICE) is True
        assert not seeded.exists(ALICE)
        assert seeded.delete_account(ALICE) is False


class TestTransaction:
    def test_commit(self, seeded: AccountStore) -> None:
        with seeded.transaction() as txn:
            txn.adjust_balance(ALICE, Decimal("5"))
            txn.adjust_balance(BOB, Decimal("7"))
        assert seeded.get_balance(ALICE) == Decimal("5")
        assert seeded.get_balance(BOB) == Decimal("7")

    def test_rollback_on_error(self, seeded: AccountStore) -> None:
        with pytest.raises(RuntimeError), seeded.transaction() as txn:
            txn.adjust_balance(ALICE, Decimal("5"))
            raise RuntimeError("abort")
        assert seeded.get_balance(ALICE) == Decimal("0.00")

    def test_data_survives_reopen(self, seeded: AccountStore, settings: BankSettings) -> None:
        seeded.adjust_balance(ALICE, Decimal("12.34"))
        seeded.close()
        reopened = AccountStore(settings)
        try:
            assert reopened.get_balance(ALICE) == Decimal("12.34")
        finally:
            reopened.close()
