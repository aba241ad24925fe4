"""Tests for IdentifierService: unique number generation and PINs."""

from __future__ import annotations

from datetime import datetime
from random import Random

from bankctl.domain.ids import build_account_number, validate_checksum
from bankctl.services.identifiers import IdentifierService
from tests.conftest import MemoryStore

CREATED = datetime(2025, 1, 1)


class TestGenerateUniqueAccountNumber:
    def test_valid_and_prefixed(self) -> None:
        service = IdentifierService(MemoryStore(), rng=Random(1))
        number = service.generate_unique_account_number()
        assert number.startswith("400000")
        assert len(number) == 16
        assert validate_checksum(number)

    def test_custom_bin_prefix(self) -> None:
        service = IdentifierService(MemoryStore(), rng=Random(1), bin_prefix="512345")
        assert service.bin_prefix == "512345"
        assert service.generate_unique_account_number().startswith("512345")

    def test_retries_past_existing_numbers(self) -> None:
        """Seed the store with the first two candidates the RNG will produce."""
        probe = Random(5)
        first = build_account_number("400000", probe)
        second = build_account_number("400000", probe)
        third = build_account_number("400000", probe)

        store = MemoryStore(taken={first, second})
        service = IdentifierService(store, rng=Random(5))
        number = service.generate_unique_account_number()

        assert number == third
        assert store.exists_calls == [first, second, third]

    def test_explicit_lookup_overrides_store(self) -> None:
        store = MemoryStore()
        lookup = MemoryStore()
        service = IdentifierService(store, rng=Random(2))
        service.generate_unique_account_number(lookup)
        assert store.exists_calls == []
        assert len(lookup.exists_calls) == 1

    def test_many_numbers_distinct(self) -> None:
        store = MemoryStore()
        service = IdentifierService(store, rng=Random(8))
        numbers = set()
        for _ in range(200):
            number = service.generate_unique_account_number()
            store.insert_account(number, "1111", "Holder", CREATED)
            numbers.add(number)
        assert len(numbers) == 200


class TestChecksumHelpers:
    def test_generate_checksum_digit(self) -> None:
        assert IdentifierService.generate_checksum_digit("400000123456789") == 9

    def test_validate_checksum(self) -> None:
        assert IdentifierService.validate_checksum("4000001234567899") is True
        assert IdentifierService.validate_checksum("4000001234567898") is False


class TestCreatePin:
    def test_pin_shape(self) -> None:
        service = IdentifierService(MemoryStore(), rng=Random(3))
        pin = service.create_pin()
        assert len(pin) == 4
        assert pin.isdigit()

    def test_pins_vary(self) -> None:
        service = IdentifierService(MemoryStore(), rng=Random(3))
        assert len({service.create_pin() for _ in range(50)}) > 1
