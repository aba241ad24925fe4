"""IdentifierService — unique account numbers and PINs.

Generation loop: BIN + 9 random digits + Luhn check digit, repeated until
the store reports the number unused. The loop is unbounded; with 10^9
bodies per BIN it terminates after one pass in practice.

The random source is injected so tests can seed it. Account numbers are
not secrets, so a non-cryptographic :class:`random.Random` is enough.
"""

from __future__ import annotations

import logging
from random import Random
from typing import Protocol

from bankctl.domain.ids import (
    DEFAULT_BIN_PREFIX,
    build_account_number,
    generate_pin,
    luhn_check_digit,
    validate_checksum,
)

logger = logging.getLogger(__name__)


class AccountLookup(Protocol):
    """Anything that can answer whether an account number is taken."""

    def exists(self, number: str) -> bool: ...


class IdentifierService:
    """Generates and validates account numbers against a store."""

    def __init__(
        self,
        store: AccountLookup,
        *,
        rng: Random | None = None,
        bin_prefix: str = DEFAULT_BIN_PREFIX,
    ) -> None:
        self._store = store
        self._rng = rng if rng is not None else Random()
        self._bin_prefix = bin_prefix

    @property
    def bin_prefix(self) -> str:
        return self._bin_prefix

    @staticmethod
    def generate_checksum_digit(digits: str) -> int:
        return luhn_check_digit(digits)

    @staticmethod
    def validate_checksum(number: str) -> bool:
        """Luhn-check a full number; raises MalformedAccountNumber on bad shape."""
        return validate_checksum(number)

    def generate_unique_account_number(self, lookup: AccountLookup | None = None) -> str:
        """Return a Luhn-valid number not present in the store.

        Args:
            lookup: Existence checker to use instead of the configured store,
                e.g. an open store transaction so the check and the insert
                share one lock.
        """
        lookup = lookup if lookup is not None else self._store
        attempts = 0
        while True:
            attempts += 1
            candidate = build_account_number(self._bin_prefix, self._rng)
            if not lookup.exists(candidate):
                if attempts > 1:
                    logger.debug("Account number found after %d attempts", attempts)
                return candidate

    def create_pin(self) -> str:
        return generate_pin(self._rng)
