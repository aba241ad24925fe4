"""Account number and PIN rules.

Account numbers are 16 decimal digits::

    400000 123456789 7
    ^^^^^^ ^^^^^^^^^ ^
    BIN    body      Luhn check digit

INVARIANT: every stored account number satisfies the Luhn relation.
Generation against the store lives in
:class:`bankctl.services.identifiers.IdentifierService`; this module is pure.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from random import Random

from bankctl.domain.errors import MalformedAccountNumber

DEFAULT_BIN_PREFIX = "400000"
BIN_LENGTH = 6
BODY_LENGTH = 9
ACCOUNT_NUMBER_LENGTH = BIN_LENGTH + BODY_LENGTH + 1
PIN_LENGTH = 4

ACCOUNT_NUMBER_PATTERN = re.compile(rf"[0-9]{{{ACCOUNT_NUMBER_LENGTH}}}")
PIN_PATTERN = re.compile(rf"[0-9]{{{PIN_LENGTH}}}")
BIN_PATTERN = re.compile(rf"[0-9]{{{BIN_LENGTH}}}")


def luhn_check_digit(digits: Iterable[int] | str) -> int:
    """Compute the Luhn check digit for *digits*.

    Digits at even 0-based positions (from the left) are doubled, with 9
    subtracted when the result exceeds 9.  The check digit is the smallest
    ``d`` in 0..9 such that ``(sum + d) % 10 == 0``.

    Examples:
        >>> luhn_check_digit("400000123456789")
        9
        >>> luhn_check_digit([0, 0])
        0
    """
    values = [int(d) for d in digits]
    total = 0
    for index, value in enumerate(values):
        if index % 2 == 0:
            value *= 2
            if value > 9:
                value -= 9
        total += value
    return (10 - total % 10) % 10


def ensure_account_number(number: str) -> str:
    """Return *number* unchanged, or raise if it is not 16 ASCII digits."""
    if not isinstance(number, str) or ACCOUNT_NUMBER_PATTERN.fullmatch(number) is None:
        msg = f"Account number must be {ACCOUNT_NUMBER_LENGTH} digits, got {number!r}"
        raise MalformedAccountNumber(msg)
    return number


def validate_checksum(number: str) -> bool:
    """Check the trailing Luhn digit of a full account number.

    Raises:
        MalformedAccountNumber: If *number* is not exactly 16 digits.
    """
    ensure_account_number(number)
    body, claimed = number[:-1], int(number[-1])
    return claimed == luhn_check_digit(body)


def build_account_number(bin_prefix: str, rng: Random) -> str:
    """Assemble ``bin_prefix`` + 9 random digits + check digit."""
    if BIN_PATTERN.fullmatch(bin_prefix) is None:
        msg = f"BIN prefix must be {BIN_LENGTH} digits, got {bin_prefix!r}"
        raise ValueError(msg)
    body = "".join(str(rng.randrange(10)) for _ in range(BODY_LENGTH))
    partial = bin_prefix + body
    return f"{partial}{luhn_check_digit(partial)}"


def generate_pin(rng: Random) -> str:
    """Return four independent random digits (leading zeros kept)."""
    return "".join(str(rng.randrange(10)) for _ in range(PIN_LENGTH))


def is_valid_pin(pin: str) -> bool:
    """Check whether *pin* is a 4-digit string."""
    return PIN_PATTERN.fullmatch(pin) is not None
