"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Current UTC time, timezone-aware (for account creation stamps)."""
    return datetime.now(UTC)


def mask_number(number: str) -> str:
    """Hide all but the last four digits of an account number.

    Examples:
        >>> mask_number("4000001234567899")
        '************7899'
        >>> mask_number("12")
        '12'
    """
    if len(number) <= 4:
        return number
    return "*" * (len(number) - 4) + number[-4:]
