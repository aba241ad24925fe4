"""Classification enums shared across layers."""

from __future__ import annotations

from enum import StrEnum


class ClosePolicy(StrEnum):
    """What closing an account does with a remaining balance."""

    ALLOW = "allow"
    REQUIRE_ZERO = "require_zero"
