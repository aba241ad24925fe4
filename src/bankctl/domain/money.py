"""Decimal money helpers.

Balances and amounts are always :class:`decimal.Decimal`. Binary floats are
rejected at the boundary because they cannot represent cents exactly.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from bankctl.domain.errors import InvalidAmount, MalformedAmount

ZERO = Decimal("0.00")
CENT = Decimal("0.01")

# Balances stay far below the default context's 28 significant digits,
# so sums of cent amounts are always exact.
MAX_AMOUNT = Decimal("1E15")


def require_cents(amount: Decimal) -> Decimal:
    """Return *amount* if it is a whole number of cents below ``MAX_AMOUNT``.

    Trailing zeros past the cents are fine (``5.000``); any other digit
    there is not, since it could not be added to a balance exactly.

    Raises:
        InvalidAmount: If *amount* has sub-cent digits or is too large.
    """
    if abs(amount) >= MAX_AMOUNT:
        raise InvalidAmount(f"Amount exceeds the largest supported value ({MAX_AMOUNT:,.0f})")
    if amount.as_tuple().exponent < -2 and amount != amount.quantize(CENT):
        raise InvalidAmount("Amount must not have more than two decimal places")
    return amount


def parse_amount(raw: str | Decimal) -> Decimal:
    """Parse user-supplied amount text into a finite Decimal of whole cents.

    Surrounding whitespace is ignored. ``NaN`` and infinities are rejected,
    as are floats (pass the original text instead).

    Raises:
        MalformedAmount: If *raw* is not a finite decimal number.
        InvalidAmount: If the value has sub-cent digits or is too large.
    """
    if isinstance(raw, float):
        raise MalformedAmount(f"Float amounts are not accepted: {raw!r}")
    if isinstance(raw, Decimal):
        value = raw
    else:
        try:
            value = Decimal(str(raw).strip())
        except InvalidOperation as exc:
            raise MalformedAmount(f"Invalid number format: {raw!r}") from exc
    if not value.is_finite():
        raise MalformedAmount(f"Invalid number format: {raw!r}")
    return require_cents(value)


def require_positive(amount: Decimal) -> Decimal:
    """Return *amount* if it is a strictly positive cent amount, else raise InvalidAmount."""
    if amount <= 0:
        raise InvalidAmount("Amount must be positive")
    return require_cents(amount)


def format_money(amount: Decimal, symbol: str = "€") -> str:
    """Format as ``€1,234.56`` (grouped thousands, two decimals).

    Examples:
        >>> format_money(Decimal("1234.5"))
        '€1,234.50'
        >>> format_money(Decimal("-3"))
        '-€3.00'
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
