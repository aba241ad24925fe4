"""Command: Luhn-check an account number without touching the ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bankctl.commands._base import BankCommand

if TYPE_CHECKING:
    from bankctl.commands._context import AppContext


@click.command(
    cls=BankCommand,
    examples="""\
  bankctl validate 4000001234567899
  bankctl -q validate 4000001234567890   # prints: invalid""",
)
@click.argument("number")
@click.pass_obj
def validate(app: AppContext, number: str) -> None:
    """Check the checksum digit of NUMBER."""
    from bankctl.domain.errors import LedgerError
    from bankctl.domain.ids import validate_checksum
    from bankctl.services.base import failure
    from bankctl.services.result import ServiceResult

    try:
        valid = validate_checksum(number)
    except LedgerError as exc:
        app.emit(failure("validate_number", exc.code, str(exc)))
        return
    app.emit(ServiceResult(ok=True, op="validate_number", data={"number": number, "valid": valid}))
