"""Commands: deposit, withdraw, transfer.

Amounts are taken as text and parsed to Decimal by the service, so
``10.10`` stays exactly ten euros and ten cents.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bankctl.commands._base import BankCommand, pin_option

if TYPE_CHECKING:
    from bankctl.commands._context import AppContext


@click.command(
    cls=BankCommand,
    examples="""\
  bankctl deposit 4000001234567899 250.00 --pin 1234
  bankctl --json deposit 4000001234567899 0.99 --pin 1234""",
)
@click.argument("account")
@click.argument("amount")
@pin_option
@click.pass_obj
def deposit(app: AppContext, account: str, amount: str, pin: str | None) -> None:
    """Deposit AMOUNT into ACCOUNT."""
    app.authenticate(account, pin, op="deposit")
    app.emit(app.service.deposit(account, amount))


@click.command(
    cls=BankCommand,
    examples="""\
  bankctl withdraw 4000001234567899 40 --pin 1234""",
)
@click.argument("account")
@click.argument("amount")
@pin_option
@click.pass_obj
def withdraw(app: AppContext, account: str, amount: str, pin: str | None) -> None:
    """Withdraw AMOUNT from ACCOUNT (fails on insufficient funds)."""
    app.authenticate(account, pin, op="withdraw")
    app.emit(app.service.withdraw(account, amount))


@click.command(
    cls=BankCommand,
    examples="""\
  bankctl transfer 4000001234567899 4000009876543219 100.00 --pin 1234""",
)
@click.argument("account")
@click.argument("receiver")
@click.argument("amount")
@pin_option
@click.pass_obj
def transfer(
    app: AppContext,
    account: str,
    receiver: str,
    amount: str,
    pin: str | None,
) -> None:
    """Transfer AMOUNT from ACCOUNT to RECEIVER."""
    app.authenticate(account, pin, op="transfer")
    app.emit(app.service.transfer(account, receiver, amount))
