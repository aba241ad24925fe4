"""Commands: open, balance, close."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bankctl.commands._base import BankCommand, pin_option

if TYPE_CHECKING:
    from bankctl.commands._context import AppContext


@click.command(
    "open",
    cls=BankCommand,
    examples="""\
  bankctl open "Ada Lovelace"
  bankctl --json open "Grace Hopper"
  bankctl -q open "Alan Turing"     # prints: <number> <pin>""",
)
@click.argument("holder_name")
@click.pass_obj
def open_cmd(app: AppContext, holder_name: str) -> None:
    """Open a new account for HOLDER_NAME and print its number and PIN."""
    app.emit(app.service.open_account(holder_name))


@click.command(
    cls=BankCommand,
    examples="""\
  bankctl balance 4000001234567899 --pin 1234
  bankctl -q balance 4000001234567899 --pin 1234""",
)
@click.argument("account")
@pin_option
@click.pass_obj
def balance(app: AppContext, account: str, pin: str | None) -> None:
    """Show the current balance of ACCOUNT."""
    app.authenticate(account, pin, op="balance")
    app.emit(app.service.balance(account))


@click.command(
    cls=BankCommand,
    examples="""\
  bankctl close 4000001234567899 --pin 1234
  bankctl close 4000001234567899 --pin 1234 --yes""",
)
@click.argument("account")
@pin_option
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def close(app: AppContext, account: str, pin: str | None, yes: bool) -> None:
    """Permanently delete ACCOUNT (any remaining balance is discarded)."""
    app.authenticate(account, pin, op="close_account")
    if not yes and app.interactive:
        click.confirm(f"Close account {account}? This cannot be undone", abort=True)
    app.emit(app.service.close_account(account))
