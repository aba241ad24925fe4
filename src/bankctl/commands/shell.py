"""Command: the interactive menu-driven banking session.

The shell drives the same :class:`~bankctl.services.bank.BankService` the
one-shot commands use. A failed request prints its error and returns to
the current menu; only ``0``, end of input, or Ctrl-C ends the session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bankctl.commands._base import BankCommand

if TYPE_CHECKING:
    from bankctl.commands._context import AppContext

MAIN_MENU = """\
--- Main Menu ---
1. Create an account
2. Log into account
0. Exit
"""

ACCOUNT_MENU = """\
--- Account Menu ---
1. Balance
2. Deposit money
3. Withdraw money
4. Transfer
5. Close account
6. Log out
0. Exit
"""


class BankShell:
    """Main menu / account menu loop over one :class:`AppContext`."""

    def __init__(self, app: AppContext) -> None:
        self._app = app
        self._bank_name = app.settings.bank.name

    def run(self) -> None:
        self._banner()
        try:
            self._main_loop()
        except click.Abort:
            click.echo()
        click.echo("Goodbye!")

    # ------------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------------

    def _banner(self) -> None:
        rule = "=" * 36
        click.echo(rule)
        click.echo(f"Welcome to {self._bank_name}".center(36).rstrip())
        click.echo("Secure. Simple. Personal Banking.".center(36).rstrip())
        click.echo(rule)
        click.echo()

    def _main_loop(self) -> None:
        while True:
            click.echo(MAIN_MENU)
            choice = click.prompt("Choose an option", default="", show_default=False)
            if choice == "1":
                self._create_account()
            elif choice == "2":
                number = self._login()
                if number is not None and self._account_loop(number):
                    return
            elif choice == "0":
                return
            else:
                click.echo("Error. Invalid input.")
            click.echo()

    def _account_loop(self, number: str) -> bool:
        """Serve the account menu. Returns True when the user chose to exit."""
        while True:
            click.echo(ACCOUNT_MENU)
            choice = click.prompt("Choose an option", default="", show_default=False)
            if choice == "1":
                self._app.show(self._app.service.balance(number))
            elif choice == "2":
                self._move("deposit", number)
            elif choice == "3":
                self._move("withdraw", number)
            elif choice == "4":
                self._transfer(number)
            elif choice == "5":
                if self._close(number):
                    return False
            elif choice == "6":
                click.echo("You have successfully logged out!")
                return False
            elif choice == "0":
                return True
            else:
                click.echo("Wrong input")
            click.echo()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _create_account(self) -> None:
        holder_name = click.prompt("Enter your full name")
        self._app.show(self._app.service.open_account(holder_name))

    def _login(self) -> str | None:
        number = click.prompt("Enter your account number").strip()
        pin = click.prompt("Enter your PIN", hide_input=True).strip()
        if not self._app.show(self._app.service.login(number, pin)):
            return None
        click.echo("Login successful!")
        click.echo(f"Welcome back to {self._bank_name}.")
        click.echo()
        return number

    def _move(self, op: str, number: str) -> None:
        amount = click.prompt(f"Enter amount to {op}")
        method = getattr(self._app.service, op)
        self._app.show(method(number, amount))

    def _transfer(self, number: str) -> None:
        receiver = click.prompt("Enter receiver's account number").strip()
        if not self._app.show(self._app.service.check_transfer(number, receiver)):
            return
        amount = click.prompt("Enter amount to transfer")
        self._app.show(self._app.service.transfer(number, receiver, amount))

    def _close(self, number: str) -> bool:
        """Close the logged-in account. Returns True if it was closed."""
        if not click.confirm("Close this account? This cannot be undone", default=False):
            return False
        if not self._app.show(self._app.service.close_account(number)):
            return False
        click.echo("Logging out...")
        return True


@click.command(
    cls=BankCommand,
    examples="""\
  bankctl shell
  bankctl --db demo.db shell
  bankctl -v shell            # show timing for every request""",
)
@click.pass_obj
def shell(app: AppContext) -> None:
    """Start an interactive banking session."""
    if app.settings.json_output:
        from bankctl.services.base import failure

        app.emit(failure("shell", "INVALID_USAGE", "The shell cannot run with --json"))
    BankShell(app).run()
