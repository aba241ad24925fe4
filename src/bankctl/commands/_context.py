"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy store initialization, PIN login for
account commands, and centralized result emission (stdout/stderr
routing + exit codes).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from bankctl.output.formatters import OutputSettings, format_result
from bankctl.services.base import failure

if TYPE_CHECKING:
    from bankctl.config.settings import BankSettings
    from bankctl.infrastructure.store import AccountStore
    from bankctl.services.bank import BankService
    from bankctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The store is lazily
    initialized on first use so ``--help`` and ``--version`` never
    create or open the ledger file.
    """

    def __init__(self, settings: BankSettings) -> None:
        self.settings = settings
        self._store: AccountStore | None = None
        self._service: BankService | None = None

        from bankctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            log_file=settings.log_file,
        )

        if settings.verbose:
            from bankctl.services.timing import enable_timing

            enable_timing()

    @property
    def store(self) -> AccountStore:
        """The account store (created lazily on first access)."""
        if self._store is None:
            from bankctl.infrastructure.store import AccountStore

            self._store = AccountStore(self.settings)
        return self._store

    @property
    def service(self) -> BankService:
        if self._service is None:
            from bankctl.services.bank import BankService

            self._service = BankService(self.store)
        return self._service

    @property
    def interactive(self) -> bool:
        """Prompts require: no ``--no-interact``, no ``--json``, and a TTY stdin."""
        return (
            not self.settings.no_interact
            and not self.settings.json_output
            and sys.stdin.isatty()
        )

    def render(self, result: ServiceResult) -> str:
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            currency_symbol=self.settings.bank.currency_symbol,
        )
        return format_result(result, settings=settings)

    def show(self, result: ServiceResult) -> bool:
        """Print a result without exiting. Returns ``result.ok``.

        Used by the interactive shell, where a failed request must not
        end the session.
        """
        click.echo(self.render(result), err=not result.ok)
        if result.ok and not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        return result.ok

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        if not self.show(result):
            raise SystemExit(1)

    def authenticate(self, number: str, pin: str | None, *, op: str) -> None:
        """Log in as *number* or emit a failure for *op* and exit."""
        if pin is None:
            if not self.interactive:
                self.emit(failure(op, "AUTH_FAILED", "A PIN is required (use --pin)"))
            pin = click.prompt("PIN", hide_input=True)
        result = self.service.login(number, pin)
        if not result.ok:
            error = result.error
            message = error.message if error else "Login failed"
            code = error.code if error else "AUTH_FAILED"
            self.emit(failure(op, code, message))

    def close(self) -> None:
        """Release the store's pooled connections, if a store was opened."""
        if self._store is not None:
            self._store.close()
            self._store = None
            self._service = None
