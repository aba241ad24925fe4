"""Subcommand modules for bankctl.

Provides register_commands() which uses deferred imports to keep
``bankctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from bankctl.commands.account import balance, close, open_cmd
    from bankctl.commands.money import deposit, transfer, withdraw
    from bankctl.commands.shell import shell
    from bankctl.commands.validate import validate

    cli.add_command(open_cmd)
    cli.add_command(balance)
    cli.add_command(deposit)
    cli.add_command(withdraw)
    cli.add_command(transfer)
    cli.add_command(close)
    cli.add_command(validate)
    cli.add_command(shell)
