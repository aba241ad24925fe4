"""Click classes and options shared by the bankctl commands.

``--help`` stays short. The worked invocations (opening an account,
moving money between two numbers) sit behind an eager ``--examples``
flag on any command declared with ``examples=``.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print_examples,
        help="Show usage examples.",
    )


class BankCommand(click.Command):
    """A bankctl subcommand; ``examples=`` adds ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))


class BankGroup(click.Group):
    """The root ``bankctl`` group. Subcommands default to :class:`BankCommand`."""

    command_class = BankCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))


# Account-scoped commands take the PIN here or prompt for it.
pin_option = click.option(
    "--pin",
    default=None,
    help="Account PIN (prompted, hidden, when omitted in a terminal).",
)
