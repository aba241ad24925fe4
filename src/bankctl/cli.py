"""Root CLI group for bankctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from bankctl import __version__
from bankctl.commands import register_commands
from bankctl.commands._base import BankGroup
from bankctl.commands._context import AppContext
from bankctl.config.settings import BankSettings


@click.group(
    cls=BankGroup,
    invoke_without_command=True,
    examples="""\
  bankctl                              # interactive session in a terminal
  bankctl open "Ada Lovelace"
  bankctl --db /tmp/demo.db balance 4000001234567899 --pin 1234
  bankctl -c ./bankctl.toml --json deposit 4000001234567899 20 --pin 1234""",
)
@click.version_option(version=__version__, prog_name="bankctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--db",
    "db_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Ledger database file (overrides [database] file).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
    db_file: Path | None,
) -> None:
    """bankctl — a small retail bank in your terminal."""
    settings = BankSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
        db_file=db_file,
    )
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        if ctx.obj.interactive:
            from bankctl.commands.shell import BankShell

            BankShell(ctx.obj).run()
        else:
            click.echo(ctx.get_help())


register_commands(cli)
