"""Helpers shared by CLI command tests."""

from __future__ import annotations

import json
from typing import Any

from click.testing import CliRunner

from bankctl.cli import cli


def invoke_json(runner: CliRunner, *args: str) -> tuple[int, dict[str, Any]]:
    """Invoke with ``--json`` and return ``(exit_code, parsed_stdout)``."""
    result = runner.invoke(cli, ["--json", *args])
    return result.exit_code, json.loads(result.stdout)


def open_via_cli(runner: CliRunner, holder_name: str = "Ada Lovelace") -> tuple[str, str]:
    """Open an account through the CLI and return ``(number, pin)``."""
    code, payload = invoke_json(runner, "open", holder_name)
    assert code == 0, payload
    return payload["data"]["number"], payload["data"]["pin"]
