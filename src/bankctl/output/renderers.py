"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.text import Text

from bankctl.domain.money import format_money
from bankctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from bankctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    currency_symbol: str = "€",
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose, symbol=currency_symbol)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    if result.op == "open_account":
        return f"{d['number']} {d['pin']}"
    if "balance" in d:
        return str(d["balance"])
    if result.op == "validate_number":
        return "valid" if d.get("valid") else "invalid"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _money(value: Any, symbol: str) -> str:
    return format_money(Decimal(str(value)), symbol)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="bank.ok")
    op = Text(f"  {result.op}", style="bank.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="bank.key")
    if not style and (key == "number" or key in ("sender", "receiver")):
        style = "bank.number"
    console.print(k, Text(str(value), style=style), sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including operation timing (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "timing":
            _render_timing(console, v)
        else:
            console.print(f"    {k}: {v}")


def _timing_line(indent: int, elapsed: float, label: str) -> str:
    if elapsed > 1000:
        style = "bold red"
    elif elapsed > 100:
        style = "yellow"
    else:
        style = "dim"
    return f"{' ' * indent}[{style}]{elapsed:>8.2f}ms[/{style}]  {label}"


def _render_timing(console: Console, timing: dict[str, Any]) -> None:
    console.print(_timing_line(4, timing.get("elapsed_ms", 0.0), timing.get("op", "?")))
    for name, elapsed in timing.get("steps", {}).items():
        console.print(_timing_line(8, elapsed, name))


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text("  warning: ", style="bank.warning"), warning, sep="", end="")
        console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="bank.error")
    op = Text(f"  {result.op}", style="bank.op")
    dash = Text(" — ")
    console.print(label, op, dash, msg, sep="")

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(f"    {k}: {v}")


# ── Account renderers ─────────────────────────────────────────────────


def _render_open_account(
    result: ServiceResult, console: Console, *, verbose: bool = False, symbol: str = "€"
) -> None:
    """Credentials panel shown once, right after an account is opened."""
    d = result.data
    body = Text()
    body.append("Account Holder:  ", style="bank.key")
    body.append(f"{d['holder_name']}\n")
    body.append("Account Number:  ", style="bank.key")
    body.append(f"{d['number']}\n", style="bank.number")
    body.append("PIN:             ", style="bank.key")
    body.append(f"{d['pin']}\n", style="bank.pin")
    body.append("Created At:      ", style="bank.key")
    body.append(str(d.get("created_display", d["created_at"])))
    title = "Account Successfully Created"
    if d.get("bank"):
        title = f"{d['bank']} — {title}"
    console.print(Panel(body, title=title, border_style="bank.ok", expand=False))
    console.print("Please store your credentials securely.")
    if verbose:
        _render_meta(console, result)


def _render_balance(
    result: ServiceResult, console: Console, *, verbose: bool = False, symbol: str = "€"
) -> None:
    d = result.data
    body = Text()
    body.append("Current Balance: ", style="bank.key")
    body.append(_money(d["balance"], symbol), style="bank.money")
    console.print(
        Panel(body, title="Account Balance", subtitle=d.get("holder_name"), expand=False)
    )
    if verbose:
        _field(console, "number", d["number"])
        _render_meta(console, result)


def _render_close(
    result: ServiceResult, console: Console, *, verbose: bool = False, symbol: str = "€"
) -> None:
    _status_line(console, result)
    _field(console, "number", result.data["number"])
    console.print("  Your account has been closed.")
    _render_warnings(console, result)
    if verbose:
        _render_meta(console, result)


def _render_validate(
    result: ServiceResult, console: Console, *, verbose: bool = False, symbol: str = "€"
) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "number", d["number"])
    verdict = "valid" if d["valid"] else "invalid checksum"
    _field(console, "checksum", verdict, style="bank.ok" if d["valid"] else "bank.error")
    if verbose:
        _render_meta(console, result)


# ── Money movement renderers ──────────────────────────────────────────


def _render_movement(
    result: ServiceResult, console: Console, *, verbose: bool = False, symbol: str = "€"
) -> None:
    """Render deposit / withdraw results."""
    d = result.data
    verb, style = ("deposited", "bank.credit")
    if result.op == "withdraw":
        verb, style = ("withdrew", "bank.debit")
    _status_line(console, result)
    amount = Text(_money(d["amount"], symbol), style=style)
    console.print(f"  Successfully {verb}: ", amount, sep="")
    _field(console, "balance", _money(d["balance"], symbol), style="bank.money")
    if verbose:
        _field(console, "number", d["number"])
        _render_meta(console, result)


def _render_transfer(
    result: ServiceResult, console: Console, *, verbose: bool = False, symbol: str = "€"
) -> None:
    d = result.data
    _status_line(console, result)
    console.print(
        "  Successfully transferred ",
        Text(_money(d["amount"], symbol), style="bank.debit"),
        " to account ",
        Text(d["receiver"], style="bank.number"),
        sep="",
    )
    if "balance" in d:
        _field(console, "balance", _money(d["balance"], symbol), style="bank.money")
    if verbose:
        _field(console, "sender", d["sender"])
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(
    result: ServiceResult, console: Console, *, verbose: bool = False, symbol: str = "€"
) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    _render_warnings(console, result)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "open_account": _render_open_account,
    "balance": _render_balance,
    "close_account": _render_close,
    "validate_number": _render_validate,
    "deposit": _render_movement,
    "withdraw": _render_movement,
    "transfer": _render_transfer,
}
