"""Tests for the Rich console factory."""

from __future__ import annotations

from bankctl.output.console import BANK_THEME, create_console, get_output


def test_renders_to_buffer() -> None:
    console = create_console(no_color=True)
    console.print("hello")
    assert get_output(console) == "hello\n"


def test_default_width() -> None:
    assert create_console().width == 100


def test_theme_styles_registered() -> None:
    for name in ("bank.ok", "bank.error", "bank.money", "bank.number"):
        assert name in BANK_THEME.styles
