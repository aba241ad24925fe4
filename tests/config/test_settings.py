"""Tests for BankSettings: TOML, env var, and CLI flag precedence."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from bankctl.config.settings import BankSettings
from bankctl.domain.types import ClosePolicy


def _write_config(root: Path, body: str) -> Path:
    path = root / "bankctl.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestDefaults:
    def test_no_config(self, tmp_path: Path) -> None:
        settings = BankSettings.from_cli(root=tmp_path)
        assert settings.config_path is None
        assert settings.bank.name == "Fake Bank"
        assert settings.db_path == tmp_path / "default.db"
        assert settings.log_file is None
        assert settings.accounts.close_policy is ClosePolicy.ALLOW


class TestToml:
    def test_sections_loaded(self, tmp_path: Path) -> None:
        _write_config(
            tmp_path,
            '[bank]\nname = "Acme Savings"\nbin_prefix = "512345"\n'
            '[database]\nfile = "data/ledger.db"\n'
            '[accounts]\nclose_policy = "require_zero"\n'
            '[logging]\nfile = "logs/audit.jsonl"\n',
        )
        settings = BankSettings.from_cli(root=tmp_path)
        assert settings.bank.name == "Acme Savings"
        assert settings.bank.bin_prefix == "512345"
        assert settings.db_path == tmp_path / "data" / "ledger.db"
        assert settings.accounts.close_policy is ClosePolicy.REQUIRE_ZERO
        assert settings.log_file == tmp_path / "logs" / "audit.jsonl"

    def test_root_is_config_parent(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, '[database]\nfile = "bank.db"\n')
        nested = tmp_path / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = BankSettings.from_cli()
        assert settings.root == tmp_path.resolve()
        assert settings.db_path == tmp_path.resolve() / "bank.db"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text('[bank]\nname = "Custom"\n', encoding="utf-8")
        settings = BankSettings.from_cli(root=tmp_path, config_path=str(config))
        assert settings.bank.name == "Custom"
        assert settings.config_path == config

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[bank\nname = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            BankSettings.from_cli(root=tmp_path)


class TestPrecedence:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, '[bank]\nname = "From Toml"\n')
        monkeypatch.setenv("BANKCTL_BANK__NAME", "From Env")
        assert BankSettings.from_cli(root=tmp_path).bank.name == "From Env"

    def test_cli_flag_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BANKCTL_QUIET", "true")
        assert BankSettings.from_cli(root=tmp_path, quiet=False).quiet is False

    def test_none_flags_dropped(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BANKCTL_QUIET", "true")
        assert BankSettings.from_cli(root=tmp_path, quiet=None).quiet is True

    def test_db_file_overrides_database_section(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[database]\nfile = "bank.db"\n')
        settings = BankSettings.from_cli(root=tmp_path, db_file=tmp_path / "other.db")
        assert settings.db_path == tmp_path / "other.db"

    def test_relative_db_file_is_cwd_relative(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        settings = BankSettings.from_cli(root=tmp_path / "elsewhere", db_file=Path("here.db"))
        assert settings.db_path == tmp_path / "here.db"


def test_frozen(tmp_path: Path) -> None:
    settings = BankSettings.from_cli(root=tmp_path)
    with pytest.raises(ValueError):
        settings.quiet = True  # type: ignore[misc]
