"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``BANKCTL_*`` prefix
  3. TOML file    — ``bankctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`bankctl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from bankctl.config.discovery import find_config
from bankctl.config.models import AccountsConfig, BankConfig, DatabaseConfig, LoggingConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``bankctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class BankSettings(BaseSettings):
    """Unified settings for the bankctl CLI.

    Stored on the :class:`~bankctl.commands._context.AppContext` at the CLI
    root and handed to the :class:`~bankctl.infrastructure.store.AccountStore`.

    Attributes:
        root: Directory the ledger file is resolved against (parent of
            ``bankctl.toml``, or CWD if no config found).
        config_path: The TOML file in effect, or None.
        db_file: Explicit ``--db`` override; wins over ``[database] file``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BANKCTL_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved paths ---
    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    db_file: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    bank: BankConfig = Field(default_factory=BankConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    accounts: AccountsConfig = Field(default_factory=AccountsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def db_path(self) -> Path:
        """Absolute path of the SQLite ledger file."""
        if self.db_file is not None:
            return self.db_file if self.db_file.is_absolute() else Path.cwd() / self.db_file
        configured = Path(self.database.file)
        return configured if configured.is_absolute() else self.root / configured

    @property
    def log_file(self) -> Path | None:
        """Absolute path of the audit log file, if one is configured."""
        path = self.logging.file
        if path is None:
            return None
        return path if path.is_absolute() else self.root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> BankSettings:
        """Construct settings from CLI invocation.

        Discovers ``bankctl.toml`` via walk-up (or explicit *config_path*),
        resolves *root* from the config file's parent directory, and merges
        CLI flags as highest-priority overrides. Flags passed as None are
        dropped so env vars can still supply them.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        flags = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root,
                config_path=toml_path,
                **flags,
            )
        finally:
            _tls.toml_path = None
