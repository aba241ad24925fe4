"""Locate the ``bankctl.toml`` that configures a bank.

``BANKCTL_CONFIG`` names the file outright. Without it, the starting
directory and then each parent is searched, nearest first, so every
directory below a bank's root shares its ledger and settings.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "bankctl.toml"
CONFIG_ENV_VAR = "BANKCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the bank's config file, or None when there is none.

    A ``BANKCTL_CONFIG`` pointing at a missing file yields None; the
    directory search is not used as a fallback.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
