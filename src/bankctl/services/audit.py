"""Audit sinks — where ledger operations report what they did.

The ledger never logs directly. It is handed an :class:`AuditSink` at
construction, so tests can inject a recorder and the CLI injects the
structlog-backed sink.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog


class AuditSink(Protocol):
    """Receiver of ledger audit records."""

    def info(self, event: str, **fields: Any) -> None: ...

    def warning(self, event: str, **fields: Any) -> None: ...


class StructlogAuditSink:
    """Emit audit records as structured events on the ``bankctl.audit`` logger."""

    def __init__(self, logger_name: str = "bankctl.audit") -> None:
        self._log = structlog.get_logger(logger_name)

    def info(self, event: str, **fields: Any) -> None:
        self._log.info(event, **_stringify(fields))

    def warning(self, event: str, **fields: Any) -> None:
        self._log.warning(event, **_stringify(fields))


def _stringify(fields: dict[str, Any]) -> dict[str, Any]:
    """Render non-JSON-native values (Decimal, datetime) as exact strings."""
    return {
        key: value if isinstance(value, (str, int, bool)) else str(value)
        for key, value in fields.items()
    }
