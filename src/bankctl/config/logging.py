"""structlog configuration for bankctl.

Two stderr output modes:
- Human (default): colored console output
- JSON (--log-json): structured JSON lines

An optional ``[logging] file`` adds a JSON-lines file handler at INFO so
the audit trail (account opened, deposits, failed logins, ...) is kept
even when the console only shows warnings.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

_FILE_HANDLER_NAME = "bankctl-audit-file"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level console output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        log_file: Also append INFO+ records as JSON lines to this file.
    """
    console_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(console_level)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers:
        if existing.get_name() == _FILE_HANDLER_NAME:
            existing.close()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    bank_logger = logging.getLogger("bankctl")
    bank_logger.setLevel(console_level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER_NAME)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared_processors,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )
        root_logger.addHandler(file_handler)
        bank_logger.setLevel(min(console_level, logging.INFO))

    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
