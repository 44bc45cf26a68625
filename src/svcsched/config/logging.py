"""structlog configuration for svcsched.

Two console modes, both on stderr:
- Human (default): colored key-value output
- JSON (--log-json): structured JSON lines

Plus an optional daily rolling plain-text log file.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from svcsched.config.models import LoggingConfig


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
    log_file: LoggingConfig | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. Default is INFO.
        quiet: Only WARNING+ (ignored when *verbose* is set).
        log_json: Use JSON renderer instead of console renderer.
        log_file: Rolling file settings; None or ``file_enabled=False``
            disables the file.
    """
    if verbose:
        sched_level = logging.DEBUG
    elif quiet:
        sched_level = logging.WARNING
    else:
        sched_level = logging.INFO

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

    root_logger = logging.getLogger()
    for old in root_logger.handlers:
        if isinstance(old, TimedRotatingFileHandler):
            old.close()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    if log_file is not None and log_file.file_enabled:
        root_logger.addHandler(_file_handler(log_file, shared_processors))

    sched_logger = logging.getLogger("svcsched")
    sched_logger.setLevel(sched_level)


def _file_handler(
    config: LoggingConfig,
    shared_processors: list[structlog.types.Processor],
) -> logging.Handler:
    """Daily rolling file, rotated at midnight, plain text."""
    config.directory.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        config.directory / f"{config.file_prefix}.log",
        when="midnight",
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
        )
    )
    return handler


def flush_logging() -> None:
    """Flush every handler on the root logger."""
    for handler in logging.getLogger().handlers:
        handler.flush()
