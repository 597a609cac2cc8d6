"""structlog configuration for httplan.

Library modules log through `get_logger`, which wraps the stdlib logger of
the same name, so nothing is emitted until the host application sets
levels or calls `configure_logging`.

Two output modes:
- Human (default): colored console output to stderr
- JSON (log_json=True): structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from httplan.config.settings import HttplanSettings


def get_logger(name: str) -> Any:
    """Return a structlog logger backed by the stdlib logger `name`.

    The stdlib level is the switch: callers check `isEnabledFor` before
    building debug events.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def configure_logging(
    settings: HttplanSettings | None = None,
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        settings: When given, its `verbose` and `log_json` fields are used
            and the keyword arguments are ignored.
        verbose: Enable DEBUG-level output for httplan. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    if settings is not None:
        verbose, log_json = settings.verbose, settings.log_json
    level = logging.DEBUG if verbose else logging.WARNING

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

    httplan_logger = logging.getLogger("httplan")
    httplan_logger.handlers = [h for h in httplan_logger.handlers if isinstance(h, logging.NullHandler)]
    httplan_logger.addHandler(handler)
    httplan_logger.setLevel(level)
    httplan_logger.propagate = False
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
