"""Opt-in log output for the ``space_email`` logger namespace.

Every module logs through ``structlog.get_logger(__name__)``, so events land
on stdlib loggers under ``space_email.*``.  An application that already
configures structlog and logging needs nothing from here.
:func:`setup_logging` is for scripts that just want to see the client's
events.  It leaves the root logger and any other handler alone.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog

LOGGER_NAME = "space_email"

# Marks handlers installed here so a second call replaces only those.
_HANDLER_FLAG = "_space_email_handler"


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(
    *,
    json: bool = True,
    level: str = "INFO",
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Send ``space_email`` events to *stream* (stderr by default).

    structlog is routed through stdlib logging only if the host has not
    configured it yet.  The handler goes on the ``space_email`` logger,
    which stops propagating so events are not printed twice.  Returns the
    installed handler.
    """
    if not structlog.is_configured():
        _configure_structlog()

    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
    )
    setattr(handler, _HANDLER_FLAG, True)

    package_logger = logging.getLogger(LOGGER_NAME)
    for existing in list(package_logger.handlers):
        if getattr(existing, _HANDLER_FLAG, False):
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
    package_logger.propagate = False
    return handler
