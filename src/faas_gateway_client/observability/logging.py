"""Structured logging configuration for the FaaS gateway client.

This module provides structured logging using structlog to emit
JSON-formatted logs with contextual information. The listing loop binds:

- Gateway URL
- Target location and attempt number
- Response status and outcome
- Error type for failed calls

Credentials are never bound to log events.

Examples:
    Configure logging::

        from faas_gateway_client.observability.logging import configure_logging

        configure_logging(level="INFO", json_output=True)

    Use the logger::

        from faas_gateway_client.observability.logging import get_logger

        logger = get_logger(__name__)
        logger.info(
            "gateway.list.redirect",
            gateway_url="http://127.0.0.1:8080",
            location="/system/functions",
            attempt=2,
        )

    Output (JSON)::

        {
            "event": "gateway.list.redirect",
            "gateway_url": "http://127.0.0.1:8080",
            "location": "/system/functions",
            "attempt": 2,
            "timestamp": "2024-01-01T00:00:00.000000Z",
            "level": "info"
        }
"""

import logging
import sys
from typing import Any, TextIO

import structlog

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging for programs using the client.

    The package itself never calls this. Console output is the default;
    pass ``json_output=True`` for log aggregation.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, emit JSON logs; if False, use console format
        stream: Where to write log lines (default: stderr, keeping stdout
            free for listing output)

    Raises:
        ValueError: If ``level`` is not a known level name

    Examples:
        >>> configure_logging(level="DEBUG")
        >>> configure_logging(level="INFO", json_output=True, stream=sys.stdout)
    """
    if level.upper() not in LEVELS:
        raise ValueError(f"unknown log level: {level!r}")
    log_level = getattr(logging, level.upper())
    stream = sys.stderr if stream is None else stream

    logging.basicConfig(format="%(message)s", stream=stream, level=log_level)

    processors: list[object] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_output:
        processors.extend([structlog.processors.format_exc_info, structlog.processors.JSONRenderer()])
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)
    """
    return structlog.get_logger(name)
