"""Logfire setup for the board service.

Modules log through ``logging.getLogger(__name__)`` with snake_case
event names and the interesting fields in ``extra``; once
``configure_logfire()`` has run, those records flow into Logfire next to
the request spans from ``instrument_fastapi()``.

    logger.info("task_created", extra={"task_id": 3, "bucket": "Today"})
    log_with_context(logger, "info", "task_moved", task_id=3, bucket="Today", index=0)
"""

import logging

import logfire
from fastapi import FastAPI

from eisenhower.core.config import settings


logger = logging.getLogger(__name__)


def configure_logfire() -> None:
    """Set up Logfire and route the root logger through it.

    Without ``LOGFIRE_TOKEN`` nothing leaves the machine; records still
    go to the console.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name="eisenhower",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logging.basicConfig(level=logging.INFO, handlers=[logfire.LogfireLoggingHandler()])
    logger.info("logfire_configured", extra={"environment": settings.environment})


def instrument_fastapi(app: FastAPI) -> None:
    """Emit one span per HTTP request handled by ``app``."""
    logfire.instrument_fastapi(app)
    logger.info("fastapi_instrumented")


def span(name: str) -> logfire.LogfireSpan:
    """Open a span around one task operation, e.g. ``span("task_service.move_task")``."""
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log ``message`` at ``level`` with keyword arguments as structured fields.

    Args:
        logger: Logger of the calling module
        level: "debug", "info", "warning", "error" or "critical"
        message: snake_case event name
        **context: Fields such as task_id, bucket or position
    """
    getattr(logger, level.lower())(message, extra=context)
