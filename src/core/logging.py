"""Structured logging for the pagination store.

Every module that logs obtains its logger through ``get_logger(__name__)``
and emits snake_case event names with keyword context:

    from src.core.logging import configure_logging, get_logger

    configure_logging(development=True)
    logger = get_logger(__name__)
    logger.debug("page_snapped", current_page=2, history_depth=3)

Output is pretty-printed in development and JSON in production.
"""

import logging
import sys
from os import getenv
from typing import Any, cast

import structlog
from structlog.types import Processor


def _is_development() -> bool:
    return getenv("ENVIRONMENT", "development").lower() != "production"


def _build_processors(development: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    return processors


def configure_logging(
    development: bool | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        development: Pretty console output when True, JSON when False.
            Defaults to the ENVIRONMENT env var (anything but "production"
            counts as development).
        log_level: DEBUG, INFO, WARNING or ERROR. Defaults to the LOG_LEVEL
            env var, then INFO.
    """
    if development is None:
        development = _is_development()
    if log_level is None:
        log_level = getenv("LOG_LEVEL", "INFO")

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=_build_processors(development),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # force=True replaces handlers installed by an earlier call
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )
    logging.getLogger().setLevel(numeric_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def bind_contextvars(**kwargs: Any) -> None:
    """Attach key/value pairs to every subsequent log line.

    Used to tag log output with the identity of the store being driven:

        bind_contextvars(store_id=store.store_id)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """Drop all bound context variables."""
    structlog.contextvars.clear_contextvars()


def unbind_contextvars(*keys: str) -> None:
    """Drop the named context variables."""
    structlog.contextvars.unbind_contextvars(*keys)
