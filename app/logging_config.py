"""
structlog setup shared by the API server and the CLI.

Every event is tagged with the service name. LI.FI call logs
(``providers.lifi``) can run at their own level through ``LIFI_LOG_LEVEL``,
so upstream traffic can be traced without turning the whole service to DEBUG.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog

from .config import settings

SERVICE_NAME = "btc-swap-gateway"
UPSTREAM_LOGGER = "providers.lifi"

_THIRD_PARTY_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def _level(name: Optional[str], default: int) -> int:
    if not name or not name.strip():
        return default
    value = getattr(logging, name.strip().upper(), None)
    return value if isinstance(value, int) else default


def _add_service(_logger, _method, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(
    log_level: Optional[str] = None,
    *,
    upstream_log_level: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Route structlog and stdlib logging through a single handler.

    Args:
        log_level: Override log level (default: settings.log_level)
        upstream_log_level: Level for LI.FI call logs (default: settings.lifi_log_level,
            empty inherits ``log_level``)
        stream: Output stream; the CLI passes stderr so stdout stays clean for results
    """
    level = _level(log_level or settings.log_level, logging.INFO)
    console = level <= logging.DEBUG

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if not console:
        processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = structlog.dev.ConsoleRenderer() if console else structlog.processors.JSONRenderer()
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # NOTSET defers to the root level
    logging.getLogger(UPSTREAM_LOGGER).setLevel(
        _level(upstream_log_level or settings.lifi_log_level, logging.NOTSET)
    )
