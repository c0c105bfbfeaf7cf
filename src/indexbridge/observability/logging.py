"""Structured logging configuration using structlog.

IndexBridge modules log through ``logging.getLogger(__name__)``; those
records are rendered by the same structlog chain as structlog loggers, via
one ``ProcessorFormatter`` handler on the root logger.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from indexbridge.config.settings import ObservabilitySettings

# Loggers of the Elasticsearch client stack; they log every request at INFO.
_TRANSPORT_LOGGERS = ("elastic_transport", "elasticsearch")
_HANDLER_NAME = "indexbridge"


def _pre_chain() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]


def setup_logging(settings: ObservabilitySettings | None = None) -> None:
    """Configure structured logging for IndexBridge.

    Calling it again replaces the handler it installed earlier. The client
    transport loggers are held at WARNING unless the level is DEBUG, in which
    case request traces are let through alongside the rendered query bodies.

    Args:
        settings: Observability settings. Uses defaults if None.
    """
    log_level = settings.log_level.upper() if settings else "INFO"
    log_format = settings.log_format if settings else "json"
    level = getattr(logging, log_level, logging.INFO)

    renderer = structlog.dev.ConsoleRenderer() if log_format == "console" else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
