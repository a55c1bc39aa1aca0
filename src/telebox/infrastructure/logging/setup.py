"""structlog + stdlib logging, rendered through one ProcessorFormatter.

The dictConfig built here is handed to uvicorn; records are emitted from a
background QueueListener so stream I/O never blocks the event loop.
"""

from __future__ import annotations

import atexit
import copy
import logging
import logging.config
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Optional

import structlog

from telebox.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

_STREAMS = {"default": "ext://sys.stderr", "access": "ext://sys.stdout"}

# Logger name -> (handler, propagate); None keeps the root handler
_MANAGED_LOGGERS: dict[str, tuple[Optional[str], bool]] = {
    "uvicorn": ("default", False),
    "uvicorn.error": (None, True),
    "uvicorn.access": ("access", False),
    "httpx": (None, True),
}

# httpx logs full request URLs (query string and token included) at INFO
_QUIET_LOGGERS = {"httpx": logging.WARNING}

_SECRET_KEYS = ("token", "api_token")
_QUEUE_LISTENER: Optional[QueueListener] = None


def _drop_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Uvicorn duplicates the message as "color_message".
    event_dict.pop("color_message", None)
    return event_dict


def _mask_secrets(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in _SECRET_KEYS:
        if event_dict.get(key):
            event_dict[key] = "***"
    return event_dict


def _shared_processors() -> list[structlog.typing.Processor]:
    return [
        _drop_color_message,
        _mask_secrets,
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]


def _processor_formatter(config: AppConfig) -> dict[str, Any]:
    renderer: structlog.typing.Processor
    if config.logging.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    return {
        "()": structlog.stdlib.ProcessorFormatter,
        "foreign_pre_chain": _shared_processors(),
        "processors": [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    }


def _logger_level(name: str, level: str) -> str:
    floor = _QUIET_LOGGERS.get(name)
    if floor is not None and logging.getLevelName(level) < floor:
        return logging.getLevelName(floor)
    return level


def build_logging_config(config: AppConfig) -> dict[str, Any]:
    """Build the uvicorn-compatible dictConfig.

    ``config.logging.level`` applies to root and every managed logger; quiet
    loggers never drop below their floor.
    """
    level = config.logging.level

    loggers: dict[str, dict[str, Any]] = {}
    for name, (handler, propagate) in _MANAGED_LOGGERS.items():
        entry: dict[str, Any] = {"level": _logger_level(name, level)}
        if handler is not None:
            entry["handlers"] = [handler]
            entry["propagate"] = propagate
        loggers[name] = entry

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"structlog": _processor_formatter(config)},
        "handlers": {
            name: {
                "class": "logging.StreamHandler",
                "stream": stream,
                "formatter": "structlog",
            }
            for name, stream in _STREAMS.items()
        },
        "loggers": loggers,
        "root": {"handlers": ["default"], "level": level},
    }


def _stop_async_listener() -> None:
    global _QUEUE_LISTENER
    if _QUEUE_LISTENER is not None:
        try:
            _QUEUE_LISTENER.stop()
        finally:
            _QUEUE_LISTENER = None


class _StructlogQueueHandler(QueueHandler):
    """QueueHandler that keeps structlog's dict ``record.msg`` intact."""

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        return copy.copy(record)


def _enable_async_logging(config: AppConfig) -> None:
    global _QUEUE_LISTENER

    _stop_async_listener()

    kwargs = _processor_formatter(config)
    factory = kwargs.pop("()")
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(factory(**kwargs))

    records: queue.Queue[logging.LogRecord] = queue.Queue()

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_StructlogQueueHandler(records))
    root.setLevel(config.logging.level)

    # Uvicorn loggers re-routed through root so they share the queue
    for name, (handler_name, _) in _MANAGED_LOGGERS.items():
        if handler_name is not None:
            logger = logging.getLogger(name)
            logger.handlers.clear()
            logger.propagate = True

    _QUEUE_LISTENER = QueueListener(records, handler, respect_handler_level=True)
    _QUEUE_LISTENER.start()
    atexit.register(_stop_async_listener)


def configure_logging(config: AppConfig) -> dict[str, Any]:
    """Configure structlog and stdlib logging; return the dictConfig for uvicorn."""
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    cfg = build_logging_config(config)
    logging.config.dictConfig(cfg)
    _enable_async_logging(config)

    log.info(
        "logging_configured",
        log_format=config.logging.format,
        log_level=config.logging.level,
    )
    return cfg
