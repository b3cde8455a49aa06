"""
Structured logging for applications embedding pagesift.

Library modules only call ``structlog.get_logger``. Handlers and renderers are
installed by the host application through :func:`configure_logging`.
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

import structlog

if TYPE_CHECKING:
    from pagesift.config.config import LoggingConfig

HANDLER_NAME = "pagesift"


def add_correlation_id(logger: logging.Logger, method_name: str, event_dict: Dict[Any, Any]) -> Dict[Any, Any]:
    """Copy a ``correlation_id`` bound with ``structlog.contextvars`` into the event."""
    correlation_id = structlog.contextvars.get_contextvars().get("correlation_id")
    if correlation_id is not None:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def _build_handler(config: LoggingConfig) -> Tuple[logging.Handler, Any]:
    handler: logging.Handler
    renderer: Any
    if config.log_file:
        handler = logging.FileHandler(config.log_file)
        renderer = structlog.processors.JSONRenderer()
    else:
        handler = logging.StreamHandler(sys.stdout)
        renderer = (
            structlog.processors.JSONRenderer() if config.json_logs else structlog.dev.ConsoleRenderer(colors=False)
        )
    handler.set_name(HANDLER_NAME)
    return handler, renderer


def configure_logging(config: LoggingConfig) -> None:
    """
    Route structlog events through stdlib logging.

    File output is always JSON. Console output is JSON or human-readable per
    ``config.json_logs``. Handlers installed by the host are kept; a handler
    from an earlier call is replaced.
    """
    shared_processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        add_correlation_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    handler, renderer = _build_handler(config)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared_processors))

    root = logging.getLogger()
    for previous in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(previous)
        previous.close()
    root.addHandler(handler)
    root.setLevel(config.log_level)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).info(
        "Logging configured", level=config.log_level, output=config.log_file or "console"
    )
