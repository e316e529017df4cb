"""
Structured logging setup.

structlog renders events; stdlib logging owns handlers and levels so that
records from redis-py and from nsindex share one root logger.
"""

import logging

import structlog

_HANDLER_NAME = "nsindex"


def _processor_chain(json_format: bool) -> list:
    renderer = structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        renderer,
    ]


def _install_handler(root: logging.Logger) -> None:
    if any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Route structlog through stdlib logging at ``level``.

    The root level is set on every call, so a later call (e.g. after
    observability.reset_logging) takes effect even when handlers exist.

    Args:
        level: stdlib level name, already validated by Settings
        json_format: JSON lines instead of the console renderer
    """
    structlog.configure(
        processors=_processor_chain(json_format),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    _install_handler(root)
    root.setLevel(logging.getLevelName(level.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger bound to ``name``."""
    return structlog.get_logger(name)
