"""
Logging for the inspection core.

Records emitted under the ``vehicle_intake`` logger carry the inspection
session, the marker photo group and the component that produced them. The
context lives in a :class:`contextvars.ContextVar`, so concurrent photo
batches running in separate tasks keep their own fields.
"""

import contextvars
import inspect
import logging
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

PACKAGE_LOGGER = "vehicle_intake"

DEFAULT_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(inspection_session)s/%(marker_group)s] %(message)s"
)

# Always present on records so format strings can reference them
CONTEXT_FIELDS: Mapping[str, str] = {
    "inspection_session": "-",
    "marker_group": "-",
    "component": "-",
}

_log_context: "contextvars.ContextVar[Dict[str, Any]]" = contextvars.ContextVar(
    "vehicle_intake_log_context", default={}
)


class ContextFilter(logging.Filter):
    """Stamp the current inspection context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, default in CONTEXT_FIELDS.items():
            if not hasattr(record, key):
                setattr(record, key, default)
        for key, value in _log_context.get().items():
            setattr(record, key, value)
        return True


_context_filter = ContextFilter()


def _build_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(_context_filter)
    return handler


def setup_logging(
    level: str = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the ``vehicle_intake`` logger.

    Only the package logger is touched; a host form keeps its own root
    configuration. Calling this again replaces the handlers installed by the
    previous call.

    Args:
        level: Logging level name, case-insensitive
        log_format: Format string; may use any of ``CONTEXT_FIELDS``
        log_file: Optional log file, its directory is created when missing

    Returns:
        The configured package logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(log_format)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.addHandler(_build_handler(logging.StreamHandler(), numeric_level, formatter))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        package_logger.addHandler(_build_handler(file_handler, numeric_level, formatter))

    return package_logger


def get_context() -> Dict[str, Any]:
    """Return a copy of the logging context of the current task."""
    return dict(_log_context.get())


def set_context(**kwargs) -> None:
    """
    Add fields to the logging context of the current task.

    Example:
        set_context(inspection_session="a1b2", marker_group="c3d4")
        logger.info("Uploading photo")  # Record carries both fields
    """
    _log_context.set({**_log_context.get(), **kwargs})


def clear_context() -> None:
    _log_context.set({})


def with_context(**context_kwargs):
    """
    Decorator adding fields to the logging context for one call.

    The previous context is restored when the call returns or raises. Works
    for plain and ``async`` functions.
    """
    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                token = _log_context.set({**_log_context.get(), **context_kwargs})
                try:
                    return await func(*args, **kwargs)
                finally:
                    _log_context.reset(token)

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            token = _log_context.set({**_log_context.get(), **context_kwargs})
            try:
                return func(*args, **kwargs)
            finally:
                _log_context.reset(token)

        return wrapper
    return decorator
