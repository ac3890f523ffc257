"""femtologging wiring for denmon.

Every module obtains its logger through :func:`get_logger` and emits
pre-formatted messages through the ``log_*`` helpers, so messages are
interpolated once on the calling thread rather than in the femtologging
worker.

Example:
>>> from denmon.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Current supply: %s", "1,000")

"""

from __future__ import annotations

import enum
import os
import typing as typ

from femtologging import basicConfig, get_logger

LOG_LEVEL_ENV = "DENMON_LOG_LEVEL"
_DEFAULT_LEVEL = "INFO"


class LogLevel(enum.StrEnum):
    """Log levels accepted by femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Return the upper-cased level and whether the input had to be replaced.

    Empty or unknown levels fall back to ``INFO`` and are flagged as invalid
    so the caller can warn once logging is up.
    """
    if not level or not level.strip():
        return (_DEFAULT_LEVEL, True)

    normalized = level.strip().upper()
    if normalized in LogLevel.__members__:
        return (normalized, False)
    return (_DEFAULT_LEVEL, True)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging at ``level``.

    Parameters
    ----------
    level : str | None
        Raw level name, typically read from ``DENMON_LOG_LEVEL``.
    force : bool, optional
        Replace any handler configuration already installed.

    Returns
    -------
    tuple[str, bool]
        The level actually applied and a flag set when ``level`` was invalid.

    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def configure_logging_from_env(*, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging from ``DENMON_LOG_LEVEL`` (default ``INFO``)."""
    return configure_logging(os.environ.get(LOG_LEVEL_ENV, _DEFAULT_LEVEL), force=force)


class _SupportsLog(typ.Protocol):
    """Protocol for femtologging-compatible loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: _SupportsLog,
    level: str,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    message = template % args if args else template
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_debug(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a DEBUG message with percent-style formatting."""
    _emit(logger, "DEBUG", template, args, exc_info)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an INFO message with percent-style formatting."""
    _emit(logger, "INFO", template, args, exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a WARNING message with percent-style formatting."""
    _emit(logger, "WARNING", template, args, exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an ERROR message with percent-style formatting."""
    _emit(logger, "ERROR", template, args, exc_info)


__all__ = [
    "LOG_LEVEL_ENV",
    "LogLevel",
    "configure_logging",
    "configure_logging_from_env",
    "get_logger",
    "log_debug",
    "log_error",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
