"""Logging for workdir: rotating file handler and the structured logger collaborator.

Preparation, relocation and directory changes report through a
``StructuredLogger``: a message template with ``{name}`` placeholders plus a
context mapping. The default is ``NullLogger``; ``StdlibLogger`` forwards to
the ``workdir`` logger configured by :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z0-9_.]+)\}")

_logger: logging.Logger | None = None


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: str = "INFO",
    logs_dir: Path | None = None,
    log_file: str = "workdir.log",
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> logging.Logger:
    """Configure the workdir logger with optional rotating file handler.

    Returns the configured logger.
    """
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger("workdir")
    logger.setLevel(_level(log_level))
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler (WARNING and above only)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            logs_dir / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(_level(log_level))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the workdir logger. Sets up with defaults if not yet configured."""
    global _logger
    if _logger is None:
        return setup_logging()
    return _logger


def reset_logger() -> None:
    """Reset the global logger (for testing)."""
    global _logger
    if _logger is not None:
        _logger.handlers.clear()
        _logger = None


def interpolate(message: str, context: Optional[Mapping[str, Any]] = None) -> str:
    """Replace ``{name}`` placeholders with values from *context*.

    Unknown placeholders are left as-is.
    """
    if not context:
        return message

    def _sub(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in context:
            return str(context[key])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_sub, message)


@runtime_checkable
class StructuredLogger(Protocol):
    def notice(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None: ...
    def error(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None: ...


class NullLogger:
    """Discards every record."""

    def notice(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        pass

    def error(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        pass


class StdlibLogger:
    """Forward structured records to a :mod:`logging` logger.

    Notices go out at the NOTICE level (between INFO and WARNING). The raw
    context is attached to the record as ``context``.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger if logger is not None else get_logger()

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def notice(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        self._log(NOTICE, message, context)

    def error(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, context)

    def _log(self, level: int, message: str, context: Optional[Mapping[str, Any]]) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(
                level,
                interpolate(message, context),
                extra={"context": dict(context or {})},
            )
