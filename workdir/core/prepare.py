"""Make sure a directory exists and is writable, creating it when missing."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from workdir.core.errors import (
    CollisionKind,
    CreationFailedError,
    NameCollisionError,
    NotWritableError,
    PrepareError,
)
from workdir.core.filesystem import FileSystem, get_filesystem
from workdir.core.logging import NullLogger, StructuredLogger

MKDIR_MODE = 0o777


class PrepareStatus(Enum):
    """Outcome of preparing a directory."""
    ALREADY_OK = "already_ok"    # Existed and writable, nothing done
    CREATED = "created"          # Created (with parents)
    FAILED = "failed"            # See PrepareResult.error


@dataclass
class PrepareResult:
    path: str
    status: PrepareStatus
    error: Optional[PrepareError] = None

    @property
    def ok(self) -> bool:
        return self.status is not PrepareStatus.FAILED

    def __bool__(self) -> bool:
        return self.ok


def _collision_kind(fs: FileSystem, path: str) -> CollisionKind:
    if fs.is_symlink(path):
        return CollisionKind.LINK
    if fs.is_file(path):
        return CollisionKind.FILE
    return CollisionKind.OTHER


def _ensure_directory(fs: FileSystem, path: str, mode: int) -> PrepareStatus:
    """Raise a PrepareError unless *path* ends up as a writable directory."""
    if fs.is_dir(path):
        if fs.is_writable(path):
            return PrepareStatus.ALREADY_OK
        raise NotWritableError(path)
    if fs.exists(path):
        raise NameCollisionError(path, _collision_kind(fs, path))
    if not fs.make_directories(path, mode):
        raise CreationFailedError(path)
    return PrepareStatus.CREATED


def prepare_directory(
    path: str | os.PathLike,
    fs: FileSystem | None = None,
    log: StructuredLogger | None = None,
    mode: int = MKDIR_MODE,
) -> PrepareResult:
    """Create *path* (with parents) if needed and check it is writable.

    Failures are logged and returned in the result, never raised.
    Calling this again on a directory that is already fine is a no-op.
    """
    fs = fs if fs is not None else get_filesystem()
    log = log if log is not None else NullLogger()
    path = os.fspath(path)

    try:
        status = _ensure_directory(fs, path, mode)
    except PrepareError as e:
        log.error(
            'Failed to prepare directory "{directory}": {message}',
            {"directory": path, "message": e.message},
        )
        return PrepareResult(path=path, status=PrepareStatus.FAILED, error=e)

    if status is PrepareStatus.CREATED:
        log.notice("Directory created: {dir}.", {"dir": path})
    return PrepareResult(path=path, status=status)
