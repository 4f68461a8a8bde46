"""Move registered files from an old base directory to a new one.

Files are moved one at a time. A failure part way through leaves the
already-moved files at the new base; the result reports which is which.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from workdir.core.errors import PartialRelocationError
from workdir.core.filesystem import FileSystem, get_filesystem
from workdir.core.logging import NullLogger, StructuredLogger
from workdir.core.paths import directory_portion, join_path
from workdir.core.prepare import MKDIR_MODE, prepare_directory


@dataclass
class RelocationResult:
    """Partition of the requested files after a relocation."""
    moved: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)   # Not present under the old base

    @property
    def partial(self) -> bool:
        return bool(self.failed)

    def raise_for_partial(self) -> None:
        """Raise PartialRelocationError if any candidate failed to move."""
        if self.failed:
            raise PartialRelocationError(self.moved, self.failed)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "moved": list(self.moved),
            "failed": list(self.failed),
            "skipped": list(self.skipped),
        }


def move_file(
    old_path: str,
    new_path: str,
    fs: FileSystem | None = None,
    log: StructuredLogger | None = None,
) -> bool:
    """Rename a single file, logging the outcome."""
    fs = fs if fs is not None else get_filesystem()
    log = log if log is not None else NullLogger()
    context = {"old": old_path, "new": new_path}
    if fs.rename(old_path, new_path):
        log.notice("Moved file from {old} to {new}", context)
        return True
    log.error("Failed to move file from {old} to {new}", context)
    return False


def relocate_files(
    old_base: str | os.PathLike,
    new_base: str | os.PathLike,
    files: Iterable[str],
    fs: FileSystem | None = None,
    log: StructuredLogger | None = None,
    windows: Optional[bool] = None,
    mode: int = MKDIR_MODE,
) -> RelocationResult:
    """Move each of *files* from under *old_base* to the same place under *new_base*.

    Args:
        old_base: Directory the relative paths currently live under.
        new_base: Directory to move them to.
        files: Relative paths, processed in order.
        fs: Filesystem collaborator (defaults to the local disk).
        log: Structured logger (defaults to a no-op).
        windows: Force Windows path rules; detected when None.
        mode: Mode for any intermediate directories created.

    Returns:
        RelocationResult. Files missing under *old_base* are skipped rather
        than counted as failures.
    """
    fs = fs if fs is not None else get_filesystem()
    log = log if log is not None else NullLogger()
    old_base = os.fspath(old_base)
    new_base = os.fspath(new_base)

    result = RelocationResult()
    for name in files:
        old_path = join_path(old_base, name, windows)
        new_path = join_path(new_base, name, windows)
        if not fs.exists(old_path):
            result.skipped.append(name)
            continue
        prepared = prepare_directory(directory_portion(new_path, windows), fs=fs, log=log, mode=mode)
        if prepared.ok and move_file(old_path, new_path, fs=fs, log=log):
            result.moved.append(name)
        else:
            result.failed.append(name)

    if result.failed:
        log.error(
            "{count} file(s) could not be moved: {files}",
            {"count": len(result.failed), "files": ", ".join(result.failed)},
        )
    log.notice("Moved {count} file(s).", {"count": len(result.moved)})
    return result
