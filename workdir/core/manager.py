"""A working directory as an object.

``WorkingDirectory`` holds a base path and a list of files registered
relative to it. Changing the base moves every registered file that exists
under the old base to the same relative spot under the new one.

Unlike ``os.chdir`` nothing here touches the process working directory and
paths are never passed through ``realpath``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

from workdir.core.config import WorkdirConfig
from workdir.core.errors import DirectoryChangeError
from workdir.core.filesystem import FileSystem, get_filesystem
from workdir.core.logging import NullLogger, StructuredLogger
from workdir.core.paths import (
    SEPARATORS,
    PrefixStrategy,
    is_relative_path,
    is_windows,
    join_path,
    strip_base_prefix,
    strip_base_segments,
)
from workdir.core.prepare import MKDIR_MODE, prepare_directory
from workdir.core.relocator import RelocationResult, relocate_files


@dataclass
class DirectoryChange:
    """Outcome of ``WorkingDirectory.change_directory``."""
    requested: str
    previous: str
    current: str
    success: bool
    error: Optional[DirectoryChangeError] = None
    relocation: Optional[RelocationResult] = None

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "requested": self.requested,
            "previous": self.previous,
            "current": self.current,
            "success": self.success,
            "error": self.error.to_dict() if self.error else None,
            "relocation": self.relocation.to_dict() if self.relocation else None,
        }


class WorkingDirectory:
    """Mutable base directory with files that follow it when it changes.

    Args:
        directory: Initial base. When omitted the process CWD is used.
        log: Structured logger; a no-op logger by default.
        fs: Filesystem collaborator; the local disk by default.
        autocreate: Create *directory* if it does not exist. Off by default,
            so a fresh instance never touches the disk.
        windows: Force Windows path rules; detected when None.
        mode: Mode used for any directory this instance creates.
        prefix_strategy: How absolute paths are matched against the base in
            ``resolve_relative``. Defaults to a literal string prefix.
    """

    def __init__(
        self,
        directory: str | os.PathLike | None = None,
        log: StructuredLogger | None = None,
        fs: FileSystem | None = None,
        autocreate: bool = False,
        windows: Optional[bool] = None,
        mode: int = MKDIR_MODE,
        prefix_strategy: PrefixStrategy = strip_base_prefix,
    ) -> None:
        self.log = log if log is not None else NullLogger()
        self._fs = fs if fs is not None else get_filesystem()
        self._windows = is_windows() if windows is None else windows
        self._mode = mode
        self._prefix_strategy = prefix_strategy
        self._autocreate_default = True
        self._files: list[str] = []
        self._cwd: Optional[str] = None

        if directory is not None:
            self.change_directory(directory, autocreate=autocreate)
        else:
            self._cwd = self._fs.getcwd()

    @classmethod
    def from_config(
        cls,
        config: WorkdirConfig,
        directory: str | os.PathLike | None = None,
        log: StructuredLogger | None = None,
        fs: FileSystem | None = None,
        windows: Optional[bool] = None,
    ) -> WorkingDirectory:
        """Build an instance using the mode, containment and autocreate settings of *config*."""
        strategy = strip_base_segments if config.strict_containment else strip_base_prefix
        instance = cls(
            directory,
            log=log,
            fs=fs,
            windows=windows,
            mode=config.mkdir_mode,
            prefix_strategy=strategy,
        )
        instance._autocreate_default = config.autocreate
        return instance

    @property
    def path(self) -> str:
        """Return the current base directory."""
        return self._cwd if self._cwd is not None else self._fs.getcwd()

    def get_cwd(self) -> str:
        return self.path

    @property
    def registered_files(self) -> tuple[str, ...]:
        """Registered relative paths, in registration order."""
        return tuple(self._files)

    def is_relative(self, path: str | os.PathLike) -> bool:
        return is_relative_path(path, self._windows)

    def resolve_absolute(self, filename: str | os.PathLike) -> str:
        """Join a relative *filename* onto the base; absolute paths pass through."""
        filename = os.fspath(filename)
        if self.is_relative(filename):
            return join_path(self.path, filename, self._windows)
        return filename

    def resolve_relative(self, filename: str | os.PathLike) -> Optional[str]:
        """Return *filename* relative to the base, or None if it is not under it."""
        return self._prefix_strategy(self.path, os.fspath(filename))

    def exists(self, filename: str | os.PathLike) -> bool:
        """Check whether a file, directory or link exists at *filename*."""
        return self._fs.exists(self.resolve_absolute(filename))

    def register_file(self, filename: str | os.PathLike) -> bool:
        """Track *filename* so it follows the base on the next directory change.

        Relative paths (including ``../`` forms) are stored as given. An
        absolute path is stored in its base-relative form, or ignored when it
        lies outside the base.

        Returns:
            True if the file was registered.
        """
        filename = os.fspath(filename)
        if self.is_relative(filename):
            self._files.append(filename)
            return True
        relative = self.resolve_relative(filename)
        if relative:
            self._files.append(relative)
            return True
        return False

    def change_directory(
        self,
        new_dir: str | os.PathLike,
        autocreate: Optional[bool] = None,
    ) -> DirectoryChange:
        """Move the base to *new_dir*, taking registered files along.

        A relative *new_dir* is resolved against the current base. With
        autocreate the target is created if missing and must be writable;
        if that fails the base is left where it was (or set to the process
        CWD on first binding) and the failure is logged and returned.
        Never raises.
        """
        if autocreate is None:
            autocreate = self._autocreate_default
        previous = self._cwd if self._cwd is not None else self._fs.getcwd()
        requested = os.fspath(new_dir)

        target, error = self._plan_change(previous, requested, autocreate)

        if error is not None:
            if self._cwd is None:
                self._cwd = previous
            self.log.error(
                "Change directory failed: {reason}",
                {"cwd": self._cwd, "directory": target, "reason": error.message},
            )
            self.log.notice("Working directory reverted to: {cwd}", {"cwd": self._cwd})
            return DirectoryChange(
                requested=requested,
                previous=previous,
                current=self._cwd,
                success=False,
                error=error,
            )

        self._cwd = target
        relocation = self._relocate(previous, target)
        return DirectoryChange(
            requested=requested,
            previous=previous,
            current=target,
            success=True,
            relocation=relocation,
        )

    def _plan_change(
        self,
        previous: str,
        requested: str,
        autocreate: bool,
    ) -> tuple[str, Optional[DirectoryChangeError]]:
        """Work out the new base without mutating any state."""
        raw = requested.strip()
        if not raw:
            return raw, DirectoryChangeError(raw)
        # "/" strips down to nothing; keep the root
        target = raw.rstrip(SEPARATORS) or raw[0]
        if self.is_relative(target):
            target = join_path(previous, target, self._windows)
        if autocreate:
            prepared = prepare_directory(target, fs=self._fs, log=self.log, mode=self._mode)
            if not prepared.ok:
                return target, DirectoryChangeError(target, prepared.error)
        return target, None

    def _relocate(self, previous: str, target: str) -> RelocationResult:
        if not self._files or previous == target:
            return RelocationResult()
        return relocate_files(
            previous,
            target,
            self._files,
            fs=self._fs,
            log=self.log,
            windows=self._windows,
            mode=self._mode,
        )

    def __repr__(self) -> str:
        return f"WorkingDirectory({self.path!r}, files={len(self._files)})"
