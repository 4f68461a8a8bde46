"""Filesystem collaborator used by the preparer, relocator and manager.

Creation and rename report failure through a ``False`` return rather than
an exception.
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    def exists(self, path: str) -> bool: ...
    def is_dir(self, path: str) -> bool: ...
    def is_writable(self, path: str) -> bool: ...
    def is_symlink(self, path: str) -> bool: ...
    def is_file(self, path: str) -> bool: ...
    def make_directories(self, path: str, mode: int) -> bool: ...
    def rename(self, old_path: str, new_path: str) -> bool: ...
    def getcwd(self) -> str: ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def exists(self, path: str) -> bool:
        # dangling symlinks count as existing
        return os.path.lexists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_writable(self, path: str) -> bool:
        return os.access(path, os.W_OK)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def make_directories(self, path: str, mode: int = 0o777) -> bool:
        try:
            os.makedirs(path, mode=mode)
        except OSError:
            return False
        return True

    def rename(self, old_path: str, new_path: str) -> bool:
        try:
            os.rename(old_path, new_path)
        except OSError:
            return False
        return True

    def getcwd(self) -> str:
        return os.getcwd()


_default_fs: FileSystem | None = None


def get_filesystem() -> FileSystem:
    """Return the shared LocalFileSystem instance."""
    global _default_fs
    if _default_fs is None:
        _default_fs = LocalFileSystem()
    return _default_fs
