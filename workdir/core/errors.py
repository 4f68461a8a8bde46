"""Error taxonomy for directory preparation, relocation and directory changes."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence


class ErrorCategory(Enum):
    """Categories of failures a working directory can run into."""
    NOT_WRITABLE = "not_writable"                        # Directory exists but is read-only
    NAME_COLLISION = "name_collision"                    # Non-directory occupies the name
    CREATION_FAILED = "creation_failed"                  # mkdir itself failed
    PARTIAL_RELOCATION = "partial_relocation"            # Some registered files were not moved
    DIRECTORY_CHANGE_FAILED = "directory_change_failed"  # Change abandoned, base unchanged


class CollisionKind(Enum):
    """What occupies a path that should have been a directory."""
    FILE = "file"
    LINK = "link"
    OTHER = "other"


class WorkdirError(Exception):
    """Base exception for working directory errors."""

    def __init__(self, message: str, category: ErrorCategory):
        super().__init__(message)
        self.message = message
        self.category = category

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for logging or CLI output."""
        return {
            "type": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
        }


class PrepareError(WorkdirError):
    """A directory could not be made ready for writing."""

    def __init__(self, path: str, message: str, category: ErrorCategory):
        super().__init__(message, category)
        self.path = path

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["path"] = self.path
        return data


class NotWritableError(PrepareError):
    """Directory exists but is not writable."""

    def __init__(self, path: str):
        super().__init__(path, "Directory is not writable.", ErrorCategory.NOT_WRITABLE)


class NameCollisionError(PrepareError):
    """A file, link or something else already exists under the directory name."""

    def __init__(self, path: str, kind: CollisionKind):
        label = "something" if kind is CollisionKind.OTHER else kind.value
        super().__init__(
            path,
            f"A {label} has same name and exists.",
            ErrorCategory.NAME_COLLISION,
        )
        self.kind = kind

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["kind"] = self.kind.value
        return data


class CreationFailedError(PrepareError):
    """Recursive directory creation failed."""

    def __init__(self, path: str):
        super().__init__(path, "Create directory failed.", ErrorCategory.CREATION_FAILED)


class PartialRelocationError(WorkdirError):
    """Some registered files could not be moved to the new base.

    Only raised on request via ``RelocationResult.raise_for_partial()``.
    """

    def __init__(self, moved: Sequence[str], failed: Sequence[str]):
        super().__init__(
            f"{len(failed)} file(s) could not be moved: {', '.join(failed)}",
            ErrorCategory.PARTIAL_RELOCATION,
        )
        self.moved = list(moved)
        self.failed = list(failed)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["moved"] = self.moved
        data["failed"] = self.failed
        return data


class DirectoryChangeError(WorkdirError):
    """A directory change was abandoned because the target was not prepared."""

    def __init__(self, path: str, cause: Optional[WorkdirError] = None):
        message = f"Cannot change directory to '{path}'"
        if cause is not None:
            message = f"{message}: {cause.message}"
        super().__init__(message, ErrorCategory.DIRECTORY_CHANGE_FAILED)
        self.path = path
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["path"] = self.path
        data["cause"] = self.cause.to_dict() if self.cause else None
        return data
