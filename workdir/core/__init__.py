"""Core module - path classification, directory preparation, relocation and the working directory."""

from workdir.core.config import ConfigManager, WorkdirConfig
from workdir.core.errors import (
    CollisionKind,
    CreationFailedError,
    DirectoryChangeError,
    ErrorCategory,
    NameCollisionError,
    NotWritableError,
    PartialRelocationError,
    PrepareError,
    WorkdirError,
)
from workdir.core.filesystem import FileSystem, LocalFileSystem, get_filesystem
from workdir.core.logging import (
    NOTICE,
    NullLogger,
    StdlibLogger,
    StructuredLogger,
    get_logger,
    reset_logger,
    setup_logging,
)
from workdir.core.manager import DirectoryChange, WorkingDirectory
from workdir.core.paths import (
    directory_portion,
    is_relative_path,
    join_path,
    strip_base_prefix,
    strip_base_segments,
)
from workdir.core.prepare import PrepareResult, PrepareStatus, prepare_directory
from workdir.core.relocator import RelocationResult, move_file, relocate_files

__all__ = [
    # Config
    "ConfigManager",
    "WorkdirConfig",
    # Errors
    "CollisionKind",
    "CreationFailedError",
    "DirectoryChangeError",
    "ErrorCategory",
    "NameCollisionError",
    "NotWritableError",
    "PartialRelocationError",
    "PrepareError",
    "WorkdirError",
    # Filesystem
    "FileSystem",
    "LocalFileSystem",
    "get_filesystem",
    # Logging
    "NOTICE",
    "NullLogger",
    "StdlibLogger",
    "StructuredLogger",
    "get_logger",
    "reset_logger",
    "setup_logging",
    # Paths
    "directory_portion",
    "is_relative_path",
    "join_path",
    "strip_base_prefix",
    "strip_base_segments",
    # Preparation
    "PrepareResult",
    "PrepareStatus",
    "prepare_directory",
    # Relocation
    "RelocationResult",
    "move_file",
    "relocate_files",
    # Working directory
    "DirectoryChange",
    "WorkingDirectory",
]
