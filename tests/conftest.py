"""Shared test fixtures and pytest configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import pytest

from workdir.core.logging import reset_logger


class RecordingLogger:
    """StructuredLogger that keeps every record for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def notice(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        self.records.append(("notice", message, dict(context or {})))

    def error(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        self.records.append(("error", message, dict(context or {})))

    @property
    def errors(self) -> list[tuple[str, dict[str, Any]]]:
        return [(m, c) for level, m, c in self.records if level == "error"]

    @property
    def notices(self) -> list[tuple[str, dict[str, Any]]]:
        return [(m, c) for level, m, c in self.records if level == "notice"]


class FakeFileSystem:
    """In-memory FileSystem with POSIX-style paths and injectable failures."""

    def __init__(self, cwd: str = "/cwd") -> None:
        self.cwd = cwd
        self.dirs: set[str] = {"/", cwd}
        self.files: set[str] = set()
        self.links: set[str] = set()
        self.others: set[str] = set()       # sockets, fifos, ...
        self.readonly: set[str] = set()
        self.fail_mkdir: set[str] = set()
        self.fail_rename: set[str] = set()
        self.mkdir_calls: list[tuple[str, int]] = []
        self.rename_calls: list[tuple[str, str]] = []

    def add_dir(self, path: str) -> None:
        parts = path.split("/")
        for i in range(1, len(parts) + 1):
            p = "/".join(parts[:i])
            if p:
                self.dirs.add(p)

    def add_file(self, path: str) -> None:
        self.add_dir(path.rsplit("/", 1)[0])
        self.files.add(path)

    def exists(self, path: str) -> bool:
        return path in self.dirs or path in self.files or path in self.links or path in self.others

    def is_dir(self, path: str) -> bool:
        return path in self.dirs

    def is_writable(self, path: str) -> bool:
        return self.exists(path) and path not in self.readonly

    def is_symlink(self, path: str) -> bool:
        return path in self.links

    def is_file(self, path: str) -> bool:
        return path in self.files

    def make_directories(self, path: str, mode: int) -> bool:
        self.mkdir_calls.append((path, mode))
        if path in self.fail_mkdir:
            return False
        self.add_dir(path)
        return True

    def rename(self, old_path: str, new_path: str) -> bool:
        self.rename_calls.append((old_path, new_path))
        if old_path in self.fail_rename or old_path not in self.files:
            return False
        self.files.remove(old_path)
        self.files.add(new_path)
        return True

    def getcwd(self) -> str:
        return self.cwd


@pytest.fixture(autouse=True)
def _reset_workdir_logger():
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def recording_log() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def tmp_config_dir(tmp_path: Path) -> Path:
    """Provide a temporary config directory."""
    config_dir = tmp_path / ".workdir"
    config_dir.mkdir()
    return config_dir
