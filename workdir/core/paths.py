"""Path classification and base-relative resolution.

Paths are handled as plain strings: nothing here touches the filesystem or
normalizes ``..`` segments.
"""

from __future__ import annotations

import os
import re
from typing import Callable, Optional

SEPARATORS = "/\\"

_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def is_windows() -> bool:
    """Return True when running on a Windows-like platform."""
    return os.name == "nt"


def separator(windows: Optional[bool] = None) -> str:
    """Directory separator used when joining a base and a relative path."""
    if windows is None:
        windows = is_windows()
    return "\\" if windows else "/"


def join_path(base: str, name: str, windows: Optional[bool] = None) -> str:
    """Concatenate *name* onto *base* with a single separator between them.

    A base that already ends in a separator, such as the root ``"/"``, is
    not given a second one.
    """
    if base and base[-1] in SEPARATORS:
        return base + name
    return base + separator(windows) + name


def directory_portion(path: str, windows: Optional[bool] = None) -> str:
    """Return *path* with its last segment stripped.

    Follows ``dirname`` semantics: a path without a directory component of
    its own (``"file.txt"``, ``"dir/"``) yields ``"."``, and a root-level path
    (``"/file"``) yields the separator it starts with.
    """
    if windows is None:
        windows = is_windows()
    stripped = path.rstrip(SEPARATORS)
    if not stripped:
        return path[:1]
    idx = max(stripped.rfind("/"), stripped.rfind("\\"))
    if idx == -1:
        if windows and _DRIVE_RE.match(stripped):
            return stripped[:2]
        return "."
    head = stripped[:idx].rstrip(SEPARATORS)
    return head or stripped[0]


def is_relative_path(path: str | os.PathLike, windows: Optional[bool] = None) -> bool:
    """Decide whether *path* is relative to some base directory.

    Parent-relative forms such as ``"../file.txt"`` count as relative.
    Drive-letter paths (``"C:\\data"``) are only absolute on Windows.
    """
    if windows is None:
        windows = is_windows()
    path = os.fspath(path).strip()
    if directory_portion(path, windows) == ".":
        return True
    if path[:1] in ("/", "\\"):
        return False
    if windows and _DRIVE_RE.match(path):
        return False
    return True


def strip_base_prefix(base: str, filename: str) -> Optional[str]:
    """Strip *base* from the front of *filename* as a literal string prefix.

    This is a textual match: a base of ``/home/foo`` also matches
    ``/home/foobar/x`` and yields ``"bar/x"``.
    Returns None when the prefix does not match or nothing is left.
    """
    filename = filename.strip()
    if not filename.startswith(base):
        return None
    relative = filename[len(base):].lstrip(SEPARATORS)
    return relative or None


def strip_base_segments(base: str, filename: str) -> Optional[str]:
    """Segment-aware variant of :func:`strip_base_prefix`.

    The remainder must start at a separator boundary, so ``/home/foo`` does
    not match ``/home/foobar/x``.
    """
    filename = filename.strip()
    trimmed = base.rstrip(SEPARATORS)
    if not filename.startswith(trimmed):
        return None
    rest = filename[len(trimmed):]
    if rest and rest[0] not in SEPARATORS and trimmed:
        return None
    relative = rest.lstrip(SEPARATORS)
    return relative or None


PrefixStrategy = Callable[[str, str], Optional[str]]
