"""Tests for path classification and base-prefix stripping."""

from __future__ import annotations

import pytest

from workdir.core.paths import (
    directory_portion,
    is_relative_path,
    join_path,
    separator,
    strip_base_prefix,
    strip_base_segments,
)


class TestDirectoryPortion:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("file.txt", "."),
            ("./file.txt", "."),
            ("dir/", "."),
            ("a/b", "a"),
            ("a//b", "a"),
            ("../x", ".."),
            ("/file", "/"),
            ("/", "/"),
            ("", ""),
        ],
    )
    def test_posix(self, path: str, expected: str):
        assert directory_portion(path, windows=False) == expected

    def test_backslash_is_a_separator(self):
        assert directory_portion("dir\\file.txt", windows=False) == "dir"
        assert directory_portion("\\file.txt", windows=False) == "\\"

    def test_drive_without_separator(self):
        assert directory_portion("C:file.txt", windows=True) == "C:"
        assert directory_portion("C:file.txt", windows=False) == "."


class TestIsRelativePath:
    @pytest.mark.parametrize("windows", [False, True])
    @pytest.mark.parametrize(
        "path", ["file.txt", "./file.txt", "../file.txt", "sub/dir/file.txt", "..\\file.txt", ""]
    )
    def test_relative_everywhere(self, path: str, windows: bool):
        assert is_relative_path(path, windows=windows)

    @pytest.mark.parametrize("windows", [False, True])
    @pytest.mark.parametrize("path", ["/etc/passwd", "/", "\\server\\share", "\\file.txt"])
    def test_separator_prefix_is_absolute(self, path: str, windows: bool):
        assert not is_relative_path(path, windows=windows)

    @pytest.mark.parametrize("path", ["C:\\Users\\me", "c:/data/x.txt", "Z:", "D:file.txt"])
    def test_drive_letter_absolute_on_windows(self, path: str):
        assert not is_relative_path(path, windows=True)

    def test_drive_letter_relative_on_posix(self):
        assert is_relative_path("C:\\Users\\me", windows=False)

    def test_surrounding_whitespace_ignored(self):
        assert not is_relative_path("   /tmp/x  ", windows=False)
        assert is_relative_path("  x.txt  ", windows=False)

    def test_accepts_pathlike(self, tmp_path):
        assert not is_relative_path(tmp_path, windows=False)


class TestSeparator:
    def test_posix(self):
        assert separator(False) == "/"

    def test_windows(self):
        assert separator(True) == "\\"


class TestJoinPath:
    def test_adds_one_separator(self):
        assert join_path("/a", "x", windows=False) == "/a/x"
        assert join_path("C:\\data", "x", windows=True) == "C:\\data\\x"

    def test_root_base_not_doubled(self):
        assert join_path("/", "etc/x", windows=False) == "/etc/x"
        assert join_path("C:\\", "x", windows=True) == "C:\\x"

    def test_trailing_separator_of_either_kind(self):
        assert join_path("/a/", "x", windows=False) == "/a/x"
        assert join_path("/a\\", "x", windows=False) == "/a\\x"


class TestStripBasePrefix:
    def test_file_under_base(self):
        assert strip_base_prefix("/home/foo", "/home/foo/x.txt") == "x.txt"

    def test_nested(self):
        assert strip_base_prefix("/home/foo", "/home/foo/a/b.txt") == "a/b.txt"

    def test_sibling_sharing_prefix_still_matches(self):
        # Raw string prefix, not a containment check
        assert strip_base_prefix("/home/foo", "/home/foobar/x") == "bar/x"

    def test_base_itself(self):
        assert strip_base_prefix("/home/foo", "/home/foo") is None
        assert strip_base_prefix("/home/foo", "/home/foo/") is None

    def test_outside(self):
        assert strip_base_prefix("/home/foo", "/other/x") is None

    def test_trims_filename(self):
        assert strip_base_prefix("/home/foo", "  /home/foo/x  ") == "x"

    def test_backslashes_trimmed(self):
        assert strip_base_prefix("C:\\work", "C:\\work\\x.txt") == "x.txt"


class TestStripBaseSegments:
    def test_file_under_base(self):
        assert strip_base_segments("/home/foo", "/home/foo/x.txt") == "x.txt"

    def test_sibling_sharing_prefix_rejected(self):
        assert strip_base_segments("/home/foo", "/home/foobar/x") is None

    def test_base_with_trailing_separator(self):
        assert strip_base_segments("/home/foo/", "/home/foo/x") == "x"

    def test_root_base(self):
        assert strip_base_segments("/", "/etc/x") == "etc/x"

    def test_base_itself(self):
        assert strip_base_segments("/home/foo", "/home/foo") is None
