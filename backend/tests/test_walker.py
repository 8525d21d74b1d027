"""Tests for recursive directory listing."""
import os

import pytest

from minidrive.files.paths import STAGING_DIR_NAME
from minidrive.files.walker import list_files, walk_files


def _touch(path, content=b"x"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def test_empty_root_lists_nothing(tmp_path):
    assert list_files(tmp_path) == []


def test_missing_root_lists_nothing(tmp_path):
    assert list_files(tmp_path / "nope") == []


def test_nested_files_are_relative_posix_paths(tmp_path):
    _touch(tmp_path / "a" / "b" / "c.txt")
    _touch(tmp_path / "top.txt")

    assert sorted(list_files(tmp_path)) == ["a/b/c.txt", "top.txt"]


def test_depth_first_name_order(tmp_path):
    _touch(tmp_path / "b.txt")
    _touch(tmp_path / "a" / "z.txt")
    _touch(tmp_path / "a" / "y" / "inner.txt")
    _touch(tmp_path / "c" / "d.txt")

    assert list_files(tmp_path) == ["a/y/inner.txt", "a/z.txt", "b.txt", "c/d.txt"]


def test_empty_directories_are_not_listed(tmp_path):
    (tmp_path / "empty" / "deeper").mkdir(parents=True)
    assert list_files(tmp_path) == []


def test_symlinks_are_skipped(tmp_path):
    _touch(tmp_path / "real.txt")
    (tmp_path / "alias.txt").symlink_to(tmp_path / "real.txt")

    assert list_files(tmp_path) == ["real.txt"]


def test_symlink_cycle_terminates(tmp_path):
    _touch(tmp_path / "dir" / "file.txt")
    (tmp_path / "dir" / "loop").symlink_to(tmp_path, target_is_directory=True)

    assert list_files(tmp_path) == ["dir/file.txt"]


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires FIFO support")
def test_special_files_are_skipped(tmp_path):
    _touch(tmp_path / "regular.txt")
    os.mkfifo(tmp_path / "pipe")

    assert list_files(tmp_path) == ["regular.txt"]


def test_max_depth_limits_descent(tmp_path):
    _touch(tmp_path / "top.txt")
    _touch(tmp_path / "one" / "mid.txt")
    _touch(tmp_path / "one" / "two" / "deep.txt")

    assert list_files(tmp_path, max_depth=0) == ["top.txt"]
    assert list_files(tmp_path, max_depth=1) == ["one/mid.txt", "top.txt"]
    assert list_files(tmp_path, max_depth=None) == [
        "one/mid.txt",
        "one/two/deep.txt",
        "top.txt",
    ]


def test_walk_is_lazy(tmp_path):
    _touch(tmp_path / "a.txt")
    gen = walk_files(tmp_path)
    assert next(gen) == "a.txt"


def test_staging_directory_is_not_listed(tmp_path):
    _touch(tmp_path / STAGING_DIR_NAME / "upload-123.part")
    _touch(tmp_path / "a" / STAGING_DIR_NAME / "kept.txt")

    assert list_files(tmp_path) == [f"a/{STAGING_DIR_NAME}/kept.txt"]
