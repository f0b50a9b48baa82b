"""Tests for filesystem and device helpers."""

import pytest

from vidsub.exceptions import FileSystemError
from vidsub.utils import ensure_dir_exists, resolve_device


def test_ensure_dir_exists_creates_nested(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_dir_exists(str(target))
    assert target.is_dir()
    ensure_dir_exists(str(target))


def test_ensure_dir_exists_rejects_file(tmp_path):
    path = tmp_path / "file"
    path.write_text("x")
    with pytest.raises(FileSystemError):
        ensure_dir_exists(str(path))


def test_ensure_dir_exists_rejects_empty():
    with pytest.raises(ValueError):
        ensure_dir_exists("")


def test_resolve_device():
    assert resolve_device("cpu") == "cpu"
    with pytest.raises(ValueError):
        resolve_device("tpu")
