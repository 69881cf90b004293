"""Shared fixtures for fragexport tests."""

from pathlib import Path

import pytest


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def write(tmp_path):
    """Write a file relative to tmp_path and return its resolved path."""
    def _write(relative: str, content: str) -> Path:
        return write_file(tmp_path / relative, content).resolve()
    return _write
