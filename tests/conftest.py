"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from native2ascii.grammars import GRAMMARS
from native2ascii.scanner import Scanner, ScanState


@pytest.fixture
def scan():
    """Return a helper that scans source and returns the per-position states."""

    def _scan(source: str, tag: str = "default") -> list[ScanState]:
        return Scanner(source, GRAMMARS[tag]).states()

    return _scan


@pytest.fixture
def write_source(tmp_path: Path):
    """Return a helper that writes text to a file under tmp_path."""

    def _write(text: str, name: str = "input.txt", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return path

    return _write
