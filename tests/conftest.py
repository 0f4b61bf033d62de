"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from row_bind.mapping.report import CollectingReporter


@pytest.fixture
def reporter() -> CollectingReporter:
    """Fresh in-memory diagnostics reporter."""
    return CollectingReporter()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Temporary directory for source files."""
    return tmp_path / "data"


@pytest.fixture
def write_file(data_dir: Path):
    """Helper to write source files into the temp directory.

    Usage:
        write_file("cars.csv", "Make,Year\\nVolvo,2020\\n")
    """

    def _write(relative_path: str, content: str, encoding: str = "utf-8") -> Path:
        file_path = data_dir / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding=encoding)
        return file_path

    return _write
