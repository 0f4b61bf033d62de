"""Row sources - producers of column -> raw value rows."""

from __future__ import annotations

from row_bind.sources.delimited import CsvSource
from row_bind.sources.memory import InMemorySource
from row_bind.sources.protocol import Row, RowSource
from row_bind.sources.registry import FileSource, source_for

__all__ = [
    "Row",
    "RowSource",
    "CsvSource",
    "InMemorySource",
    "FileSource",
    "source_for",
]
