"""Row source protocol.

Every row source MUST implement this protocol. Rows are mappings from
column name to raw value; key order is irrelevant to binding.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

Row = Mapping[str, Any]


@runtime_checkable
class RowSource(Protocol):
    """Produces the rows of a file-like source."""

    def read_rows(self, identifier: str) -> Iterable[Row]:
        """Yield rows for ``identifier``.

        Raises:
            SourceError: If the source is missing, unreadable, or unsupported.
        """
        ...
