"""In-memory row source - pre-materialized tables keyed by identifier."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from row_bind.core.exceptions import SourceNotFoundError


class InMemorySource:
    """Serves rows from a dict of identifier -> list of rows.

    Useful for tests and for callers that already hold parsed rows.
    """

    def __init__(self, tables: Mapping[str, Sequence[Mapping[str, Any]]] | None = None) -> None:
        self._tables: dict[str, list[Mapping[str, Any]]] = {
            name: list(rows) for name, rows in (tables or {}).items()
        }

    def add(self, identifier: str, rows: Sequence[Mapping[str, Any]]) -> None:
        self._tables[identifier] = list(rows)

    def read_rows(self, identifier: str) -> Iterator[Mapping[str, Any]]:
        try:
            rows = self._tables[identifier]
        except KeyError:
            raise SourceNotFoundError(identifier) from None
        return iter(rows)

    @property
    def identifiers(self) -> list[str]:
        return sorted(self._tables)

    def __len__(self) -> int:
        return len(self._tables)
