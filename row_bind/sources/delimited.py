"""Delimited-text row source using the stdlib csv module."""

from __future__ import annotations

import csv
import logging
import weakref
from collections.abc import Iterator
from pathlib import Path
from typing import Any, TextIO

from row_bind.core.exceptions import MissingHeaderError, SourceNotFoundError, SourceReadError

logger = logging.getLogger(__name__)


class CsvSource:
    """Reads a header row followed by data rows.

    Headers and values are whitespace-trimmed, blank lines are skipped, and
    short rows are padded with empty strings. Duplicate headers collapse to
    the last occurrence.

    The file is opened by ``read_rows`` and closed when the returned
    iterator is exhausted, closed, or garbage-collected.

    Args:
        delimiter: Field separator character.
        encoding: Text encoding of the file.
    """

    def __init__(self, delimiter: str = ",", encoding: str = "utf-8-sig") -> None:
        self.delimiter = delimiter
        self.encoding = encoding

    def read_rows(self, identifier: str) -> Iterator[dict[str, str]]:
        path = Path(identifier)
        if not path.is_file():
            raise SourceNotFoundError(identifier)

        # Open eagerly so header errors surface before iteration starts.
        try:
            handle = path.open(encoding=self.encoding, newline="")
        except OSError as e:
            raise SourceReadError(identifier, str(e)) from e

        reader = csv.reader(handle, delimiter=self.delimiter)
        try:
            header = next(reader, None)
        except (UnicodeDecodeError, csv.Error) as e:
            handle.close()
            raise SourceReadError(identifier, str(e)) from e

        if header is None or not any(name.strip() for name in header):
            handle.close()
            raise MissingHeaderError(identifier)

        columns = [name.strip() for name in header]
        logger.debug("Reading %s with columns %s", identifier, columns)
        rows = self._iter_rows(identifier, handle, reader, columns)
        # An iterator dropped before its first row never enters ``with handle``.
        weakref.finalize(rows, handle.close)
        return rows

    def _iter_rows(
        self,
        identifier: str,
        handle: TextIO,
        reader: Any,
        columns: list[str],
    ) -> Iterator[dict[str, str]]:
        with handle:
            try:
                for values in reader:
                    if not any(value.strip() for value in values):
                        continue
                    row: dict[str, str] = {}
                    for index, column in enumerate(columns):
                        row[column] = values[index].strip() if index < len(values) else ""
                    yield row
            except (UnicodeDecodeError, csv.Error) as e:
                raise SourceReadError(identifier, f"line {reader.line_num}: {e}") from e
