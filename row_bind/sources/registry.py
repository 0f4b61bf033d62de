"""File source dispatch by extension.

    cars.csv -> CsvSource(delimiter=",")
    cars.tsv -> CsvSource(delimiter="\\t")
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from row_bind.core.enums import SourceFormat
from row_bind.core.exceptions import UnsupportedFormatError
from row_bind.sources.delimited import CsvSource
from row_bind.sources.protocol import Row, RowSource

_DELIMITERS: dict[SourceFormat, str] = {
    SourceFormat.CSV: ",",
    SourceFormat.TSV: "\t",
}


def source_for(identifier: str, encoding: str = "utf-8-sig") -> RowSource:
    """Pick a row source for ``identifier`` based on its file extension.

    Raises:
        UnsupportedFormatError: If no built-in source handles the extension.
    """
    suffix = Path(identifier).suffix.lower()
    try:
        source_format = SourceFormat(suffix)
    except ValueError:
        raise UnsupportedFormatError(identifier, suffix) from None
    return CsvSource(delimiter=_DELIMITERS[source_format], encoding=encoding)


class FileSource:
    """Row source that dispatches on each identifier's extension."""

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    def read_rows(self, identifier: str) -> Iterable[Row]:
        return source_for(identifier, self.encoding).read_rows(identifier)
