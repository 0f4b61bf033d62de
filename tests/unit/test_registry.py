"""Unit tests for extension-based source dispatch."""

from __future__ import annotations

import pytest

from row_bind.core.exceptions import UnsupportedFormatError
from row_bind.sources.delimited import CsvSource
from row_bind.sources.registry import FileSource, source_for


class TestSourceFor:
    def test_csv(self) -> None:
        source = source_for("data/cars.csv")
        assert isinstance(source, CsvSource)
        assert source.delimiter == ","

    def test_tsv(self) -> None:
        source = source_for("data/cars.tsv")
        assert isinstance(source, CsvSource)
        assert source.delimiter == "\t"

    def test_extension_case_insensitive(self) -> None:
        assert isinstance(source_for("CARS.CSV"), CsvSource)

    def test_encoding_forwarded(self) -> None:
        source = source_for("cars.csv", encoding="latin-1")
        assert source.encoding == "latin-1"  # type: ignore[attr-defined]

    @pytest.mark.parametrize("identifier", ["cars.xlsx", "cars", "cars.csv.bak"])
    def test_unsupported(self, identifier: str) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            source_for(identifier)
        assert exc_info.value.identifier == identifier

    def test_file_source_dispatches_per_call(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            FileSource().read_rows("cars.json")
