"""RowBind - declarative binding of tabular rows onto typed object graphs."""

from __future__ import annotations

import logging

from row_bind.core.config import BindingOptions
from row_bind.core.enums import SkipReason, SourceFormat
from row_bind.core.exceptions import (
    ConversionError,
    MappingError,
    MissingHeaderError,
    PlanCompilationError,
    RowBindError,
    SourceError,
    SourceNotFoundError,
    SourceReadError,
    UnknownFieldError,
    UnsupportedFormatError,
)
from row_bind.core.mapper import RowMapper
from row_bind.mapping.builder import binding
from row_bind.mapping.plan import BindingPlan
from row_bind.mapping.report import CollectingReporter
from row_bind.sources.delimited import CsvSource
from row_bind.sources.memory import InMemorySource
from row_bind.sources.registry import FileSource

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Mapper
    "RowMapper",
    # Plan
    "BindingPlan",
    "BindingOptions",
    "binding",
    "CollectingReporter",
    # Sources
    "CsvSource",
    "FileSource",
    "InMemorySource",
    # Enums
    "SkipReason",
    "SourceFormat",
    # Exceptions
    "RowBindError",
    "SourceError",
    "SourceNotFoundError",
    "UnsupportedFormatError",
    "MissingHeaderError",
    "SourceReadError",
    "MappingError",
    "UnknownFieldError",
    "ConversionError",
    "PlanCompilationError",
]
