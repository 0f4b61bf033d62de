"""Enumerations shared across RowBind."""

from __future__ import annotations

from enum import Enum


class SkipReason(Enum):
    """Why a bound column was not written into the model."""

    UNBOUND = "unbound"
    NULL_VALUE = "null_value"
    UNKNOWN_FIELD = "unknown_field"
    CONVERSION_FAILED = "conversion_failed"
    WRITE_FAILED = "write_failed"


class SourceFormat(Enum):
    """Built-in tabular source formats, keyed by file extension."""

    CSV = ".csv"
    TSV = ".tsv"
