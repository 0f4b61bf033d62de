"""RowBind exception hierarchy.

Two tiers. Source errors are fatal to a mapping call and always propagate.
Mapping errors describe a single field or row; the binding pipeline carries
them as values and never raises them out of ``BindingPlan.map_row``.
"""

from __future__ import annotations

from typing import Any


class RowBindError(Exception):
    """Base exception for all RowBind errors."""


# --- Source ---


class SourceError(RowBindError):
    """Base for row source errors."""

    def __init__(self, identifier: str, message: str) -> None:
        self.identifier = identifier
        super().__init__(message)


class SourceNotFoundError(SourceError):
    """Raised when a row source identifier does not exist."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, f"Source not found: '{identifier}'")


class UnsupportedFormatError(SourceError):
    """Raised when no row source handles the identifier's format."""

    def __init__(self, identifier: str, suffix: str) -> None:
        self.suffix = suffix
        super().__init__(
            identifier, f"Unsupported source format '{suffix or '<none>'}' for '{identifier}'"
        )


class MissingHeaderError(SourceError):
    """Raised when a tabular source has no header row."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, f"Missing header row in '{identifier}'")


class SourceReadError(SourceError):
    """Raised when a source exists but cannot be read or parsed."""

    def __init__(self, identifier: str, detail: str) -> None:
        self.detail = detail
        super().__init__(identifier, f"Failed to read '{identifier}': {detail}")


# --- Mapping ---


class MappingError(RowBindError):
    """Base for mapping errors."""


class UnknownFieldError(MappingError):
    """A path segment does not name a field on the holder's type."""

    def __init__(self, segment: str, holder_type: type) -> None:
        self.segment = segment
        self.holder_type = holder_type
        super().__init__(f"Field '{segment}' not found on type '{holder_type.__name__}'")


class ConversionError(MappingError):
    """A raw value cannot be converted to the target field type."""

    def __init__(self, value: Any, target_type: Any, detail: str) -> None:
        self.value = value
        self.target_type = target_type
        self.detail = detail
        name = getattr(target_type, "__name__", None) or repr(target_type)
        super().__init__(f"Cannot convert {value!r} to {name}: {detail}")


class PlanCompilationError(MappingError):
    """Raised when a BindingPlan is malformed at construction or build()."""
