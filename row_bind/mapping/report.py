"""Optional diagnostics channel for skipped fields and rejected rows.

Reporting is opt-in. Without a reporter, mapping silently degrades: failed
columns are left at their defaults and rejected rows are dropped.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from row_bind.core.enums import SkipReason


@dataclass(frozen=True)
class FieldSkipped:
    """A bound column that was not written into the model."""

    row_number: int | None
    column: str
    reason: SkipReason
    detail: str
    value: Any = None


@dataclass(frozen=True)
class RowRejected:
    """A populated row that failed validation."""

    row_number: int | None
    missing_fields: tuple[str, ...]


@runtime_checkable
class BindingReporter(Protocol):
    """Receives per-field and per-row diagnostics."""

    def field_skipped(self, event: FieldSkipped) -> None: ...

    def row_rejected(self, event: RowRejected) -> None: ...


@dataclass
class CollectingReporter:
    """Reporter that keeps every event in memory."""

    skipped: list[FieldSkipped] = field(default_factory=list)
    rejected: list[RowRejected] = field(default_factory=list)

    def field_skipped(self, event: FieldSkipped) -> None:
        self.skipped.append(event)

    def row_rejected(self, event: RowRejected) -> None:
        self.rejected.append(event)

    def counts_by_reason(self) -> dict[SkipReason, int]:
        return dict(Counter(event.reason for event in self.skipped))

    def clear(self) -> None:
        self.skipped.clear()
        self.rejected.clear()
