"""Per-step result types for the binding pipeline.

Each step of binding one column (resolve, convert, write) returns an
Outcome instead of raising, so the per-column loop can stay explicit and
the skipped columns can be reported without exceptions leaving the plan.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from row_bind.core.enums import SkipReason

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A step succeeded and produced a value."""

    value: T


@dataclass(frozen=True)
class Skip:
    """Nothing to do for this column (unbound or null value)."""

    reason: SkipReason
    detail: str = ""


@dataclass(frozen=True)
class Fail:
    """A step failed; the column is left untouched."""

    reason: SkipReason
    detail: str
    error: Exception | None = None


Outcome = Union[Ok[Any], Skip, Fail]
