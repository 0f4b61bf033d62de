"""Path resolver - walk a dotted field path to a writable slot.

Intermediate objects are created on demand and attached to their parent
before the walk continues, so a partially built graph is always reachable
from the root. Paths are assumed acyclic; self-referencing model schemas
are not supported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from row_bind.core.enums import SkipReason
from row_bind.core.exceptions import PlanCompilationError, UnknownFieldError
from row_bind.mapping.result import Fail, Ok
from row_bind.mapping.schema import FieldSlot, SchemaDescriptor, is_class

PATH_SEPARATOR = "."


@dataclass(frozen=True)
class FieldTarget:
    """The holder object and the slot on it that a value should go into."""

    holder: Any
    slot: FieldSlot


def parse_path(text: str) -> tuple[str, ...]:
    """Split a dotted path into segments.

    A blank path means the column is explicitly unbound and yields ``()``.

    Raises:
        PlanCompilationError: If any segment is empty (e.g. ``"Engine..Type"``).
    """
    if not text or not text.strip():
        return ()
    segments = tuple(part.strip() for part in text.split(PATH_SEPARATOR))
    if any(not segment for segment in segments):
        raise PlanCompilationError(f"Malformed field path '{text}': empty segment")
    return segments


def resolve_path(
    root: Any,
    segments: tuple[str, ...],
    schema: SchemaDescriptor,
) -> Ok[FieldTarget] | Fail:
    """Resolve ``segments`` against ``root``, creating intermediates.

    Only non-terminal fields are read or written; the terminal slot is
    returned untouched so the caller can write it after conversion.
    """
    if not segments:
        return Fail(SkipReason.UNBOUND, "empty path")

    holder = root
    for segment in segments[:-1]:
        found = _lookup(holder, segment, schema)
        if isinstance(found, Fail):
            return found
        slot = found.value

        child = slot.read(holder)
        if child is None:
            target = slot.target_type
            if not is_class(target) or slot.is_value_kind or target in (str, bytes):
                return Fail(
                    SkipReason.UNKNOWN_FIELD,
                    f"Field '{segment}' on '{type(holder).__name__}' is not a nested model",
                )
            try:
                child = schema.construct(slot.target_type)
                slot.write(holder, child)
            except (TypeError, ValueError, AttributeError) as e:
                return Fail(
                    SkipReason.UNKNOWN_FIELD,
                    f"Cannot create intermediate '{segment}' on "
                    f"'{type(holder).__name__}': {e}",
                    e,
                )
        holder = child

    found = _lookup(holder, segments[-1], schema)
    if isinstance(found, Fail):
        return found
    return Ok(FieldTarget(holder, found.value))


def _lookup(holder: Any, segment: str, schema: SchemaDescriptor) -> Ok[FieldSlot] | Fail:
    holder_type = type(holder)
    slot = schema.resolve(holder_type, segment)
    if slot is None:
        error = UnknownFieldError(segment, holder_type)
        return Fail(SkipReason.UNKNOWN_FIELD, str(error), error)
    return Ok(slot)
