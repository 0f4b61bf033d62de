"""Binding plan - column-to-path table plus policy, applied one row at a time.

A plan is immutable after construction and safe to share across mapping
sessions. Per-row work happens on a fresh model graph owned by that row.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from row_bind.core.config import DEFAULT_OPTIONS, BindingOptions
from row_bind.core.enums import SkipReason
from row_bind.core.exceptions import PlanCompilationError
from row_bind.mapping.converter import DEFAULT_CONVERTER, ValueConverter
from row_bind.mapping.report import BindingReporter, FieldSkipped, RowRejected
from row_bind.mapping.resolver import PATH_SEPARATOR, parse_path, resolve_path
from row_bind.mapping.result import Fail, Ok, Outcome, Skip
from row_bind.mapping.schema import DEFAULT_SCHEMA, SchemaDescriptor, is_class
from row_bind.mapping.validator import missing_required_fields, validate

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class BindingPlan(Generic[T]):
    """Binds raw rows onto new instances of ``model``.

    Args:
        model: Target model class, constructed once per row.
        bindings: Column name -> dotted field path (e.g. ``"Engine.Type"``).
            A blank path marks the column as explicitly unbound.
        options: Validation policy. Defaults to no null enforcement.
        schema: Field introspection strategy (keyword-only).
        converter: Raw value converter (keyword-only).

    Passing None for ``options``, ``schema`` or ``converter`` selects the
    shared default.

    Raises:
        PlanCompilationError: If the model is not a class, cannot be
            default-constructed, or a path is malformed.
    """

    model: type[T]
    bindings: Mapping[str, str]
    options: BindingOptions = field(default_factory=BindingOptions)
    schema: SchemaDescriptor = field(default=DEFAULT_SCHEMA, kw_only=True, repr=False)
    converter: ValueConverter = field(default=DEFAULT_CONVERTER, kw_only=True, repr=False)
    paths: Mapping[str, tuple[str, ...]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not is_class(self.model):
            raise PlanCompilationError(f"Binding target must be a class, got {self.model!r}")

        if self.options is None:
            object.__setattr__(self, "options", DEFAULT_OPTIONS)
        if self.schema is None:
            object.__setattr__(self, "schema", DEFAULT_SCHEMA)
        if self.converter is None:
            object.__setattr__(self, "converter", DEFAULT_CONVERTER)

        try:
            self.schema.construct(self.model)
        except (TypeError, ValueError, AttributeError) as e:
            raise PlanCompilationError(
                f"Cannot create a default {self.model.__name__}: {e}"
            ) from e

        paths: dict[str, tuple[str, ...]] = {}
        for column, text in self.bindings.items():
            if not isinstance(column, str) or not isinstance(text, str):
                raise PlanCompilationError(
                    f"Binding '{column}' -> {text!r}: column and path must be strings"
                )
            paths[column] = parse_path(text)

        object.__setattr__(self, "bindings", MappingProxyType(dict(self.bindings)))
        object.__setattr__(self, "paths", MappingProxyType(paths))

    @property
    def columns(self) -> tuple[str, ...]:
        """Bound column names, in declaration order."""
        return tuple(self.paths)

    def path_for(self, column: str) -> str:
        """Dotted path bound to ``column`` ("" when explicitly unbound)."""
        return PATH_SEPARATOR.join(self.paths[column])

    def check(self) -> list[str]:
        """Columns whose paths do not resolve against the declared model types.

        Walks declared annotations only; no instance is created. Resolution
        during mapping stays lazy, so calling this is optional.
        """
        unresolved = []
        for column, segments in self.paths.items():
            cls: Any = self.model
            for segment in segments:
                slot = self.schema.resolve(cls, segment) if is_class(cls) else None
                if slot is None:
                    unresolved.append(column)
                    break
                cls = slot.target_type
        return unresolved

    def map_row(
        self,
        row: Mapping[str, Any],
        *,
        reporter: BindingReporter | None = None,
        row_number: int | None = None,
    ) -> T | None:
        """Bind and validate one row.

        Returns:
            The populated model, or None if it failed validation.
        """
        model = self.bind_row(row, reporter=reporter, row_number=row_number)
        if validate(model, self.options, self.schema):
            return model

        missing = tuple(missing_required_fields(model, self.schema))
        logger.debug("Row %s rejected: required fields unset %s", row_number, missing)
        if reporter is not None:
            reporter.row_rejected(RowRejected(row_number, missing))
        return None

    def bind_row(
        self,
        row: Mapping[str, Any],
        *,
        reporter: BindingReporter | None = None,
        row_number: int | None = None,
    ) -> T:
        """Populate a fresh model from ``row`` without validating it.

        Columns are processed in the row's own key order. Columns missing
        from the plan are ignored; failed columns keep their default value.
        """
        model: T = self.schema.construct(self.model)

        for column, raw in row.items():
            segments = self.paths.get(column)
            if segments is None:
                continue

            outcome = self._bind_column(model, segments, raw)
            if isinstance(outcome, Ok):
                continue

            logger.debug(
                "Row %s column '%s' skipped (%s): %s",
                row_number,
                column,
                outcome.reason.value,
                outcome.detail,
            )
            if reporter is not None:
                reporter.field_skipped(
                    FieldSkipped(row_number, column, outcome.reason, outcome.detail, raw)
                )

        return model

    def _bind_column(self, model: Any, segments: tuple[str, ...], raw: Any) -> Outcome:
        if not segments:
            return Skip(SkipReason.UNBOUND, "column is explicitly unbound")

        resolved = resolve_path(model, segments, self.schema)
        if isinstance(resolved, Fail):
            return resolved

        if raw is None:
            return Skip(SkipReason.NULL_VALUE, "value is null")

        target = resolved.value
        converted = self.converter.convert(raw, target.slot.target_type)
        if isinstance(converted, Fail):
            return converted

        try:
            target.slot.write(target.holder, converted.value)
        except (AttributeError, TypeError, ValueError) as e:
            return Fail(SkipReason.WRITE_FAILED, f"Cannot assign '{target.slot.name}': {e}", e)
        return converted
