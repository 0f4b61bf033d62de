"""Binding plan DSL builder.

Provides a fluent builder for declaring column bindings:

    plan = (
        binding(Car)
        .column("Make")
        .column("Engine Type", "Engine.Type")
        .enforce_non_nullable()
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Generic, TypeVar

from row_bind.core.config import BindingOptions
from row_bind.core.exceptions import PlanCompilationError
from row_bind.mapping.converter import DEFAULT_CONVERTER, ValueConverter
from row_bind.mapping.plan import BindingPlan
from row_bind.mapping.schema import DEFAULT_SCHEMA, SchemaDescriptor

T = TypeVar("T")


def binding(model: type[T]) -> BindingPlanBuilder[T]:
    """Entry point for the binding DSL.

    Args:
        model: The class each row is bound onto.

    Returns:
        A builder for chaining column declarations.
    """
    return BindingPlanBuilder(model)


class BindingPlanBuilder(Generic[T]):
    """Fluent builder for BindingPlan definitions."""

    def __init__(self, model: type[T]) -> None:
        self._model = model
        self._bindings: dict[str, str] = {}
        self._enforce_non_nullable = False
        self._schema: SchemaDescriptor = DEFAULT_SCHEMA
        self._converter: ValueConverter = DEFAULT_CONVERTER

    def column(self, name: str, path: str | None = None) -> BindingPlanBuilder[T]:
        """Bind a column to a dotted field path (defaults to the column name)."""
        if name in self._bindings:
            raise PlanCompilationError(f"Column '{name}' is bound more than once")
        self._bindings[name] = name if path is None else path
        return self

    def columns(self, mapping: Mapping[str, str]) -> BindingPlanBuilder[T]:
        """Bind several columns at once."""
        for name, path in mapping.items():
            self.column(name, path)
        return self

    def unbound(self, name: str) -> BindingPlanBuilder[T]:
        """Declare a column that is known but deliberately not bound."""
        return self.column(name, "")

    def enforce_non_nullable(self, enabled: bool = True) -> BindingPlanBuilder[T]:
        """Reject rows that leave a required reference field unset."""
        self._enforce_non_nullable = enabled
        return self

    def schema(self, schema: SchemaDescriptor) -> BindingPlanBuilder[T]:
        self._schema = schema
        return self

    def converter(self, converter: ValueConverter) -> BindingPlanBuilder[T]:
        self._converter = converter
        return self

    def build(self) -> BindingPlan[T]:
        """Compile the declarations into an immutable BindingPlan."""
        if not self._bindings:
            raise PlanCompilationError(
                f"Binding for {getattr(self._model, '__name__', self._model)!r} "
                "declares no columns"
            )
        return BindingPlan(
            model=self._model,
            bindings=dict(self._bindings),
            options=BindingOptions(enforce_non_nullable=self._enforce_non_nullable),
            schema=self._schema,
            converter=self._converter,
        )
