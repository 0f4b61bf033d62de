"""Schema descriptors - field lookup and default construction for model types.

Supports Pydantic models, dataclasses, and plain annotated classes, in that
detection order. The binding engine only talks to the SchemaDescriptor
protocol, so another introspection strategy can be swapped in per plan.
"""

from __future__ import annotations

import dataclasses
import inspect
import types
import typing
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Protocol, Union, runtime_checkable
from uuid import UUID

from pydantic import BaseModel

# Types that always hold a value, so they are exempt from null checks.
VALUE_KINDS: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    Decimal,
    datetime,
    date,
    time,
    timedelta,
    UUID,
    Enum,
)

_ZERO_VALUES: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
}


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip ``Optional``/``X | None`` and ``Annotated`` wrappers.

    Returns:
        The underlying type and whether a None member was present.
    """
    if typing.get_origin(annotation) is Annotated:
        annotation = typing.get_args(annotation)[0]

    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = typing.get_args(annotation)
        members = tuple(a for a in args if a is not type(None))
        optional = len(members) != len(args)
        if len(members) == 1:
            return members[0], optional
        return Union[members], optional  # type: ignore[return-value]
    return annotation, False


def is_class(tp: Any) -> bool:
    """True for real classes, excluding parametrized generics like ``list[int]``."""
    return isinstance(tp, type) and typing.get_origin(tp) is None


def is_value_kind(tp: Any) -> bool:
    """True for primitive-like types that are never null-checked."""
    return is_class(tp) and issubclass(tp, VALUE_KINDS)


def _zero_value(annotation: Any) -> Any:
    target, optional = unwrap_optional(annotation)
    if optional:
        return None
    return _ZERO_VALUES.get(target)


def _is_pydantic_model(cls: Any) -> bool:
    return is_class(cls) and issubclass(cls, BaseModel)


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references: keep the raw annotations.
        return dict(getattr(obj, "__annotations__", {}))


def _init_arguments(cls: type, slots: dict[str, FieldSlot]) -> tuple[list[Any], dict[str, Any]]:
    """Placeholder arguments for every required ``__init__`` parameter.

    Annotations come from ``__init__`` itself, falling back to the class
    field of the same name.
    """
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
    except (TypeError, ValueError):
        return [], {}

    hints = _type_hints(cls.__init__)  # type: ignore[misc]
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for name, param in sig.parameters.items():
        if name == "self" or param.default is not inspect.Parameter.empty:
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        slot = slots.get(name)
        annotation = hints.get(name, slot.annotation if slot is not None else None)
        if param.kind is param.POSITIONAL_ONLY:
            args.append(_zero_value(annotation))
        else:
            kwargs[name] = _zero_value(annotation)
    return args, kwargs


@dataclass(frozen=True)
class FieldSlot:
    """A named, typed field on a model class."""

    owner: type
    name: str
    annotation: Any

    @property
    def is_optional(self) -> bool:
        return unwrap_optional(self.annotation)[1]

    @property
    def target_type(self) -> Any:
        """Declared type with any optional wrapper removed."""
        return unwrap_optional(self.annotation)[0]

    @property
    def is_value_kind(self) -> bool:
        return is_value_kind(self.target_type)

    def read(self, holder: Any) -> Any:
        return getattr(holder, self.name, None)

    def write(self, holder: Any, value: Any) -> None:
        setattr(holder, self.name, value)


@runtime_checkable
class SchemaDescriptor(Protocol):
    """Capability interface used by the path resolver and validator."""

    def resolve(self, cls: type, name: str) -> FieldSlot | None:
        """Look up a field by name, or None if the type has no such field."""
        ...

    def fields(self, cls: type) -> list[FieldSlot]:
        """All fields declared on the type, in declaration order."""
        ...

    def construct(self, cls: type) -> Any:
        """Create a default instance of the type."""
        ...


class ReflectiveSchema:
    """SchemaDescriptor backed by runtime introspection.

    Field tables are computed once per class and cached for the lifetime of
    the descriptor.
    """

    def __init__(self) -> None:
        self._cache: dict[type, dict[str, FieldSlot]] = {}

    def resolve(self, cls: type, name: str) -> FieldSlot | None:
        return self._describe(cls).get(name)

    def fields(self, cls: type) -> list[FieldSlot]:
        return list(self._describe(cls).values())

    def construct(self, cls: type) -> Any:
        """Create an instance with required fields zero-filled.

        Required value-kind fields get their zero value; every other
        required field is set to None so the validator can report it.
        Plain classes receive the same placeholders for each required
        ``__init__`` parameter.

        Whatever the class's own ``__init__`` raises for those placeholders
        propagates unchanged.
        """
        if _is_pydantic_model(cls):
            required = {
                name: _zero_value(info.annotation)
                for name, info in cls.model_fields.items()
                if info.is_required()
            }
            return cls.model_construct(**required)

        if dataclasses.is_dataclass(cls):
            slots = self._describe(cls)
            required = {
                f.name: _zero_value(slots[f.name].annotation)
                for f in dataclasses.fields(cls)
                if f.init
                and f.default is dataclasses.MISSING
                and f.default_factory is dataclasses.MISSING
            }
            return cls(**required)

        args, kwargs = _init_arguments(cls, self._describe(cls))
        return cls(*args, **kwargs)

    def _describe(self, cls: type) -> dict[str, FieldSlot]:
        cached = self._cache.get(cls)
        if cached is not None:
            return cached

        table: dict[str, FieldSlot] = {}
        if _is_pydantic_model(cls):
            for name, info in cls.model_fields.items():
                table[name] = FieldSlot(cls, name, info.annotation)
        elif dataclasses.is_dataclass(cls):
            hints = _type_hints(cls)
            for f in dataclasses.fields(cls):
                table[f.name] = FieldSlot(cls, f.name, hints.get(f.name, f.type))
        elif is_class(cls):
            for name, annotation in _type_hints(cls).items():
                if name.startswith("_") or typing.get_origin(annotation) is ClassVar:
                    continue
                table[name] = FieldSlot(cls, name, annotation)

        self._cache[cls] = table
        return table


DEFAULT_SCHEMA = ReflectiveSchema()
