"""Post-population validation of required fields.

Only the model's immediate fields are checked. A field is required when its
declared type is not optional and not a value kind (numbers, bool, dates,
UUIDs, enums), which always carry a default.
"""

from __future__ import annotations

from typing import Any

from row_bind.core.config import BindingOptions
from row_bind.mapping.schema import DEFAULT_SCHEMA, SchemaDescriptor


def missing_required_fields(
    model: Any,
    schema: SchemaDescriptor = DEFAULT_SCHEMA,
) -> list[str]:
    """Names of required fields that still hold None."""
    return [
        slot.name
        for slot in schema.fields(type(model))
        if not slot.is_optional and not slot.is_value_kind and slot.read(model) is None
    ]


def validate(
    model: Any,
    options: BindingOptions,
    schema: SchemaDescriptor = DEFAULT_SCHEMA,
) -> bool:
    """Accept or reject a populated model under the given policy."""
    if not options.enforce_non_nullable:
        return True
    return not missing_required_fields(model, schema)
