"""Mapping layer - bind raw row dicts onto typed model graphs."""

from __future__ import annotations

from row_bind.mapping.builder import BindingPlanBuilder, binding
from row_bind.mapping.converter import ValueConverter, convert_value
from row_bind.mapping.plan import BindingPlan
from row_bind.mapping.report import (
    BindingReporter,
    CollectingReporter,
    FieldSkipped,
    RowRejected,
)
from row_bind.mapping.resolver import FieldTarget, parse_path, resolve_path
from row_bind.mapping.result import Fail, Ok, Outcome, Skip
from row_bind.mapping.schema import FieldSlot, ReflectiveSchema, SchemaDescriptor
from row_bind.mapping.validator import missing_required_fields, validate

__all__ = [
    "BindingPlan",
    "BindingPlanBuilder",
    "binding",
    "ValueConverter",
    "convert_value",
    "FieldTarget",
    "parse_path",
    "resolve_path",
    "FieldSlot",
    "ReflectiveSchema",
    "SchemaDescriptor",
    "missing_required_fields",
    "validate",
    "BindingReporter",
    "CollectingReporter",
    "FieldSkipped",
    "RowRejected",
    "Ok",
    "Skip",
    "Fail",
    "Outcome",
]
