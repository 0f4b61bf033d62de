"""Binding policy configuration.

BindingOptions is a Pydantic model so that policies loaded from user
configuration are validated the same way as ones built in code.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BindingOptions(BaseModel):
    """Policy applied by a BindingPlan after each row is populated."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    enforce_non_nullable: bool = False


DEFAULT_OPTIONS = BindingOptions()
