"""Identifier synthesis for generated constructors.

Names are pure functions of existing identifiers; nothing here looks at
the surrounding scope, so collisions with user-defined names (or with
each other, for variants that differ only by case) are not detected.
"""

from __future__ import annotations

from noble.ir.models import FieldSpec

RECORD_CONSTRUCTOR = "new_unsafe"
POSITIONAL_PREFIX = "field_"


def variant_constructor_name(variant: str) -> str:
    """`Idle` -> `new_idle_unsafe`."""
    return f"new_{variant.lower()}_unsafe"


def positional_name(index: int) -> str:
    return f"{POSITIONAL_PREFIX}{index}"


def parameter_names(fields: list[FieldSpec]) -> list[str]:
    """One parameter name per field, in field order.

    Named fields keep their own name; positional fields get
    field_0, field_1, ... by position.
    """
    return [f.name if f.name else positional_name(i) for i, f in enumerate(fields)]
