"""Tagged-union transformer: one unchecked constructor per variant.

Each constructor is itself `unsafe fn`; its body is the bare variant
construction. Variant order is preserved.
"""

from __future__ import annotations

from noble.ir.models import DeclarationNode
from noble.naming import variant_constructor_name
from noble.transforms.base import (
    Expansion,
    render_construction,
    render_inherent_impl,
    render_method,
    render_parameters,
)


def transform_union(node: DeclarationNode) -> Expansion:
    constructors = [
        render_method(
            variant_constructor_name(variant.name),
            render_parameters(variant.fields),
            render_construction(f"Self::{variant.name}", variant.field_style, variant.fields),
        )
        for variant in node.variants
    ]
    return Expansion(node, companions=[render_inherent_impl(node, constructors)])
