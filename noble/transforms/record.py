"""Data-record transformer: synthesize an unchecked `new_unsafe` constructor.

The struct itself is emitted as written. The constructor takes one
parameter per field in field order, is callable only from an unsafe
context, and builds the value inside an unsafe block.
"""

from __future__ import annotations

from noble.ir.models import DeclarationNode
from noble.naming import RECORD_CONSTRUCTOR
from noble.transforms.base import (
    MARKER,
    Expansion,
    render_construction,
    render_inherent_impl,
    render_method,
    render_parameters,
)


def transform_record(node: DeclarationNode) -> Expansion:
    construction = render_construction("Self", node.field_style, node.fields)
    constructor = render_method(
        RECORD_CONSTRUCTOR,
        render_parameters(node.fields),
        f"{MARKER} {{ {construction} }}",
        doc="Unsafe constructor",
    )
    return Expansion(node, companions=[render_inherent_impl(node, [constructor])])
