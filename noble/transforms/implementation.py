"""Contract-implementation transformer.

Every method body is wrapped. Only a block bound to a trait
(`impl Trait for Type`) becomes `unsafe impl`; inherent blocks keep
their header.
"""

from __future__ import annotations

from noble.ir.models import DeclarationNode
from noble.transforms.base import Expansion, mark_unsafe, wrap_body


def transform_implementation(node: DeclarationNode) -> Expansion:
    expansion = Expansion(node)
    if node.is_bound_impl and not node.is_unsafe:
        expansion.edits.append(mark_unsafe(node.unsafe_at))

    for member in node.members:
        if member.body_span is not None:
            expansion.edits.append(wrap_body(member.body_span, member.body))
    return expansion
