"""Capability-contract transformer.

Marks the trait and every method signature unsafe, and wraps default
method bodies. Signature-only methods stay bodyless.
"""

from __future__ import annotations

from noble.ir.models import DeclarationNode
from noble.transforms.base import Expansion, mark_unsafe, wrap_body


def transform_contract(node: DeclarationNode) -> Expansion:
    expansion = Expansion(node)
    if not node.is_unsafe:
        expansion.edits.append(mark_unsafe(node.unsafe_at))

    for member in node.members:
        if not member.is_unsafe:
            expansion.edits.append(mark_unsafe(member.unsafe_at))
        if member.body_span is not None:
            expansion.edits.append(wrap_body(member.body_span, member.body))
    return expansion
