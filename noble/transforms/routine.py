"""Routine transformer: run the whole body under the marker."""

from __future__ import annotations

from noble.ir.models import DeclarationNode
from noble.transforms.base import Expansion, wrap_body


def transform_routine(node: DeclarationNode) -> Expansion:
    return Expansion(node, edits=[wrap_body(node.body_span, node.body)])
