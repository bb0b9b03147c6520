"""Shape transformers and the dispatch table over every Shape."""

from noble.ir.models import DeclarationNode, Shape
from noble.transforms.base import Expansion
from noble.transforms.contract import transform_contract
from noble.transforms.implementation import transform_implementation
from noble.transforms.record import transform_record
from noble.transforms.routine import transform_routine
from noble.transforms.union import transform_union


def passthrough(node: DeclarationNode) -> Expansion:
    """Unrecognized shapes are emitted verbatim."""
    return Expansion(node)


TRANSFORMERS = {
    Shape.ROUTINE: transform_routine,
    Shape.DATA_RECORD: transform_record,
    Shape.TAGGED_UNION: transform_union,
    Shape.CAPABILITY_CONTRACT: transform_contract,
    Shape.CONTRACT_IMPLEMENTATION: transform_implementation,
    Shape.OTHER: passthrough,
}


def transform(node: DeclarationNode) -> Expansion:
    return TRANSFORMERS[node.shape](node)


__all__ = ["Expansion", "TRANSFORMERS", "passthrough", "transform"]
