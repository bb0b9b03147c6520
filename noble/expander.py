"""The expansion pipeline: classify, transform, emit."""

from __future__ import annotations

from noble.emitter import emit
from noble.ir.models import DeclarationNode
from noble.ir.rust_parser import parse_declaration
from noble.log import get_logger
from noble.transforms import transform

logger = get_logger(__name__)


def expand(source: str, args: str | None = None) -> str:
    """Expand one annotated declaration.

    Args:
        source: Text of exactly one Rust declaration, with any leading
            attributes or doc comments.
        args: Annotation arguments. Accepted and ignored.

    Returns:
        The rewritten declaration followed by any synthesized
        companions. Unrecognized declarations come back verbatim.

    Raises:
        MalformedDeclaration: ``source`` is not a single declaration.
    """
    if args:
        logger.debug("args_ignored", args=args)

    node = parse_declaration(source)
    return expand_node(node)


def expand_node(node: DeclarationNode) -> str:
    expansion = transform(node)
    logger.debug(
        "declaration_expanded",
        shape=node.shape.value,
        identifier=node.identifier,
        edits=len(expansion.edits),
        companions=len(expansion.companions),
    )
    return emit(expansion)
