"""Rust declaration classifier — builds a DeclarationNode from source text.

The outer declaration shape is read here; the structural parse of types
and bodies comes from tree-sitter with the Rust grammar. Byte spans are
kept so the emitter can splice edits into the original text without
reformatting anything it does not touch.
"""

from __future__ import annotations

from functools import lru_cache

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from noble.errors import MalformedDeclaration
from noble.ir.models import (
    DeclarationNode,
    FieldSpec,
    FieldStyle,
    Generics,
    MemberOperation,
    Shape,
    Span,
    VariantSpec,
)
from noble.log import get_logger

logger = get_logger(__name__)


SHAPES_BY_KIND = {
    "function_item": Shape.ROUTINE,
    "struct_item": Shape.DATA_RECORD,
    "enum_item": Shape.TAGGED_UNION,
    "trait_item": Shape.CAPABILITY_CONTRACT,
    "impl_item": Shape.CONTRACT_IMPLEMENTATION,
}

# Well-formed items that are passed through untouched
PASSTHROUGH_KINDS = {
    "const_item",
    "static_item",
    "type_item",
    "union_item",
    "use_declaration",
    "mod_item",
    "foreign_mod_item",
    "extern_crate_declaration",
    "macro_definition",
    "macro_invocation",
    "function_signature_item",
    "associated_type",
}

# Leading material attached to the declaration rather than counted as one
METADATA_KINDS = {"attribute_item", "inner_attribute_item", "line_comment", "block_comment"}


@lru_cache(maxsize=1)
def rust_language() -> Language:
    return Language(tree_sitter_rust.language())


def parse_declaration(source: str) -> DeclarationNode:
    """Parse and classify a single Rust declaration.

    Raises:
        MalformedDeclaration: The text does not parse, holds no
            declaration, holds more than one, or holds a statement
            that is not a declaration.
    """
    data = source.encode("utf-8")
    tree = Parser(rust_language()).parse(data)
    root = tree.root_node

    if root.has_error:
        bad = _first_error(root)
        if bad is None:
            bad = root
        raise _malformed("Input does not parse as a declaration", bad)

    metadata: list[str] = []
    items: list[Node] = []
    for child in root.named_children:
        if child.type in METADATA_KINDS:
            if not items:
                metadata.append(_text(child, data).rstrip())
            continue
        items.append(child)

    if not items:
        raise MalformedDeclaration("No declaration found in input")
    if len(items) > 1:
        raise _malformed("Expected exactly one declaration, found another", items[1])

    item = _unwrap_item(items[0])
    shape = SHAPES_BY_KIND.get(item.type)
    if shape is None:
        if item.type not in PASSTHROUGH_KINDS:
            raise _malformed(f"'{item.type}' is not a declaration", item)
        shape = Shape.OTHER

    node = DeclarationNode(
        shape=shape,
        source=source,
        kind=item.type,
        metadata=metadata,
        visibility=_visibility(item, data),
    )

    if shape == Shape.OTHER:
        name = item.child_by_field_name("name")
        node.identifier = _text(name, data) if name is not None else ""
    elif shape == Shape.ROUTINE:
        _read_routine(item, data, node)
    elif shape == Shape.DATA_RECORD:
        _read_record(item, data, node)
    elif shape == Shape.TAGGED_UNION:
        _read_union(item, data, node)
    elif shape == Shape.CAPABILITY_CONTRACT:
        _read_contract(item, data, node)
    elif shape == Shape.CONTRACT_IMPLEMENTATION:
        _read_implementation(item, data, node)

    logger.debug(
        "declaration_classified",
        shape=node.shape.value,
        kind=node.kind,
        identifier=node.identifier,
    )
    return node


# --- Shape readers ---


def _read_routine(item: Node, data: bytes, node: DeclarationNode) -> None:
    node.identifier = _field_text(item, "name", data)
    node.generics = _read_generics(item, data)
    body = item.child_by_field_name("body")
    node.body_span = Span(body.start_byte, body.end_byte)
    node.body = node.body_span.slice(data)


def _read_record(item: Node, data: bytes, node: DeclarationNode) -> None:
    node.identifier = _field_text(item, "name", data)
    node.generics = _read_generics(item, data)
    node.field_style, node.fields = _read_fields(item, data)


def _read_union(item: Node, data: bytes, node: DeclarationNode) -> None:
    node.identifier = _field_text(item, "name", data)
    node.generics = _read_generics(item, data)
    body = item.child_by_field_name("body")
    for variant in _named_of_type(body, "enum_variant"):
        style, fields = _read_fields(variant, data)
        node.variants.append(
            VariantSpec(
                name=_field_text(variant, "name", data),
                field_style=style,
                fields=fields,
            )
        )


def _read_contract(item: Node, data: bytes, node: DeclarationNode) -> None:
    node.identifier = _field_text(item, "name", data)
    node.generics = _read_generics(item, data)
    node.is_unsafe = _has_token(item, "unsafe")
    anchor = _token(item, "auto")
    if anchor is None:
        anchor = _token(item, "trait")
    node.unsafe_at = anchor.start_byte
    node.members = _read_members(item.child_by_field_name("body"), data)


def _read_implementation(item: Node, data: bytes, node: DeclarationNode) -> None:
    node.self_type = _field_text(item, "type", data)
    node.identifier = node.self_type
    node.generics = _read_generics(item, data)
    trait = item.child_by_field_name("trait")
    if trait is not None:
        negated = _token(item, "!")
        node.contract = ("!" if negated is not None else "") + _text(trait, data)
    node.is_unsafe = _has_token(item, "unsafe")
    node.unsafe_at = _token(item, "impl").start_byte
    node.members = _read_members(item.child_by_field_name("body"), data)


# --- Building blocks ---


def _read_fields(owner: Node, data: bytes) -> tuple[FieldStyle, list[FieldSpec]]:
    """Read the field list of a struct or enum variant."""
    body = owner.child_by_field_name("body")
    if body is None:
        # Some grammar versions do not label struct bodies
        for child in owner.named_children:
            if child.type in ("field_declaration_list", "ordered_field_declaration_list"):
                body = child
                break

    if body is None:
        return FieldStyle.UNIT, []

    if body.type == "field_declaration_list":
        fields = [
            FieldSpec(
                name=_field_text(decl, "name", data),
                type=_field_text(decl, "type", data),
            )
            for decl in _named_of_type(body, "field_declaration")
        ]
        return FieldStyle.NAMED, fields

    if body.type == "ordered_field_declaration_list":
        fields = [FieldSpec(type=_text(t, data)) for t in body.children_by_field_name("type")]
        return FieldStyle.POSITIONAL, fields

    return FieldStyle.UNIT, []


def _read_members(body: Node | None, data: bytes) -> list[MemberOperation]:
    """Read the methods of a trait or impl body, in order."""
    if body is None:
        return []

    members = []
    for child in body.named_children:
        if child.type not in ("function_item", "function_signature_item"):
            continue

        block = child.child_by_field_name("body")
        sig_end = block.start_byte if block is not None else child.end_byte
        signature = data[child.start_byte : sig_end].decode("utf-8").strip().rstrip(";").rstrip()

        modifiers = _first_of_type(child, "function_modifiers")
        is_unsafe = modifiers is not None and _has_token(modifiers, "unsafe")
        extern = _first_of_type(modifiers, "extern_modifier") if modifiers is not None else None
        anchor = extern if extern is not None else _token(child, "fn")

        member = MemberOperation(
            name=_field_text(child, "name", data),
            signature=signature,
            is_unsafe=is_unsafe,
            unsafe_at=anchor.start_byte,
        )
        if block is not None:
            member.body_span = Span(block.start_byte, block.end_byte)
            member.body = member.body_span.slice(data)
        members.append(member)
    return members


def _read_generics(item: Node, data: bytes) -> Generics:
    """Split generic parameters into impl-side and type-side forms."""
    generics = Generics()
    where = _first_of_type(item, "where_clause")
    if where is not None:
        generics.where_clause = _text(where, data)

    params = item.child_by_field_name("type_parameters")
    if params is None:
        return generics

    generics.declared = _text(params, data)
    impl_parts: list[str] = []
    type_parts: list[str] = []
    for param in params.named_children:
        if param.type in METADATA_KINDS:
            continue
        impl_parts.append(_without_default(param, data))
        type_parts.append(_param_name(param, data))

    generics.impl_params = "<" + ", ".join(impl_parts) + ">"
    generics.type_args = "<" + ", ".join(type_parts) + ">"
    return generics


def _param_name(param: Node, data: bytes) -> str:
    """Name of a generic parameter as used in type position."""
    if param.type in ("lifetime", "type_identifier", "metavariable", "identifier"):
        return _text(param, data)
    name = param.child_by_field_name("name")
    if name is None:
        name = param.child_by_field_name("left")
    if name is None:
        return _text(param, data)
    return _param_name(name, data)


def _without_default(param: Node, data: bytes) -> str:
    """Parameter text with any "= default" removed; bounds are kept."""
    eq = _token(param, "=")
    if eq is None:
        return _text(param, data)
    return data[param.start_byte : eq.start_byte].decode("utf-8").rstrip()


def _unwrap_item(node: Node) -> Node:
    # Item-position macro calls like `foo!(...);` arrive as statements
    if node.type == "expression_statement" and node.named_child_count == 1:
        inner = node.named_children[0]
        if inner.type == "macro_invocation":
            return inner
    return node


def _visibility(item: Node, data: bytes) -> str:
    vis = _first_of_type(item, "visibility_modifier")
    return _text(vis, data) if vis is not None else ""


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _malformed(message: str, node: Node) -> MalformedDeclaration:
    row, column = node.start_point
    return MalformedDeclaration(message, line=row + 1, column=column + 1)


def _text(node: Node, data: bytes) -> str:
    return data[node.start_byte : node.end_byte].decode("utf-8")


def _field_text(node: Node, field_name: str, data: bytes) -> str:
    child = node.child_by_field_name(field_name)
    return _text(child, data) if child is not None else ""


def _first_of_type(node: Node, node_type: str) -> Node | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _named_of_type(node: Node | None, node_type: str) -> list[Node]:
    if node is None:
        return []
    return [c for c in node.named_children if c.type == node_type]


def _token(node: Node, token: str) -> Node | None:
    """First anonymous child with the given token text."""
    for child in node.children:
        if not child.is_named and child.type == token:
            return child
    return None


def _has_token(node: Node, token: str) -> bool:
    return _token(node, token) is not None
