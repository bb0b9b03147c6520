"""Shared pieces for the shape transformers."""

from __future__ import annotations

from dataclasses import dataclass, field

from noble.ir.models import DeclarationNode, Edit, FieldSpec, FieldStyle, Span
from noble.naming import parameter_names

MARKER = "unsafe"
INDENT = "    "


@dataclass
class Expansion:
    """Output of one transformer.

    ``edits`` apply to the original declaration text; ``companions`` are
    fully rendered declarations emitted after it.
    """

    node: DeclarationNode
    edits: list[Edit] = field(default_factory=list)
    companions: list[str] = field(default_factory=list)


def wrap_body(span: Span, body: str) -> Edit:
    """Replace a block with one that runs it under the marker."""
    return Edit(span, f"{{ {MARKER} {body} }}")


def mark_unsafe(at: int) -> Edit:
    return Edit.insert(at, f"{MARKER} ")


def render_parameters(fields: list[FieldSpec]) -> str:
    names = parameter_names(fields)
    return ", ".join(f"{name}: {f.type}" for name, f in zip(names, fields))


def render_construction(path: str, style: FieldStyle, fields: list[FieldSpec]) -> str:
    """Literal construction of ``path`` from same-named parameters."""
    names = parameter_names(fields)
    if style == FieldStyle.NAMED:
        if not names:
            return f"{path} {{}}"
        return f"{path} {{ {', '.join(names)} }}"
    if style == FieldStyle.POSITIONAL:
        return f"{path}({', '.join(names)})"
    return path


def render_method(name: str, params: str, body: str, doc: str = "") -> str:
    lines = []
    if doc:
        lines.append(f"{INDENT}/// {doc}")
    lines.append(f"{INDENT}pub {MARKER} fn {name}({params}) -> Self {{")
    lines.append(f"{INDENT * 2}{body}")
    lines.append(f"{INDENT}}}")
    return "\n".join(lines)


def render_inherent_impl(node: DeclarationNode, methods: list[str]) -> str:
    """An inherent impl block for ``node`` carrying its generics."""
    g = node.generics
    header = f"impl{g.impl_params} {node.identifier}{g.type_args}"
    if g.where_clause:
        header += f" {g.where_clause}"
    if not methods:
        return f"{header} {{}}"
    return f"{header} {{\n" + "\n\n".join(methods) + "\n}"
