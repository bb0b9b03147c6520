"""IR data models — the parsed form of one annotated declaration.

The classifier builds a DeclarationNode from the input text; the shape
transformers read it and produce edits against the original source plus
any synthesized companion declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Shape(Enum):
    ROUTINE = "routine"  # fn
    DATA_RECORD = "data_record"  # struct
    TAGGED_UNION = "tagged_union"  # enum
    CAPABILITY_CONTRACT = "capability_contract"  # trait
    CONTRACT_IMPLEMENTATION = "contract_implementation"  # impl
    OTHER = "other"  # Passed through verbatim


class FieldStyle(Enum):
    NAMED = "named"  # { a: T }
    POSITIONAL = "positional"  # (T)
    UNIT = "unit"  # no field list


@dataclass(frozen=True)
class Span:
    """Half-open byte range into the UTF-8 encoded source."""

    start: int
    end: int

    def slice(self, data: bytes) -> str:
        return data[self.start : self.end].decode("utf-8")


@dataclass(frozen=True)
class Edit:
    """Replace the bytes covered by ``span`` with ``replacement``.

    An insertion is an edit with an empty span.
    """

    span: Span
    replacement: str

    @classmethod
    def insert(cls, at: int, text: str) -> Edit:
        return cls(Span(at, at), text)


@dataclass
class Generics:
    """Generic parameters of a declaration, pre-split for impl blocks."""

    declared: str = ""  # As written, e.g. "<'a, T: Clone = u8>"
    impl_params: str = ""  # Bounds kept, defaults dropped: "<'a, T: Clone>"
    type_args: str = ""  # Names only: "<'a, T>"
    where_clause: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.declared and not self.where_clause


@dataclass
class FieldSpec:
    """A record or variant field. ``name`` is None for positional fields."""

    type: str
    name: str | None = None


@dataclass
class VariantSpec:
    name: str
    field_style: FieldStyle = FieldStyle.UNIT
    fields: list[FieldSpec] = field(default_factory=list)


@dataclass
class MemberOperation:
    """A method inside a trait or impl block."""

    name: str
    signature: str
    body: str | None = None  # None for signature-only trait methods
    is_unsafe: bool = False

    # Rewrite anchors
    unsafe_at: int = 0  # Byte offset where "unsafe " belongs in the signature
    body_span: Span | None = None


@dataclass
class DeclarationNode:
    """One parsed declaration plus the shape-specific payload."""

    shape: Shape
    source: str
    kind: str = ""  # Host grammar node type, e.g. "struct_item"
    identifier: str = ""
    visibility: str = ""
    generics: Generics = field(default_factory=Generics)
    metadata: list[str] = field(default_factory=list)

    # ROUTINE
    body: str | None = None
    body_span: Span | None = None

    # DATA_RECORD
    field_style: FieldStyle = FieldStyle.UNIT
    fields: list[FieldSpec] = field(default_factory=list)

    # TAGGED_UNION
    variants: list[VariantSpec] = field(default_factory=list)

    # CAPABILITY_CONTRACT / CONTRACT_IMPLEMENTATION
    members: list[MemberOperation] = field(default_factory=list)
    contract: str = ""  # Bound trait for impl blocks; empty when inherent
    self_type: str = ""  # Implementing type for impl blocks
    is_unsafe: bool = False  # Already "unsafe trait" / "unsafe impl"
    unsafe_at: int = 0  # Where "unsafe " belongs on the trait / impl header

    @property
    def encoded(self) -> bytes:
        return self.source.encode("utf-8")

    @property
    def is_bound_impl(self) -> bool:
        return self.shape == Shape.CONTRACT_IMPLEMENTATION and bool(self.contract)

    def to_dict(self) -> dict:
        """Plain-data view for the inspect command."""
        data: dict = {
            "shape": self.shape.value,
            "kind": self.kind,
            "identifier": self.identifier,
            "visibility": self.visibility,
            "generics": {
                "declared": self.generics.declared,
                "impl_params": self.generics.impl_params,
                "type_args": self.generics.type_args,
                "where_clause": self.generics.where_clause,
            },
            "metadata": list(self.metadata),
        }
        if self.shape == Shape.ROUTINE:
            data["body"] = self.body
        elif self.shape == Shape.DATA_RECORD:
            data["field_style"] = self.field_style.value
            data["fields"] = [_field_dict(f) for f in self.fields]
        elif self.shape == Shape.TAGGED_UNION:
            data["variants"] = [
                {
                    "name": v.name,
                    "field_style": v.field_style.value,
                    "fields": [_field_dict(f) for f in v.fields],
                }
                for v in self.variants
            ]
        elif self.shape in (Shape.CAPABILITY_CONTRACT, Shape.CONTRACT_IMPLEMENTATION):
            data["is_unsafe"] = self.is_unsafe
            if self.shape == Shape.CONTRACT_IMPLEMENTATION:
                data["contract"] = self.contract
                data["self_type"] = self.self_type
            data["members"] = [
                {
                    "name": m.name,
                    "signature": m.signature,
                    "has_body": m.body is not None,
                    "is_unsafe": m.is_unsafe,
                }
                for m in self.members
            ]
        return data


def _field_dict(f: FieldSpec) -> dict:
    return {"name": f.name, "type": f.type}
