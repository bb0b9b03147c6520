"""Tests for the declaration classifier and IR models."""

import pytest

from noble.errors import MalformedDeclaration
from noble.ir.models import FieldStyle, Shape
from noble.ir.rust_parser import parse_declaration


# --- Classification ---


@pytest.mark.parametrize(
    "source, shape",
    [
        ("fn main() {}", Shape.ROUTINE),
        ("struct Point { x: i32 }", Shape.DATA_RECORD),
        ("enum State { Idle }", Shape.TAGGED_UNION),
        ("trait Device { fn reset(&mut self); }", Shape.CAPABILITY_CONTRACT),
        ("impl Device for Uart {}", Shape.CONTRACT_IMPLEMENTATION),
        ("impl Uart {}", Shape.CONTRACT_IMPLEMENTATION),
        ("type Bytes = Vec<u8>;", Shape.OTHER),
        ("const MAX: usize = 10;", Shape.OTHER),
        ("static COUNT: u32 = 0;", Shape.OTHER),
        ("use std::ptr;", Shape.OTHER),
        ("mod inner {}", Shape.OTHER),
        ("macro_rules! nothing { () => {}; }", Shape.OTHER),
    ],
)
def test_classifies_shape(source, shape):
    assert parse_declaration(source).shape == shape


def test_routine_payload():
    node = parse_declaration("pub fn add(a: i32, b: i32) -> i32 {\n    a + b\n}\n")
    assert node.identifier == "add"
    assert node.visibility == "pub"
    assert node.body == "{\n    a + b\n}"
    assert node.kind == "function_item"


def test_metadata_collected():
    node = parse_declaration("/// Docs\n#[derive(Debug)]\nstruct A { x: u8 }")
    assert node.metadata == ["/// Docs", "#[derive(Debug)]"]
    assert node.identifier == "A"


def test_record_named_fields():
    node = parse_declaration("pub struct Point {\n    pub x: f64,\n    y: Vec<u8>,\n}")
    assert node.field_style == FieldStyle.NAMED
    assert [(f.name, f.type) for f in node.fields] == [("x", "f64"), ("y", "Vec<u8>")]


def test_record_positional_fields():
    node = parse_declaration("struct Pair(pub u8, String);")
    assert node.field_style == FieldStyle.POSITIONAL
    assert [(f.name, f.type) for f in node.fields] == [(None, "u8"), (None, "String")]


def test_record_styles_with_no_fields():
    assert parse_declaration("struct Marker;").field_style == FieldStyle.UNIT
    assert parse_declaration("struct Empty {}").field_style == FieldStyle.NAMED
    assert parse_declaration("struct Nothing();").field_style == FieldStyle.POSITIONAL


def test_generics_split():
    node = parse_declaration(
        "struct Wrapper<'a, T: Clone = u8, const N: usize> where T: Default { items: &'a [T; N] }"
    )
    g = node.generics
    assert g.declared == "<'a, T: Clone = u8, const N: usize>"
    assert g.impl_params == "<'a, T: Clone, const N: usize>"
    assert g.type_args == "<'a, T, N>"
    assert g.where_clause == "where T: Default"


def test_no_generics():
    node = parse_declaration("struct Plain { x: u8 }")
    assert node.generics.is_empty
    assert node.generics.impl_params == ""


def test_union_variants_in_order():
    node = parse_declaration(
        "enum Event {\n    Idle,\n    Key(char, bool),\n    Move { x: i32, y: i32 },\n    Code = 7,\n}"
    )
    assert [v.name for v in node.variants] == ["Idle", "Key", "Move", "Code"]
    assert [v.field_style for v in node.variants] == [
        FieldStyle.UNIT,
        FieldStyle.POSITIONAL,
        FieldStyle.NAMED,
        FieldStyle.UNIT,
    ]
    assert [f.type for f in node.variants[1].fields] == ["char", "bool"]
    assert [f.name for f in node.variants[2].fields] == ["x", "y"]


def test_contract_members():
    node = parse_declaration(
        "pub trait Device {\n"
        "    type Word;\n"
        "    fn reset(&mut self);\n"
        "    unsafe fn poke(&mut self, v: u8);\n"
        "    fn id(&self) -> u32 {\n        0\n    }\n"
        "}"
    )
    assert node.identifier == "Device"
    assert not node.is_unsafe
    assert [m.name for m in node.members] == ["reset", "poke", "id"]
    assert [m.body is None for m in node.members] == [True, True, False]
    assert [m.is_unsafe for m in node.members] == [False, True, False]
    assert node.members[0].signature == "fn reset(&mut self)"
    assert node.members[2].signature == "fn id(&self) -> u32"


def test_implementation_bound_and_free():
    bound = parse_declaration("unsafe impl<T> Send for Buf<T> {}")
    assert bound.contract == "Send"
    assert bound.self_type == "Buf<T>"
    assert bound.is_unsafe
    assert bound.is_bound_impl

    free = parse_declaration("impl Buf { fn len(&self) -> usize { 0 } }")
    assert free.contract == ""
    assert not free.is_bound_impl
    assert [m.name for m in free.members] == ["len"]


def test_to_dict_shape_payloads():
    data = parse_declaration("enum State { Idle, Run(u32) }").to_dict()
    assert data["shape"] == "tagged_union"
    assert data["variants"][1] == {
        "name": "Run",
        "field_style": "positional",
        "fields": [{"name": None, "type": "u32"}],
    }

    data = parse_declaration("impl Device for Uart { fn reset(&mut self) {} }").to_dict()
    assert data["contract"] == "Device"
    assert data["members"][0]["has_body"] is True


# --- Malformed input ---


def test_empty_input_is_malformed():
    with pytest.raises(MalformedDeclaration):
        parse_declaration("")


def test_comment_only_is_malformed():
    with pytest.raises(MalformedDeclaration):
        parse_declaration("// nothing here\n")


def test_two_declarations_is_malformed():
    with pytest.raises(MalformedDeclaration) as exc:
        parse_declaration("struct A; struct B;")
    assert exc.value.line == 1
    assert exc.value.column == 11


def test_statement_is_malformed():
    with pytest.raises(MalformedDeclaration) as exc:
        parse_declaration("let x = 1;")
    assert "not a declaration" in exc.value.message


def test_syntax_error_is_malformed():
    with pytest.raises(MalformedDeclaration) as exc:
        parse_declaration("fn broken( {")
    assert exc.value.line == 1
    assert str(exc.value).startswith("[malformed-declaration] 1:")
