"""noble — wrap Rust declarations in unsafe and synthesize unchecked constructors."""

__version__ = "0.1.0"

from noble.errors import MalformedDeclaration, NobleError
from noble.expander import expand
from noble.ir.models import DeclarationNode, Shape
from noble.ir.rust_parser import parse_declaration

__all__ = [
    "DeclarationNode",
    "MalformedDeclaration",
    "NobleError",
    "Shape",
    "expand",
    "parse_declaration",
]
