"""Intermediate representation of one annotated declaration.

The classifier (rust_parser) turns input text into a DeclarationNode:
- the declaration's shape (routine, record, union, contract, impl, other)
- its name, visibility, generics and leading attributes
- the shape payload: body, fields, variants or member operations
"""
