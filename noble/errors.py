"""Errors raised by the noble expansion pipeline."""

from __future__ import annotations


class NobleError(Exception):
    """Structured, user-facing error.

    Rendered as ``[code] message`` so the CLI can show it without a
    stack trace.
    """

    code = "noble-error"

    def __init__(self, message: str, code: str | None = None):
        if code:
            self.code = code
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class MalformedDeclaration(NobleError):
    """The input text is not exactly one declaration.

    Carries the 1-based line and column of the first offending token.
    """

    code = "malformed-declaration"

    def __init__(self, message: str, line: int = 1, column: int = 1):
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.line}:{self.column}: {self.message}"
