"""Emitter — turns an Expansion back into source text.

Edits are spliced into the original bytes, so every byte no edit
touches is reproduced exactly. Synthesized declarations follow the
rewritten one, separated by a blank line.
"""

from __future__ import annotations

from noble.ir.models import Edit
from noble.transforms.base import Expansion


def apply_edits(data: bytes, edits: list[Edit]) -> str:
    """Apply non-overlapping edits to ``data``.

    Edits are applied back to front so earlier offsets stay valid. An
    insertion and a replacement starting at the same offset keep the
    insertion first.
    """
    ordered = sorted(
        edits,
        key=lambda e: (e.span.start, e.span.end - e.span.start),
        reverse=True,
    )
    out = data
    for edit in ordered:
        out = out[: edit.span.start] + edit.replacement.encode("utf-8") + out[edit.span.end :]
    return out.decode("utf-8")


def emit(expansion: Expansion) -> str:
    node = expansion.node
    if not expansion.edits and not expansion.companions:
        return node.source

    text = apply_edits(node.encoded, expansion.edits) if expansion.edits else node.source
    if not expansion.companions:
        return text
    return text.rstrip() + "\n\n" + "\n\n".join(expansion.companions) + "\n"
