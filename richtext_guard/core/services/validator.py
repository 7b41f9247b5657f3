"""
Structural Validator - second check of sanitized Portable Text.

Re-derives the sanitizer's guarantees from the wire shape of its output,
without reusing any sanitizer code. The renderer refuses to render a
document that fails here.

Checks:
- Input is a list of blocks
- Every block type is allowlisted
- No field whose name looks like a mark-definition table
- style and listItem values, when present, are allowlisted
- Every child is a span with string text and allowlisted marks
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from typing import Any

from richtext_guard.core.allowlists import (
    ALLOWED_BLOCK_TYPES,
    ALLOWED_LIST_TYPES,
    ALLOWED_MARKS,
    ALLOWED_STYLES,
    SPAN_TYPE,
)
from richtext_guard.core.entities import is_sanitized_block

NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class PortableTextViolation:
    """First invariant breach found in a document."""

    code: str
    message: str
    path: str | None = None


def _looks_like_mark_defs(name: object) -> bool:
    return isinstance(name, str) and "markdef" in NON_ALNUM_PATTERN.sub("", name.lower())


def _block_fields(block: object) -> tuple[Mapping[str, Any], list[str]] | None:
    """Return (wire dict, every field name the block exposes)."""
    if is_sanitized_block(block):
        names = [f.name for f in fields(block)]  # type: ignore[arg-type]
        wire = block.to_dict()  # type: ignore[union-attr]
        return wire, names + list(wire)
    if isinstance(block, Mapping):
        return block, [str(name) for name in block]
    return None


def _check_span(span: object, path: str) -> PortableTextViolation | None:
    if is_dataclass(span) and hasattr(span, "to_dict"):
        span = span.to_dict()  # type: ignore[union-attr]
    if not isinstance(span, Mapping) or span.get("_type") != SPAN_TYPE:
        return PortableTextViolation("invalid_span", "Child is not a span", path)

    if not isinstance(span.get("text"), str):
        return PortableTextViolation("invalid_span_text", "Span text is not a string", path)

    marks = span.get("marks")
    if marks is None:
        return None
    if not isinstance(marks, (list, tuple)):
        return PortableTextViolation("invalid_mark", "Span marks are not a list", path)
    for i, mark in enumerate(marks):
        if not isinstance(mark, str) or mark not in ALLOWED_MARKS:
            return PortableTextViolation(
                "invalid_mark", f"Mark {str(mark)[:50]!r} is not allowed", f"{path}.marks[{i}]"
            )
    return None


def _check_block(block: object, path: str) -> PortableTextViolation | None:
    resolved = _block_fields(block)
    if resolved is None:
        return PortableTextViolation("invalid_block", "Block is not an object", path)
    wire, names = resolved

    block_type = wire.get("_type")
    if not isinstance(block_type, str) or block_type not in ALLOWED_BLOCK_TYPES:
        return PortableTextViolation(
            "invalid_block_type", f"Block type {str(block_type)[:50]!r} is not allowed", path
        )

    for name in names:
        if _looks_like_mark_defs(name):
            return PortableTextViolation(
                "mark_defs_present", f"Field {name[:50]!r} is not allowed", f"{path}.{name[:50]}"
            )

    style = wire.get("style")
    if style is not None and (not isinstance(style, str) or style not in ALLOWED_STYLES):
        return PortableTextViolation("invalid_style", "Style is not allowed", f"{path}.style")

    list_item = wire.get("listItem")
    if list_item is not None and (
        not isinstance(list_item, str) or list_item not in ALLOWED_LIST_TYPES
    ):
        return PortableTextViolation(
            "invalid_list_item", "List item kind is not allowed", f"{path}.listItem"
        )

    children = wire.get("children")
    if children is None:
        return None
    if not isinstance(children, (list, tuple)):
        return PortableTextViolation("invalid_span", "Children are not a list", f"{path}.children")
    for i, child in enumerate(children):
        violation = _check_span(child, f"{path}.children[{i}]")
        if violation is not None:
            return violation
    return None


def find_violation(blocks: object) -> PortableTextViolation | None:
    """Return the first violation in a sanitized document, or None if it is clean."""
    if not isinstance(blocks, (list, tuple)):
        return PortableTextViolation("not_a_sequence", "Document is not a list of blocks")

    for i, block in enumerate(blocks):
        violation = _check_block(block, f"blocks[{i}]")
        if violation is not None:
            return violation
    return None


def validate_sanitized_portable_text(blocks: object) -> bool:
    """Check that sanitized blocks still satisfy every allowlist invariant."""
    return find_violation(blocks) is None
