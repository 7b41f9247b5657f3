"""
Portable Text Sanitizer - allowlist filtering of untrusted content blocks.

Turns loosely typed blocks from the content backend into the closed set
of sanitized block dataclasses.

Key behaviors:
- Unknown block types are dropped
- Unknown styles fall back to "normal", unknown list kinds to no list
- Marks outside the allowlist are dropped
- markDefs is dropped unconditionally, whatever it contains
- Text and alt text go through the multi-pass text cleaner
- Never raises: malformed input degrades to omission
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from richtext_guard.core.allowlists import (
    ALLOWED_BLOCK_TYPES,
    ALLOWED_LIST_TYPES,
    ALLOWED_MARKS,
    ALLOWED_STYLES,
    DEFAULT_STYLE,
    MAX_LEVEL,
    MIN_LEVEL,
    SPAN_TYPE,
)
from richtext_guard.core.entities import (
    ImageAsset,
    SanitizedBlock,
    SanitizedBreakBlock,
    SanitizedImageBlock,
    SanitizedSpan,
    SanitizedTextBlock,
    is_sanitized_block,
)
from richtext_guard.core.services.text_cleaner import clean_alt_text, clean_key, clean_text

logger = logging.getLogger(__name__)


# --- Decoding Helpers ---


def _as_mapping(value: object) -> Mapping[str, Any] | None:
    """Return a mapping view of a raw or already sanitized record."""
    if is_sanitized_block(value) or isinstance(value, SanitizedSpan):
        return value.to_dict()  # type: ignore[union-attr]
    if isinstance(value, Mapping):
        return value
    return None


def _field(record: Mapping[str, Any], name: str) -> Any:
    """Read a Portable Text field, accepting both "_name" and "name"."""
    if f"_{name}" in record:
        return record[f"_{name}"]
    return record.get(name)


def _type_tag(record: Mapping[str, Any]) -> str | None:
    tag = _field(record, "type")
    return tag if isinstance(tag, str) else None


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


# --- Spans ---


def sanitize_span(raw: object) -> SanitizedSpan | None:
    """Sanitize a single span. Returns None for anything that is not a span."""
    record = _as_mapping(raw)
    if record is None or _type_tag(record) != SPAN_TYPE:
        return None

    marks: list[str] = []
    raw_marks = record.get("marks")
    if _is_sequence(raw_marks):
        for mark in raw_marks:
            if isinstance(mark, str) and mark in ALLOWED_MARKS and mark not in marks:
                marks.append(mark)

    return SanitizedSpan(
        key=clean_key(_field(record, "key")),
        text=clean_text(record.get("text")),
        marks=tuple(marks),  # type: ignore[arg-type]
    )


# --- Blocks ---


def _sanitize_level(value: object) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if MIN_LEVEL <= value <= MAX_LEVEL:
        return value
    return None


def _sanitize_text_block(record: Mapping[str, Any], key: str) -> SanitizedTextBlock:
    style = record.get("style")
    list_item = record.get("listItem")

    children: list[SanitizedSpan] = []
    raw_children = record.get("children")
    if _is_sequence(raw_children):
        for child in raw_children:
            span = sanitize_span(child)
            if span is not None:
                children.append(span)

    # markDefs is never read
    return SanitizedTextBlock(
        key=key,
        style=style if isinstance(style, str) and style in ALLOWED_STYLES else DEFAULT_STYLE,  # type: ignore[arg-type]
        children=tuple(children),
        list_item=(
            list_item  # type: ignore[arg-type]
            if isinstance(list_item, str) and list_item in ALLOWED_LIST_TYPES
            else None
        ),
        level=_sanitize_level(record.get("level")),
    )


def _sanitize_image_block(record: Mapping[str, Any], key: str) -> SanitizedImageBlock:
    asset = None
    raw_asset = record.get("asset")
    if isinstance(raw_asset, Mapping):
        ref = _field(raw_asset, "ref")
        if isinstance(ref, str):
            asset = ImageAsset(ref=ref)

    alt = record["alt"] if "alt" in record else record.get("caption")
    return SanitizedImageBlock(key=key, asset=asset, alt=clean_alt_text(alt))


def decode_block(raw: object) -> SanitizedBlock | None:
    """
    Decode one untrusted block into a sanitized variant.

    The type tag is checked before any other field is read. Returns None
    when the record is not a mapping or its type is not allowlisted.
    """
    record = _as_mapping(raw)
    if record is None:
        return None

    block_type = _type_tag(record)
    if block_type not in ALLOWED_BLOCK_TYPES:
        logger.debug("Dropping block with disallowed type %r", str(block_type)[:50])
        return None

    key = clean_key(_field(record, "key"))

    if block_type == "block":
        return _sanitize_text_block(record, key)
    if block_type == "image":
        return _sanitize_image_block(record, key)
    if block_type == "break":
        return SanitizedBreakBlock(key=key)
    return None


def sanitize_portable_text(raw_blocks: object) -> list[SanitizedBlock]:
    """
    Sanitize a Portable Text document.

    Args:
        raw_blocks: Untrusted value, expected to be a list of block records.
            Already sanitized blocks are accepted and come back unchanged.

    Returns:
        Fresh list of sanitized blocks; empty for non-list input.
    """
    if not _is_sequence(raw_blocks):
        return []

    sanitized: list[SanitizedBlock] = []
    for raw in raw_blocks:  # type: ignore[union-attr]
        block = decode_block(raw)
        if block is not None:
            sanitized.append(block)
    return sanitized
