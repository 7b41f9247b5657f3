"""
Portable Text allowlists.

Single source of truth for every value permitted to pass through
sanitization. The sanitizer, validator and renderer all read these
constants; none of them keeps its own copy.
"""

from __future__ import annotations

from typing import Final, Literal

AllowedBlockType = Literal["block", "image", "break"]
AllowedMark = Literal["strong", "em", "code", "underline"]
AllowedStyle = Literal["normal", "h1", "h2", "h3", "h4", "blockquote"]
AllowedListType = Literal["bullet", "number"]

ALLOWED_BLOCK_TYPES: Final[frozenset[str]] = frozenset(["block", "image", "break"])

ALLOWED_MARKS: Final[frozenset[str]] = frozenset(["strong", "em", "code", "underline"])

ALLOWED_STYLES: Final[frozenset[str]] = frozenset(
    ["normal", "h1", "h2", "h3", "h4", "blockquote"]
)

ALLOWED_LIST_TYPES: Final[frozenset[str]] = frozenset(["bullet", "number"])

# Inline nesting order, innermost first
MARK_NESTING_ORDER: Final[tuple[str, ...]] = ("strong", "em", "code", "underline")

DEFAULT_STYLE: Final = "normal"
SPAN_TYPE: Final = "span"

# --- Limits ---

MAX_TEXT_LENGTH: Final = 10_000
MAX_ALT_LENGTH: Final = 200
MAX_KEY_LENGTH: Final = 50
MIN_LEVEL: Final = 1
MAX_LEVEL: Final = 6
