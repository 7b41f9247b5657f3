"""
Sanitized Portable Text entities.

Closed set of block shapes produced by the sanitizer:
- SanitizedTextBlock: paragraph/heading/quote/list item made of spans
- SanitizedImageBlock: asset reference plus cleaned alt text
- SanitizedBreakBlock: line break, no payload

A text block has no mark-definition table. Links and other annotations
cannot be represented at all.

Spans also carry a small inline tree (Leaf/Bold/Italic/Code/Underline)
built once from their marks. The renderer walks the tree instead of
folding over the marks itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from richtext_guard.core.allowlists import (
    MARK_NESTING_ORDER,
    AllowedListType,
    AllowedMark,
    AllowedStyle,
)

# --- Inline Tree ---


@dataclass(frozen=True)
class Leaf:
    """Plain text at the bottom of an inline tree."""

    text: str


@dataclass(frozen=True)
class Bold:
    child: InlineNode


@dataclass(frozen=True)
class Italic:
    child: InlineNode


@dataclass(frozen=True)
class Code:
    child: InlineNode


@dataclass(frozen=True)
class Underline:
    child: InlineNode


InlineNode = Leaf | Bold | Italic | Code | Underline

MARK_WRAPPERS: dict[str, type[Bold] | type[Italic] | type[Code] | type[Underline]] = {
    "strong": Bold,
    "em": Italic,
    "code": Code,
    "underline": Underline,
}


def build_inline_tree(text: str, marks: tuple[str, ...]) -> InlineNode:
    """
    Build the inline tree for a span.

    Marks are applied in MARK_NESTING_ORDER regardless of the order they
    appear in the span, so equal mark sets always give equal trees.
    """
    node: InlineNode = Leaf(text)
    present = set(marks)
    for mark in MARK_NESTING_ORDER:
        if mark in present:
            node = MARK_WRAPPERS[mark](node)
    return node


# --- Blocks ---


@dataclass(frozen=True)
class SanitizedSpan:
    """Inline run of cleaned text with allowlisted marks."""

    type: ClassVar[str] = "span"

    key: str
    text: str
    marks: tuple[AllowedMark, ...] = ()
    tree: InlineNode = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tree", build_inline_tree(self.text, self.marks))

    def to_dict(self) -> dict[str, Any]:
        """Convert to Portable Text wire shape."""
        return {
            "_type": self.type,
            "_key": self.key,
            "text": self.text,
            "marks": list(self.marks),
        }


@dataclass(frozen=True)
class SanitizedTextBlock:
    """Text block restricted to allowlisted style and list kind."""

    type: ClassVar[str] = "block"

    key: str
    style: AllowedStyle = "normal"
    children: tuple[SanitizedSpan, ...] = ()
    list_item: AllowedListType | None = None
    level: int | float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to Portable Text wire shape."""
        result: dict[str, Any] = {
            "_type": self.type,
            "_key": self.key,
            "style": self.style,
        }
        if self.list_item is not None:
            result["listItem"] = self.list_item
        if self.level is not None:
            result["level"] = self.level
        result["children"] = [span.to_dict() for span in self.children]
        return result


@dataclass(frozen=True)
class ImageAsset:
    """Reference to an externally hosted image."""

    ref: str

    def to_dict(self) -> dict[str, Any]:
        return {"_ref": self.ref, "_type": "reference"}


@dataclass(frozen=True)
class SanitizedImageBlock:
    """Image block. The asset ref is format-checked at render time."""

    type: ClassVar[str] = "image"

    key: str
    asset: ImageAsset | None = None
    alt: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to Portable Text wire shape."""
        result: dict[str, Any] = {"_type": self.type, "_key": self.key}
        if self.asset is not None:
            result["asset"] = self.asset.to_dict()
        result["alt"] = self.alt
        return result


@dataclass(frozen=True)
class SanitizedBreakBlock:
    type: ClassVar[str] = "break"

    key: str

    def to_dict(self) -> dict[str, Any]:
        return {"_type": self.type, "_key": self.key}


SanitizedBlock = SanitizedTextBlock | SanitizedImageBlock | SanitizedBreakBlock

SANITIZED_BLOCK_CLASSES: tuple[type, ...] = (
    SanitizedTextBlock,
    SanitizedImageBlock,
    SanitizedBreakBlock,
)


def is_sanitized_block(value: object) -> bool:
    """Check that a value is one of the sanitized block dataclasses."""
    return isinstance(value, SANITIZED_BLOCK_CLASSES)
