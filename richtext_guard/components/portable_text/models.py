"""
Portable Text component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from richtext_guard.core.entities import SanitizedBlock
from richtext_guard.core.services.renderer import Element

# --- Error ---


@dataclass(frozen=True)
class PortableTextError:
    """Portable Text processing error."""

    code: str
    message: str
    path: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SanitizePortableTextInput:
    """Input for sanitizing untrusted Portable Text blocks."""

    blocks: Any


@dataclass(frozen=True)
class RenderPortableTextInput:
    """Input for sanitizing and rendering untrusted Portable Text blocks."""

    blocks: Any
    class_name: str | None = None


@dataclass(frozen=True)
class ExtractTextInput:
    """Input for plain text extraction."""

    blocks: Any


@dataclass(frozen=True)
class PreviewPortableTextInput:
    """Input for rendering blocks together with their plain text and counts."""

    blocks: Any
    class_name: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class SanitizeOutput:
    """Output for sanitized blocks."""

    blocks: list[SanitizedBlock]
    is_valid: bool = True
    errors: list[PortableTextError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class RenderOutput:
    """Output containing the display tree and its HTML serialization."""

    tree: Element
    html: str
    errors: list[PortableTextError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ExtractTextOutput:
    """Output containing plain text and counts."""

    text: str
    character_count: int
    word_count: int
    success: bool = True


@dataclass(frozen=True)
class PreviewOutput:
    """Output combining the rendered tree with derived text and counts."""

    tree: Element
    html: str
    text: str
    character_count: int
    word_count: int
    block_count: int
    errors: list[PortableTextError] = field(default_factory=list)
    success: bool = True
