"""
Portable Text component - safe rendering of untrusted rich text.
"""

from richtext_guard.core.allowlists import (
    ALLOWED_BLOCK_TYPES,
    ALLOWED_LIST_TYPES,
    ALLOWED_MARKS,
    ALLOWED_STYLES,
)
from richtext_guard.core.entities import (
    SanitizedBlock,
    SanitizedBreakBlock,
    SanitizedImageBlock,
    SanitizedSpan,
    SanitizedTextBlock,
)
from richtext_guard.core.services.links import ExternalLink, sanitize_external_link
from richtext_guard.core.services.renderer import (
    AssetConfig,
    Element,
    RenderConfig,
    TextNode,
    build_image_url,
    render_blocks,
    render_portable_text,
    render_portable_text_html,
)
from richtext_guard.core.services.sanitizer import sanitize_portable_text
from richtext_guard.core.services.text_extraction import (
    count_characters,
    count_words,
    count_words_in_text,
    extract_plain_text,
    join_block_text,
)
from richtext_guard.core.services.validator import (
    PortableTextViolation,
    find_violation,
    validate_sanitized_portable_text,
)

from .component import (
    run,
    run_extract,
    run_preview,
    run_render,
    run_sanitize,
)
from .models import (
    ExtractTextInput,
    ExtractTextOutput,
    PortableTextError,
    PreviewOutput,
    PreviewPortableTextInput,
    RenderOutput,
    RenderPortableTextInput,
    SanitizeOutput,
    SanitizePortableTextInput,
)
from .ports import AssetSettingsPort, RenderRulesPort

__all__ = [
    # Entry points
    "run",
    "run_extract",
    "run_preview",
    "run_render",
    "run_sanitize",
    # Input models
    "ExtractTextInput",
    "PreviewPortableTextInput",
    "RenderPortableTextInput",
    "SanitizePortableTextInput",
    # Output models
    "ExtractTextOutput",
    "PortableTextError",
    "PreviewOutput",
    "RenderOutput",
    "SanitizeOutput",
    # Ports
    "AssetSettingsPort",
    "RenderRulesPort",
    # Allowlists
    "ALLOWED_BLOCK_TYPES",
    "ALLOWED_LIST_TYPES",
    "ALLOWED_MARKS",
    "ALLOWED_STYLES",
    # Core re-exports
    "AssetConfig",
    "Element",
    "ExternalLink",
    "PortableTextViolation",
    "RenderConfig",
    "SanitizedBlock",
    "SanitizedBreakBlock",
    "SanitizedImageBlock",
    "SanitizedSpan",
    "SanitizedTextBlock",
    "TextNode",
    "build_image_url",
    "count_characters",
    "count_words",
    "count_words_in_text",
    "extract_plain_text",
    "find_violation",
    "join_block_text",
    "render_blocks",
    "render_portable_text",
    "render_portable_text_html",
    "sanitize_external_link",
    "sanitize_portable_text",
    "validate_sanitized_portable_text",
]
