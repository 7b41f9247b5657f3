"""
Portable Text component - sanitize, render and extract untrusted rich text.

Wires the functional core to configuration ports.

Invariants:
- Rendering only ever sees sanitizer output
- A document that fails structural validation renders empty
- Missing backend identifiers disable images, nothing else
"""

from __future__ import annotations

from richtext_guard.core.services.renderer import (
    DEFAULT_CDN_HOST,
    AssetConfig,
    RenderConfig,
    render_blocks,
)
from richtext_guard.core.services.sanitizer import sanitize_portable_text
from richtext_guard.core.services.text_extraction import (
    count_words_in_text,
    join_block_text,
)
from richtext_guard.core.services.validator import PortableTextViolation, find_violation

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


def _convert_violation(violation: PortableTextViolation | None) -> list[PortableTextError]:
    """Convert a validator violation to component errors."""
    if violation is None:
        return []
    return [
        PortableTextError(
            code=violation.code,
            message=violation.message,
            path=violation.path,
        )
    ]


def _build_config(
    settings: AssetSettingsPort | None,
    rules: RenderRulesPort | None,
    class_name: str | None = None,
) -> RenderConfig:
    """Build render config from ports."""
    asset_config = None
    if settings is not None:
        asset_config = AssetConfig(
            project_id=settings.get_project_id(),
            dataset=settings.get_dataset(),
            cdn_host=settings.get_cdn_host() or DEFAULT_CDN_HOST,
        )

    if rules is None:
        return RenderConfig(asset_config=asset_config, container_class=class_name)

    return RenderConfig(
        asset_config=asset_config,
        style_classes=rules.get_style_classes(),
        image_loading=rules.get_image_loading(),
        container_class=class_name or rules.get_container_class(),
    )


# --- Component Entry Points ---


def run_sanitize(inp: SanitizePortableTextInput) -> SanitizeOutput:
    """
    Sanitize untrusted blocks and validate the result.

    Args:
        inp: Input containing the raw blocks.

    Returns:
        SanitizeOutput with sanitized blocks and validation result.
    """
    blocks = sanitize_portable_text(inp.blocks)
    errors = _convert_violation(find_violation(blocks))

    return SanitizeOutput(
        blocks=blocks,
        is_valid=not errors,
        errors=errors,
        success=True,
    )


def run_render(
    inp: RenderPortableTextInput,
    *,
    settings: AssetSettingsPort | None = None,
    rules: RenderRulesPort | None = None,
) -> RenderOutput:
    """
    Sanitize, validate and render untrusted blocks.

    Args:
        inp: Input containing the raw blocks and optional container class.
        settings: Optional asset settings port; images are skipped without it.
        rules: Optional rules port for presentation options.

    Returns:
        RenderOutput with the display tree. success is False when
        validation failed and the tree is an empty container.
    """
    config = _build_config(settings, rules, inp.class_name)
    blocks = sanitize_portable_text(inp.blocks)
    errors = _convert_violation(find_violation(blocks))

    tree = render_blocks(blocks, config)

    return RenderOutput(
        tree=tree,
        html=tree.to_html(),
        errors=errors,
        success=not errors,
    )


def run_extract(inp: ExtractTextInput) -> ExtractTextOutput:
    """Extract plain text, character count and word count."""
    text = join_block_text(sanitize_portable_text(inp.blocks))

    return ExtractTextOutput(
        text=text,
        character_count=len(text),
        word_count=count_words_in_text(text),
        success=True,
    )


def run_preview(
    inp: PreviewPortableTextInput,
    *,
    settings: AssetSettingsPort | None = None,
    rules: RenderRulesPort | None = None,
) -> PreviewOutput:
    """
    Render untrusted blocks and derive their plain text in one pass.

    The input is sanitized once; the display tree, text and counts all
    come from the same sanitized blocks.

    Returns:
        PreviewOutput. block_count counts sanitized blocks, including
        ones that render nothing (images without a URL, empty text).
    """
    config = _build_config(settings, rules, inp.class_name)
    blocks = sanitize_portable_text(inp.blocks)
    errors = _convert_violation(find_violation(blocks))

    tree = render_blocks(blocks, config)
    text = join_block_text(blocks)

    return PreviewOutput(
        tree=tree,
        html=tree.to_html(),
        text=text,
        character_count=len(text),
        word_count=count_words_in_text(text),
        block_count=len(blocks),
        errors=errors,
        success=not errors,
    )


def run(
    inp: (
        SanitizePortableTextInput
        | RenderPortableTextInput
        | ExtractTextInput
        | PreviewPortableTextInput
    ),
    *,
    settings: AssetSettingsPort | None = None,
    rules: RenderRulesPort | None = None,
) -> SanitizeOutput | RenderOutput | ExtractTextOutput | PreviewOutput:
    """
    Main entry point for the Portable Text component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, SanitizePortableTextInput):
        return run_sanitize(inp)
    elif isinstance(inp, RenderPortableTextInput):
        return run_render(inp, settings=settings, rules=rules)
    elif isinstance(inp, ExtractTextInput):
        return run_extract(inp)
    elif isinstance(inp, PreviewPortableTextInput):
        return run_preview(inp, settings=settings, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
