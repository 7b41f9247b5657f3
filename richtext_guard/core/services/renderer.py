"""
Portable Text Renderer - map sanitized blocks to a display tree.

Only accepts the sanitized block dataclasses. Raw records, or a document
that fails structural validation, render as an empty container.

Key behaviors:
- style -> container: h1-h4, blockquote, p; list items -> ul/ol > li
- Spans render by walking their inline tree (strong, em, code, u)
- Images render only when the asset ref matches the CDN ref format
  and the backend project/dataset are configured
- Text is never re-parsed; HTML output escapes every text and attribute
- Pure: same blocks and config always give the same tree
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from richtext_guard.core.entities import (
    Bold,
    Code,
    InlineNode,
    Italic,
    Leaf,
    SanitizedBlock,
    SanitizedBreakBlock,
    SanitizedImageBlock,
    SanitizedSpan,
    SanitizedTextBlock,
    Underline,
    is_sanitized_block,
)
from richtext_guard.core.services.sanitizer import sanitize_portable_text
from richtext_guard.core.services.validator import find_violation

logger = logging.getLogger(__name__)

# --- Configuration ---

DEFAULT_CDN_HOST = "cdn.sanity.io"


@dataclass(frozen=True)
class AssetConfig:
    """Backend identifiers used to build image URLs."""

    project_id: str | None = None
    dataset: str | None = None
    cdn_host: str = DEFAULT_CDN_HOST

    @property
    def is_complete(self) -> bool:
        return bool(self.project_id and self.dataset and self.cdn_host)


@dataclass(frozen=True)
class RenderConfig:
    """Rendering configuration."""

    # None means images are skipped
    asset_config: AssetConfig | None = None

    # Optional class attribute per container style ("h1", "blockquote", ...)
    style_classes: Mapping[str, str] = field(default_factory=dict)

    image_loading: str = "lazy"  # lazy, eager
    container_class: str | None = None


DEFAULT_RENDER_CONFIG = RenderConfig()


# --- Display Tree ---

VOID_ELEMENTS = frozenset(["br", "img"])


@dataclass(frozen=True)
class TextNode:
    text: str

    def to_html(self) -> str:
        return html.escape(self.text)


@dataclass(frozen=True)
class Element:
    """Element in the display tree. Attributes keep insertion order."""

    tag: str
    attrs: tuple[tuple[str, str], ...] = ()
    children: tuple[DisplayNode, ...] = ()

    def get(self, name: str) -> str | None:
        """Get an attribute value."""
        return next((value for key, value in self.attrs if key == name), None)

    def iter(self) -> list[DisplayNode]:
        """Return this element and every descendant, depth first."""
        nodes: list[DisplayNode] = [self]
        for child in self.children:
            if isinstance(child, Element):
                nodes.extend(child.iter())
            else:
                nodes.append(child)
        return nodes

    def text_content(self) -> str:
        return "".join(
            child.text if isinstance(child, TextNode) else child.text_content()
            for child in self.children
        )

    def to_html(self) -> str:
        attrs = "".join(f' {name}="{html.escape(value)}"' for name, value in self.attrs)
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs} />"
        inner = "".join(child.to_html() for child in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


DisplayNode = TextNode | Element


# --- Image URLs ---

ASSET_REF_PATTERN = re.compile(r"image-([a-f0-9]+)-(\d+x\d+)-(\w+)", re.ASCII)


def build_image_url(asset_ref: object, asset_config: AssetConfig | None) -> str | None:
    """
    Build a CDN URL from an asset ref like "image-<id>-<w>x<h>-<format>".

    Returns None if the ref does not match or the backend identifiers are
    missing. Never returns a partial URL.
    """
    if not isinstance(asset_ref, str):
        return None

    match = ASSET_REF_PATTERN.fullmatch(asset_ref)
    if not match:
        return None

    if asset_config is None or not asset_config.is_complete:
        return None

    asset_id, dimensions, image_format = match.groups()
    return (
        f"https://{asset_config.cdn_host}/images/"
        f"{asset_config.project_id}/{asset_config.dataset}/"
        f"{asset_id}-{dimensions}.{image_format}"
    )


# --- Node Renderers ---

INLINE_TAGS: dict[type, str] = {
    Bold: "strong",
    Italic: "em",
    Code: "code",
    Underline: "u",
}


def _class_attrs(style: str, config: RenderConfig) -> tuple[tuple[str, str], ...]:
    css_class = config.style_classes.get(style)
    return (("class", css_class),) if css_class else ()


def render_inline(
    node: InlineNode,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> DisplayNode:
    """Walk an inline tree into display nodes."""
    if isinstance(node, Leaf):
        return TextNode(node.text)
    tag = INLINE_TAGS[type(node)]
    return Element(
        tag,
        attrs=_class_attrs(tag, config),
        children=(render_inline(node.child, config),),
    )


def render_span(
    span: SanitizedSpan,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> DisplayNode:
    """Render a span from its prebuilt inline tree."""
    return render_inline(span.tree, config)


def render_text_block(
    block: SanitizedTextBlock,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Element | None:
    """Render a text block. Blocks without spans render nothing."""
    if not block.children:
        return None

    content = tuple(render_span(span, config) for span in block.children)

    if block.list_item is not None:
        list_tag = "ul" if block.list_item == "bullet" else "ol"
        return Element(
            list_tag,
            attrs=_class_attrs(list_tag, config),
            children=(Element("li", children=content),),
        )

    if block.style in ("h1", "h2", "h3", "h4", "blockquote"):
        tag = block.style
    else:
        tag = "p"
    return Element(tag, attrs=_class_attrs(tag, config), children=content)


def render_image_block(
    block: SanitizedImageBlock,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Element | None:
    """Render an image block as a figure. Returns None if no URL can be built."""
    if block.asset is None:
        logger.warning("Image block %s missing asset reference", block.key)
        return None

    image_url = build_image_url(block.asset.ref, config.asset_config)
    if image_url is None:
        logger.warning("Failed to build image URL for asset %r", block.asset.ref[:50])
        return None

    img = Element(
        "img",
        attrs=(
            ("src", image_url),
            ("alt", block.alt),
            ("loading", config.image_loading),
            ("referrerpolicy", "no-referrer"),
        ),
    )
    children: tuple[DisplayNode, ...] = (img,)
    if block.alt:
        children += (Element("figcaption", children=(TextNode(block.alt),)),)
    return Element("figure", attrs=_class_attrs("figure", config), children=children)


def render_break_block(
    block: SanitizedBreakBlock,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Element:
    return Element("br")


def render_block(
    block: SanitizedBlock,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Element | None:
    """Dispatch a single block on its type."""
    if isinstance(block, SanitizedTextBlock):
        return render_text_block(block, config)
    if isinstance(block, SanitizedImageBlock):
        return render_image_block(block, config)
    if isinstance(block, SanitizedBreakBlock):
        return render_break_block(block, config)
    return None


# --- Main Rendering Functions ---


def _container(config: RenderConfig, children: tuple[DisplayNode, ...] = ()) -> Element:
    attrs = (("class", config.container_class),) if config.container_class else ()
    return Element("div", attrs=attrs, children=children)


def render_blocks(
    blocks: Sequence[SanitizedBlock],
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Element:
    """
    Render sanitized blocks into a display tree.

    Args:
        blocks: Output of sanitize_portable_text.
        config: Rendering configuration.

    Returns:
        A div container. Empty if the input is not sanitized blocks or
        fails structural validation.
    """
    if not isinstance(blocks, (list, tuple)) or not all(
        is_sanitized_block(block) for block in blocks
    ):
        logger.warning("Refusing to render unsanitized Portable Text, rendering empty content")
        return _container(config)

    violation = find_violation(blocks)
    if violation is not None:
        logger.warning(
            "Portable Text validation failed (%s at %s), rendering empty content",
            violation.code,
            violation.path,
        )
        return _container(config)

    rendered = (render_block(block, config) for block in blocks)
    return _container(config, tuple(node for node in rendered if node is not None))


def render_portable_text(
    raw_blocks: object,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> Element:
    """Sanitize, validate and render untrusted blocks."""
    return render_blocks(sanitize_portable_text(raw_blocks), config)


def render_portable_text_html(
    raw_blocks: object,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> str:
    """Convenience wrapper returning serialized HTML."""
    return render_portable_text(raw_blocks, config).to_html()
