from __future__ import annotations

from typing import Any

import pytest

from richtext_guard.core.services.renderer import AssetConfig, RenderConfig


def text_block(
    text: str,
    *,
    style: Any = "normal",
    marks: Any = None,
    key: Any = "block1",
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw Portable Text block with a single span."""
    block: dict[str, Any] = {
        "_type": "block",
        "_key": key,
        "style": style,
        "children": [
            {
                "_type": "span",
                "_key": "span1",
                "text": text,
                "marks": marks if marks is not None else [],
            }
        ],
    }
    block.update(extra)
    return block


def image_block(ref: Any = "image-abc123-800x600-jpg", alt: Any = "Alt text") -> dict[str, Any]:
    """Build a raw Portable Text image block."""
    return {
        "_type": "image",
        "_key": "img1",
        "asset": {"_ref": ref, "_type": "reference"},
        "alt": alt,
    }


@pytest.fixture
def asset_config() -> AssetConfig:
    return AssetConfig(project_id="proj123", dataset="production")


@pytest.fixture
def render_config(asset_config: AssetConfig) -> RenderConfig:
    return RenderConfig(asset_config=asset_config)


@pytest.fixture
def mixed_document() -> list[dict[str, Any]]:
    """Document mixing allowed, disallowed and malformed blocks."""
    return [
        text_block("Title", style="h1", key="heading"),
        text_block("Body text", marks=["strong", "link1"], key="body"),
        {"_type": "malicious", "_key": "evil1", "script": "<script>alert('xss')</script>"},
        image_block(),
        {"_type": "break", "_key": "br1"},
        None,
        "not a block",
    ]
