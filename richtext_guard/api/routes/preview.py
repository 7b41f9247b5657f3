"""
Portable Text Preview API Routes.

Renders untrusted Portable Text exactly as the public pages would, plus
the derived plain text and counts used for search metadata.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from richtext_guard.adapters.settings import EnvAssetSettings, RenderRulesAdapter
from richtext_guard.api.deps import get_asset_settings, get_render_rules
from richtext_guard.components.portable_text import (
    PreviewPortableTextInput,
    run_preview,
    sanitize_external_link,
)

router = APIRouter()


# --- Request/Response Models ---


class PreviewRequest(BaseModel):
    """Request to preview Portable Text content."""

    blocks: Any = Field(..., description="Portable Text blocks from the content backend")
    class_name: str | None = Field(default=None, description="Class for the root container")


class PreviewResponse(BaseModel):
    """Preview response with rendered HTML."""

    html: str
    plain_text: str
    character_count: int
    word_count: int
    # Sanitized blocks, including ones that render nothing
    block_count: int
    is_valid: bool


class LinkRequest(BaseModel):
    url: str = Field(..., max_length=2048)


class LinkPayload(BaseModel):
    href: str
    rel: str
    target: str


class LinkResponse(BaseModel):
    link: LinkPayload | None


# --- Routes ---


@router.post("/preview", response_model=PreviewResponse)
def preview_portable_text(
    request: PreviewRequest,
    settings: EnvAssetSettings = Depends(get_asset_settings),
    rules: RenderRulesAdapter = Depends(get_render_rules),
) -> PreviewResponse:
    """Sanitize and render Portable Text for preview."""
    result = run_preview(
        PreviewPortableTextInput(blocks=request.blocks, class_name=request.class_name),
        settings=settings,
        rules=rules,
    )

    return PreviewResponse(
        html=result.html,
        plain_text=result.text,
        character_count=result.character_count,
        word_count=result.word_count,
        block_count=result.block_count,
        is_valid=result.success,
    )


@router.post("/link", response_model=LinkResponse)
def check_external_link(request: LinkRequest) -> LinkResponse:
    """Validate an external URL and return its safe link attributes."""
    link = sanitize_external_link(request.url)
    if link is None:
        return LinkResponse(link=None)
    return LinkResponse(link=LinkPayload(**link.to_dict()))
