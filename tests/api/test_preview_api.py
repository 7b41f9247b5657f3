"""
Tests for the Portable Text preview API.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from richtext_guard.adapters.settings import EnvAssetSettings, RenderRulesAdapter
from richtext_guard.api.deps import get_asset_settings, get_render_rules
from richtext_guard.api.routes import preview
from richtext_guard.rules.models import RenderRules
from tests.conftest import image_block, text_block

# --- Test Client Setup ---


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.include_router(preview.router, prefix="/api/content")

    app.dependency_overrides[get_asset_settings] = lambda: EnvAssetSettings(
        RenderRules(project_id="proj123", dataset="production"), environ={}
    )
    app.dependency_overrides[get_render_rules] = lambda: RenderRulesAdapter(RenderRules())

    return TestClient(app)


# --- Preview ---


class TestPreview:
    def test_heading(self, client: TestClient) -> None:
        response = client.post(
            "/api/content/preview", json={"blocks": [text_block("Title", style="h1")]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["html"] == "<div><h1>Title</h1></div>"
        assert data["plain_text"] == "Title"
        assert data["character_count"] == 5
        assert data["word_count"] == 1
        assert data["block_count"] == 1
        assert data["is_valid"] is True

    def test_image_uses_asset_settings(self, client: TestClient) -> None:
        response = client.post("/api/content/preview", json={"blocks": [image_block()]})

        html = response.json()["html"]
        assert 'src="https://cdn.sanity.io/images/proj123/production/abc123-800x600.jpg"' in html
        assert "<figcaption>Alt text</figcaption>" in html

    def test_xss_stripped(self, client: TestClient) -> None:
        blocks: list[Any] = [
            text_block("<script>alert(1)</script>Hello"),
            {"_type": "script", "_key": "x", "code": "alert(1)"},
        ]

        response = client.post("/api/content/preview", json={"blocks": blocks})

        data = response.json()
        assert data["html"] == "<div><p>Hello</p></div>"
        assert data["plain_text"] == "Hello"
        assert "script" not in data["html"]

    def test_class_name(self, client: TestClient) -> None:
        response = client.post(
            "/api/content/preview",
            json={"blocks": [text_block("x")], "class_name": "prose"},
        )
        assert response.json()["html"] == '<div class="prose"><p>x</p></div>'

    def test_non_list_blocks_render_empty(self, client: TestClient) -> None:
        response = client.post("/api/content/preview", json={"blocks": "not a list"})

        assert response.status_code == 200
        data = response.json()
        assert data["html"] == "<div></div>"
        assert data["block_count"] == 0

    def test_block_count_includes_blocks_that_render_nothing(self, client: TestClient) -> None:
        blocks: list[Any] = [
            text_block("x"),
            {"_type": "block", "_key": "e", "children": []},
            {"_type": "break", "_key": "br"},
            {"_type": "evil"},
        ]

        response = client.post("/api/content/preview", json={"blocks": blocks})

        data = response.json()
        assert data["html"] == "<div><p>x</p><br /></div>"
        assert data["block_count"] == 3

    def test_japanese_word_count(self, client: TestClient) -> None:
        response = client.post(
            "/api/content/preview", json={"blocks": [text_block("日本語テキスト")]}
        )
        assert response.json()["word_count"] == 7

    def test_missing_blocks_rejected(self, client: TestClient) -> None:
        response = client.post("/api/content/preview", json={})
        assert response.status_code == 422


# --- Links ---


class TestLink:
    def test_valid_link(self, client: TestClient) -> None:
        response = client.post("/api/content/link", json={"url": "https://Example.com"})

        assert response.status_code == 200
        assert response.json() == {
            "link": {
                "href": "https://example.com/",
                "rel": "nofollow noopener noreferrer",
                "target": "_blank",
            }
        }

    def test_javascript_link_rejected(self, client: TestClient) -> None:
        response = client.post("/api/content/link", json={"url": "javascript:alert(1)"})

        assert response.status_code == 200
        assert response.json() == {"link": None}

    def test_overlong_url_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/content/link", json={"url": "https://example.com/" + "a" * 3000}
        )
        assert response.status_code == 422


# --- Health ---


def test_health() -> None:
    from richtext_guard.api.main import app

    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
