"""
Settings adapters for the Portable Text component.

Backend identifiers come from the environment first, then rules.yaml.
Empty values count as missing, which disables image rendering.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from richtext_guard.rules.models import RenderRules

PROJECT_ID_ENV = "SANITY_PROJECT_ID"
DATASET_ENV = "SANITY_DATASET"
CDN_HOST_ENV = "SANITY_CDN_HOST"


class EnvAssetSettings:
    """Asset settings from environment variables with rules fallback."""

    def __init__(
        self,
        rules: RenderRules | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._rules = rules or RenderRules()
        self._environ = os.environ if environ is None else environ

    def _lookup(self, env_key: str, fallback: str | None) -> str | None:
        for value in (self._environ.get(env_key), fallback):
            if value and value.strip():
                return value.strip()
        return None

    def get_project_id(self) -> str | None:
        return self._lookup(PROJECT_ID_ENV, self._rules.project_id)

    def get_dataset(self) -> str | None:
        return self._lookup(DATASET_ENV, self._rules.dataset)

    def get_cdn_host(self) -> str:
        return self._lookup(CDN_HOST_ENV, self._rules.cdn_host) or RenderRules().cdn_host


class RenderRulesAdapter:
    """Exposes RenderRules through the render rules port."""

    def __init__(self, rules: RenderRules) -> None:
        self._rules = rules

    def get_style_classes(self) -> dict[str, str]:
        return dict(self._rules.style_classes)

    def get_image_loading(self) -> str:
        return self._rules.image_loading

    def get_container_class(self) -> str | None:
        return self._rules.container_class
