"""
Portable Text component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class AssetSettingsPort(Protocol):
    """Port for the content backend identifiers used in image URLs."""

    def get_project_id(self) -> str | None:
        """Get backend project ID."""
        ...

    def get_dataset(self) -> str | None:
        """Get backend dataset name."""
        ...

    def get_cdn_host(self) -> str:
        """Get image CDN host."""
        ...


class RenderRulesPort(Protocol):
    """Port for presentation rules applied during rendering."""

    def get_style_classes(self) -> dict[str, str]:
        """Get class attribute per container tag."""
        ...

    def get_image_loading(self) -> str:
        """Get img loading attribute (lazy, eager)."""
        ...

    def get_container_class(self) -> str | None:
        """Get default class for the root container."""
        ...
