import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from richtext_guard.adapters.settings import EnvAssetSettings, RenderRulesAdapter
from richtext_guard.rules.loader import load_rules
from richtext_guard.rules.models import Rules

RULES_PATH_ENV = "RICHTEXT_GUARD_RULES"


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get(RULES_PATH_ENV, str(self.base_dir / "rules.yaml")))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def _load_cached_rules(path: Path) -> Rules:
    return load_rules(path)


def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    # Missing rules file means defaults; invalid rules still fail at startup
    if not settings.rules_path.exists():
        return Rules()
    return _load_cached_rules(settings.rules_path)


# --- Ports ---
def get_asset_settings(rules: Rules = Depends(get_rules)) -> EnvAssetSettings:
    return EnvAssetSettings(rules.render)


def get_render_rules(rules: Rules = Depends(get_rules)) -> RenderRulesAdapter:
    return RenderRulesAdapter(rules.render)
