from richtext_guard.rules.loader import load_rules
from richtext_guard.rules.models import RenderRules, Rules

__all__ = ["RenderRules", "Rules", "load_rules"]
