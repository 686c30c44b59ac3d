"""Classification rules: models, registry and built-in tables."""

from scriptlens.rules.models import MarkerRule
from scriptlens.rules.registry import RuleRegistry, build_registry

__all__ = ["MarkerRule", "RuleRegistry", "build_registry"]
