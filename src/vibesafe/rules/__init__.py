"""Rule engine — models, registry, built-in rules."""

from vibesafe.rules.models import Rule
from vibesafe.rules.registry import RuleRegistry, build_registry

__all__ = ["Rule", "RuleRegistry", "build_registry"]
