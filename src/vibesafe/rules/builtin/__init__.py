"""Built-in rules — aggregate all categories, in reporting order."""

from vibesafe.rules.builtin.aws import ALL_AWS_RULES
from vibesafe.rules.builtin.generic import ALL_GENERIC_RULES
from vibesafe.rules.models import Rule

ALL_BUILTIN_RULES: list[Rule] = [
    *ALL_AWS_RULES,
    *ALL_GENERIC_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]
