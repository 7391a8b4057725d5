"""Generic credential assignments."""

from vibesafe.rules.models import Rule

GENERIC_API_KEY = Rule(
    id="GENERIC_API_KEY",
    type="Generic API Key",
    pattern=r"api[_-]?key\s*[:=]\s*['\"]?[A-Za-z0-9_-]{16,}['\"]?",
    severity="Medium",
    ignore_case=True,
)

ALL_GENERIC_RULES = [GENERIC_API_KEY]
