"""Rule registry — loads built-in and custom rules, applies config filters."""

from __future__ import annotations

import dataclasses
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from vibesafe.config.schema import SEVERITIES, VibeSafeConfig
from vibesafe.rules.models import Rule

logger = logging.getLogger(__name__)

CUSTOM_RULES_DIRNAME = ".vibesafe-rules"


class RuleLoadError(Exception):
    """Raised when a custom rule file is malformed."""


class RuleRegistry:
    """Ordered store for detection rules; iteration order is reporting order."""

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: list[Rule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def enabled_rules(self) -> List[Rule]:
        return [r for r in self._rules.values() if r.enabled]

    # ---- config filtering ----

    def apply_config(self, config: VibeSafeConfig) -> None:
        """Enable / disable rules based on config.rules."""
        enable_list = config.rules.enable
        disable_list = config.rules.disable

        for rule in self._rules.values():
            # If an explicit enable-list exists, only those are enabled
            if enable_list:
                rule.enabled = rule.id in enable_list
            # Disable list always takes precedence
            if rule.id in disable_list:
                rule.enabled = False

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise RuleLoadError(f"Failed to read {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            self.register(_rule_from_entry(entry, path))
            count += 1
        logger.debug("Loaded %d custom rule(s) from %s", count, path)
        return count


def _rule_from_entry(entry: object, source: Path) -> Rule:
    if not isinstance(entry, dict) or "id" not in entry or "pattern" not in entry:
        raise RuleLoadError(f"{source}: each rule needs at least 'id' and 'pattern'")
    severity = entry.get("severity", "Medium")
    if severity not in SEVERITIES:
        raise RuleLoadError(f"{source}: rule {entry['id']} has invalid severity {severity!r}")
    rule = Rule(
        id=str(entry["id"]),
        type=str(entry.get("type", entry["id"])),
        pattern=str(entry["pattern"]),
        severity=severity,
        ignore_case=bool(entry.get("ignore_case", False)),
    )
    try:
        _ = rule.compiled_pattern
    except re.error as exc:
        raise RuleLoadError(f"{source}: rule {rule.id} has invalid pattern: {exc}") from exc
    if rule.compiled_pattern.fullmatch(""):
        raise RuleLoadError(f"{source}: rule {rule.id} pattern matches the empty string")
    return rule


def build_registry(config: VibeSafeConfig, root: Optional[Path] = None) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry.

    Built-in rules are copied so filtering one registry never leaks into another.
    """
    from vibesafe.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    registry.register_many([dataclasses.replace(r) for r in ALL_BUILTIN_RULES])

    if root is not None:
        registry.load_custom_rules(root / CUSTOM_RULES_DIRNAME)

    registry.apply_config(config)

    # Force-compile patterns now (not inside the hot loop)
    for rule in registry.enabled_rules():
        _ = rule.compiled_pattern

    return registry
