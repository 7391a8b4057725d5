"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

Severity = Literal["Info", "None", "Low", "Medium", "High", "Critical"]

SEVERITIES: tuple[str, ...] = ("Info", "None", "Low", "Medium", "High", "Critical")

SEVERITY_ORDER: dict[str, int] = {name: rank for rank, name in enumerate(SEVERITIES)}

OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "markdown", "json")


def severity_at_or_above(finding_sev: str, threshold: str) -> bool:
    """Return True if *finding_sev* is at or above *threshold*."""
    return SEVERITY_ORDER.get(finding_sev, 0) >= SEVERITY_ORDER.get(threshold, 0)


def normalize_severity(value: str) -> Optional[str]:
    """Map a case-insensitive severity name to its canonical spelling."""
    for name in SEVERITIES:
        if name.lower() == value.strip().lower():
            return name
    return None


@dataclass
class ScanConfig:
    fail_on: Severity = "High"  # CLI exits 1 on findings at or above this level
    ignore_patterns: List[str] = field(default_factory=list)
    follow_symlinks: bool = False
    max_depth: int = -1  # -1 = unlimited
    max_file_size_kb: int = 0  # 0 = unlimited
    workers: int = 1


@dataclass
class EntropyConfig:
    enabled: bool = True
    min_entropy: float = 4.0
    min_length: int = 20


@dataclass
class RulesConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    format: Literal["terminal", "markdown", "json"] = "terminal"
    redact: bool = False


@dataclass
class VibeSafeConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    entropy: EntropyConfig = field(default_factory=EntropyConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
