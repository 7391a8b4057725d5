"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

HIGH_ENTROPY_TYPE = "High Entropy String"
ENV_SECRET_TYPE = "Local Environment Secret"


@dataclass(frozen=True)
class Finding:
    """A detected secret occurrence. ``value`` is the literal matched text."""

    file: str
    line: int  # 1-based
    type: str
    value: str
    severity: str


@dataclass(frozen=True)
class ScanDiagnostic:
    """A file or directory that could not be scanned, and why."""

    path: str
    reason: str


@dataclass
class FileOutcome:
    """Result of scanning one file: findings on success, an error otherwise."""

    path: str
    findings: List[Finding] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    base_path: str = ""
    findings: List[Finding] = field(default_factory=list)
    diagnostics: List[ScanDiagnostic] = field(default_factory=list)
    scanned_files: int = 0
    scan_duration_ms: float = 0.0

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def by_severity(self) -> Dict[str, int]:
        from vibesafe.findings.aggregator import count_by_severity

        return count_by_severity(self.findings)
