"""Ordered aggregation of per-file outcomes."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from vibesafe.config.schema import SEVERITIES, severity_at_or_above
from vibesafe.findings.models import FileOutcome, Finding, ScanDiagnostic


def aggregate(outcomes: Iterable[FileOutcome]) -> Tuple[List[Finding], List[ScanDiagnostic]]:
    """Concatenate findings in outcome order; collect errors as diagnostics.

    A failed file contributes no findings, only a diagnostic.
    """
    findings: List[Finding] = []
    diagnostics: List[ScanDiagnostic] = []
    for outcome in outcomes:
        if outcome.ok:
            findings.extend(outcome.findings)
        else:
            diagnostics.append(ScanDiagnostic(path=outcome.path, reason=outcome.error or ""))
    return findings, diagnostics


def count_by_severity(findings: Iterable[Finding]) -> Dict[str, int]:
    """Return a count per severity, most severe first, omitting zeros."""
    counts = {name: 0 for name in reversed(SEVERITIES)}
    for f in findings:
        counts[f.severity] = counts.get(f.severity, 0) + 1
    return {name: n for name, n in counts.items() if n}


def blocking(findings: Iterable[Finding], fail_on: str) -> List[Finding]:
    """Findings at or above the *fail_on* severity."""
    return [f for f in findings if severity_at_or_above(f.severity, fail_on)]
