"""JSON reporter for pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from vibesafe.findings.models import ScanResult
from vibesafe.findings.redactor import display_value


def to_dict(result: ScanResult, *, redacted: bool = False) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    findings_list: List[Dict[str, Any]] = []
    for f in result.findings:
        findings_list.append({
            "file": f.file,
            "line": f.line,
            "type": f.type,
            "severity": f.severity,
            "value": display_value(f.value, redacted=redacted),
        })

    return {
        "version": "1.0",
        "base_path": result.base_path,
        "scanned_files": result.scanned_files,
        "total_findings": result.total_findings,
        "by_severity": result.by_severity,
        "findings": findings_list,
        "diagnostics": [{"path": d.path, "reason": d.reason} for d in result.diagnostics],
        "scan_duration_ms": result.scan_duration_ms,
    }


def render(result: ScanResult, *, redacted: bool = False) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, redacted=redacted), indent=2)
