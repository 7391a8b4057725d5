"""Markdown text report returned by the secret-scan tool."""

from __future__ import annotations

from typing import List

from vibesafe.findings.models import Finding


def render(findings: List[Finding], target_path: str) -> str:
    """Format *findings* for *target_path* as Markdown. Values are shown verbatim."""
    if not findings:
        return f"✅ No secrets found in {target_path}."

    parts = [f"## Secrets found in {target_path}:\n\n"]
    for f in findings:
        parts.append(f"*   **File:** `{f.file}` (Line: {f.line})\n")
        parts.append(f"    *   **Type:** {f.type}\n")
        parts.append(f"    *   **Severity:** {f.severity}\n")
        parts.append(f"    *   **Value:** ```{f.value}```\n\n")
    return "".join(parts)
