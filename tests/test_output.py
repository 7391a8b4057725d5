"""Tests for reporters and the redactor."""

import io
import json

from rich.console import Console

from vibesafe.findings.models import Finding, ScanDiagnostic, ScanResult
from vibesafe.findings.redactor import display_value, redact
from vibesafe.output import json_report, report, terminal

from secret_samples import AWS_ACCESS_KEY

FINDING = Finding(
    file="config/deploy.py",
    line=42,
    type="AWS Access Key ID",
    value=AWS_ACCESS_KEY,
    severity="High",
)


def _make_result(findings=None) -> ScanResult:
    return ScanResult(
        base_path="config",
        findings=[FINDING] if findings is None else findings,
        diagnostics=[ScanDiagnostic(path="config/blob.bin", reason="Skipped: binary content")],
        scanned_files=5,
        scan_duration_ms=15.3,
    )


class TestRedactor:
    def test_partial_reveal(self):
        assert redact(AWS_ACCESS_KEY) == "AKIA...OP"

    def test_short_string(self):
        assert redact("short") == "[REDACTED]"

    def test_display_value(self):
        assert display_value("secretvalue") == "secretvalue"
        assert display_value("secretvalue", redacted=True) == "secr...ue"


class TestMarkdownReport:
    def test_empty(self):
        assert report.render([], "/srv/app") == "✅ No secrets found in /srv/app."

    def test_findings_block(self):
        text = report.render([FINDING], "config")
        assert text == (
            "## Secrets found in config:\n\n"
            "*   **File:** `config/deploy.py` (Line: 42)\n"
            "    *   **Type:** AWS Access Key ID\n"
            "    *   **Severity:** High\n"
            f"    *   **Value:** ```{AWS_ACCESS_KEY}```\n\n"
        )

    def test_values_never_redacted(self):
        assert AWS_ACCESS_KEY in report.render([FINDING], "x")


class TestJsonReport:
    def test_valid_json(self):
        data = json.loads(json_report.render(_make_result()))
        assert data["version"] == "1.0"
        assert data["total_findings"] == 1
        assert data["by_severity"] == {"High": 1}
        assert data["findings"][0] == {
            "file": "config/deploy.py",
            "line": 42,
            "type": "AWS Access Key ID",
            "severity": "High",
            "value": AWS_ACCESS_KEY,
        }
        assert data["diagnostics"] == [
            {"path": "config/blob.bin", "reason": "Skipped: binary content"},
        ]

    def test_redacted(self):
        data = json.loads(json_report.render(_make_result(), redacted=True))
        assert data["findings"][0]["value"] == "AKIA...OP"

    def test_empty_result(self):
        data = json.loads(json_report.render(ScanResult()))
        assert data["total_findings"] == 0
        assert data["findings"] == []


class TestTerminalReport:
    def _render(self, result, **kwargs) -> str:
        buf = io.StringIO()
        terminal.render(result, console=Console(file=buf, width=200), **kwargs)
        return buf.getvalue()

    def test_table_lists_findings(self):
        out = self._render(_make_result())
        assert "AWS Access Key ID" in out
        assert "config/deploy.py" in out
        assert AWS_ACCESS_KEY in out
        assert "Files scanned" in out

    def test_redacted_table(self):
        out = self._render(_make_result(), redacted=True)
        assert AWS_ACCESS_KEY not in out
        assert "AKIA...OP" in out

    def test_clean_result(self):
        out = self._render(_make_result(findings=[]), show_summary=False)
        assert "No secrets found" in out

    def test_bracketed_file_name_kept_verbatim(self):
        finding = Finding(
            file="pages/[id].js",
            line=1,
            type="AWS Access Key ID",
            value=AWS_ACCESS_KEY,
            severity="High",
        )
        out = self._render(_make_result(findings=[finding]))
        assert "pages/[id].js" in out

    def test_markup_like_paths_do_not_break_rendering(self):
        finding = Finding(
            file="src/a[/b].js",
            line=3,
            type="AWS Access Key ID",
            value=AWS_ACCESS_KEY,
            severity="High",
        )
        result = _make_result(findings=[finding])
        result.base_path = "src/[bold]"
        out = self._render(result)
        assert "src/a[/b].js" in out
        assert "Secrets found in src/[bold]" in out

    def test_markup_like_base_path_when_clean(self):
        result = _make_result(findings=[])
        result.base_path = "app/[/x]"
        out = self._render(result, show_summary=False)
        assert "No secrets found in app/[/x]." in out
