"""Rich terminal reporter — colour, icons, severity pills."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from vibesafe.findings.models import ScanResult
from vibesafe.findings.redactor import display_value

_SEVERITY_STYLE = {
    "Critical": "bold white on red",
    "High": "bold white on dark_orange",
    "Medium": "bold black on yellow",
    "Low": "bold black on bright_cyan",
    "Info": "bold black on white",
    "None": "dim",
}

_SEVERITY_ICON = {
    "Critical": "🔴",
    "High": "🟠",
    "Medium": "🟡",
    "Low": "🔵",
    "Info": "⚪",
    "None": "",
}


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, "")
    icon = _SEVERITY_ICON.get(severity, "")
    return Text(f" {icon} {severity.upper()} ", style=style)


def render(
    result: ScanResult,
    *,
    redacted: bool = False,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console()

    if not result.findings:
        console.print()
        console.print(f"[bold green]✅ No secrets found in {escape(result.base_path)}.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title=f"Secrets found in {escape(result.base_path)}",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=12)
    table.add_column("Type", style="cyan", min_width=20)
    table.add_column("File", style="magenta")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Value", min_width=15, overflow="fold")

    for finding in result.findings:
        table.add_row(
            _severity_pill(finding.severity),
            Text(finding.type),
            Text(finding.file),
            str(finding.line),
            Text(display_value(finding.value, redacted=redacted)),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, result)


def _print_summary(console: Console, result: ScanResult) -> None:
    console.print()
    console.print(f"[dim]Files scanned:[/dim]  {result.scanned_files}")
    console.print(f"[dim]Findings:[/dim]       {result.total_findings}")
    for severity, count in result.by_severity.items():
        console.print(f"[dim]  {severity}:[/dim] {count}")
    console.print(f"[dim]Unreadable:[/dim]     {len(result.diagnostics)}")
    console.print(f"[dim]Duration:[/dim]       {result.scan_duration_ms:.0f}ms")
