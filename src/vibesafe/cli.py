"""VibeSafe CLI — Typer application with scan, rules, and init commands."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from vibesafe import __version__

app = typer.Typer(
    name="vibesafe",
    help="Find hardcoded secrets in files and directories.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _config_root(target: Path) -> Path:
    """Directory searched for .vibesafe.toml and .vibesafe-rules/."""
    return target if target.is_dir() else target.parent


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    path: Optional[Path] = typer.Argument(None, help="File or directory to scan (default: current directory)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .vibesafe.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | markdown | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="Severity threshold: Info | Low | Medium | High | Critical"),
    ignore: List[str] = typer.Option([], "--ignore", "-i", help="Extra ignore regex (repeatable)"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Files scanned in parallel"),
    follow_symlinks: bool = typer.Option(False, "--follow-symlinks", help="Follow symbolic links"),
    redact: bool = typer.Option(False, "--redact", help="Partially mask matched values"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Scan a file or directory tree for secrets."""
    from vibesafe.config.loader import ConfigError, load_config
    from vibesafe.config.schema import OUTPUT_FORMATS, normalize_severity
    from vibesafe.findings.aggregator import blocking
    from vibesafe.log import configure_logging
    from vibesafe.output import json_report, report, terminal
    from vibesafe.rules.registry import RuleLoadError, build_registry
    from vibesafe.scanner.engine import ScanError, run_scan

    configure_logging(verbose=verbose, debug=debug)
    target = path if path is not None else Path.cwd()
    root = _config_root(target)

    # --- Load config ---
    try:
        cfg = load_config(root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if fail_on:
        severity = normalize_severity(fail_on)
        if severity is None:
            console.print(f"[bold red]Invalid fail-on level:[/bold red] {escape(fail_on)}")
            raise typer.Exit(code=2)
        cfg.scan.fail_on = severity  # type: ignore[assignment]
    for pattern in ignore:
        try:
            re.compile(pattern)
        except re.error as exc:
            console.print(f"[bold red]Invalid ignore pattern:[/bold red] {escape(pattern)} ({escape(str(exc))})")
            raise typer.Exit(code=2) from exc
        cfg.scan.ignore_patterns.append(pattern)
    if workers is not None:
        cfg.scan.workers = workers
    if follow_symlinks:
        cfg.scan.follow_symlinks = True
    if redact:
        cfg.output.redact = True

    # --- Build rules ---
    try:
        registry = build_registry(cfg, root)
    except RuleLoadError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if verbose or debug:
        console.print(f"[dim]Rules loaded: {len(registry.enabled_rules())}[/dim]")
        console.print(f"[dim]Target: {escape(str(target))}[/dim]")

    # --- Run scan ---
    try:
        result = run_scan(str(target), cfg, registry)
    except re.error as exc:
        console.print(f"[bold red]Invalid ignore pattern:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except ScanError as exc:
        console.print(f"[bold red]Scanner error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if debug:
        console.print(f"[dim]Scan duration: {result.scan_duration_ms:.0f}ms[/dim]")

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(result, redacted=cfg.output.redact)
    elif cfg.output.format == "json":
        report_text = json_report.render(result, redacted=cfg.output.redact)
        print(report_text)
    elif cfg.output.format == "markdown":
        report_text = report.render(result.findings, str(target))
        print(report_text)

    # --- Write to file ---
    if output:
        if report_text is None:
            # Terminal output is not file-friendly; write JSON instead
            report_text = json_report.render(result, redacted=cfg.output.redact)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {escape(output)}[/dim]")

    # --- Exit code ---
    if blocking(result.findings, cfg.scan.fail_on):
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .vibesafe.toml"),
) -> None:
    """List the detection rules that a scan of the current directory would use."""
    from rich.table import Table

    from vibesafe.config.loader import ConfigError, load_config
    from vibesafe.rules.registry import RuleLoadError, build_registry

    root = Path.cwd()
    try:
        cfg = load_config(root, config)
        registry = build_registry(cfg, root)
    except (ConfigError, RuleLoadError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    table = Table(title="Detection rules", border_style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Severity")
    table.add_column("Enabled", justify="center")
    for rule in registry.all_rules:
        table.add_row(escape(rule.id), escape(rule.type), rule.severity, "✓" if rule.enabled else "✗")
    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .vibesafe.toml in the current directory."""
    from vibesafe.config.defaults import DEFAULT_TOML
    from vibesafe.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"vibesafe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """VibeSafe — find hardcoded secrets before they ship."""
