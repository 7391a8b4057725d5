"""Core scan engine — per-file line scanning and result aggregation.

A scan resolves *base_path* to a list of files, scans each one line by
line against the rule set and the entropy heuristic, and concatenates the
findings in file order. Per-file failures never abort the scan: they become
diagnostics and are logged.
"""

from __future__ import annotations

import logging
import os
import re
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Set

from vibesafe.config.schema import EntropyConfig, VibeSafeConfig
from vibesafe.findings.aggregator import aggregate
from vibesafe.findings.models import (
    ENV_SECRET_TYPE,
    HIGH_ENTROPY_TYPE,
    FileOutcome,
    Finding,
    ScanResult,
)
from vibesafe.rules.registry import RuleRegistry, build_registry
from vibesafe.scanner.entropy import find_high_entropy
from vibesafe.scanner.walker import IgnoreRules, PathArg, enumerate_files

logger = logging.getLogger(__name__)

_ENV_FILE_RE = re.compile(r"\.env($|\.)")


class ScanError(Exception):
    """Raised on internal scanner error (never contains secret values)."""


def is_env_file(path: str) -> bool:
    """True for ``.env``, ``.env.local``, ``config.env`` and the like."""
    return _ENV_FILE_RE.search(os.path.basename(path)) is not None


def _read_lines(path: str, max_bytes: int) -> List[str]:
    """Decode *path* as UTF-8 and split on ``\\n``.

    Raises OSError or UnicodeDecodeError; ValueError for binary or oversized files.
    """
    if max_bytes > 0 and os.path.getsize(path) > max_bytes:
        raise ValueError(f"larger than {max_bytes // 1024} KB")
    with open(path, "rb") as f:
        data = f.read()
    if b"\x00" in data:
        raise ValueError("binary content")
    return data.decode("utf-8").split("\n")


def scan_lines(
    file: str,
    lines: List[str],
    registry: RuleRegistry,
    entropy: EntropyConfig,
) -> List[Finding]:
    """Scan already-read *lines* of *file*; pure, no I/O."""
    env_file = is_env_file(file)
    rules = registry.enabled_rules()
    findings: List[Finding] = []

    for index, line in enumerate(lines):
        line_no = index + 1
        claimed: Set[str] = set()

        for rule in rules:
            for value in rule.find_all(line):
                findings.append(
                    Finding(
                        file=file,
                        line=line_no,
                        type=ENV_SECRET_TYPE if env_file else rule.type,
                        value=value,
                        severity="Info" if env_file else rule.severity,
                    )
                )
                claimed.add(value)

        if env_file or not entropy.enabled:
            continue

        for candidate, _ in find_high_entropy(line, entropy.min_entropy, entropy.min_length):
            # Entropy is a fallback: skip values already reported on this line
            if candidate in claimed:
                continue
            claimed.add(candidate)
            findings.append(
                Finding(
                    file=file,
                    line=line_no,
                    type=HIGH_ENTROPY_TYPE,
                    value=candidate,
                    severity="Low",
                )
            )

    return findings


def scan_file_outcome(
    path: str,
    registry: RuleRegistry,
    entropy: Optional[EntropyConfig] = None,
    *,
    max_file_size_kb: int = 0,
) -> FileOutcome:
    """Scan one file, capturing a read failure as ``FileOutcome.error``."""
    try:
        lines = _read_lines(path, max_file_size_kb * 1024)
    except FileNotFoundError:
        return FileOutcome(path=path, error="File not found")
    except PermissionError:
        return FileOutcome(path=path, error="Permission denied")
    except UnicodeDecodeError:
        return FileOutcome(path=path, error="Not valid UTF-8 text")
    except ValueError as exc:
        return FileOutcome(path=path, error=f"Skipped: {exc}")
    except OSError as exc:
        return FileOutcome(path=path, error=f"Error reading file: {exc.strerror or exc}")

    return FileOutcome(
        path=path,
        findings=scan_lines(path, lines, registry, entropy or EntropyConfig()),
    )


def _log_outcome(outcome: FileOutcome) -> None:
    if outcome.error is None:
        return
    if outcome.error.startswith("Error reading file"):
        logger.error("%s: %s", outcome.error, outcome.path)
    else:
        logger.warning("%s: %s", outcome.error, outcome.path)


def scan_file(
    path: str,
    registry: RuleRegistry,
    entropy: Optional[EntropyConfig] = None,
    *,
    max_file_size_kb: int = 0,
) -> List[Finding]:
    """Scan one file; an unreadable file yields ``[]`` and a log record."""
    outcome = scan_file_outcome(path, registry, entropy, max_file_size_kb=max_file_size_kb)
    _log_outcome(outcome)
    return outcome.findings


def _check_base_path(base_path: object) -> str:
    if not isinstance(base_path, (str, os.PathLike)):
        raise TypeError(
            f"base_path must be str or os.PathLike, not {type(base_path).__name__}"
        )
    path = os.fspath(base_path)
    if not isinstance(path, str):
        raise TypeError("base_path must resolve to a str path")
    return path


def run_scan(
    base_path: PathArg,
    config: Optional[VibeSafeConfig] = None,
    registry: Optional[RuleRegistry] = None,
    *,
    ignore: Optional[IgnoreRules] = None,
) -> ScanResult:
    """Scan *base_path* (file or directory) and return findings plus diagnostics."""
    path = _check_base_path(base_path)
    start = time.perf_counter()

    cfg = config or VibeSafeConfig()
    registry = registry or build_registry(cfg)
    ignore = ignore or IgnoreRules.with_patterns(cfg.scan.ignore_patterns)

    files = enumerate_files(
        path,
        ignore,
        follow_symlinks=cfg.scan.follow_symlinks,
        max_depth=cfg.scan.max_depth,
    )
    logger.debug("Enumerated %d file(s) under %s", len(files), path)

    def _one(file: str) -> FileOutcome:
        outcome = scan_file_outcome(
            file, registry, cfg.entropy, max_file_size_kb=cfg.scan.max_file_size_kb
        )
        _log_outcome(outcome)
        return outcome

    try:
        if cfg.scan.workers > 1 and len(files) > 1:
            # map() yields in submission order, so output matches the sequential pass
            with ThreadPoolExecutor(max_workers=cfg.scan.workers) as ex:
                outcomes = list(ex.map(_one, files))
        else:
            outcomes = [_one(f) for f in files]
    except Exception as exc:
        # Matched values must not surface in the error
        raise ScanError(
            f"Internal scanner error ({type(exc).__name__}) while scanning {path}"
        ) from None

    findings, diagnostics = aggregate(outcomes)
    elapsed = (time.perf_counter() - start) * 1000

    return ScanResult(
        base_path=path,
        findings=findings,
        diagnostics=diagnostics,
        scanned_files=sum(1 for o in outcomes if o.ok),
        scan_duration_ms=round(elapsed, 2),
    )


def scan(
    base_path: PathArg,
    config: Optional[VibeSafeConfig] = None,
    registry: Optional[RuleRegistry] = None,
    *,
    ignore: Optional[IgnoreRules] = None,
) -> List[Finding]:
    """Return every finding under *base_path*, in file, rule, then entropy order."""
    return run_scan(base_path, config, registry, ignore=ignore).findings

