"""Secret-scan tool entry point for agent integrations.

Transport and tool registration belong to the host; this module only turns
an optional path into the text report.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from vibesafe.config.schema import VibeSafeConfig
from vibesafe.output import report
from vibesafe.rules.registry import RuleRegistry
from vibesafe.scanner.engine import scan

logger = logging.getLogger(__name__)

TOOL_NAME = "secret-scan"
TOOL_DESCRIPTION = (
    "Scans a given file or directory path for secrets "
    "(API keys, high entropy strings, etc.)."
)


def run_secret_scan(
    path: Optional[str] = None,
    config: Optional[VibeSafeConfig] = None,
    registry: Optional[RuleRegistry] = None,
) -> str:
    """Scan *path* (default: the working directory) and return a Markdown report.

    Never raises; an unexpected failure is reported in the returned text.
    """
    target_path = path if path is not None else os.getcwd()

    logger.info("Starting scan for path: %s", target_path)
    try:
        findings = scan(target_path, config, registry)
    except Exception as exc:
        logger.error("Error during secret scan for %s: %s", target_path, exc)
        return f"Error during secret scan for {target_path}: {exc}"

    logger.info("Scan completed. Found %d potential secrets.", len(findings))
    return report.render(findings, target_path)
