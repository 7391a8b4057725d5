"""Scanner — engine, entropy, traversal."""

from vibesafe.scanner.engine import ScanError, is_env_file, run_scan, scan, scan_file
from vibesafe.scanner.entropy import find_high_entropy, shannon_entropy
from vibesafe.scanner.walker import IgnoreRules, enumerate_files

__all__ = [
    "IgnoreRules",
    "ScanError",
    "enumerate_files",
    "find_high_entropy",
    "is_env_file",
    "run_scan",
    "scan",
    "scan_file",
    "shannon_entropy",
]
