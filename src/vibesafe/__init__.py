"""VibeSafe — find hardcoded secrets in a file or directory tree."""

__version__ = "0.1.0"

from vibesafe.findings.models import Finding
from vibesafe.scanner.engine import scan
from vibesafe.scanner.entropy import shannon_entropy

__all__ = ["Finding", "__version__", "scan", "shannon_entropy"]
