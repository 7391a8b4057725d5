"""Finding models, aggregation, and redaction."""

from vibesafe.findings.aggregator import aggregate, count_by_severity
from vibesafe.findings.models import FileOutcome, Finding, ScanDiagnostic, ScanResult
from vibesafe.findings.redactor import redact

__all__ = [
    "FileOutcome",
    "Finding",
    "ScanDiagnostic",
    "ScanResult",
    "aggregate",
    "count_by_severity",
    "redact",
]
