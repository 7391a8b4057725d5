"""Shannon entropy calculator and candidate extraction.

Entropy is measured over Unicode code points (items of a Python ``str``).
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import List, Tuple

MIN_ENTROPY_THRESHOLD = 4.0
MIN_STRING_LENGTH_FOR_ENTROPY = 20

# Maximal runs of the base64 alphabet; length is filtered separately.
_CANDIDATE_RE = re.compile(r"[A-Za-z0-9/+=]+")


def shannon_entropy(s: str) -> float:
    """Compute Shannon entropy (bits per character) of string *s*.

    H = -Σ p(c) · log₂(p(c))  over unique characters c.
    """
    if not s:
        return 0.0
    counts = Counter(s)
    total = len(s)
    return -sum((c / total) * math.log2(c / total) for c in counts.values())


def extract_candidates(line: str, min_length: int = MIN_STRING_LENGTH_FOR_ENTROPY) -> List[str]:
    """Return each maximal base64-alphabet run in *line* of at least *min_length*, left to right."""
    return [run for run in _CANDIDATE_RE.findall(line) if len(run) >= min_length]


def find_high_entropy(
    line: str,
    min_entropy: float = MIN_ENTROPY_THRESHOLD,
    min_length: int = MIN_STRING_LENGTH_FOR_ENTROPY,
) -> List[Tuple[str, float]]:
    """Return (candidate, entropy) pairs from *line* that meet both thresholds."""
    results: List[Tuple[str, float]] = []
    for candidate in extract_candidates(line, min_length):
        h = shannon_entropy(candidate)
        if h >= min_entropy:
            results.append((candidate, h))
    return results
