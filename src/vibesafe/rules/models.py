"""Rule data model — pattern stored as string, compiled on first use."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from vibesafe.config.schema import Severity


@dataclass
class Rule:
    """A single detection rule.

    ``pattern`` is stored as a raw string so the rule remains serialisable.
    The compiled regex is built lazily on first access via ``compiled_pattern``.
    """

    id: str
    type: str  # label reported on findings, e.g. "AWS Access Key ID"
    pattern: str
    severity: Severity
    ignore_case: bool = False
    enabled: bool = True

    # --- cached compiled object (not serialised) ---
    _compiled_pattern: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        if self._compiled_pattern is None:
            flags = re.IGNORECASE if self.ignore_case else 0
            self._compiled_pattern = re.compile(self.pattern, flags)
        return self._compiled_pattern

    def find_all(self, line: str) -> List[str]:
        """Return the value of every non-overlapping match in *line*, left to right.

        A named group ``secret`` narrows the reported value; otherwise the
        whole match is reported. Empty matches are dropped.
        """
        hits: List[str] = []
        for m in self.compiled_pattern.finditer(line):
            if "secret" in m.groupdict() and m.group("secret") is not None:
                value = m.group("secret")
            else:
                value = m.group(0)
            if value:
                hits.append(value)
        return hits
