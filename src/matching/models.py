"""Data models for CPE candidate classification."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class MatchKind(Enum):
    """Outcome tag for one classification call."""
    EXACT_MATCH = "exact_match"
    VERSION_MISMATCH = "version_mismatch"
    POTENTIAL_MATCH = "potential_match"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class MatchOutcome:
    """Classification result for a (name, version) query.

    candidates keeps the original candidate order:
    - EXACT_MATCH: every candidate matching both name and version.
    - VERSION_MISMATCH: the potential matches seen before the first
      name-only match, followed by that name-only match.
    - POTENTIAL_MATCH: every candidate whose name contains the query name.
    - NO_MATCH: empty.

    saw_unrelated is True when the fuzzy scan met a candidate matching
    nothing, so a caller can emit a single "no match" notice.
    """
    kind: MatchKind
    candidates: Tuple[str, ...] = ()
    saw_unrelated: bool = False

    @property
    def matched(self) -> bool:
        return self.kind != MatchKind.NO_MATCH

    @property
    def name_match(self):
        """The candidate that ended a VERSION_MISMATCH scan, else None."""
        if self.kind == MatchKind.VERSION_MISMATCH and self.candidates:
            return self.candidates[-1]
        return None
