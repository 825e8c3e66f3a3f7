"""CPE candidate classification."""

from .cpe import classify, split_candidate
from .models import MatchKind, MatchOutcome

__all__ = ["MatchKind", "MatchOutcome", "classify", "split_candidate"]
