"""Data models for nearest-version resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResolutionStrategy(Enum):
    """How a nearest version is chosen when no exact version exists."""
    MAJOR_MATCH = "major_match"
    LEADING_PREFIX = "leading_prefix"


class NearestKind(Enum):
    """Outcome tag for a nearest-version lookup."""
    EXACT_HIT = "exact_hit"
    NEAREST_HIT = "nearest_hit"
    NO_HIT = "no_hit"


@dataclass(frozen=True)
class NearestVersionOutcome:
    """Result of resolving a queried version against available versions."""
    kind: NearestKind
    version: Optional[str] = None

    @classmethod
    def exact(cls) -> "NearestVersionOutcome":
        return cls(NearestKind.EXACT_HIT)

    @classmethod
    def nearest(cls, version: str) -> "NearestVersionOutcome":
        return cls(NearestKind.NEAREST_HIT, version)

    @classmethod
    def no_hit(cls) -> "NearestVersionOutcome":
        return cls(NearestKind.NO_HIT)
