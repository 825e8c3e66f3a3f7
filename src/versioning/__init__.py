"""Version ordering and nearest-version resolution."""

from .comparer import ParsedVersion, VersionComparer
from .models import NearestKind, NearestVersionOutcome, ResolutionStrategy
from .nearest import NearestVersionResolver, resolve

__all__ = [
    "NearestKind",
    "NearestVersionOutcome",
    "NearestVersionResolver",
    "ParsedVersion",
    "ResolutionStrategy",
    "VersionComparer",
    "resolve",
]
