"""Nearest-version resolution for registry version listings.

Two strategies exist because the registries expose different version data:

- MAJOR_MATCH: the highest available version whose parsed major component
  equals the queried major (used for NuGet).
- LEADING_PREFIX: the highest available version whose text starts with the
  queried version's first dot-separated token (used for npm). "4" therefore
  also matches "40.1.0".
"""

import logging
from typing import Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled

from .comparer import VersionComparer
from .models import NearestVersionOutcome, ResolutionStrategy

logger = logging.getLogger(__name__)


class NearestVersionResolver:
    """Resolve a queried version against the versions a registry offers."""

    def __init__(self, comparer: Optional[VersionComparer] = None):
        self.comparer = comparer or VersionComparer()

    def resolve(
        self,
        query_version: Optional[str],
        available_versions: Optional[Sequence[str]],
        strategy: ResolutionStrategy = ResolutionStrategy.MAJOR_MATCH,
    ) -> NearestVersionOutcome:
        """Return an exact hit, the nearest version, or no hit.

        Never raises: empty listings and unparseable versions degrade to NO_HIT.
        """
        versions = [v for v in (available_versions or []) if v]
        if not versions or not query_version:
            return NearestVersionOutcome.no_hit()

        wanted = query_version.lower()
        if any(v.lower() == wanted for v in versions):
            return NearestVersionOutcome.exact()

        if strategy == ResolutionStrategy.LEADING_PREFIX:
            nearest = self._pick_leading_prefix(query_version, versions)
        else:
            nearest = self._pick_major_match(query_version, versions)

        if is_debug_enabled(logger):
            logger.debug(
                "Nearest version lookup",
                extra=extra_context(
                    event="nearest_version",
                    strategy=strategy.value,
                    query_version=query_version,
                    candidate_count=len(versions),
                    nearest_version=nearest,
                ),
            )
        if nearest is None:
            return NearestVersionOutcome.no_hit()
        return NearestVersionOutcome.nearest(nearest)

    def _pick_major_match(self, query_version: str, versions: Sequence[str]) -> Optional[str]:
        major = self.comparer.major(query_version)
        if major is None:
            return None
        same_major = [v for v in versions if self.comparer.major(v) == major]
        return self.comparer.highest(same_major)

    def _pick_leading_prefix(self, query_version: str, versions: Sequence[str]) -> Optional[str]:
        prefix = query_version.split(".")[0].lower()
        if not prefix:
            return None
        matching = [v for v in versions if v.lower().startswith(prefix)]
        return self.comparer.highest(matching)


def resolve(
    query_version: Optional[str],
    available_versions: Optional[Sequence[str]],
    strategy: ResolutionStrategy = ResolutionStrategy.MAJOR_MATCH,
) -> NearestVersionOutcome:
    """Module-level shortcut around NearestVersionResolver.resolve()."""
    return NearestVersionResolver().resolve(query_version, available_versions, strategy)
