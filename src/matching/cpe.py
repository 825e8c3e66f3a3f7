"""Classify CPE candidates returned by a vulnerability database lookup.

A candidate is a colon-delimited CPE string such as
``cpe:2.3:a:vendor:product:1.2.3:*:*:*:*:*:*:*``; field 4 is the product
name and field 5 its version. Classification runs in two passes:

1. Exact pass: every candidate whose name and version equal the query.
2. Fuzzy pass (only when the exact pass found nothing), in candidate order:
   a name-only match ends the scan as VERSION_MISMATCH; a name containing
   the query (case-insensitive) accumulates as POTENTIAL_MATCH; anything
   else is unrelated.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .models import MatchKind, MatchOutcome

logger = logging.getLogger(__name__)


def split_candidate(candidate: Optional[str]) -> Optional[List[str]]:
    """Split a CPE string into fields, or None when it is malformed."""
    if not isinstance(candidate, str) or not candidate:
        return None
    fields = candidate.split(":")
    if len(fields) < Constants.CPE_MIN_FIELDS:
        return None
    return fields


class _FuzzyScan:
    """Bookkeeping for one fuzzy pass; never shared between calls."""

    def __init__(self, query_name: str):
        self.query_name = query_name
        self.query_folded = query_name.lower()
        self.gathered: List[str] = []
        self.has_potential = False
        self.saw_unrelated = False

    def feed(self, candidate: str, fields: List[str]) -> bool:
        """Record one candidate; True when the scan must stop."""
        product = fields[Constants.CPE_NAME_INDEX]
        if product == self.query_name:
            self.gathered.append(candidate)
            return True
        if self.query_folded in product.lower():
            self.gathered.append(candidate)
            self.has_potential = True
        else:
            self.saw_unrelated = True
        return False


def _exact_matches(candidates: List[str], query_name: str, query_version: str) -> List[str]:
    matches = []
    for candidate in candidates:
        fields = split_candidate(candidate)
        if fields is None:
            continue
        if (fields[Constants.CPE_NAME_INDEX] == query_name
                and fields[Constants.CPE_VERSION_INDEX] == query_version):
            matches.append(candidate)
    return matches


def classify(
    candidates: Optional[Iterable[Optional[str]]],
    query_name: str,
    query_version: str,
) -> MatchOutcome:
    """Classify candidates against a (name, version) query.

    Name and version are compared as given; callers lower-case them first.
    Malformed candidates are skipped. Never raises.

    Returns:
        MatchOutcome: exactly one of the MatchKind variants.
    """
    items = list(candidates or [])
    if not items or not query_name:
        return MatchOutcome(MatchKind.NO_MATCH)

    exact = _exact_matches(items, query_name, query_version)
    if exact:
        outcome = MatchOutcome(MatchKind.EXACT_MATCH, tuple(exact))
        _log_outcome(query_name, query_version, outcome, len(items))
        return outcome

    scan = _FuzzyScan(query_name)
    outcome = None
    for candidate in items:
        fields = split_candidate(candidate)
        if fields is None:
            continue
        if scan.feed(candidate, fields):
            outcome = MatchOutcome(MatchKind.VERSION_MISMATCH, tuple(scan.gathered), scan.saw_unrelated)
            break

    if outcome is None:
        if scan.has_potential:
            outcome = MatchOutcome(MatchKind.POTENTIAL_MATCH, tuple(scan.gathered), scan.saw_unrelated)
        else:
            outcome = MatchOutcome(MatchKind.NO_MATCH, (), scan.saw_unrelated)

    _log_outcome(query_name, query_version, outcome, len(items))
    return outcome


def _log_outcome(query_name: str, query_version: str, outcome: MatchOutcome, total: int) -> None:
    if is_debug_enabled(logger):
        logger.debug(
            "CPE classification",
            extra=extra_context(
                event="cpe_classified",
                query_name=query_name,
                query_version=query_version,
                outcome=outcome.kind.value,
                matched_count=len(outcome.candidates),
                candidate_count=total,
            ),
        )
