"""Turn classification and nearest-version outcomes into report lines.

This is the seam the orchestration layer calls after it has fetched
CPE candidates and registry version listings for a ComponentRecord. It
logs what it finds and returns the lines the results report should carry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from constants import Constants
from identifiers import construct
from matching import MatchKind, MatchOutcome, classify
from sbom import ComponentRecord
from versioning import NearestKind, ResolutionStrategy, resolve

logger = logging.getLogger(__name__)

STATUS_EXACT = "exact"
STATUS_NEAREST = "nearest"
STATUS_NO_HIT = "no_hit"
STATUS_MISSING = "missing"


@dataclass(frozen=True)
class PurlLookup:
    """What one registry knew about a component.

    status is one of: exact (purl is set), nearest (nearest_version may be
    set), no_hit (the registry lists the package but nothing close), and
    missing (the registry had no entry at all).
    """
    package_type: str
    status: str
    purl: Optional[str] = None
    nearest_version: Optional[str] = None


def _no_cpe_line(record: ComponentRecord) -> str:
    return f"{Constants.CPE_PREFIX} {Constants.NO_CPES_FOUND} for {record.name}"


def describe_cpe_outcome(record: ComponentRecord, outcome: MatchOutcome) -> List[str]:
    """Report lines for a classification outcome, logged as they are built."""
    prefix = Constants.CPE_PREFIX
    lines: List[str] = []

    if outcome.kind == MatchKind.EXACT_MATCH:
        lines.append(f"{prefix} {Constants.EXACT_MATCH}")
        lines.extend(f"{prefix} {candidate}" for candidate in outcome.candidates)
        for line in lines:
            logger.info(line)
        return lines

    if outcome.kind == MatchKind.NO_MATCH or outcome.saw_unrelated:
        lines.append(_no_cpe_line(record))

    if outcome.kind == MatchKind.VERSION_MISMATCH:
        potentials = outcome.candidates[:-1]
        if potentials:
            lines.append(f"{prefix} {Constants.POTENTIAL_MATCH}")
            lines.extend(f"{prefix} {candidate}" for candidate in potentials)
        else:
            lines.append(f"{prefix} {Constants.MATCH_WITH_VERSION_MISMATCH}")
        lines.append(f"{prefix} {outcome.name_match}")
    elif outcome.kind == MatchKind.POTENTIAL_MATCH:
        lines.append(f"{prefix} {Constants.POTENTIAL_MATCH}")
        lines.extend(f"{prefix} {candidate}" for candidate in outcome.candidates)

    for line in lines:
        logger.warning(line)
    return lines


def cpe_lookup(record: ComponentRecord, candidates: Optional[Iterable[Optional[str]]]) -> Tuple[MatchOutcome, List[str]]:
    """Classify the candidates for a component and describe the result.

    The query is lower-cased the way the registry stores product tokens.
    """
    outcome = classify(candidates, record.name.lower(), record.version.lower())
    return outcome, describe_cpe_outcome(record, outcome)


def strategy_for(package_type: str) -> ResolutionStrategy:
    """Nearest-version strategy configured for a registry type."""
    configured = Constants.REGISTRY_STRATEGIES.get(package_type, ResolutionStrategy.MAJOR_MATCH.value)
    return ResolutionStrategy(configured)


def purl_lookup(
    record: ComponentRecord,
    package_type: str,
    available_versions: Optional[Sequence[str]],
    strategy: Optional[ResolutionStrategy] = None,
) -> PurlLookup:
    """Build a PURL on an exact version hit, else find the nearest version.

    Args:
        record: Component being looked up.
        package_type: Registry / PURL type, e.g. "npm" or "nuget".
        available_versions: Versions the registry lists, or None when the
            registry has no entry for the component.
        strategy: Overrides the strategy configured for package_type.

    Raises:
        InvalidIdentifier: When package_type is not a valid PURL type.
    """
    if available_versions is None:
        return PurlLookup(package_type, STATUS_MISSING)

    outcome = resolve(record.version, available_versions, strategy or strategy_for(package_type))
    if outcome.kind == NearestKind.EXACT_HIT:
        purl = str(construct(package_type, None, record.name, record.version))
        return PurlLookup(package_type, STATUS_EXACT, purl=purl)
    if outcome.kind == NearestKind.NEAREST_HIT:
        return PurlLookup(package_type, STATUS_NEAREST, nearest_version=outcome.version)
    return PurlLookup(package_type, STATUS_NO_HIT)


def _label(package_type: str) -> str:
    return Constants.REGISTRY_LABELS.get(package_type, package_type)


def summarize_purl_lookups(record: ComponentRecord, lookups: Sequence[PurlLookup]) -> Tuple[bool, List[str]]:
    """Combine per-registry lookups for one component.

    Returns:
        tuple: (True when any registry produced a PURL, report lines)
    """
    prefix = Constants.PURL_PREFIX
    lines: List[str] = []
    for lookup in lookups:
        if lookup.status == STATUS_EXACT:
            lines.append(f"{prefix} {lookup.purl}")
        elif lookup.status == STATUS_NEAREST and lookup.nearest_version:
            lines.append(
                f"{prefix} Nearest hit was for version:{lookup.nearest_version} ({_label(lookup.package_type)})"
            )

    generated = any(lookup.status == STATUS_EXACT for lookup in lookups)
    if lookups and all(lookup.status == STATUS_MISSING for lookup in lookups):
        registries = " + ".join(_label(lookup.package_type) for lookup in lookups)
        lines.append(f"{prefix} No hits for Name: {record.name} with Version: {record.version} ({registries})")

    for line in lines:
        logger.info(line)
    return generated, lines
