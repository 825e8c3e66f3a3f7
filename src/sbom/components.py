"""Turn CycloneDX-style component entries into lookup queries.

Works on an SBOM document that has already been loaded into a mapping;
reading files is left to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentRecord:
    """Name and version of one SBOM component, normalized for lookups."""
    name: str
    version: str


def normalize_component_name(name: str) -> str:
    """Lower-case the name and drop assembly suffixes such as .dll/.exe."""
    normalized = name.lower()
    for suffix in Constants.STRIP_NAME_SUFFIXES:
        normalized = normalized.replace(suffix.lower(), "")
    return normalized


def normalize_component_version(version: Optional[str]) -> str:
    """Map missing and placeholder versions to the unknown-version marker."""
    if version is None or version == Constants.PLACEHOLDER_VERSION:
        return Constants.UNKNOWN_VERSION
    return str(version)


def project_name(bom: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Name of the component the SBOM describes, if present."""
    if not isinstance(bom, Mapping):
        return None
    metadata = bom.get("metadata") or {}
    component = metadata.get("component") or {}
    return component.get("name")


def records_from_bom(bom: Optional[Mapping[str, Any]], exclude: Optional[str] = None) -> List[ComponentRecord]:
    """Extract ComponentRecords from a loaded SBOM mapping.

    Args:
        bom: Parsed SBOM document with a "components" list.
        exclude: Components whose normalized name contains this text
            (case-insensitive) are left out.

    Returns:
        list: ComponentRecords in document order.
    """
    if not isinstance(bom, Mapping):
        logger.error("SBOM data is missing or not a mapping")
        return []

    components = bom.get("components") or []
    records: List[ComponentRecord] = []
    skipped = 0
    excluded = 0
    needle = exclude.lower() if exclude else None

    for component in components:
        name = component.get("name") if isinstance(component, Mapping) else None
        if not name:
            skipped += 1
            continue
        record = ComponentRecord(
            normalize_component_name(str(name)),
            normalize_component_version(component.get("version")),
        )
        if needle and needle in record.name:
            excluded += 1
            continue
        records.append(record)

    if skipped:
        logger.warning("Skipped %d component(s) without a name", skipped)
    if needle:
        logger.info("Excluded %d component(s) that contained '%s'", excluded, exclude)
    return records
