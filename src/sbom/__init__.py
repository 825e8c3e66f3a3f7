"""SBOM component extraction."""

from .components import (
    ComponentRecord,
    normalize_component_name,
    normalize_component_version,
    project_name,
    records_from_bom,
)

__all__ = [
    "ComponentRecord",
    "normalize_component_name",
    "normalize_component_version",
    "project_name",
    "records_from_bom",
]
