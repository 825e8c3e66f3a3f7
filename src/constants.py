"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class PackageTypes(Enum):
    """Package registries that versions are looked up against.

    Args:
        Enum (string): PURL type used for the registry.
    """

    NPM = "npm"
    NUGET = "nuget"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PURL_SCHEME = "pkg"
    # Types whose namespace is case-insensitive.
    PURL_LOWERCASE_NAMESPACE_TYPES = ["bitbucket", "github", "pypi", "gitlab"]
    # Types whose name is case-insensitive.
    PURL_LOWERCASE_NAME_TYPES = ["bitbucket", "github", "gitlab"]

    CPE_NAME_INDEX = 4
    CPE_VERSION_INDEX = 5
    CPE_MIN_FIELDS = 6

    STRIP_NAME_SUFFIXES = [".dll", ".exe"]
    PLACEHOLDER_VERSION = "0.0"
    UNKNOWN_VERSION = "-"

    # npm exposes bare version keys, nuget exposes parseable versions
    REGISTRY_STRATEGIES = {
        PackageTypes.NPM.value: "leading_prefix",
        PackageTypes.NUGET.value: "major_match",
    }

    REGISTRY_LABELS = {
        PackageTypes.NPM.value: "NPM",
        PackageTypes.NUGET.value: "NuGet",
    }

    CPE_PREFIX = "~ CPE :"
    PURL_PREFIX = "~ PURL:"
    NO_CPES_FOUND = "No matching CPEs were found"
    EXACT_MATCH = "CPE with (**** EXACT VERSION MATCH ****) found"
    MATCH_WITH_VERSION_MISMATCH = "CPEs with (**** VERSION MISMATCH ****) found"
    POTENTIAL_MATCH = "CPEs with (**** POTENTIAL MATCH ****) found"
    NO_MATCH = "(**** NO MATCH ****)"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL = "INFO"
    ENV_LOG_LEVEL = "SBOM2GID_LOG_LEVEL"
    ENV_CONFIG = "SBOM2GID_CONFIG"


def _load_yaml_config(path: str) -> Optional[Dict[str, Any]]:
    """Read a YAML document from disk, returning None when unusable."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError:
        logger.warning("Config file not found: %s", path)
        return None
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Unable to read config file %s: %s", path, e)
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not a mapping", path)
        return None
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Apply YAML overrides onto Constants.

    Only existing upper-case attributes are overridden. The path defaults to
    the SBOM2GID_CONFIG environment variable.

    Args:
        path (str, optional): YAML file to read.

    Returns:
        dict: The overrides that were applied.
    """
    path = path or os.environ.get(Constants.ENV_CONFIG)
    if not path:
        return {}
    data = _load_yaml_config(path)
    if not data:
        return {}

    applied: Dict[str, Any] = {}
    for key, value in data.items():
        attr = str(key).upper()
        if not attr.isupper() or not hasattr(Constants, attr):
            logger.warning("Unknown config key ignored: %s", key)
            continue
        setattr(Constants, attr, value)
        applied[attr] = value
    logger.debug("Applied %d config override(s) from %s", len(applied), path)
    return applied
