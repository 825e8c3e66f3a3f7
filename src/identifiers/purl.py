"""Package URL (purl) parsing and canonical formatting.

A purl is composed of seven components::

    scheme:type/namespace/name@version?qualifiers#subpath

Components are separated by a specific character for unambiguous parsing.
A purl must NOT contain a URL authority, so user info and ports are
rejected. A namespace segment may look like a host but its meaning is
specific to the package type.
"""
from __future__ import annotations

import logging
import re
import urllib.parse
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .exceptions import InvalidIdentifier

logger = logging.getLogger(__name__)

TYPE_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9.+-]+")
# Characters that would split a qualifier key on re-parse
QUALIFIER_KEY_FORBIDDEN = set("&=?#")


@dataclass(frozen=True)
class PackageIdentifier:
    """Structured, normalized package URL.

    Instances should be created through construct() or parse() so the
    per-type casing rules and qualifier ordering are applied.
    """
    type: str
    name: str
    namespace: Optional[str] = None
    version: Optional[str] = None
    qualifiers: Dict[str, str] = field(default_factory=dict, hash=False)
    subpath: Optional[str] = None
    scheme: str = "pkg"

    def __str__(self) -> str:
        return format_purl(self)


def _invalid(message: str, value: Optional[str] = None) -> InvalidIdentifier:
    """Build the exception, leaving a DEBUG trace of the rejected input."""
    if is_debug_enabled(logger):
        logger.debug(
            "Rejected package identifier",
            extra=extra_context(event="purl_rejected", reason=message, raw_value=value),
        )
    return InvalidIdentifier(message, value)


def _validate_type(purl_type: Optional[str]) -> str:
    if not purl_type or not TYPE_PATTERN.fullmatch(purl_type):
        raise _invalid("Invalid purl: the type specified is invalid", purl_type)
    return purl_type.lower()


def _normalize_namespace(namespace: Optional[str], purl_type: str) -> Optional[str]:
    """Join non-empty segments and apply the type's casing rule."""
    if namespace is None:
        return None
    segments = [segment for segment in namespace.split("/") if segment]
    if not segments:
        return None
    joined = "/".join(segments)
    if purl_type in Constants.PURL_LOWERCASE_NAMESPACE_TYPES:
        return joined.lower()
    return joined


def _normalize_name(name: Optional[str], purl_type: str) -> str:
    if not name:
        raise _invalid("Invalid purl: the name specified is invalid", name)
    if purl_type in Constants.PURL_LOWERCASE_NAME_TYPES:
        return name.lower()
    if purl_type == "pypi":
        return name.replace("_", "-").lower()
    return name


def _normalize_subpath(subpath: Optional[str]) -> Optional[str]:
    if subpath is None:
        return None
    return subpath.strip("/") or None


def _normalize_qualifiers(qualifiers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Lower-case keys and return a new mapping sorted by key."""
    if not qualifiers:
        return {}
    normalized: Dict[str, str] = {}
    for key, value in qualifiers.items():
        key = str(key).lower()
        if not key or QUALIFIER_KEY_FORBIDDEN.intersection(key):
            raise _invalid(f"Invalid purl: qualifier key {key!r} is invalid", key)
        if key in normalized:
            raise _invalid(f"Invalid purl: duplicate qualifier key {key!r}", key)
        normalized[key] = "" if value is None else str(value)
    return dict(sorted(normalized.items()))


def construct(
    purl_type: str,
    namespace: Optional[str],
    name: str,
    version: Optional[str] = None,
    qualifiers: Optional[Mapping[str, str]] = None,
    subpath: Optional[str] = None,
) -> PackageIdentifier:
    """Build a normalized PackageIdentifier from its parts.

    Args:
        purl_type: Package type, e.g. npm, nuget, pypi.
        namespace: Name prefix such as a Maven groupId or GitHub owner.
        name: Package name (required).
        version: Package version; an empty string is treated as absent.
        qualifiers: Extra key/value data such as arch or distro.
        subpath: Path inside the package; surrounding slashes are trimmed.

    Raises:
        InvalidIdentifier: When the type or name is invalid.
    """
    validated_type = _validate_type(purl_type)
    return PackageIdentifier(
        type=validated_type,
        namespace=_normalize_namespace(namespace, validated_type),
        name=_normalize_name(name, validated_type),
        version=version or None,
        qualifiers=_normalize_qualifiers(qualifiers),
        subpath=_normalize_subpath(subpath),
    )


def _check_url(purl: str) -> None:
    """Reject strings that are not URLs, carry an authority, or use another scheme."""
    try:
        parts = urllib.parse.urlsplit(purl)
        port = parts.port
    except ValueError as e:
        raise _invalid(f"Invalid purl: {e}", purl) from e
    if parts.username or parts.password or port is not None:
        raise _invalid("Invalid purl: contains parts not supported by the purl spec", purl)
    if parts.scheme != Constants.PURL_SCHEME:
        raise _invalid("Invalid purl: the scheme is invalid", purl)


def _parse_qualifiers(raw: str, purl: str) -> Dict[str, str]:
    qualifiers: Dict[str, str] = {}
    for pair in raw.split("&"):
        if "=" not in pair:
            continue
        key, _, value = pair.partition("=")
        key = key.lower()
        if not key:
            continue
        if key in qualifiers:
            raise _invalid(f"Invalid purl: duplicate qualifier key {key!r}", purl)
        qualifiers[key] = urllib.parse.unquote(value)
    return qualifiers


def parse(purl: str) -> PackageIdentifier:
    """Parse a purl string into a PackageIdentifier.

    The optional trailing parts are removed right to left (subpath, then
    qualifiers, then version) before the remaining path is split on '/',
    since earlier parts may legitimately contain '/'.

    Raises:
        InvalidIdentifier: When the string is empty or violates the grammar.
    """
    if purl is None or not str(purl).strip():
        raise _invalid("Invalid purl: contains an empty or null value", purl)
    text = str(purl).strip()
    _check_url(text)

    remainder = text[len(Constants.PURL_SCHEME) + 1:]

    subpath = None
    if "#" in remainder:
        remainder, _, raw_subpath = remainder.rpartition("#")
        subpath = urllib.parse.unquote(raw_subpath)

    qualifiers: Dict[str, str] = {}
    if "?" in remainder:
        remainder, _, raw_qualifiers = remainder.rpartition("?")
        qualifiers = _parse_qualifiers(raw_qualifiers, text)

    version = None
    if "@" in remainder:
        remainder, _, raw_version = remainder.rpartition("@")
        version = urllib.parse.unquote(raw_version)

    segments: List[str] = remainder.strip("/").split("/")
    if len(segments) < 2:
        raise _invalid("Invalid purl: does not contain a minimum of a 'type' and a 'name'", text)

    namespace = None
    if len(segments) > 2:
        namespace = "/".join(urllib.parse.unquote(segment) for segment in segments[1:-1])

    return construct(
        segments[0],
        namespace,
        urllib.parse.unquote(segments[-1]),
        version,
        qualifiers,
        subpath,
    )


def format_purl(identifier: PackageIdentifier) -> str:
    """Return the canonical string form of a PackageIdentifier."""
    out = [identifier.scheme, ":", identifier.type, "/"]
    if identifier.namespace:
        out.append(urllib.parse.quote(identifier.namespace, safe="/"))
        out.append("/")
    out.append(urllib.parse.quote(identifier.name, safe=":"))
    if identifier.version is not None:
        out.append("@")
        out.append(urllib.parse.quote(identifier.version, safe=":"))
    if identifier.qualifiers:
        pairs = [
            f"{key.lower()}={urllib.parse.quote(value, safe='/')}"
            for key, value in sorted(identifier.qualifiers.items())
        ]
        out.append("?")
        out.append("&".join(pairs))
    if identifier.subpath is not None:
        out.append("#")
        out.append(urllib.parse.quote(identifier.subpath, safe="/:"))
    return "".join(out)
