"""Package URL codec."""

from .exceptions import InvalidIdentifier
from .purl import PackageIdentifier, construct, format_purl, parse

__all__ = [
    "InvalidIdentifier",
    "PackageIdentifier",
    "construct",
    "format_purl",
    "parse",
]
