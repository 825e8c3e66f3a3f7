"""Version ordering used by the nearest-version lookup.

Versions are a dotted numeric core of any length (``4``, ``4.4.1``,
``1.2.3.4``) optionally followed by a pre-release suffix (``-beta.2``,
``rc1``) and build metadata (``+abc``, ignored). A plain release outranks
a pre-release of the same numeric core; pre-release identifiers follow
semantic-version precedence.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Iterable, Optional, Tuple

import semantic_version

VERSION_PATTERN = re.compile(r"^v?(?P<core>\d+(?:\.\d+)*)(?P<suffix>[^+]*)(?:\+.*)?$", re.IGNORECASE)


def _prerelease_identifiers(suffix: str) -> Tuple[str, ...]:
    """Split a suffix into identifiers semantic_version accepts."""
    identifiers = []
    for part in suffix.lstrip("-._").lower().split("."):
        part = re.sub(r"[^0-9a-z-]", "-", part)
        if not part:
            continue
        if part.isdigit():
            part = str(int(part))
        identifiers.append(part)
    return tuple(identifiers)


@total_ordering
class ParsedVersion:
    """A comparable version; equality ignores trailing zero components."""

    def __init__(self, raw: str, core: Tuple[int, ...], prerelease: Tuple[str, ...] = ()):
        self.raw = raw
        self.core = core
        self.prerelease = prerelease

    @property
    def major(self) -> int:
        return self.core[0]

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _trimmed_core(self) -> Tuple[int, ...]:
        core = list(self.core)
        while core and core[-1] == 0:
            core.pop()
        return tuple(core)

    def _prerelease_version(self) -> semantic_version.Version:
        return semantic_version.Version(major=0, minor=0, patch=0, prerelease=self.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedVersion):
            return NotImplemented
        return self._trimmed_core() == other._trimmed_core() and self.prerelease == other.prerelease

    def __lt__(self, other: "ParsedVersion") -> bool:
        if not isinstance(other, ParsedVersion):
            return NotImplemented
        mine, theirs = self._trimmed_core(), other._trimmed_core()
        if mine != theirs:
            return mine < theirs
        if not self.prerelease:
            return False
        if not other.prerelease:
            return True
        return self._prerelease_version() < other._prerelease_version()

    def __hash__(self) -> int:
        return hash((self._trimmed_core(), self.prerelease))

    def __repr__(self) -> str:
        return f"ParsedVersion({self.raw!r})"


class VersionComparer:
    """Orders version strings and extracts their major component."""

    def parse(self, version: Optional[str]) -> Optional[ParsedVersion]:
        """Parse a version string, returning None when it has no numeric core."""
        if not version:
            return None
        match = VERSION_PATTERN.match(version.strip())
        if not match:
            return None
        core = tuple(int(part) for part in match.group("core").split("."))
        return ParsedVersion(version, core, _prerelease_identifiers(match.group("suffix")))

    def major(self, version: Optional[str]) -> Optional[int]:
        parsed = self.parse(version)
        return parsed.major if parsed else None

    def sort_key(self, version: str):
        """Key placing unparseable versions below every parseable one."""
        parsed = self.parse(version)
        if parsed is None:
            return (0, version)
        return (1, parsed)

    def compare(self, left: str, right: str) -> int:
        """Return -1, 0 or 1 like a classic cmp()."""
        left_key, right_key = self.sort_key(left), self.sort_key(right)
        if left_key < right_key:
            return -1
        if left_key > right_key:
            return 1
        return 0

    def highest(self, versions: Iterable[str]) -> Optional[str]:
        """Highest version by this ordering; the first seen wins ties."""
        best = None
        best_key = None
        for version in versions:
            key = self.sort_key(version)
            if best_key is None or key > best_key:
                best, best_key = version, key
        return best
