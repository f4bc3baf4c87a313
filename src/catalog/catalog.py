"""Version catalog of known IDE releases.

The catalog maps marketing versions (``2024.3``) to build-number branches
(``243``). It is built once and never mutated, so concurrent readers need
no locking.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple

from constants import Constants
from versioning.errors import DuplicateCatalogEntryError, UnknownVersionError
from versioning.models import BuildNumber

logger = logging.getLogger(__name__)

# 2024.3.1 belongs to the 2024.3 release line
_BUGFIX_MARKETING_RE = re.compile(r"^(\d{4}\.\d+)(?:\.\d+)+$")


@dataclass(frozen=True)
class CatalogEntry:
    """One known IDE release."""
    marketing_version: str
    build_number: BuildNumber
    release_date: date
    recommended_toolchain: str

    @property
    def branch(self) -> int:
        return self.build_number.branch

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CatalogEntry":
        """Build an entry from a catalog source record.

        Record keys: marketingVersion, branch, build, fix, releaseDate,
        recommendedToolchain. build and fix may be omitted.
        """
        released = record["releaseDate"]
        if not isinstance(released, date):
            released = date.fromisoformat(str(released))
        build = record.get("build")
        fix = record.get("fix") if build is not None else None
        return cls(
            marketing_version=str(record["marketingVersion"]).strip(),
            build_number=BuildNumber(
                branch=int(record["branch"]),
                build=None if build is None else int(build),
                fix=None if fix is None else int(fix),
            ),
            release_date=released,
            recommended_toolchain=str(record["recommendedToolchain"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "marketingVersion": self.marketing_version,
            "buildNumber": str(self.build_number),
            "branch": self.branch,
            "releaseDate": self.release_date.isoformat(),
            "recommendedToolchain": self.recommended_toolchain,
        }


class VersionCatalog:
    """Immutable lookup table keyed by marketing version and by branch."""

    def __init__(self, entries: Iterable[CatalogEntry]):
        by_branch: Dict[int, CatalogEntry] = {}
        by_marketing: Dict[str, CatalogEntry] = {}
        for entry in entries:
            existing = by_branch.get(entry.branch)
            if existing is not None:
                raise DuplicateCatalogEntryError(
                    entry.branch, existing.marketing_version, entry.marketing_version
                )
            existing = by_marketing.get(entry.marketing_version)
            if existing is not None:
                raise DuplicateCatalogEntryError(
                    entry.marketing_version, existing.build_number, entry.build_number
                )
            by_branch[entry.branch] = entry
            by_marketing[entry.marketing_version] = entry

        self._by_branch = by_branch
        self._by_marketing = by_marketing
        self._entries: Tuple[CatalogEntry, ...] = tuple(
            sorted(by_branch.values(), key=lambda e: e.build_number.sort_key())
        )

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "VersionCatalog":
        return cls(CatalogEntry.from_record(r) for r in records)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[CatalogEntry, ...]:
        """Entries in ascending build-number order."""
        return self._entries

    def lookup(self, key: str) -> CatalogEntry:
        """Resolve a marketing version (``2024.3``) or a bare branch (``243``).

        Raises:
            UnknownVersionError: No entry matches; the target cannot be verified.
        """
        token = str(key).strip()
        entry = self._by_marketing.get(token)
        if entry is not None:
            return entry
        if token.isascii() and token.isdigit():
            entry = self._by_branch.get(int(token))
            if entry is not None:
                return entry
        match = _BUGFIX_MARKETING_RE.match(token)
        if match:
            entry = self._by_marketing.get(match.group(1))
            if entry is not None:
                return entry
        raise UnknownVersionError(token)

    def latest(self) -> CatalogEntry:
        if not self._entries:
            raise UnknownVersionError(Constants.TARGET_LATEST)
        return self._entries[-1]

    def resolve(self, tokens: Sequence[str]) -> Tuple[List[CatalogEntry], List[str]]:
        """Resolve target tokens to entries.

        Tokens may be comma-separated and may use the ``latest`` and ``all``
        keywords. Duplicates are collapsed, first occurrence wins.

        Returns:
            (entries, unknown tokens), both in request order.
        """
        resolved: List[CatalogEntry] = []
        unknown: List[str] = []
        seen = set()
        for token in _split_tokens(tokens):
            lowered = token.lower()
            if lowered == Constants.TARGET_ALL:
                candidates = list(self._entries)
            elif lowered == Constants.TARGET_LATEST:
                candidates = [self.latest()] if self._entries else []
            else:
                try:
                    candidates = [self.lookup(token)]
                except UnknownVersionError:
                    logger.warning("Cannot verify unknown IDE version '%s'", token)
                    if token not in unknown:
                        unknown.append(token)
                    continue
            for entry in candidates:
                if entry.branch not in seen:
                    seen.add(entry.branch)
                    resolved.append(entry)
        return resolved, unknown


def _split_tokens(tokens: Sequence[str]) -> List[str]:
    out: List[str] = []
    for token in tokens or []:
        out.extend(part.strip() for part in str(token).split(",") if part.strip())
    return out


@lru_cache(maxsize=1)
def default_catalog() -> VersionCatalog:
    """Process-wide catalog built from the bundled release table."""
    from .builtin import BUILTIN_RELEASES  # pylint: disable=import-outside-toplevel
    return VersionCatalog.from_records(BUILTIN_RELEASES)
