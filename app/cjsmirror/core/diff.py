"""Diff between the source package's versions and the mirror's.

Works out which source versions still need mirroring and in what order.
Version precedence comes from semantic_version; nothing here parses
versions by hand.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import semantic_version

from cjsmirror.models.version import VersionListing

logger = logging.getLogger(__name__)


def sort_newest_first(versions: Iterable[str]) -> tuple[str, ...]:
    """Sort version identifiers by descending semver precedence.

    Identifiers that are not valid semantic versions are dropped.
    Duplicates are removed, keeping the first spelling seen.

    Args:
        versions: Version strings as reported by the registry.

    Returns:
        Tuple of version strings, newest first.
    """
    parsed: dict[semantic_version.Version, str] = {}
    for raw in versions:
        try:
            version = semantic_version.Version(raw)
        except ValueError:
            logger.debug("Ignoring non-semver version %r", raw)
            continue
        parsed.setdefault(version, raw)
    return tuple(parsed[v] for v in sorted(parsed, reverse=True))


def compute_missing_versions(source: Sequence[str], mirror: Iterable[str]) -> tuple[str, ...]:
    """Return the source versions not present in the mirror.

    The result preserves the order of ``source``.

    Args:
        source: Source package versions, in processing order.
        mirror: Versions already published for the mirror package.

    Returns:
        Subsequence of ``source`` absent from ``mirror``.
    """
    mirrored = set(mirror)
    return tuple(version for version in source if version not in mirrored)


@dataclass(frozen=True, slots=True)
class MirrorDiff:
    """Result of comparing source and mirror listings.

    Attributes:
        source: Source listing, versions sorted newest first.
        mirror: Mirror listing as reported by the registry.
        missing: Source versions not yet mirrored, newest first.
    """

    source: VersionListing
    mirror: VersionListing
    missing: tuple[str, ...]

    @property
    def is_in_sync(self) -> bool:
        """Check whether every source version is already mirrored."""
        return not self.missing

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": {
                "package": self.source.package,
                "published": self.source.found,
                "versions": len(self.source.versions),
            },
            "mirror": {
                "package": self.mirror.package,
                "published": self.mirror.found,
                "versions": len(self.mirror.versions),
            },
            "in_sync": self.is_in_sync,
            "missing": list(self.missing),
        }


def compute_diff(source: VersionListing, mirror: VersionListing) -> MirrorDiff:
    """Compare a source listing with a mirror listing.

    Args:
        source: Listing of the source package, in any order.
        mirror: Listing of the mirror package; may be a not-found listing.

    Returns:
        MirrorDiff with the source sorted newest first and the missing versions.
    """
    ordered = VersionListing(
        package=source.package,
        versions=sort_newest_first(source.versions),
        found=source.found,
    )
    missing = compute_missing_versions(ordered.versions, mirror.versions)
    logger.info(
        "%d of %d %s versions missing from %s",
        len(missing),
        len(ordered.versions),
        source.package,
        mirror.package,
    )
    return MirrorDiff(source=ordered, mirror=mirror, missing=missing)
