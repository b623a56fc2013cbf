"""Exception hierarchy for mirroring failures.

Every error raised while mirroring a version derives from MirrorError so the
pipeline can turn it into a failed outcome in one place.
"""


class MirrorError(Exception):
    """Base exception for mirroring errors."""


class RegistryError(MirrorError):
    """Raised when a registry query, pack or publish fails."""


class ArchiveError(MirrorError):
    """Raised when a package archive cannot be unpacked."""


class ManifestError(MirrorError):
    """Raised when package.json is missing, unreadable or unusable."""


class TranspileError(MirrorError):
    """Raised when the module transform fails."""
