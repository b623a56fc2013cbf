"""Abstract base class for package registries.

This module defines the Registry interface the mirror pipeline uses to
discover, fetch and publish packages.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from cjsmirror.models.version import VersionListing


class Registry(ABC):
    """Abstract base class for package registries.

    Attributes:
        dry_run: If True, publishing is simulated.

    Example:
        >>> registry = NpmRegistry(dry_run=True)
        >>> listing = registry.list_versions("hyperapp")
        >>> if listing.found:
        ...     tarball = registry.pack("hyperapp", listing.versions[0], workdir)
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the registry client.

        Args:
            dry_run: If True, publish without actually uploading.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if registry is in dry-run mode."""
        return self._dry_run

    @abstractmethod
    def list_versions(self, package: str) -> VersionListing:
        """List the published versions of a package.

        Args:
            package: Registry name of the package.

        Returns:
            VersionListing; ``found`` is False if the package is unknown.

        Raises:
            RegistryError: On any failure other than "not found".
        """

    @abstractmethod
    def pack(self, package: str, version: str, directory: Path) -> Path:
        """Download the archive of one package version.

        Args:
            package: Registry name of the package.
            version: Exact version to fetch.
            directory: Directory to place the archive in.

        Returns:
            Path to the downloaded archive.

        Raises:
            RegistryError: If the archive cannot be fetched.
        """

    @abstractmethod
    def publish(self, package_dir: Path) -> None:
        """Publish the package contained in a directory.

        Args:
            package_dir: Directory holding package.json and the files to publish.

        Raises:
            RegistryError: If publishing fails.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the registry tooling is available on the system.

        Returns:
            True if the registry can be used, False otherwise.
        """
