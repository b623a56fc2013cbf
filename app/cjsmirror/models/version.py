"""Registry version listing model.

A VersionListing is the typed answer to "which versions of P are published",
distinguishing a package the registry has never heard of from one that
exists with a list of versions.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class VersionListing:
    """Published versions of one package as reported by the registry.

    Attributes:
        package: Registry name of the package.
        versions: Version identifiers in registry order.
        found: False if the registry reported the package as not found.
    """

    package: str
    versions: tuple[str, ...] = field(default=())
    found: bool = True

    def __post_init__(self) -> None:
        """Validate listing data after initialization."""
        if not self.package:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if not self.found and self.versions:
            msg = f"Listing for unknown package {self.package} cannot carry versions"
            raise ValueError(msg)

    @classmethod
    def not_found(cls, package: str) -> "VersionListing":
        """Create the listing for a package that has never been published."""
        return cls(package=package, versions=(), found=False)

    def __contains__(self, version: object) -> bool:
        return version in self.versions

    def __len__(self) -> int:
        return len(self.versions)
