"""Unpacking of npm package archives."""

import logging
import tarfile
from pathlib import Path

from cjsmirror.core.errors import ArchiveError

logger = logging.getLogger(__name__)

# npm tarballs place all content under this top-level directory
PACKAGE_DIR = "package"


def extract_archive(tarball: Path, directory: Path) -> Path:
    """Extract an npm tarball into a directory.

    Extraction uses tarfile's "data" filter, which rejects absolute paths,
    links escaping the destination and device files.

    Args:
        tarball: Path to the .tgz produced by npm pack.
        directory: Destination directory.

    Returns:
        Path to the unpacked package directory (``directory/package``).

    Raises:
        ArchiveError: If the archive is missing, corrupt or has no package directory.
    """
    logger.debug("Extracting %s into %s", tarball, directory)
    try:
        with tarfile.open(tarball, "r:*") as archive:
            archive.extractall(directory, filter="data")
    except (tarfile.TarError, OSError) as e:
        msg = f"Failed to extract {tarball.name}: {e}"
        raise ArchiveError(msg) from e

    package_dir = directory / PACKAGE_DIR
    if not package_dir.is_dir():
        msg = f"Archive {tarball.name} has no '{PACKAGE_DIR}/' directory"
        raise ArchiveError(msg)
    return package_dir
