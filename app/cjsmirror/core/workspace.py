"""Ephemeral workspace management for mirror runs.

Each run works inside a root temporary directory, with one subdirectory per
version. Both levels are removed when their scope ends, whether or not the
work inside succeeded.

Workspace structure:
    <tmp>/cjsmirror-<hex>/
        <hex>/                  - One per version being mirrored
            <name>-<ver>.tgz    - Archive fetched with npm pack
            package/            - Unpacked package contents
"""

from __future__ import annotations

import logging
import os
import shutil
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from tempfile import NamedTemporaryFile

from cjsmirror.core.paths import APP_NAME, get_temp_root

logger = logging.getLogger(__name__)

# Mode for newly written package files
FILE_MODE = 0o644


def create_directory(path: Path) -> Path:
    """Create a directory and any missing parents.

    Args:
        path: Directory to create.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def remove_tree(path: Path) -> None:
    """Recursively delete a directory tree.

    Succeeds silently if the path does not exist.

    Args:
        path: Directory (or file) to delete.
    """
    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
        return
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    logger.debug("Removed %s", path)


def delete_map_files(directory: Path, pattern: str = "*.map") -> int:
    """Recursively delete files matching a glob pattern.

    Matching nothing is not an error.

    Args:
        directory: Root directory to search.
        pattern: Glob pattern for file names (default: source maps).

    Returns:
        Number of files deleted.
    """
    if not directory.exists():
        return 0
    deleted = 0
    for path in sorted(directory.rglob(pattern)):
        if path.is_file() or path.is_symlink():
            path.unlink(missing_ok=True)
            deleted += 1
    logger.debug("Deleted %d file(s) matching %s under %s", deleted, pattern, directory)
    return deleted


def write_text_atomic(path: Path, content: str) -> None:
    """Write text to a file atomically.

    Writes to a temporary file in the same directory and renames it over the
    target with os.replace(), so readers never see a partial file. An existing
    target keeps its permission bits; a new file gets FILE_MODE.

    Args:
        path: Destination file.
        content: Text to write (UTF-8).

    Raises:
        OSError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
        # NamedTemporaryFile creates 0600 files
        if path.exists():
            shutil.copymode(path, tmp_path)
        else:
            tmp_path.chmod(FILE_MODE)
        os.replace(str(tmp_path), str(path))
    except OSError:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise


@contextmanager
def run_workspace(base: Path | None = None) -> Iterator[Path]:
    """Provide the root temporary directory for one run.

    Args:
        base: Directory to create the workspace in. Defaults to the system
            temporary directory.

    Yields:
        Path to the freshly created workspace root.
    """
    root = (base or get_temp_root()) / f"{APP_NAME}-{uuid.uuid4().hex}"
    create_directory(root)
    logger.debug("Created workspace %s", root)
    try:
        yield root
    finally:
        remove_tree(root)


@contextmanager
def version_directory(root: Path) -> Iterator[Path]:
    """Provide a fresh per-version directory inside the run workspace.

    Args:
        root: Run workspace root.

    Yields:
        Path to the new, empty version directory.
    """
    directory = create_directory(root / uuid.uuid4().hex)
    try:
        yield directory
    finally:
        remove_tree(directory)
