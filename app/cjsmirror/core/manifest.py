"""package.json handling for mirrored versions.

Reads the source manifest, decides whether it is an ES-module package, and
rewrites the handful of fields that identify the mirror.
"""

import json
import logging
from pathlib import Path
from typing import Any

from cjsmirror.core.config import MirrorConfig
from cjsmirror.core.errors import ManifestError
from cjsmirror.core.workspace import write_text_atomic

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"

# Value of the "type" field for ES-module packages
MODULE_TYPE = "module"


def load_manifest(path: Path) -> dict[str, Any]:
    """Read and parse a package.json file.

    Args:
        path: Path to package.json.

    Returns:
        The manifest as a dictionary, key order preserved.

    Raises:
        ManifestError: If the file cannot be read or is not a JSON object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Failed to read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ManifestError(f"{path} is not valid UTF-8: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{path} does not contain a JSON object")
    return data


def is_es_module(manifest: dict[str, Any]) -> bool:
    """Check whether a manifest declares an ES-module package."""
    return manifest.get("type") == MODULE_TYPE


def main_entry(manifest: dict[str, Any], package_dir: Path) -> Path:
    """Resolve the manifest's main entry point inside the package.

    Args:
        manifest: Parsed package.json.
        package_dir: Unpacked package directory.

    Returns:
        Path to the main entry file.

    Raises:
        ManifestError: If "main" is absent, escapes the package, or the file is missing.
    """
    main = manifest.get("main")
    if not isinstance(main, str) or not main:
        raise ManifestError("package.json declares no main entry point")

    entry = (package_dir / main).resolve()
    if not entry.is_relative_to(package_dir.resolve()):
        raise ManifestError(f"Main entry point {main!r} is outside the package")
    if not entry.is_file():
        raise ManifestError(f"Main entry point {main!r} does not exist")
    return entry


def transform_manifest(manifest: dict[str, Any], config: MirrorConfig) -> dict[str, Any]:
    """Turn a source manifest into the mirror's manifest.

    Replaces repository, name and description, and drops the module type
    marker. Every other field is carried over unchanged, in its original
    position.

    Args:
        manifest: Parsed source package.json. Not modified.
        config: Mirror configuration providing the replacement values.

    Returns:
        A new manifest dictionary.
    """
    result = dict(manifest)
    result["repository"] = config.repository
    result["name"] = config.mirror_package
    result["description"] = config.description
    result.pop("type", None)
    return result


def dump_manifest(manifest: dict[str, Any]) -> str:
    """Serialize a manifest as compact JSON."""
    return json.dumps(manifest, separators=(",", ":"), ensure_ascii=False)


def write_manifest(path: Path, manifest: dict[str, Any]) -> None:
    """Write a manifest to disk as compact JSON.

    Raises:
        ManifestError: If the file cannot be written.
    """
    try:
        write_text_atomic(path, dump_manifest(manifest))
    except OSError as e:
        raise ManifestError(f"Failed to write {path}: {e}") from e
    logger.debug("Wrote %s", path)
