"""Mirror configuration and settings.

This module provides the configuration model and I/O functions describing
which package is mirrored, under which name, and which tools do the work.

Configuration is stored in ~/.config/cjsmirror/mirror.toml. The file is
optional; without it the defaults mirror hyperapp as hyperapp-cjs.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cjsmirror.core.paths import get_config_path

logger = logging.getLogger(__name__)

BABEL_PLUGIN = "@babel/plugin-transform-modules-commonjs"

DEFAULT_BABEL_COMMAND: list[str] = [
    "npx",
    "--yes",
    "-p",
    "@babel/cli",
    "-p",
    "@babel/core",
    "-p",
    BABEL_PLUGIN,
    "babel",
]


class MirrorConfig(BaseModel):
    """Configuration for a mirror run.

    Attributes:
        source_package: Registry name of the ES-module package to mirror.
        mirror_package: Registry name the CommonJS copy is published under.
        repository: Value written to the mirror manifest's repository field.
        description: Value written to the mirror manifest's description field.
        upstream_name: Display name of the upstream project in the README.
        upstream_url: Homepage of the upstream project in the README.
        npm_command: Executable used for registry operations.
        babel_command: Command line that invokes the Babel CLI.
        babel_plugin: Babel plugin performing the module transform.
        map_pattern: Glob of source-map files removed before publishing.
        timeout_seconds: Per-command timeout, or None to wait indefinitely.
    """

    model_config = ConfigDict(extra="forbid")

    source_package: Annotated[str, Field(min_length=1)] = "hyperapp"
    mirror_package: Annotated[str, Field(min_length=1)] = "hyperapp-cjs"
    repository: str = "jameswilddev/hyperapp-cjs"
    description: str = "A mirror of Hyperapp, transpiled from a MJS to a CJS using Babel."
    upstream_name: str = "Hyperapp"
    upstream_url: str = "https://github.com/jorgebucaran/hyperapp"
    npm_command: Annotated[str, Field(min_length=1)] = "npm"
    babel_command: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BABEL_COMMAND),
        min_length=1,
    )
    babel_plugin: str = BABEL_PLUGIN
    map_pattern: str = "*.map"
    timeout_seconds: Annotated[
        int | None,
        Field(ge=10, le=7200, description="Timeout in seconds (10-7200), unset for none"),
    ] = None

    def source_page_url(self, version: str) -> str:
        """Registry web page of the source package at a given version."""
        return f"https://www.npmjs.com/package/{self.source_package}/v/{version}"


class MirrorConfigError(Exception):
    """Base exception for mirror configuration errors."""


class MirrorConfigNotFoundError(MirrorConfigError):
    """Raised when the mirror config file is not found."""


class MirrorConfigParseError(MirrorConfigError):
    """Raised when the mirror config file cannot be parsed."""


def load_config(path: Path | None = None) -> MirrorConfig:
    """Load mirror configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated MirrorConfig object.

    Raises:
        MirrorConfigNotFoundError: If the config file doesn't exist.
        MirrorConfigParseError: If the TOML syntax is invalid.
        MirrorConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise MirrorConfigNotFoundError(f"Mirror config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise MirrorConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise MirrorConfigError(f"Failed to read mirror config: {e}") from e

    try:
        return MirrorConfig.model_validate(data)
    except ValidationError as e:
        raise MirrorConfigError(f"Invalid mirror config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> MirrorConfig:
    """Load the config file, falling back to defaults when it does not exist.

    An explicitly given path must exist; only the default location is optional.

    Raises:
        MirrorConfigError: If the file exists but is invalid, or an explicit
            path is missing.
    """
    try:
        return load_config(path)
    except MirrorConfigNotFoundError:
        if path is not None:
            raise
        logger.debug("No config at %s, using defaults", get_config_path())
        return MirrorConfig()


def save_config(config: MirrorConfig, path: Path | None = None) -> Path:
    """Save mirror configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The MirrorConfig object to save.
        path: Path to save the config. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        MirrorConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise MirrorConfigError(f"Failed to write mirror config: {e}") from e

    return config_path


def config_to_dict(config: MirrorConfig) -> dict[str, object]:
    """Convert MirrorConfig to a dictionary for TOML serialization.

    TOML has no null, so an unset timeout is omitted.
    """
    return config.model_dump(exclude_none=True)
