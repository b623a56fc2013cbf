"""Shared CLI option types and helpers used across commands."""

from pathlib import Path
from typing import Annotated

import typer

from cjsmirror.core.config import MirrorConfig, MirrorConfigError, load_config_or_default
from cjsmirror.utils.formatting import print_error, print_info

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Mirror config file (default: ~/.config/cjsmirror/mirror.toml).",
        dir_okay=False,
    ),
]


def require_config(path: Path | None) -> MirrorConfig:
    """Load the mirror configuration or exit with an error.

    Args:
        path: Explicit config path, or None for the default location.

    Returns:
        Validated MirrorConfig (defaults if the default file is absent).

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    try:
        return load_config_or_default(path)
    except MirrorConfigError as e:
        print_error(str(e))
        print_info("Run 'cjsmirror config init' to create a default configuration.")
        raise typer.Exit(code=1) from e
