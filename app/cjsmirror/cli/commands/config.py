"""Config command implementation.

Shows and initializes the mirror configuration file.
"""

from typing import Annotated

import tomli_w
import typer

from cjsmirror.cli.types import ConfigOption, require_config
from cjsmirror.core.config import MirrorConfig, MirrorConfigError, config_to_dict, save_config
from cjsmirror.core.paths import get_config_path
from cjsmirror.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the mirror configuration.",
    no_args_is_help=True,
)


@app.command()
def show(config_path: ConfigOption = None) -> None:
    """Print the effective configuration as TOML."""
    path = config_path or get_config_path()
    config = require_config(config_path)

    origin = str(path) if path.exists() else "built-in defaults"
    console.print(f"[muted]# {origin}[/muted]", soft_wrap=True)
    console.print(
        tomli_w.dumps(config_to_dict(config)),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def init(
    config_path: ConfigOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write the default configuration file."""
    path = config_path or get_config_path()

    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(MirrorConfig(), path)
    except MirrorConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written: {saved}")
