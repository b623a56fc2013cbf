"""Pending command implementation.

Shows which source versions a run would mirror, without changing anything.
"""

import json
from typing import Annotated

import typer

from cjsmirror.cli.display import narrate, print_pending_table
from cjsmirror.cli.types import ConfigOption, require_config
from cjsmirror.core.errors import MirrorError
from cjsmirror.core.pipeline import build_pipeline
from cjsmirror.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="List versions waiting to be mirrored.",
    invoke_without_command=True,
)


def _quiet(message: str, depth: int = 0) -> None:
    """Narrator that discards progress (keeps JSON output clean)."""


@app.callback(invoke_without_command=True)
def list_pending(
    config_path: ConfigOption = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """List source versions missing from the mirror package, newest first.

    Examples:
        cjsmirror pending              # Table of pending versions
        cjsmirror pending --json       # JSON output for scripting
    """
    config = require_config(config_path)
    pipeline = build_pipeline(config, narrate=_quiet if json_output else narrate)

    try:
        diff = pipeline.discover()
    except MirrorError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(diff.to_dict()))
        return

    if diff.is_in_sync:
        print_success(f"{config.mirror_package} is up to date with {config.source_package}.")
        return

    print_pending_table(diff)
