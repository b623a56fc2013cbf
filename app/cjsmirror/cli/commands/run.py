"""Run command implementation.

Mirrors every source version the mirror package does not have yet.
"""

from typing import Annotated

import typer

from cjsmirror.cli.display import narrate, print_outcome_summary
from cjsmirror.cli.types import ConfigOption, require_config
from cjsmirror.core.pipeline import build_pipeline
from cjsmirror.utils.formatting import print_error, print_success, print_warning

app = typer.Typer(
    help="Mirror all unmirrored versions.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def run_mirror(
    config_path: ConfigOption = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Do everything except upload (npm publish --dry-run).",
        ),
    ] = False,
) -> None:
    """Mirror all unmirrored versions of the source package.

    Versions are processed newest first. The run stops at the first
    failure; already published versions stay published and a rerun
    continues with the rest.

    Examples:
        cjsmirror run                  # Mirror everything missing
        cjsmirror run --dry-run        # Rehearse without publishing
        cjsmirror run -c mirror.toml   # Use a specific config
    """
    config = require_config(config_path)
    pipeline = build_pipeline(config, dry_run=dry_run, narrate=narrate)

    if not pipeline.registry.is_available():
        print_error(f"{config.npm_command} is not available on this system.")
        raise typer.Exit(code=1)
    if not pipeline.transpiler.is_available():
        print_warning(f"{config.babel_command[0]} not found on PATH; transpiling will fail.")

    outcome = pipeline.run()

    if not outcome.success:
        print_error(f"{outcome.message}.")
        if outcome.published:
            print_outcome_summary(outcome, dry_run=dry_run)
        raise typer.Exit(code=outcome.exit_code)

    print_outcome_summary(outcome, dry_run=dry_run)
    print_success("Done.")
