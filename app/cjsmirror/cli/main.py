"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from cjsmirror import __version__
from cjsmirror.cli.commands import config, pending, run
from cjsmirror.utils.formatting import err_console

app = typer.Typer(
    name="cjsmirror",
    help="Republish ES-module npm packages as CommonJS mirrors.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cjsmirror version {__version__}")
        raise typer.Exit()


def configure_logging() -> None:
    """Send DEBUG and above log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=True)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """cjsmirror - Republish ES-module npm packages as CommonJS mirrors.

    Lists the versions of the source package, finds the ones the mirror
    package lacks, and publishes a Babel-transpiled copy of each.
    """
    if verbose:
        configure_logging()
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(run.app, name="run")
app.add_typer(pending.app, name="pending")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
