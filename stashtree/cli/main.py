"""Main CLI callback: global options and the default command."""

import typer

from stashtree.cli.tree import tree_command
from stashtree.cli.utils import configure_logging


def _version_callback(value: bool) -> None:
    if value:
        from stashtree import __version__

        typer.echo(f"stashtree {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Show git stashes as a tree of the branches they were taken from."""
    configure_logging(verbose)

    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    tree_command(json_output=False, with_diffs=False)
