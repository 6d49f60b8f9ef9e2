"""CLI commands for the stash tree and stash list."""

import json

import typer

from stashtree.formatters import format_stash_list, format_topology
from stashtree.git import GitError
from stashtree.inspection import inspect_repository
from stashtree.cli.utils import open_repository


def tree_command(
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the topology as JSON",
    ),
    with_diffs: bool = typer.Option(
        False,
        "--diffs",
        help="Also reconstruct each stash's diff and show file counts",
    ),
) -> None:
    """Show stashes grouped by the branch they were taken from."""
    try:
        backend, settings = open_repository()
        inspection = inspect_repository(backend, settings, with_diffs=with_diffs)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if json_output:
        data = inspection.topology.to_dict()
        if inspection.diffs is not None:
            data["diffs"] = {
                str(index): document.to_dict()
                for index, document in sorted(inspection.diffs.documents.items())
            }
            data["diff_failures"] = {
                str(index): failure.reason
                for index, failure in sorted(inspection.diffs.failures.items())
            }
        typer.echo(json.dumps(data, indent=2))
        return

    if not inspection.stashes:
        typer.echo("No stashes found.")
        return

    typer.echo(format_topology(inspection.topology, inspection.diffs))


def list_command() -> None:
    """List stashes with the branch each one belongs to."""
    try:
        backend, settings = open_repository()
        inspection = inspect_repository(backend, settings)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not inspection.stashes:
        typer.echo("No stashes found.")
        return

    typer.echo(format_stash_list(inspection.stashes, inspection.topology))
