"""CLI command for showing a stash's reconstructed diff."""

import json

import typer

from stashtree.diff import format_diff_stat, render_document
from stashtree.git import GitError
from stashtree.inspection import find_stash, stash_diff
from stashtree.cli.utils import colorize_diff, open_repository, show_in_pager


def show_command(
    index: int = typer.Argument(
        0,
        help="Stash index (N in stash@{N})",
    ),
    stat: bool = typer.Option(
        False,
        "--stat",
        help="Show per-file change counts instead of the full diff",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the reconstructed diff as JSON",
    ),
    no_pager: bool = typer.Option(
        False,
        "--no-pager",
        help="Print directly instead of using a pager",
    ),
) -> None:
    """Show the diff between a stash and the commit it was taken from."""
    try:
        backend, settings = open_repository()
        stash = find_stash(backend.enumerate_stashes(), index)
        document = stash_diff(backend, stash)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps({"stash": stash.ref, "message": stash.message, **document.to_dict()}, indent=2))
        return

    header = f"{stash.ref}: {stash.message}"
    if stat:
        typer.echo(header)
        typer.echo(format_diff_stat(document))
        return

    text = render_document(document)
    if not text:
        typer.echo(header)
        typer.echo("(no changes)")
        return

    if settings.color:
        text = colorize_diff(text)
    output = f"{header}\n\n{text}"

    if settings.pager and not no_pager:
        show_in_pager(output)
    else:
        typer.echo(output.rstrip("\n"))
