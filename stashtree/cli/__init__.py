"""CLI entry point for stashtree.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from stashtree.cli.config import config_app
from stashtree.cli.main import main_command
from stashtree.cli.show import show_command
from stashtree.cli.tree import list_command, tree_command

# Main application
app = typer.Typer(
    name="stashtree",
    help="stashtree: browse git stashes by branch",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("tree")(tree_command)
app.command("list")(list_command)
app.command("show")(show_command)

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "main_command",
    "tree_command",
    "list_command",
    "show_command",
]
