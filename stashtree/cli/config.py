"""CLI commands for per-repository configuration."""

import typer

from stashtree.config import ConfigError, load_settings, set_setting
from stashtree.git import GitError, get_repo_root

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage settings in .stashtree/config.yaml",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show the current repository settings."""
    try:
        repo_root = get_repo_root()
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    settings = load_settings(repo_root)
    typer.echo("Current stashtree settings (.stashtree/config.yaml):")
    typer.echo()
    for key, value in settings.model_dump().items():
        typer.echo(f"  {key}: {value}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Setting name (e.g., context_lines, pager)"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a repository setting."""
    try:
        repo_root = get_repo_root()
        settings = set_setting(repo_root, key, value)
    except (GitError, ConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Set {key} = {getattr(settings, key)}")
