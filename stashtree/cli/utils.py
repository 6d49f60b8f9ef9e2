"""Utility functions for stashtree CLI commands.

Contains:
- configure_logging: Set up stdlib logging for a CLI run
- open_repository: Open the backend and settings for the cwd repository
- colorize_diff: Add ANSI colors to unified diff text
- show_in_pager: Display text in a scrollable pager
"""

import logging
import shutil
import subprocess

import typer

from stashtree.config import StashtreeConfig, get_log_level, load_settings
from stashtree.git import GitRepository


def configure_logging(verbose: bool = False) -> None:
    """Configure stdlib logging for clean CLI output.

    Args:
        verbose: Log at DEBUG instead of the STASHTREE_LOG_LEVEL level.
    """
    level = logging.DEBUG if verbose else getattr(logging, get_log_level())
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def open_repository() -> tuple[GitRepository, StashtreeConfig]:
    """Open the repository containing the cwd and load its settings.

    Returns:
        Tuple of (backend, settings).

    Raises:
        GitError: If not in a git repository.
    """
    repo = GitRepository.discover()
    settings = load_settings(repo.repo_root)
    repo.context_lines = settings.context_lines
    return repo, settings


def colorize_diff(text: str) -> str:
    """Add ANSI color codes to diff lines like git diff.

    - Red for removed lines (-)
    - Green for added lines (+)
    - Cyan for hunk headers (@@)
    - Bold for file header lines

    Args:
        text: Raw diff text.

    Returns:
        Colorized diff text with ANSI escape codes.
    """
    red = "\033[31m"
    green = "\033[32m"
    cyan = "\033[36m"
    bold = "\033[1m"
    reset = "\033[0m"

    colorized = []
    for line in text.split("\n"):
        if line.startswith("@@"):
            colorized.append(f"{cyan}{line}{reset}")
        elif line.startswith("--- a/") or line.startswith("+++ b/"):
            colorized.append(f"{bold}{line}{reset}")
        elif line.startswith("-"):
            colorized.append(f"{red}{line}{reset}")
        elif line.startswith("+"):
            colorized.append(f"{green}{line}{reset}")
        else:
            colorized.append(line)
    return "\n".join(colorized)


def show_in_pager(text: str) -> None:
    """Display text in a scrollable pager.

    Uses less when available, falls back to direct output.

    Args:
        text: The text to display.
    """
    less_path = shutil.which("less")
    if less_path:
        try:
            proc = subprocess.Popen(
                [less_path, "-R", "--quit-if-one-screen"],
                stdin=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
            )
            proc.communicate(input=text)
            return
        except (OSError, BrokenPipeError):
            pass

    typer.echo(text)
