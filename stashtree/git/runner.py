"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- _git_exit_code: Run a git command and return only its exit status
- get_repo_root: Get the root directory of the current git repository
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from stashtree.git.exceptions import GitError

logger = logging.getLogger(__name__)


def _run_git_command(args: list[str], cwd: Optional[Path] = None, strip: bool = True) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in (defaults to the process cwd).
        strip: Strip surrounding whitespace; when False only trailing
            newlines are removed.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            errors="replace",
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip() if strip else result.stdout.rstrip("\n")
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def _git_exit_code(args: list[str], cwd: Optional[Path] = None) -> int:
    """Run a git command whose answer is its exit status.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in.

    Returns:
        The process return code.

    Raises:
        GitError: If git cannot be started.
    """
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
            cwd=cwd,
        )
        return result.returncode
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
