"""Git branch and commit graph utilities.

Contains:
- get_current_branch: Get the checked-out branch name
- get_local_branches: List local branches with their tip commits
- is_ancestor: Check commit reachability
- get_base_commit: Resolve the first parent of a commit and its timestamp
"""

from pathlib import Path
from typing import Optional

from stashtree.git.runner import _git_exit_code, _run_git_command
from stashtree.git.exceptions import (
    EnumerationError,
    GitError,
    GraphError,
    HeadError,
    ResolutionError,
)


def get_current_branch(cwd: Optional[Path] = None) -> str:
    """Get the current branch name.

    Returns:
        The short name of the branch HEAD points to.

    Raises:
        HeadError: If HEAD is detached, unborn or cannot be read.
    """
    try:
        branch = _run_git_command(["symbolic-ref", "--quiet", "--short", "HEAD"], cwd=cwd)
    except GitError as e:
        raise HeadError(f"HEAD is detached or unreadable: {e}")
    if not branch:
        raise HeadError("HEAD does not point to a branch")

    # symbolic-ref also succeeds for a branch with no commits yet
    try:
        code = _git_exit_code(["rev-parse", "--verify", "--quiet", "HEAD"], cwd=cwd)
    except GitError as e:
        raise HeadError(str(e))
    if code != 0:
        raise HeadError(f"HEAD is unborn: branch {branch} has no commits")
    return branch


def get_local_branches(cwd: Optional[Path] = None) -> list[tuple[str, str]]:
    """List local branches and their tip commits.

    The order is git's ref-name order, which is stable for a fixed
    repository state.

    Returns:
        List of (branch name, tip commit id) tuples.

    Raises:
        EnumerationError: If the branch list cannot be read.
    """
    try:
        output = _run_git_command(
            ["for-each-ref", "--format=%(refname:short)%00%(objectname)", "refs/heads/"],
            cwd=cwd,
        )
    except GitError as e:
        raise EnumerationError(f"Cannot list local branches: {e}")

    branches = []
    for line in output.split("\n"):
        if not line:
            continue
        name, _, tip = line.partition("\x00")
        if name and tip:
            branches.append((name, tip))
    return branches


def is_ancestor(candidate_id: str, tip_id: str, cwd: Optional[Path] = None) -> bool:
    """Check whether a commit is reachable from another.

    Args:
        candidate_id: The possible ancestor.
        tip_id: The commit to walk back from.

    Returns:
        True if candidate_id is an ancestor of (or equal to) tip_id.

    Raises:
        GraphError: If git cannot answer (unknown commit, corrupt repo).
    """
    try:
        code = _git_exit_code(["merge-base", "--is-ancestor", candidate_id, tip_id], cwd=cwd)
    except GitError as e:
        raise GraphError(str(e))
    if code == 0:
        return True
    if code == 1:
        return False
    raise GraphError(f"Ancestry check failed for {candidate_id[:12]}..{tip_id[:12]} (exit {code})")


def get_base_commit(commit_id: str, cwd: Optional[Path] = None) -> tuple[str, int]:
    """Resolve the first parent of a commit.

    Args:
        commit_id: The stash commit.

    Returns:
        Tuple of (parent commit id, parent committer timestamp).

    Raises:
        ResolutionError: If the commit or its parent cannot be found.
    """
    try:
        output = _run_git_command(["show", "-s", "--format=%H %ct", f"{commit_id}^1"], cwd=cwd)
    except GitError as e:
        raise ResolutionError(f"Cannot resolve base commit of {commit_id[:12]}: {e}")

    parts = output.split()
    if len(parts) != 2 or not parts[1].isdigit():
        raise ResolutionError(f"Unexpected commit data for {commit_id[:12]}: {output!r}")
    return parts[0], int(parts[1])
