"""Git-related exception classes.

Contains all exception classes for stash inspection:
- GitError: Base exception for git-related errors
- StashtreeError: Base of the stash inspection error taxonomy
- EnumerationError: Stashes or branches cannot be listed (fatal)
- ResolutionError: A stash's base commit cannot be read (per stash)
- GraphError: An ancestry query failed (per branch check)
- HeadError: No checked-out branch could be resolved
- DiffSourceError: A stash's diff stream could not be produced
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class StashtreeError(GitError):
    """Base class for errors raised while inspecting stashes."""

    pass


class EnumerationError(StashtreeError):
    """Raised when the stash list or the local branch list cannot be read."""

    pass


class ResolutionError(StashtreeError):
    """Raised when a stash commit or its first parent cannot be found."""

    pass


class GraphError(StashtreeError):
    """Raised when an ancestry query between two commits fails."""

    pass


class HeadError(StashtreeError):
    """Raised when HEAD is unborn or detached."""

    pass


class DiffSourceError(StashtreeError):
    """Raised when the diff between a stash and its base cannot be produced."""

    pass
