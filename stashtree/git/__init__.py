"""Git access for stashtree.

This package provides read-only repository access with:
- exceptions: GitError, StashtreeError, EnumerationError, ResolutionError,
              GraphError, HeadError, DiffSourceError
- models: StashRecord, BaseCommit
- runner: _run_git_command, _git_exit_code, get_repo_root
- branch: get_current_branch, get_local_branches, is_ancestor, get_base_commit
- stash: get_stashes
- repository: RepositoryBackend, GitRepository
"""

# Exceptions
from stashtree.git.exceptions import (
    DiffSourceError,
    EnumerationError,
    GitError,
    GraphError,
    HeadError,
    ResolutionError,
    StashtreeError,
)

# Models
from stashtree.git.models import (
    BaseCommit,
    StashRecord,
)

# Runner utilities
from stashtree.git.runner import (
    _git_exit_code,
    _run_git_command,
    get_repo_root,
)

# Branch and graph utilities
from stashtree.git.branch import (
    get_base_commit,
    get_current_branch,
    get_local_branches,
    is_ancestor,
)

# Stash utilities
from stashtree.git.stash import (
    get_stashes,
)

# Backends
from stashtree.git.repository import (
    GitRepository,
    RepositoryBackend,
)


__all__ = [
    # Exceptions
    "GitError",
    "StashtreeError",
    "EnumerationError",
    "ResolutionError",
    "GraphError",
    "HeadError",
    "DiffSourceError",
    # Models
    "BaseCommit",
    "StashRecord",
    # Runner
    "_git_exit_code",
    "_run_git_command",
    "get_repo_root",
    # Branch
    "get_base_commit",
    "get_current_branch",
    "get_local_branches",
    "is_ancestor",
    # Stash
    "get_stashes",
    # Backends
    "GitRepository",
    "RepositoryBackend",
]
