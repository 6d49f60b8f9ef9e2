"""Repository backends for stash inspection.

Contains:
- RepositoryBackend: Abstract read-only capability object passed into
  every core operation
- GitRepository: Backend driven by the git command line
"""

import logging
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional

from stashtree.diff.events import iter_diff_events
from stashtree.diff.models import DiffEvent
from stashtree.git.branch import (
    get_base_commit,
    get_current_branch,
    get_local_branches,
    is_ancestor,
)
from stashtree.git.exceptions import DiffSourceError, GitError
from stashtree.git.models import BaseCommit, StashRecord
from stashtree.git.runner import _run_git_command, get_repo_root
from stashtree.git.stash import get_stashes

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_LINES = 3


class RepositoryBackend(ABC):
    """Read-only view of a repository used by the topology builder and the
    diff collector."""

    @abstractmethod
    def enumerate_stashes(self) -> list[StashRecord]:
        """List stash entries, most recent first. Raises EnumerationError."""
        pass

    @abstractmethod
    def resolve_base_commit(self, stash_commit_id: str) -> BaseCommit:
        """Return the stash commit's first parent. Raises ResolutionError."""
        pass

    @abstractmethod
    def is_ancestor(self, candidate_id: str, tip_id: str) -> bool:
        """Check reachability of candidate_id from tip_id. Raises GraphError."""
        pass

    @abstractmethod
    def local_branches(self) -> list[tuple[str, str]]:
        """List (name, tip commit id) in a deterministic order. Raises EnumerationError."""
        pass

    @abstractmethod
    def current_branch_name(self) -> str:
        """Short name of the checked-out branch. Raises HeadError."""
        pass

    @abstractmethod
    def diff_events(self, base_id: str, target_id: str) -> Iterator[DiffEvent]:
        """Single-pass diff events from base to target. Raises DiffSourceError."""
        pass


class GitRepository(RepositoryBackend):
    """Backend that shells out to git for a repository on disk."""

    def __init__(self, repo_root: Path, context_lines: int = DEFAULT_CONTEXT_LINES):
        self.repo_root = Path(repo_root)
        self.context_lines = context_lines

    @classmethod
    def discover(cls, path: Optional[Path] = None, context_lines: int = DEFAULT_CONTEXT_LINES) -> "GitRepository":
        """Open the repository containing ``path`` (default: cwd).

        Raises:
            GitError: If not in a git repository.
        """
        return cls(get_repo_root(cwd=path), context_lines=context_lines)

    def enumerate_stashes(self) -> list[StashRecord]:
        return get_stashes(cwd=self.repo_root)

    def resolve_base_commit(self, stash_commit_id: str) -> BaseCommit:
        commit_id, timestamp = get_base_commit(stash_commit_id, cwd=self.repo_root)
        return BaseCommit(commit_id=commit_id, timestamp=timestamp)

    def is_ancestor(self, candidate_id: str, tip_id: str) -> bool:
        return is_ancestor(candidate_id, tip_id, cwd=self.repo_root)

    def local_branches(self) -> list[tuple[str, str]]:
        return get_local_branches(cwd=self.repo_root)

    def current_branch_name(self) -> str:
        return get_current_branch(cwd=self.repo_root)

    def _verify_commit(self, commit_id: str) -> None:
        try:
            _run_git_command(["rev-parse", "--verify", "--quiet", f"{commit_id}^{{commit}}"], cwd=self.repo_root)
        except GitError:
            raise DiffSourceError(f"Commit not found: {commit_id}")

    def diff_events(self, base_id: str, target_id: str) -> Iterator[DiffEvent]:
        """Stream ``git diff base target`` as diff events.

        Both commits are checked before git is started. If git exits with an
        error the generator raises DiffSourceError after the last event, so a
        consumer folding the stream never ends up with a partial document.
        """
        self._verify_commit(base_id)
        self._verify_commit(target_id)
        return self._stream_diff(base_id, target_id)

    def _stream_diff(self, base_id: str, target_id: str) -> Iterator[DiffEvent]:
        args = [
            "git",
            "-c",
            "core.quotePath=false",
            "diff",
            "--no-color",
            "--no-ext-diff",
            # The parser expects a/ and b/ whatever diff.noprefix says
            "--src-prefix=a/",
            "--dst-prefix=b/",
            f"-U{self.context_lines}",
            base_id,
            target_id,
        ]
        logger.debug("%s", " ".join(args))
        with tempfile.TemporaryFile() as errors:
            try:
                proc = subprocess.Popen(
                    args,
                    stdout=subprocess.PIPE,
                    stderr=errors,
                    cwd=self.repo_root,
                )
            except FileNotFoundError:
                raise DiffSourceError("Git is not installed or not in PATH.")

            with proc:
                try:
                    yield from iter_diff_events(proc.stdout)
                except GeneratorExit:
                    # Consumer stopped early
                    proc.kill()
                    raise
                returncode = proc.wait()

            errors.seek(0)
            stderr = errors.read().decode("utf-8", errors="replace").strip()

        if returncode != 0:
            raise DiffSourceError(f"Git command failed: git diff {base_id} {target_id}\n{stderr}")
