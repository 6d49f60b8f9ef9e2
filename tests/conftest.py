"""Shared test fixtures and configuration."""

import subprocess
import tempfile
from pathlib import Path

import pytest

from stashtree.git import (
    BaseCommit,
    DiffSourceError,
    EnumerationError,
    GraphError,
    HeadError,
    RepositoryBackend,
    ResolutionError,
    StashRecord,
)


class FakeRepository(RepositoryBackend):
    """In-memory backend.

    Args:
        stashes: StashRecords returned by enumerate_stashes.
        bases: stash commit id -> (base commit id, timestamp).
        parents: commit id -> parent commit ids, used for ancestry.
        branches: (name, tip) pairs in the order returned.
        head: Current branch name, or None for a detached HEAD.
        diffs: (base, target) -> list of diff events.
        broken_tips: Tips whose ancestry checks raise GraphError.
    """

    def __init__(
        self,
        stashes=None,
        bases=None,
        parents=None,
        branches=None,
        head="main",
        diffs=None,
        broken_tips=(),
        fail_branches=False,
    ):
        self.stashes = list(stashes or [])
        self.bases = dict(bases or {})
        self.parents = dict(parents or {})
        self.branches = list(branches or [])
        self.head = head
        self.diffs = dict(diffs or {})
        self.broken_tips = set(broken_tips)
        self.fail_branches = fail_branches
        self.ancestry_calls = []

    def enumerate_stashes(self):
        return list(self.stashes)

    def resolve_base_commit(self, stash_commit_id):
        if stash_commit_id not in self.bases:
            raise ResolutionError(f"Cannot resolve base commit of {stash_commit_id}")
        commit_id, timestamp = self.bases[stash_commit_id]
        return BaseCommit(commit_id=commit_id, timestamp=timestamp)

    def is_ancestor(self, candidate_id, tip_id):
        self.ancestry_calls.append((candidate_id, tip_id))
        if tip_id in self.broken_tips:
            raise GraphError(f"Ancestry check failed for {candidate_id}..{tip_id}")
        seen = set()
        queue = [tip_id]
        while queue:
            commit = queue.pop()
            if commit == candidate_id:
                return True
            if commit in seen:
                continue
            seen.add(commit)
            queue.extend(self.parents.get(commit, []))
        return False

    def local_branches(self):
        if self.fail_branches:
            raise EnumerationError("Cannot list local branches")
        return list(self.branches)

    def current_branch_name(self):
        if self.head is None:
            raise HeadError("HEAD does not point to a branch")
        return self.head

    def diff_events(self, base_id, target_id):
        if (base_id, target_id) not in self.diffs:
            raise DiffSourceError(f"Commit not found: {target_id}")
        return iter(self.diffs[(base_id, target_id)])


def stash(index, commit_id, message=None):
    """Build a StashRecord with a default message."""
    return StashRecord(index=index, message=message or f"WIP {index}", commit_id=commit_id)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def git(repo_dir, *args):
    """Run a git command in a test repository."""
    return subprocess.run(
        ["git", *args],
        cwd=repo_dir,
        capture_output=True,
        text=True,
        check=True,
    ).stdout.strip()


@pytest.fixture
def temp_repo(tmp_path):
    """Create a temporary git repository on branch main with one commit."""
    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    git(repo_dir, "init")
    git(repo_dir, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo_dir, "config", "user.email", "test@example.com")
    git(repo_dir, "config", "user.name", "Test User")
    git(repo_dir, "config", "commit.gpgsign", "false")

    (repo_dir / "README.md").write_text("# Test Repo\n")
    git(repo_dir, "add", "README.md")
    git(repo_dir, "commit", "-m", "Initial commit")

    return repo_dir
