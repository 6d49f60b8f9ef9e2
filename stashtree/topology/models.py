"""Data models for the stash topology.

Contains:
- AttributedStash: A stash paired with its resolved base commit
- StashRef / BranchRef: Tagged references held by a BranchNode
- BranchNode: One branch's entry in the topology tree
- StashFailure: A stash that could not be resolved
- Topology: Root branch node, orphans, errors and warnings
"""

from dataclasses import dataclass, field
from typing import Union

from stashtree.git.exceptions import StashtreeError
from stashtree.git.models import BaseCommit, StashRecord

# Timestamp used for branches without any stash
EPOCH = 0


@dataclass(frozen=True)
class AttributedStash:
    """A stash with its resolved base commit."""

    stash: StashRecord
    base: BaseCommit

    @property
    def timestamp(self) -> int:
        return self.base.timestamp


@dataclass(frozen=True)
class StashRef:
    """Reference to a stash inside a branch node."""

    entry: AttributedStash

    @property
    def sort_key(self) -> int:
        return self.entry.timestamp


@dataclass
class BranchNode:
    """One branch's topology entry."""

    name: str
    timestamp: int = EPOCH
    refs: list["Reference"] = field(default_factory=list)

    @property
    def stashes(self) -> list[AttributedStash]:
        """Stashes directly attributed to this branch."""
        return [ref.entry for ref in self.refs if isinstance(ref, StashRef)]

    @property
    def branches(self) -> list["BranchNode"]:
        """Nested branch nodes."""
        return [ref.branch for ref in self.refs if isinstance(ref, BranchRef)]


@dataclass
class BranchRef:
    """Reference to a nested branch node."""

    branch: BranchNode

    @property
    def sort_key(self) -> int:
        first = self.branch.refs[0] if self.branch.refs else None
        if isinstance(first, StashRef):
            return first.entry.timestamp
        if isinstance(first, BranchRef):
            return first.branch.timestamp
        return EPOCH


Reference = Union[StashRef, BranchRef]


@dataclass(frozen=True)
class StashFailure:
    """A stash whose data could not be read."""

    stash: StashRecord
    error: StashtreeError

    @property
    def reason(self) -> str:
        message = str(self.error).strip()
        return message.splitlines()[0] if message else type(self.error).__name__


@dataclass
class Topology:
    """Complete stash topology for a repository."""

    root: BranchNode
    orphans: list[AttributedStash] = field(default_factory=list)
    errors: list[StashFailure] = field(default_factory=list)
    warnings: list[StashtreeError] = field(default_factory=list)

    def owner_of(self, stash: StashRecord) -> Union[str, None]:
        """Name of the branch a stash is attributed to, or None."""
        for entry in self.root.stashes:
            if entry.stash == stash:
                return self.root.name
        for branch in self.root.branches:
            for entry in branch.stashes:
                if entry.stash == stash:
                    return branch.name
        return None

    def to_dict(self) -> dict:
        return {
            "root": _branch_to_dict(self.root),
            "orphans": [_stash_to_dict(entry) for entry in self.orphans],
            "errors": [
                {"index": failure.stash.index, "message": failure.stash.message, "error": failure.reason}
                for failure in self.errors
            ],
            "warnings": [str(warning) for warning in self.warnings],
        }


def _stash_to_dict(entry: AttributedStash) -> dict:
    return {
        "index": entry.stash.index,
        "message": entry.stash.message,
        "commit_id": entry.stash.commit_id,
        "base_commit_id": entry.base.commit_id,
        "timestamp": entry.base.timestamp,
    }


def _branch_to_dict(node: BranchNode) -> dict:
    refs = []
    for ref in node.refs:
        if isinstance(ref, StashRef):
            refs.append({"stash": _stash_to_dict(ref.entry)})
        else:
            refs.append({"branch": _branch_to_dict(ref.branch)})
    return {"name": node.name, "timestamp": node.timestamp, "refs": refs}
