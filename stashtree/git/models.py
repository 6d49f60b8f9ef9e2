"""Data models for repository records.

Contains:
- StashRecord: Identity of one stash entry
- BaseCommit: The commit a stash was taken from
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StashRecord:
    """One stash entry as listed by the repository."""

    index: int  # Position in the stash list, 0 is most recent
    message: str
    commit_id: str

    @property
    def ref(self) -> str:
        return f"stash@{{{self.index}}}"


@dataclass(frozen=True)
class BaseCommit:
    """First parent of a stash commit."""

    commit_id: str
    timestamp: int  # Seconds since epoch
