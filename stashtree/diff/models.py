"""Data models for stashtree diffs.

Contains:
- FileHeader, HunkHeader, LineRecord: events produced by a diff event source
- DiffLine: One line of a hunk
- Hunk: A contiguous change region
- DiffItem: One file's change
- DiffDocument: Ordered file changes for one stash-vs-base comparison
"""

from dataclasses import dataclass, field
from typing import Optional, Union

# Line origins kept by the reconstruction engine
CONTEXT = " "
ADDITION = "+"
DELETION = "-"
ACCEPTED_ORIGINS = frozenset({CONTEXT, ADDITION, DELETION})


@dataclass(frozen=True)
class FileHeader:
    """Start of a file pair in the diff stream."""

    old_path: Optional[str]  # None for newly created files
    new_path: Optional[str]  # None for deleted files


@dataclass(frozen=True)
class HunkHeader:
    """Start of a hunk in the diff stream."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int


@dataclass(frozen=True)
class LineRecord:
    """A single line record. Origins outside ' ', '+', '-' are noise."""

    origin: str
    content: Union[str, bytes]


DiffEvent = Union[FileHeader, HunkHeader, LineRecord]


@dataclass(frozen=True)
class DiffLine:
    """One line of a hunk."""

    origin: str  # '-', '+', or ' ' (context)
    content: str  # Line text without its terminator

    def to_dict(self) -> dict:
        return {"origin": self.origin, "content": self.content}


@dataclass
class Hunk:
    """A contiguous change region.

    The counts come from the source's header and are not recomputed from
    ``lines``.
    """

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: list[DiffLine] = field(default_factory=list)

    @property
    def header(self) -> str:
        """The ``@@ ... @@`` line for this hunk."""
        return f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"

    @property
    def additions(self) -> int:
        return sum(1 for line in self.lines if line.origin == ADDITION)

    @property
    def deletions(self) -> int:
        return sum(1 for line in self.lines if line.origin == DELETION)

    def to_dict(self) -> dict:
        return {
            "old_start": self.old_start,
            "old_lines": self.old_lines,
            "new_start": self.new_start,
            "new_lines": self.new_lines,
            "lines": [line.to_dict() for line in self.lines],
        }


@dataclass
class DiffItem:
    """Diff for a single file containing multiple hunks."""

    old_path: Optional[str]
    new_path: Optional[str]
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def paths(self) -> tuple[Optional[str], Optional[str]]:
        return (self.old_path, self.new_path)

    @property
    def display_path(self) -> str:
        """Best single path for display (new path, else old path)."""
        if self.new_path and self.old_path and self.new_path != self.old_path:
            return f"{self.old_path} => {self.new_path}"
        return self.new_path or self.old_path or ""

    @property
    def is_new_file(self) -> bool:
        return self.old_path is None

    @property
    def is_deleted_file(self) -> bool:
        return self.new_path is None

    @property
    def additions(self) -> int:
        return sum(hunk.additions for hunk in self.hunks)

    @property
    def deletions(self) -> int:
        return sum(hunk.deletions for hunk in self.hunks)

    def to_dict(self) -> dict:
        return {
            "old_path": self.old_path,
            "new_path": self.new_path,
            "hunks": [hunk.to_dict() for hunk in self.hunks],
        }


@dataclass
class DiffDocument:
    """Ordered list of DiffItem for one stash-vs-base comparison."""

    items: list[DiffItem] = field(default_factory=list)

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> DiffItem:
        return self.items[index]

    def to_dict(self) -> dict:
        return {"items": [item.to_dict() for item in self.items]}
