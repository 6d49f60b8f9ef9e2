"""Diff reconstruction engine for stashtree.

Folds a stream of diff events into a DiffDocument:
- DiffBuilder: incremental state machine (feed events, then finish)
- reconstruct: build a DiffDocument from a whole event sequence

The engine never raises on malformed input. Out-of-order or stray events are
absorbed by the boundary rules below.
"""

from typing import Iterable, Optional

from stashtree.diff.models import (
    ACCEPTED_ORIGINS,
    DiffDocument,
    DiffEvent,
    DiffItem,
    DiffLine,
    FileHeader,
    Hunk,
    HunkHeader,
    LineRecord,
)


def _decode(content) -> str:
    """Decode line content, replacing invalid bytes."""
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


class DiffBuilder:
    """Builds a DiffDocument from diff events, one event at a time.

    At most one file item and one hunk are open at any moment. A new file
    header with a different (old, new) path pair closes both; a new hunk
    header with a different (old_start, new_start) pair closes the hunk.
    """

    def __init__(self) -> None:
        self._items: list[DiffItem] = []
        self._item: Optional[DiffItem] = None
        self._hunk: Optional[Hunk] = None

    def feed(self, event: DiffEvent) -> None:
        """Apply one event to the document under construction."""
        if isinstance(event, FileHeader):
            self._on_file(event)
        elif isinstance(event, HunkHeader):
            self._on_hunk(event)
        elif isinstance(event, LineRecord):
            self._on_line(event)

    def finish(self) -> DiffDocument:
        """Flush the open hunk and item and return the document."""
        self._close_item()
        document = DiffDocument(items=self._items)
        self._items = []
        return document

    def _on_file(self, event: FileHeader) -> None:
        if self._item is not None and self._item.paths == (event.old_path, event.new_path):
            return
        self._close_item()
        self._item = DiffItem(old_path=event.old_path, new_path=event.new_path)

    def _on_hunk(self, event: HunkHeader) -> None:
        if self._hunk is not None and (self._hunk.old_start, self._hunk.new_start) == (
            event.old_start,
            event.new_start,
        ):
            return
        self._close_hunk()
        self._hunk = Hunk(
            old_start=event.old_start,
            old_lines=event.old_lines,
            new_start=event.new_start,
            new_lines=event.new_lines,
        )

    def _on_line(self, event: LineRecord) -> None:
        if event.origin not in ACCEPTED_ORIGINS:
            return
        # Leading metadata before the first hunk header
        if self._hunk is None:
            return
        self._hunk.lines.append(DiffLine(origin=event.origin, content=_decode(event.content)))

    def _close_hunk(self) -> None:
        # A hunk opened with no file item has nowhere to go and is dropped
        if self._hunk is not None and self._item is not None:
            self._item.hunks.append(self._hunk)
        self._hunk = None

    def _close_item(self) -> None:
        self._close_hunk()
        if self._item is not None:
            self._items.append(self._item)
        self._item = None


def reconstruct(events: Iterable[DiffEvent]) -> DiffDocument:
    """Reconstruct a DiffDocument from an ordered sequence of diff events.

    Args:
        events: Diff events in source order. Consumed exactly once.

    Returns:
        The reconstructed DiffDocument.
    """
    builder = DiffBuilder()
    for event in events:
        builder.feed(event)
    return builder.finish()
