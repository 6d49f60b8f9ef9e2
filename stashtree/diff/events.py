"""Translate `git diff` output into diff events.

Contains:
- iter_diff_events: Lazily turn unified diff lines into FileHeader, HunkHeader
  and LineRecord events
- parse_hunk_header: Parse an ``@@ -a,b +c,d @@`` line
"""

import re
from typing import Iterable, Iterator, Optional, Union

from stashtree.diff.models import DiffEvent, FileHeader, HunkHeader, LineRecord

# Format: @@ -old_start[,old_len] +new_start[,new_len] @@ optional context
_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_QUOTED = r'"(?:[^"\\]|\\.)*"'
_DIFF_GIT_RE = re.compile(rf"^diff --git ({_QUOTED}|a/.*?) ({_QUOTED}|b/.*)$")
_OCTAL_RE = re.compile(r"[0-7]{3}")

# C-style escapes git uses in quoted paths
_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}

DEV_NULL = "/dev/null"


def parse_hunk_header(header: str) -> Optional[HunkHeader]:
    """Parse a hunk header line.

    Missing counts default to 1, as in the unified diff format.

    Args:
        header: The ``@@`` line.

    Returns:
        HunkHeader, or None if the line is not a valid header.
    """
    match = _HUNK_HEADER_RE.match(header)
    if not match:
        return None
    return HunkHeader(
        old_start=int(match.group(1)),
        old_lines=int(match.group(2)) if match.group(2) is not None else 1,
        new_start=int(match.group(3)),
        new_lines=int(match.group(4)) if match.group(4) is not None else 1,
    )


def _unquote(path: str) -> str:
    """Undo git's C-style quoting of a path.

    Octal escapes are raw bytes of the UTF-8 encoded name, so the result is
    assembled as bytes and decoded once at the end.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            octal = body[i + 1:i + 4]
            if _OCTAL_RE.fullmatch(octal):
                out.append(int(octal, 8) & 0xFF)
                i += 4
                continue
            if body[i + 1] in _ESCAPES:
                out.append(_ESCAPES[body[i + 1]])
                i += 2
                continue
        out.extend(char.encode("utf-8"))
        i += 1
    return out.decode("utf-8", errors="replace")


def _strip_prefix(path: str, prefix: str) -> Optional[str]:
    """Turn a ``---``/``+++`` path into a repository path (None for /dev/null)."""
    path = _unquote(path.rstrip("\t"))
    if path == DEV_NULL:
        return None
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


class _PendingFile:
    """File header fields collected between ``diff --git`` and the first hunk."""

    def __init__(self, old_path: Optional[str], new_path: Optional[str]) -> None:
        self.old_path = old_path
        self.new_path = new_path
        self.is_new_file = False
        self.is_deleted_file = False
        self.emitted = False

    def header(self) -> FileHeader:
        return FileHeader(
            old_path=None if self.is_new_file else self.old_path,
            new_path=None if self.is_deleted_file else self.new_path,
        )


def iter_diff_events(lines: Iterable[Union[str, bytes]]) -> Iterator[DiffEvent]:
    """Lazily translate unified diff lines into diff events.

    Line bodies are recognised by the remaining line counts of the current
    hunk, so a removed line that reads ``-- x`` is never taken for a header.
    Line content is passed through untouched (bytes stay bytes) apart from
    the trailing newline.

    Args:
        lines: Raw diff lines, with or without line terminators.

    Yields:
        Diff events in source order.
    """
    pending: Optional[_PendingFile] = None
    old_remaining = 0
    new_remaining = 0

    for raw in lines:
        if isinstance(raw, bytes):
            raw = raw[:-1] if raw.endswith(b"\n") else raw
            text = raw.decode("utf-8", errors="replace")
        else:
            raw = raw[:-1] if raw.endswith("\n") else raw
            text = raw

        # Inside a hunk body
        if old_remaining > 0 or new_remaining > 0:
            origin = text[:1]
            if origin == " ":
                old_remaining -= 1
                new_remaining -= 1
            elif origin == "-":
                old_remaining -= 1
            elif origin == "+":
                new_remaining -= 1
            elif origin != "\\":
                # Truncated hunk: fall through to header handling
                old_remaining = new_remaining = 0
            if old_remaining > 0 or new_remaining > 0 or origin in (" ", "-", "+", "\\"):
                yield LineRecord(origin=origin, content=raw[1:])
                continue

        if text.startswith("\\"):
            # "\ No newline at end of file" trailing the last hunk line
            yield LineRecord(origin="\\", content=raw[1:])
            continue

        if text.startswith("diff --git "):
            if pending is not None and not pending.emitted:
                yield pending.header()
            match = _DIFF_GIT_RE.match(text)
            if match:
                pending = _PendingFile(
                    _strip_prefix(match.group(1), "a/"),
                    _strip_prefix(match.group(2), "b/"),
                )
            else:
                pending = _PendingFile(None, None)
            continue

        if text.startswith("new file mode") and pending is not None:
            pending.is_new_file = True
        elif text.startswith("deleted file mode") and pending is not None:
            pending.is_deleted_file = True
        elif text.startswith("rename from ") and pending is not None:
            pending.old_path = _unquote(text[len("rename from "):])
        elif text.startswith("rename to ") and pending is not None:
            pending.new_path = _unquote(text[len("rename to "):])
        elif text.startswith("--- "):
            if pending is None or pending.emitted:
                pending = _PendingFile(None, None)
            pending.old_path = _strip_prefix(text[4:], "a/")
            pending.is_new_file = pending.old_path is None
        elif text.startswith("+++ "):
            if pending is None or pending.emitted:
                # No "---" line for this file: there is no old side
                pending = _PendingFile(None, None)
                pending.is_new_file = True
            pending.new_path = _strip_prefix(text[4:], "b/")
            pending.is_deleted_file = pending.new_path is None
            pending.emitted = True
            yield pending.header()
        elif text.startswith("@@"):
            if pending is not None and not pending.emitted:
                pending.emitted = True
                yield pending.header()
            hunk = parse_hunk_header(text)
            if hunk is None:
                continue
            old_remaining = hunk.old_lines
            new_remaining = hunk.new_lines
            yield hunk
        # index, mode, similarity and "Binary files" lines carry nothing else

    if pending is not None and not pending.emitted:
        yield pending.header()
