"""Git stash enumeration.

Contains:
- get_stashes: List stash entries, most recent first
- _parse_stash_line: Parse one line of the stash listing
"""

import logging
import re
from pathlib import Path
from typing import Optional

from stashtree.git.runner import _run_git_command
from stashtree.git.exceptions import EnumerationError, GitError
from stashtree.git.models import StashRecord

logger = logging.getLogger(__name__)

_STASH_REF_RE = re.compile(r"^stash@\{(\d+)\}$")

# %gd: stash@{N}, %H: stash commit, %gs: reflog subject (the stash message)
STASH_LIST_FORMAT = "--format=%gd%x00%H%x00%gs"


def _parse_stash_line(line: str) -> Optional[StashRecord]:
    """Parse one NUL-separated stash listing line.

    Args:
        line: ``stash@{N}\\0<commit>\\0<message>``

    Returns:
        StashRecord, or None if the line is malformed.
    """
    parts = line.split("\x00", 2)
    if len(parts) != 3:
        return None
    ref, commit_id, message = parts
    match = _STASH_REF_RE.match(ref)
    if not match or not commit_id:
        return None
    return StashRecord(index=int(match.group(1)), message=message, commit_id=commit_id)


def get_stashes(cwd: Optional[Path] = None) -> list[StashRecord]:
    """List all stash entries present at call time.

    Returns:
        StashRecords ordered by index (most recent first).

    Raises:
        EnumerationError: If the stash list cannot be read.
    """
    try:
        # Messages may end in whitespace
        output = _run_git_command(["stash", "list", STASH_LIST_FORMAT], cwd=cwd, strip=False)
    except GitError as e:
        raise EnumerationError(f"Cannot list stashes: {e}")

    stashes = []
    for line in output.split("\n"):
        if not line:
            continue
        record = _parse_stash_line(line)
        if record is None:
            logger.warning("Skipping unparseable stash entry: %r", line)
            continue
        stashes.append(record)
    return stashes
