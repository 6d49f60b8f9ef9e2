"""Plain-text formatting of stash topologies."""

from datetime import datetime, timezone
from typing import Optional

from stashtree.inspection import StashDiffs
from stashtree.topology.models import (
    AttributedStash,
    BranchNode,
    BranchRef,
    StashRef,
    Topology,
)

INDENT = "  "


def format_timestamp(timestamp: int) -> str:
    """Format a commit timestamp as a UTC date."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def format_stash(entry: AttributedStash, diffs: Optional[StashDiffs] = None) -> str:
    """Format one stash line.

    Example output:
        stash@{0}: WIP on main: 1a2b3c4 Fix parser (2024-05-01 10:00)
    """
    line = f"{entry.stash.ref}: {entry.stash.message} ({format_timestamp(entry.timestamp)})"
    if diffs is not None:
        if entry.stash.index in diffs.failures:
            line += " [diff unavailable]"
        elif entry.stash.index in diffs.documents:
            count = len(diffs.documents[entry.stash.index])
            line += f" [{count} file{'s' if count != 1 else ''}]"
    return line


def format_branch(node: BranchNode, diffs: Optional[StashDiffs] = None, level: int = 0) -> list[str]:
    """Format a branch node and everything below it."""
    lines = [f"{INDENT * level}branch {node.name}"]
    for ref in node.refs:
        if isinstance(ref, StashRef):
            lines.append(f"{INDENT * (level + 1)}{format_stash(ref.entry, diffs)}")
        elif isinstance(ref, BranchRef):
            lines.extend(format_branch(ref.branch, diffs, level + 1))
    return lines


def format_topology(topology: Topology, diffs: Optional[StashDiffs] = None) -> str:
    """Render the full topology as an indented tree.

    Example output:
        branch main
          stash@{1}: WIP on main: 1a2b3c4 Tweak (2024-05-01 10:00)
          branch feature
            stash@{0}: On feature: spike (2024-05-02 09:30)

        orphaned
          stash@{2}: WIP on old: 9f8e7d6 Gone (2024-04-01 08:00)
    """
    lines = format_branch(topology.root, diffs)

    if topology.orphans:
        lines.append("")
        lines.append("orphaned")
        for entry in topology.orphans:
            lines.append(f"{INDENT}{format_stash(entry, diffs)}")

    if topology.errors:
        lines.append("")
        lines.append("unavailable")
        for failure in topology.errors:
            lines.append(f"{INDENT}{failure.stash.ref}: {failure.stash.message} ({failure.reason})")

    if topology.warnings:
        lines.append("")
        for warning in topology.warnings:
            message = str(warning).strip().splitlines()
            lines.append(f"warning: {message[0] if message else type(warning).__name__}")

    return "\n".join(lines)


def format_stash_list(stashes, topology: Topology) -> str:
    """One line per stash with its owning branch.

    Example output:
        stash@{0}: On feature: spike  [feature]
        stash@{1}: WIP on old: 9f8e7d6 Gone  [orphan]
    """
    orphaned = {entry.stash.index for entry in topology.orphans}
    failed = {failure.stash.index for failure in topology.errors}

    lines = []
    for stash in stashes:
        if stash.index in failed:
            label = "unavailable"
        elif stash.index in orphaned:
            label = "orphan"
        else:
            label = topology.owner_of(stash) or "unavailable"
        lines.append(f"{stash.ref}: {stash.message}  [{label}]")
    return "\n".join(lines)
