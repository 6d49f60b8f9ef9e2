"""Stash topology builder.

Attributes each stash to the local branch it was taken from and arranges
the result as a tree rooted at the current branch:
- resolve_default_branch: Name the root branch, with a sentinel fallback
- find_owning_branch: First branch whose tip reaches a base commit
- build_topology: Group, order and collect orphans and per-stash errors
"""

import logging
from typing import Optional

from stashtree.git.exceptions import GraphError, HeadError, ResolutionError
from stashtree.git.models import BaseCommit, StashRecord
from stashtree.git.repository import RepositoryBackend
from stashtree.topology.models import (
    EPOCH,
    AttributedStash,
    BranchNode,
    BranchRef,
    StashFailure,
    StashRef,
    Topology,
)

logger = logging.getLogger(__name__)

# Root name used when HEAD is detached or unborn
DEFAULT_HEAD_SENTINEL = "HEAD"


def resolve_default_branch(
    backend: RepositoryBackend,
    warnings: list,
    sentinel: str = DEFAULT_HEAD_SENTINEL,
) -> str:
    """Get the checked-out branch name, falling back to a sentinel.

    Args:
        backend: Repository backend.
        warnings: List that receives the HeadError on fallback.
        sentinel: Name to use when there is no current branch.

    Returns:
        The branch name or the sentinel.
    """
    try:
        return backend.current_branch_name()
    except HeadError as e:
        logger.warning("No current branch, using %r as root: %s", sentinel, e)
        warnings.append(e)
        return sentinel


def find_owning_branch(
    backend: RepositoryBackend,
    base: BaseCommit,
    branches: list[tuple[str, str]],
    warnings: list,
) -> Optional[str]:
    """Find the first branch that owns a base commit.

    A branch owns the commit if its tip is the commit or the commit is an
    ancestor of the tip. When several branches qualify, the first one in
    ``branches`` order wins.

    Args:
        backend: Repository backend.
        base: The stash's base commit.
        branches: (name, tip) pairs in a deterministic order.
        warnings: List that receives GraphErrors; a failed check counts as
            "not an ancestor".

    Returns:
        Branch name, or None if no branch owns the commit.
    """
    for name, tip in branches:
        if tip == base.commit_id:
            return name
        try:
            if backend.is_ancestor(base.commit_id, tip):
                return name
        except GraphError as e:
            logger.warning("Ancestry check against %s failed: %s", name, e)
            warnings.append(e)
    return None


def _stable_sort_branch(node: BranchNode) -> None:
    # list.sort is stable, so equal timestamps keep enumeration order
    node.refs.sort(key=lambda ref: ref.sort_key)
    stamps = [ref.entry.timestamp for ref in node.refs if isinstance(ref, StashRef)]
    stamps += [ref.branch.timestamp for ref in node.refs if isinstance(ref, BranchRef)]
    node.timestamp = max(stamps) if stamps else EPOCH


def build_topology(
    stashes: list[StashRecord],
    backend: RepositoryBackend,
    default_branch: Optional[str] = None,
    head_sentinel: str = DEFAULT_HEAD_SENTINEL,
) -> Topology:
    """Build the stash topology tree.

    Every stash ends up in exactly one place: under its owning branch, in
    the orphan list, or in the error list.

    Args:
        stashes: Stash records in enumeration order.
        backend: Repository backend.
        default_branch: Root branch name; resolved from HEAD when None.
        head_sentinel: Root name used when HEAD has no branch.

    Returns:
        Topology with root node, orphans, errors and warnings.

    Raises:
        EnumerationError: If the local branches cannot be listed.
    """
    warnings: list = []
    branches = backend.local_branches()
    if default_branch is None:
        default_branch = resolve_default_branch(backend, warnings, sentinel=head_sentinel)

    grouped: dict[str, list[AttributedStash]] = {}
    orphans: list[AttributedStash] = []
    errors: list[StashFailure] = []

    for stash in stashes:
        try:
            base = backend.resolve_base_commit(stash.commit_id)
        except ResolutionError as e:
            logger.warning("Skipping %s: %s", stash.ref, e)
            errors.append(StashFailure(stash=stash, error=e))
            continue

        entry = AttributedStash(stash=stash, base=base)
        owner = find_owning_branch(backend, base, branches, warnings)
        if owner is None:
            logger.debug("%s is orphaned (base %s)", stash.ref, base.commit_id[:12])
            orphans.append(entry)
        else:
            logger.debug("%s belongs to %s", stash.ref, owner)
            grouped.setdefault(owner, []).append(entry)

    root = BranchNode(name=default_branch)
    root.refs = [StashRef(entry) for entry in grouped.pop(default_branch, [])]

    # Dict order follows first encounter, which is the tie-break for equal keys
    for name, entries in grouped.items():
        node = BranchNode(name=name, refs=[StashRef(entry) for entry in entries])
        _stable_sort_branch(node)
        root.refs.append(BranchRef(node))

    _stable_sort_branch(root)

    return Topology(root=root, orphans=orphans, errors=errors, warnings=warnings)
