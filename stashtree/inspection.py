"""Stash inspection entry points.

Contains:
- stash_diff: Reconstruct one stash's diff against its base commit
- collect_stash_diffs: Diffs for many stashes, optionally in worker threads
- inspect_repository: Enumerate, build the topology and collect diffs
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from stashtree.config import StashtreeConfig
from stashtree.diff.engine import reconstruct
from stashtree.diff.models import DiffDocument
from stashtree.git.exceptions import DiffSourceError, ResolutionError, StashtreeError
from stashtree.git.models import StashRecord
from stashtree.git.repository import RepositoryBackend
from stashtree.topology.builder import build_topology
from stashtree.topology.models import StashFailure, Topology

logger = logging.getLogger(__name__)


@dataclass
class StashDiffs:
    """Per-stash diff results keyed by stash index."""

    documents: dict[int, DiffDocument] = field(default_factory=dict)
    failures: dict[int, StashFailure] = field(default_factory=dict)

    def get(self, index: int) -> Optional[DiffDocument]:
        return self.documents.get(index)


@dataclass
class Inspection:
    """Everything known about a repository's stashes."""

    stashes: list[StashRecord]
    topology: Topology
    diffs: Optional[StashDiffs] = None


def stash_diff(backend: RepositoryBackend, stash: StashRecord) -> DiffDocument:
    """Reconstruct the diff between a stash and its base commit.

    Args:
        backend: Repository backend.
        stash: The stash to diff.

    Returns:
        The reconstructed DiffDocument.

    Raises:
        ResolutionError: If the base commit cannot be resolved.
        DiffSourceError: If the diff stream cannot be produced.
    """
    base = backend.resolve_base_commit(stash.commit_id)
    return reconstruct(backend.diff_events(base.commit_id, stash.commit_id))


def _diff_one(backend: RepositoryBackend, stash: StashRecord):
    try:
        return stash, stash_diff(backend, stash), None
    except (ResolutionError, DiffSourceError) as e:
        logger.warning("Diff unavailable for %s: %s", stash.ref, e)
        return stash, None, e


def collect_stash_diffs(
    backend: RepositoryBackend,
    stashes: list[StashRecord],
    max_workers: int = 1,
) -> StashDiffs:
    """Reconstruct diffs for several stashes.

    Each stash is diffed independently. With more than one worker the
    backend must tolerate concurrent read-only queries. Results are merged
    after every worker has finished.

    Args:
        backend: Repository backend.
        stashes: Stashes to diff.
        max_workers: Thread count (1 runs sequentially).

    Returns:
        StashDiffs with a document or a failure for every stash.
    """
    if max_workers > 1 and len(stashes) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda s: _diff_one(backend, s), stashes))
    else:
        results = [_diff_one(backend, stash) for stash in stashes]

    diffs = StashDiffs()
    for stash, document, error in results:
        if error is not None:
            diffs.failures[stash.index] = StashFailure(stash=stash, error=error)
        else:
            diffs.documents[stash.index] = document
    return diffs


def find_stash(stashes: list[StashRecord], index: int) -> StashRecord:
    """Look up a stash by its index.

    Raises:
        StashtreeError: If there is no such stash.
    """
    for stash in stashes:
        if stash.index == index:
            return stash
    raise StashtreeError(f"No stash found: stash@{{{index}}}")


def inspect_repository(
    backend: RepositoryBackend,
    settings: Optional[StashtreeConfig] = None,
    with_diffs: bool = False,
) -> Inspection:
    """Enumerate stashes, build the topology and optionally collect diffs.

    Args:
        backend: Repository backend.
        settings: Settings (defaults when None).
        with_diffs: Also reconstruct every stash's diff.

    Returns:
        Inspection result.

    Raises:
        EnumerationError: If stashes or branches cannot be listed.
    """
    settings = settings or StashtreeConfig()
    stashes = backend.enumerate_stashes()
    logger.info("Found %d stash(es)", len(stashes))

    topology = build_topology(stashes, backend, head_sentinel=settings.detached_head_name)

    diffs = None
    if with_diffs:
        diffs = collect_stash_diffs(backend, stashes, max_workers=settings.max_workers)

    return Inspection(stashes=stashes, topology=topology, diffs=diffs)
