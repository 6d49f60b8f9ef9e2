"""Stash topology for stashtree.

This package provides:
- models: AttributedStash, StashRef, BranchRef, BranchNode, StashFailure, Topology
- builder: build_topology, find_owning_branch, resolve_default_branch
"""

# Models
from stashtree.topology.models import (
    EPOCH,
    AttributedStash,
    BranchNode,
    BranchRef,
    Reference,
    StashFailure,
    StashRef,
    Topology,
)

# Builder
from stashtree.topology.builder import (
    DEFAULT_HEAD_SENTINEL,
    build_topology,
    find_owning_branch,
    resolve_default_branch,
)


__all__ = [
    # Models
    "EPOCH",
    "AttributedStash",
    "BranchNode",
    "BranchRef",
    "Reference",
    "StashFailure",
    "StashRef",
    "Topology",
    # Builder
    "DEFAULT_HEAD_SENTINEL",
    "build_topology",
    "find_owning_branch",
    "resolve_default_branch",
]
