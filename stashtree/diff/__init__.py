"""Diff reconstruction for stashtree.

This package provides:
- models: FileHeader, HunkHeader, LineRecord, DiffLine, Hunk, DiffItem, DiffDocument
- events: iter_diff_events, parse_hunk_header
- engine: DiffBuilder, reconstruct
- render: render_document, render_item, format_diff_stat
"""

# Models
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

# Event translation
from stashtree.diff.events import (
    iter_diff_events,
    parse_hunk_header,
)

# Engine
from stashtree.diff.engine import (
    DiffBuilder,
    reconstruct,
)

# Rendering
from stashtree.diff.render import (
    format_diff_stat,
    render_document,
    render_item,
)


__all__ = [
    # Models
    "ACCEPTED_ORIGINS",
    "DiffDocument",
    "DiffEvent",
    "DiffItem",
    "DiffLine",
    "FileHeader",
    "Hunk",
    "HunkHeader",
    "LineRecord",
    # Events
    "iter_diff_events",
    "parse_hunk_header",
    # Engine
    "DiffBuilder",
    "reconstruct",
    # Render
    "format_diff_stat",
    "render_document",
    "render_item",
]
