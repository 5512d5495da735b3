"""Filesystem traversal and mirroring module.

This module provides the depth-first tree walker, idempotent removal,
copy and symlink mirroring with optional stale-entry pruning, and
small JSON/text document helpers.
"""

from treemirror.filesystem.documents import (
    MISSING,
    read_json,
    read_text,
    remove_document,
    write_json,
    write_text,
)
from treemirror.filesystem.mirror import copy, prune_stale, symlink
from treemirror.filesystem.models import (
    EntryKind,
    MirrorFlags,
    TraversalOptions,
    TreeEntry,
    VisitResult,
    WalkOrder,
)
from treemirror.filesystem.removal import remove
from treemirror.filesystem.walker import walk

__all__ = [
    "MISSING",
    "EntryKind",
    "MirrorFlags",
    "TraversalOptions",
    "TreeEntry",
    "VisitResult",
    "WalkOrder",
    "copy",
    "prune_stale",
    "read_json",
    "read_text",
    "remove",
    "remove_document",
    "symlink",
    "walk",
    "write_json",
    "write_text",
]
