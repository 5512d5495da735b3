"""treemirror - Walk, copy and symlink-mirror directory trees."""

from treemirror.filesystem import (
    EntryKind,
    MirrorFlags,
    TreeEntry,
    VisitResult,
    WalkOrder,
    copy,
    remove,
    symlink,
    walk,
)

__version__ = "0.1.0"

__all__ = [
    "EntryKind",
    "MirrorFlags",
    "TreeEntry",
    "VisitResult",
    "WalkOrder",
    "__version__",
    "copy",
    "remove",
    "symlink",
    "walk",
]
