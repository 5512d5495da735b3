"""Depth-first directory tree walker.

Enumerates every entry below a root directory and hands each one to a
visitor callback together with its root-relative path. Directories can
be visited before their children (pre-order, the default) or after
them (post-order). Symbolic links are treated as leaves and never
followed.
"""

import logging
import os
from pathlib import Path

from treemirror.filesystem.models import (
    EntryKind,
    MirrorFlags,
    StrPath,
    TraversalOptions,
    TreeEntry,
    Visitor,
    VisitResult,
    WalkOrder,
)

logger = logging.getLogger(__name__)


def walk(
    root: StrPath,
    visitor: Visitor,
    flags: MirrorFlags | None = None,
    *,
    order: WalkOrder | None = None,
) -> None:
    """Walk the tree below ``root`` and call ``visitor`` for each entry.

    In pre-order a directory's visitor result controls descent: returning
    ``False`` or ``VisitResult.SKIP_CHILDREN`` skips its children. In
    post-order the children have already been visited, so the result is
    ignored. Results for non-directory entries are always ignored.

    Sibling order is the order ``os.scandir`` yields; no sorting is done.

    Args:
        root: Directory to walk. The root itself is not visited.
        visitor: Callback receiving a TreeEntry per entry.
        flags: Mirror flags; only ``file_first`` is relevant here.
        order: Explicit traversal order, overrides ``flags.file_first``.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
        NotADirectoryError: If ``root`` is not a directory, or a listed
            directory stopped being one before it was entered.
    """
    if order is None:
        order = (flags or MirrorFlags()).order

    options = TraversalOptions(root=Path(root), order=order, visitor=visitor)
    logger.debug("Walking %s (%s-order)", options.root, order.value)
    _walk("", options)


def _walk(relative: str, options: TraversalOptions) -> None:
    """Visit all entries of one directory level, recursing into subdirectories.

    Args:
        relative: Directory path relative to the root ("" for the root).
        options: Settings of the current walk.
    """
    for entry in list_entries(options.root, relative):
        if visits_before_children(entry, options.order):
            result = options.visitor(entry)
            if descends(entry, result):
                _walk(entry.path, options)
        else:
            _walk(entry.path, options)
            options.visitor(entry)


def list_entries(root: Path, relative: str) -> list[TreeEntry]:
    """List one directory level as root-relative entries.

    The listing is read completely before it is returned, so no
    directory handle stays open while the caller recurses.

    Args:
        root: Traversal root.
        relative: Directory to list, relative to ``root`` ("" for the root).

    Returns:
        Entries in ``os.scandir`` order.

    Raises:
        FileNotFoundError: If the directory does not exist.
        NotADirectoryError: If the path is not a directory.
    """
    with os.scandir(root / relative) as it:
        return [
            TreeEntry(
                path=f"{relative}/{dir_entry.name}" if relative else dir_entry.name,
                kind=_entry_kind(dir_entry),
            )
            for dir_entry in it
        ]


def visits_before_children(entry: TreeEntry, order: WalkOrder) -> bool:
    """Whether ``entry`` is visited before its children are walked.

    Leaves have no children and are always visited right away.
    """
    return not entry.is_dir or order == WalkOrder.PRE


def descends(entry: TreeEntry, result: object) -> bool:
    """Whether a pre-order visit result allows walking into ``entry``."""
    return entry.is_dir and result is not False and result is not VisitResult.SKIP_CHILDREN


def _entry_kind(dir_entry: os.DirEntry[str]) -> EntryKind:
    if dir_entry.is_symlink():
        return EntryKind.SYMLINK
    if dir_entry.is_dir(follow_symlinks=False):
        return EntryKind.DIRECTORY
    return EntryKind.FILE
