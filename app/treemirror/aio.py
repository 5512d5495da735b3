"""Awaitable variants of the traversal and mirror operations.

The walker lists each directory in a worker thread and awaits every
visitor result (sync or async visitors are both accepted) before moving
on, so entries are still processed strictly one at a time. The mirror
and removal operations run their synchronous counterpart in a worker
thread.

There is no cancellation support: cancelling the awaiting task (for
example through ``asyncio.wait_for``) does not undo filesystem changes
that already happened, and a mirror running in a thread finishes its
current call.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from treemirror.filesystem import mirror, removal
from treemirror.filesystem.models import MirrorFlags, StrPath, TreeEntry, WalkOrder
from treemirror.filesystem.walker import descends, list_entries, visits_before_children

logger = logging.getLogger(__name__)

AsyncVisitor = Callable[[TreeEntry], object | Awaitable[object]]


async def walk(
    root: StrPath,
    visitor: AsyncVisitor,
    flags: MirrorFlags | None = None,
    *,
    order: WalkOrder | None = None,
) -> None:
    """Asynchronously walk the tree below ``root``.

    Same contract as :func:`treemirror.filesystem.walker.walk`; the
    visitor may be a coroutine function.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
        NotADirectoryError: If ``root`` or a listed directory is not a
            directory when it is entered.
    """
    if order is None:
        order = (flags or MirrorFlags()).order

    logger.debug("Walking %s asynchronously (%s-order)", root, order.value)
    await _walk(Path(root), "", order, visitor)


async def _walk(root: Path, relative: str, order: WalkOrder, visitor: AsyncVisitor) -> None:
    entries = await asyncio.to_thread(list_entries, root, relative)

    for entry in entries:
        if visits_before_children(entry, order):
            result = await _visit(visitor, entry)
            if descends(entry, result):
                await _walk(root, entry.path, order, visitor)
        else:
            await _walk(root, entry.path, order, visitor)
            await _visit(visitor, entry)


async def _visit(visitor: AsyncVisitor, entry: TreeEntry) -> object:
    result = visitor(entry)
    if inspect.isawaitable(result):
        result = await result
    return result


async def copy(src: StrPath, dest: StrPath, flags: MirrorFlags | None = None) -> None:
    """Run :func:`treemirror.filesystem.mirror.copy` in a worker thread."""
    await asyncio.to_thread(mirror.copy, src, dest, flags)


async def symlink(src: StrPath, dest: StrPath, flags: MirrorFlags | None = None) -> None:
    """Run :func:`treemirror.filesystem.mirror.symlink` in a worker thread."""
    await asyncio.to_thread(mirror.symlink, src, dest, flags)


async def remove(path: StrPath) -> None:
    """Run :func:`treemirror.filesystem.removal.remove` in a worker thread."""
    await asyncio.to_thread(removal.remove, path)
