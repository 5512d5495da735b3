"""Copy and symlink mirroring of directory trees.

Both operations share one structure: a pre-order walk over the source
creates the destination directories and handles each leaf entry (copy
its content, or link to it). When ``prune_stale`` is set every
destination path produced by that pass is recorded, and a second
post-order walk over the destination removes whatever was not
recorded.

Failures propagate unchanged and nothing is rolled back; a failed
mirror leaves the destination partially updated.
"""

import errno
import logging
import shutil
import stat
from collections.abc import Callable
from pathlib import Path

from treemirror.filesystem.models import MirrorFlags, StrPath, TreeEntry, VisitResult
from treemirror.filesystem.removal import exists, remove
from treemirror.filesystem.walker import walk

logger = logging.getLogger(__name__)

# Handles one leaf entry: (source path, destination path, exclusive)
LeafHandler = Callable[[Path, Path, bool], None]


def copy(src: StrPath, dest: StrPath, flags: MirrorFlags | None = None) -> None:
    """Copy a file or directory tree from ``src`` to ``dest``.

    Files are copied with their permission bits. Symlinks found inside
    a source tree are recreated with the same target instead of being
    followed. Symlinks already in the destination are never written
    through: one standing where a directory or file belongs is replaced
    unless ``exclusive`` is set.

    Args:
        src: Source file or directory.
        dest: Destination path.
        flags: ``exclusive`` refuses to overwrite or merge,
            ``prune_stale`` deletes destination entries missing from
            the source.

    Raises:
        FileNotFoundError: If ``src`` does not exist.
        FileExistsError: If ``exclusive`` is set and ``dest`` (or an
            entry below it) already exists.
        OSError: On any other filesystem failure.
    """
    flags = flags or MirrorFlags()
    src, dest = Path(src), Path(dest)

    if stat.S_ISDIR(src.stat().st_mode):
        pruned = _mirror_tree(src, src, dest, flags, _copy_leaf)
        logger.info("Copied %s -> %s (%d stale entries pruned)", src, dest, pruned)
        return

    if not flags.exclusive:
        _ensure_parent(dest)
    _copy_file(src, dest, flags.exclusive)
    logger.info("Copied %s -> %s", src, dest)


def symlink(src: StrPath, dest: StrPath, flags: MirrorFlags | None = None) -> None:
    """Link ``dest`` to ``src``, or mirror a directory tree as links.

    For a directory, the destination gets real directories and one
    absolute symlink per file (or symlink) of the source. A link that
    already points at the wanted target is left untouched, so repeating
    the call performs no filesystem mutation.

    Args:
        src: Source file or directory.
        dest: Destination path.
        flags: ``exclusive`` refuses to replace existing entries,
            ``prune_stale`` deletes destination entries missing from
            the source.

    Raises:
        FileNotFoundError: If ``src`` does not exist.
        FileExistsError: If ``exclusive`` is set and ``dest`` (or an
            entry below it) already exists.
        OSError: On any other filesystem failure.
    """
    flags = flags or MirrorFlags()
    src, dest = Path(src), Path(dest)
    target = src.absolute()

    if not exists(src):
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(src))

    if src.is_dir() and not src.is_symlink():
        pruned = _mirror_tree(src, target, dest, flags, _link_leaf)
        logger.info("Linked %s -> %s (%d stale entries pruned)", dest, target, pruned)
        return

    if not flags.exclusive:
        _ensure_parent(dest)
    _link_leaf(target, dest, flags.exclusive)


def _mirror_tree(
    src: Path,
    leaf_src: Path,
    dest: Path,
    flags: MirrorFlags,
    handle_leaf: LeafHandler,
) -> int:
    """Reproduce the directory tree ``src`` at ``dest``.

    Args:
        src: Source directory to walk.
        leaf_src: Base joined with entry paths before calling
            ``handle_leaf`` (absolute for links).
        dest: Destination directory.
        flags: Mirror flags.
        handle_leaf: Callback for file and symlink entries.

    Returns:
        Number of stale destination entries removed.
    """
    visited: set[Path] | None = set() if flags.prune_stale else None

    _make_dir(dest, flags.exclusive, parents=True)
    if visited is not None:
        visited.add(_key(dest))

    def mirror_entry(entry: TreeEntry) -> None:
        target = dest / entry.path
        if entry.is_dir:
            _make_dir(target, flags.exclusive)
        else:
            handle_leaf(leaf_src / entry.path, target, flags.exclusive)
        if visited is not None:
            visited.add(_key(target))

    walk(src, mirror_entry)

    if visited is None:
        return 0
    return prune_stale(dest, visited)


def prune_stale(root: StrPath, visited: set[Path]) -> int:
    """Remove every entry below ``root`` whose path is not in ``visited``.

    The destination is walked post-order, so a directory is only
    considered once all of its children have been.

    Args:
        root: Destination directory to reconcile.
        visited: Absolute paths to keep.

    Returns:
        Number of entries removed.
    """
    root = Path(root)
    removed = 0

    def prune_entry(entry: TreeEntry) -> VisitResult:
        nonlocal removed
        path = root / entry.path
        if _key(path) in visited:
            return VisitResult.CONTINUE
        logger.debug("Pruning stale entry %s", path)
        remove(path)
        removed += 1
        return VisitResult.SKIP_CHILDREN

    walk(root, prune_entry, MirrorFlags(file_first=True))
    return removed


def _copy_leaf(src: Path, dest: Path, exclusive: bool) -> None:
    if src.is_symlink():
        link_target = src.readlink()
        if not exclusive and exists(dest):
            if dest.is_symlink() and dest.readlink() == link_target:
                return
            remove(dest)
        dest.symlink_to(link_target)
        return
    _copy_file(src, dest, exclusive)


def _copy_file(src: Path, dest: Path, exclusive: bool) -> None:
    """Copy file content and permission bits.

    Args:
        src: Source file.
        dest: Destination file.
        exclusive: Fail with FileExistsError instead of overwriting.
    """
    if exclusive:
        with src.open("rb") as fsrc, dest.open("xb") as fdst:
            shutil.copyfileobj(fsrc, fdst)
    else:
        # Never write through an existing link
        if dest.is_symlink():
            dest.unlink()
        shutil.copyfile(src, dest)
    shutil.copymode(src, dest)


def _link_leaf(target: Path, dest: Path, exclusive: bool) -> None:
    """Point ``dest`` at ``target``, replacing whatever is there.

    Args:
        target: Absolute link target.
        dest: Link path.
        exclusive: Fail with FileExistsError if ``dest`` exists.
    """
    if not exclusive and exists(dest):
        if dest.is_symlink() and dest.readlink() == target:
            return
        remove(dest)

    dest.symlink_to(target)
    logger.debug("Linked %s -> %s", dest, target)


def _make_dir(path: Path, exclusive: bool, *, parents: bool = False) -> None:
    """Create a mirrored directory, accepting only a real existing one.

    Args:
        path: Directory to create.
        exclusive: Fail with FileExistsError if anything exists at ``path``.
        parents: Also create missing ancestors (ignored when exclusive).
    """
    if exclusive:
        path.mkdir()
        return

    # A link is never descended into, even if it points at a directory
    if path.is_symlink():
        logger.debug("Replacing symlink %s with a directory", path)
        path.unlink()
    path.mkdir(parents=parents, exist_ok=True)


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _key(path: Path) -> Path:
    """Absolute form of a destination path for the visited set."""
    return path.absolute()
