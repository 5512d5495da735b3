"""Filesystem domain models for tree traversal and mirroring.

This module defines the core data structures shared by the walker and
the mirror operations: entry kinds, traversal entries, visitor results,
and the option sets that configure a walk or a mirror call.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path


class EntryKind(str, Enum):
    """Kind of a directory entry as seen during traversal.

    Symlinks are reported as such and never followed, even when they
    point at a directory. FIFOs, sockets and devices are reported as
    FILE.

    Attributes:
        DIRECTORY: Regular directory.
        FILE: Regular file (or any other non-directory, non-link entry).
        SYMLINK: Symbolic link, live or dangling.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


class WalkOrder(str, Enum):
    """When a directory's visitor call happens relative to its children.

    Attributes:
        PRE: Directory first, then its children (default).
        POST: Children first, then the directory ("file first").
    """

    PRE = "pre"
    POST = "post"


class VisitResult(Enum):
    """Control signal a visitor may return for a directory entry.

    Only honoured in pre-order. Returning ``False`` is equivalent to
    SKIP_CHILDREN; any other value continues the descent.
    """

    CONTINUE = "continue"
    SKIP_CHILDREN = "skip_children"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single entry produced while walking a tree.

    Attributes:
        path: Path relative to the traversal root, joined with ``/``.
        kind: Kind of the entry.
    """

    path: str
    kind: EntryKind

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Entry path cannot be empty"
            raise ValueError(msg)
        if self.path.startswith("/"):
            msg = f"Entry path must be relative to the traversal root, got {self.path}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Last path segment of the entry."""
        return self.path.rpartition("/")[2]

    @property
    def depth(self) -> int:
        """Nesting level below the root (top-level entries are 1)."""
        return self.path.count("/") + 1

    @property
    def is_dir(self) -> bool:
        """Check if the entry is a directory."""
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        """Check if the entry is a file."""
        return self.kind == EntryKind.FILE

    @property
    def is_symlink(self) -> bool:
        """Check if the entry is a symbolic link."""
        return self.kind == EntryKind.SYMLINK


# Visitors may return VisitResult, False, or nothing at all
Visitor = Callable[[TreeEntry], object]

StrPath = str | PathLike[str]


@dataclass(frozen=True, slots=True)
class MirrorFlags:
    """Independent boolean options for walk and mirror operations.

    Attributes:
        exclusive: Fail with FileExistsError on a collision instead of
            merging into or overwriting the destination.
        prune_stale: After mirroring, delete destination entries that
            have no counterpart in the source.
        file_first: Walk children before their parent directory.
    """

    exclusive: bool = False
    prune_stale: bool = False
    file_first: bool = False

    @property
    def order(self) -> WalkOrder:
        """Traversal order selected by ``file_first``."""
        return WalkOrder.POST if self.file_first else WalkOrder.PRE


@dataclass(frozen=True, slots=True)
class TraversalOptions:
    """Settings for a single walk; immutable for its duration.

    Attributes:
        root: Base directory; entry paths are relative to it.
        order: Visitor timing relative to a directory's children.
        visitor: Callback invoked once per entry.
    """

    root: Path
    order: WalkOrder
    visitor: Visitor
