"""Copy and link command implementations.

Mirror a source file or directory tree to a destination, either by
copying content or by creating symlinks.
"""

from pathlib import Path
from typing import Annotated

import typer

from treemirror.filesystem.mirror import copy, symlink
from treemirror.filesystem.models import MirrorFlags
from treemirror.utils.formatting import print_error, print_success

SourceArg = Annotated[Path, typer.Argument(help="Source file or directory.")]
DestArg = Annotated[Path, typer.Argument(help="Destination path.")]
ExclusiveOpt = Annotated[
    bool,
    typer.Option(
        "--exclusive",
        "-x",
        help="Fail if the destination already exists instead of overwriting.",
    ),
]
PruneOpt = Annotated[
    bool,
    typer.Option(
        "--prune",
        "-p",
        help="Delete destination entries that are missing from the source.",
    ),
]


def copy_tree(
    ctx: typer.Context,
    src: SourceArg,
    dest: DestArg,
    exclusive: ExclusiveOpt = False,
    prune: PruneOpt = False,
) -> None:
    """Copy a file or directory tree to DEST."""
    flags = MirrorFlags(exclusive=exclusive, prune_stale=prune)
    try:
        copy(src, dest, flags)
    except OSError as e:
        print_error(f"Copy failed: {e}")
        raise typer.Exit(code=1) from e

    if not _quiet(ctx):
        print_success(f"Copied {src} -> {dest}")


def link_tree(
    ctx: typer.Context,
    src: SourceArg,
    dest: DestArg,
    exclusive: ExclusiveOpt = False,
    prune: PruneOpt = False,
) -> None:
    """Mirror a file or directory tree to DEST as symlinks."""
    flags = MirrorFlags(exclusive=exclusive, prune_stale=prune)
    try:
        symlink(src, dest, flags)
    except OSError as e:
        print_error(f"Link failed: {e}")
        raise typer.Exit(code=1) from e

    if not _quiet(ctx):
        print_success(f"Linked {dest} -> {src}")


def _quiet(ctx: typer.Context) -> bool:
    """Read the global --quiet option stored by the main callback."""
    return bool(ctx.obj and ctx.obj.get("quiet"))
