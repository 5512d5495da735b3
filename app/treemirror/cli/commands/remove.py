"""Remove command implementation.

Recursively deletes paths. Missing paths are reported but not treated
as failures.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from treemirror.filesystem.removal import exists, remove
from treemirror.utils.formatting import console, print_error, print_info, print_success


def remove_paths(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Paths to delete."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Recursively delete PATHS."""
    existing = [p for p in paths if exists(p)]
    for missing in (p for p in paths if p not in existing):
        print_info(f"Already absent: {missing}")

    if not existing:
        return

    _print_plan(existing, dry_run)

    if dry_run:
        print_info(f"Dry-run: {len(existing)} path(s) would be deleted.")
        return

    if not yes:
        confirmed = typer.confirm(
            f"\nProceed with deleting {len(existing)} path(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    failed = 0
    for path in existing:
        try:
            remove(path)
        except OSError as e:
            print_error(f"Cannot delete {path}: {e}")
            failed += 1

    if failed:
        raise typer.Exit(code=1)
    print_success(f"All {len(existing)} path(s) deleted.")


def _print_plan(paths: list[Path], dry_run: bool) -> None:
    """Display planned deletions."""
    label = "Planned Deletions (dry-run)" if dry_run else "Planned Deletions"
    table = Table(title=label, show_lines=False)
    table.add_column("Path", style="bold")
    table.add_column("Type", width=10)

    for path in paths:
        if path.is_symlink():
            kind = "symlink"
        elif path.is_dir():
            kind = "directory"
        else:
            kind = "file"
        table.add_row(escape(str(path)), kind)

    console.print(table)
