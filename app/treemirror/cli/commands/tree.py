"""Walk command implementation.

Lists the entries of a directory tree in traversal order.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from treemirror.filesystem.models import MirrorFlags, TreeEntry, VisitResult
from treemirror.filesystem.walker import walk
from treemirror.utils.formatting import console, create_entry_table, format_kind, print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    PLAIN = "plain"


def walk_tree(
    root: Annotated[
        Path,
        typer.Argument(help="Directory to walk."),
    ],
    file_first: Annotated[
        bool,
        typer.Option(
            "--file-first",
            help="List children before their parent directory.",
        ),
    ] = False,
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            "-d",
            min=1,
            help="Do not list entries nested deeper than this.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Walk a directory tree and list every entry."""
    entries: list[TreeEntry] = []

    def collect(entry: TreeEntry) -> VisitResult:
        if max_depth is not None and entry.depth > max_depth:
            return VisitResult.SKIP_CHILDREN
        entries.append(entry)
        if max_depth is not None and entry.depth == max_depth:
            return VisitResult.SKIP_CHILDREN
        return VisitResult.CONTINUE

    try:
        walk(root, collect, MirrorFlags(file_first=file_first))
    except OSError as e:
        print_error(f"Cannot walk {root}: {e}")
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        data = [{"path": e.path, "kind": e.kind.value} for e in entries]
        console.print_json(json.dumps(data))
        return

    if output_format == OutputFormat.PLAIN:
        for entry in entries:
            typer.echo(entry.path)
        return

    table = create_entry_table(f"Entries of {escape(str(root))}")
    for entry in entries:
        table.add_row(escape(entry.path), format_kind(entry.kind))
    console.print(table)
    console.print(f"\n[muted]{len(entries)} entries[/muted]")
