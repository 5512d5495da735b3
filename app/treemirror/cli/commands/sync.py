"""Sync command implementation.

Runs stored mirror profiles. Each profile is mirrored independently;
a failing profile does not stop the others, but makes the command exit
with an error.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from treemirror.core.config import ConfigError, MirrorProfile, load_config_or_default
from treemirror.filesystem.mirror import copy, symlink
from treemirror.utils.formatting import console, print_error, print_info, print_warning


def sync_profiles(
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Profiles to run (default: all)."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be mirrored."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to use."),
    ] = None,
) -> None:
    """Run stored mirror profiles."""
    try:
        config = load_config_or_default(config_path)
        selected = {name: config.get_profile(name) for name in names} if names else config.profiles
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not selected:
        print_info("No profiles configured.")
        return

    table = Table(
        title="Sync Results (dry-run)" if dry_run else "Sync Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Profile", style="bold")
    table.add_column("Mode", width=6)
    table.add_column("Message")

    failed = 0
    for name, profile in selected.items():
        if dry_run:
            table.add_row("[info]PLAN[/info]", name, profile.mode, _describe(profile))
            continue

        try:
            _run_profile(profile)
        except OSError as e:
            failed += 1
            message = f"[muted]{escape(str(e))}[/muted]"
            table.add_row("[error]FAIL[/error]", name, profile.mode, message)
        else:
            table.add_row("[success]OK[/success]", name, profile.mode, _describe(profile))

    console.print(table)

    if failed:
        print_warning(f"{len(selected) - failed} succeeded, {failed} failed")
        raise typer.Exit(code=1)


def _run_profile(profile: MirrorProfile) -> None:
    """Mirror a single profile according to its mode."""
    operation = symlink if profile.mode == "link" else copy
    operation(profile.source_path, profile.destination_path, profile.flags)


def _describe(profile: MirrorProfile) -> str:
    """One-line summary of what a profile mirrors."""
    arrow = "=>" if profile.mode == "link" else "->"
    return f"[muted]{escape(profile.source)} {arrow} {escape(profile.destination)}[/muted]"
