"""Profile management commands.

Store, list and delete named mirror profiles in the config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from treemirror.core.config import (
    ConfigError,
    MirrorProfile,
    load_config_or_default,
    save_config,
)
from treemirror.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage stored mirror profiles.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("add")
def add_profile(
    name: Annotated[str, typer.Argument(help="Profile name.")],
    source: Annotated[str, typer.Argument(help="Source file or directory.")],
    destination: Annotated[str, typer.Argument(help="Destination path.")],
    link: Annotated[
        bool,
        typer.Option("--link", "-L", help="Mirror as symlinks instead of copies."),
    ] = False,
    exclusive: Annotated[
        bool,
        typer.Option("--exclusive", "-x", help="Fail instead of overwriting."),
    ] = False,
    prune: Annotated[
        bool,
        typer.Option("--prune", "-p", help="Delete stale destination entries."),
    ] = False,
    description: Annotated[
        str | None,
        typer.Option("--description", help="Free-form note."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Replace an existing profile."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to use."),
    ] = None,
) -> None:
    """Store a mirror profile under NAME."""
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if name in config.profiles and not force:
        print_error(f"Profile already exists: {name} (use --force to replace)")
        raise typer.Exit(code=1)

    try:
        config.profiles[name] = MirrorProfile(
            source=source,
            destination=destination,
            mode="link" if link else "copy",
            exclusive=exclusive,
            prune_stale=prune,
            description=description,
        )
    except ValueError as e:
        print_error(f"Invalid profile: {e}")
        raise typer.Exit(code=1) from e

    try:
        saved = save_config(config, config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Profile '{name}' saved to {saved}")


@app.command("list")
def list_profiles(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to use."),
    ] = None,
) -> None:
    """List stored profiles."""
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not config.profiles:
        print_info("No profiles configured.")
        return

    table = Table(
        title="Mirror Profiles",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Name", style="bold")
    table.add_column("Mode", width=6)
    table.add_column("Source")
    table.add_column("Destination")
    table.add_column("Flags", style="muted")

    for name, profile in sorted(config.profiles.items()):
        flags = [
            label
            for label, enabled in (
                ("exclusive", profile.exclusive),
                ("prune", profile.prune_stale),
            )
            if enabled
        ]
        table.add_row(
            escape(name),
            profile.mode,
            escape(profile.source),
            escape(profile.destination),
            ", ".join(flags) or "-",
        )

    console.print(table)


@app.command("remove")
def remove_profile(
    name: Annotated[str, typer.Argument(help="Profile name.")],
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to use."),
    ] = None,
) -> None:
    """Delete the profile NAME (the mirrored files are left alone)."""
    try:
        config = load_config_or_default(config_path)
        config.get_profile(name)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    del config.profiles[name]

    try:
        save_config(config, config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Profile '{name}' removed.")
