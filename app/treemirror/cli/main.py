"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from treemirror import __version__
from treemirror.cli.commands import mirror, profile, remove, sync, tree
from treemirror.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="treemirror",
    help="Walk, copy and symlink-mirror directory trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"treemirror version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """treemirror - Walk, copy and symlink-mirror directory trees.

    Reproduce a source tree at a destination by copying or linking,
    optionally pruning destination entries that no longer exist in
    the source.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose=verbose, quiet=quiet)


# Register commands
app.command(name="walk")(tree.walk_tree)
app.command(name="copy")(mirror.copy_tree)
app.command(name="link")(mirror.link_tree)
app.command(name="remove")(remove.remove_paths)
app.command(name="sync")(sync.sync_profiles)
app.add_typer(profile.app, name="profile")


if __name__ == "__main__":
    app()
