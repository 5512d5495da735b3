"""CLI package for treemirror.

This package contains the Typer application and all subcommands.
"""

from treemirror.cli.main import app

__all__ = ["app"]
