"""CLI commands for treemirror.

This package contains all subcommand implementations.
"""

from treemirror.cli.commands import mirror, profile, remove, sync, tree

__all__ = ["mirror", "profile", "remove", "sync", "tree"]
