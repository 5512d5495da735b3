"""Idempotent recursive removal of filesystem paths."""

import logging
import shutil
from pathlib import Path

from treemirror.filesystem.models import StrPath

logger = logging.getLogger(__name__)


def remove(path: StrPath) -> None:
    """Delete ``path`` and everything below it.

    Dispatches on the entry type without following symlinks:
    - Directories: shutil.rmtree
    - Files, symlinks, and dead symlinks: Path.unlink

    Removing a path that does not exist is a success.

    Args:
        path: Path to delete.

    Raises:
        OSError: If the path exists but cannot be deleted.
    """
    target = Path(path)

    if not exists(target):
        return

    # Directories (but not symlinks to directories)
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    else:
        # Tolerates the path vanishing between the check and the unlink
        target.unlink(missing_ok=True)

    logger.debug("Removed %s", target)


def exists(path: Path) -> bool:
    """Check whether ``path`` exists, counting dangling symlinks."""
    return path.is_symlink() or path.exists()
