"""JSON and text document helpers.

Thin read/write wrappers used next to the mirror operations. Reads can
substitute a default for a missing file; writes create missing parent
directories unless ``exclusive`` is set, in which case an existing file
is an error.
"""

import json
from pathlib import Path
from typing import Any

from treemirror.filesystem.models import MirrorFlags, StrPath
from treemirror.filesystem.removal import remove


class _Missing:
    """Sentinel type for "no default given"."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def read_text(path: StrPath, default: Any = MISSING, *, encoding: str = "utf-8") -> Any:
    """Read a text file.

    Args:
        path: File to read.
        default: Returned instead of raising when the file does not exist.
        encoding: Text encoding.

    Returns:
        File content, or ``default`` if the file is missing.

    Raises:
        FileNotFoundError: If the file is missing and no default was given.
    """
    try:
        return Path(path).read_text(encoding=encoding)
    except FileNotFoundError:
        if default is MISSING:
            raise
        return default


def read_json(path: StrPath, default: Any = MISSING) -> Any:
    """Read and decode a JSON file.

    Args:
        path: File to read.
        default: Returned instead of raising when the file does not exist.

    Returns:
        Decoded JSON value, or ``default`` if the file is missing.

    Raises:
        FileNotFoundError: If the file is missing and no default was given.
        json.JSONDecodeError: If the content is not valid JSON.
    """
    text = read_text(path, default=MISSING if default is MISSING else None)
    if text is None:
        return default
    return json.loads(text)


def write_text(
    path: StrPath,
    text: str,
    flags: MirrorFlags | None = None,
    *,
    encoding: str = "utf-8",
) -> None:
    """Write a text file, replacing any previous content.

    Args:
        path: File to write.
        text: Content to write.
        flags: With ``exclusive`` the file must not exist yet and no
            parent directories are created.
        encoding: Text encoding.

    Raises:
        FileExistsError: If ``exclusive`` is set and the file exists.
    """
    flags = flags or MirrorFlags()
    target = Path(path)

    if not flags.exclusive:
        target.parent.mkdir(parents=True, exist_ok=True)

    mode = "x" if flags.exclusive else "w"
    with target.open(mode, encoding=encoding) as f:
        f.write(text)


def write_json(
    path: StrPath,
    data: Any,
    flags: MirrorFlags | None = None,
    *,
    indent: int | None = 2,
) -> None:
    """Encode ``data`` as JSON and write it to ``path``.

    Args:
        path: File to write.
        data: JSON-serialisable value.
        flags: Same semantics as for write_text.
        indent: Indentation passed to json.dumps.

    Raises:
        FileExistsError: If ``exclusive`` is set and the file exists.
        TypeError: If ``data`` is not JSON-serialisable.
    """
    write_text(path, json.dumps(data, indent=indent) + "\n", flags)


def remove_document(path: StrPath) -> None:
    """Delete a document; a missing file is not an error."""
    remove(path)
