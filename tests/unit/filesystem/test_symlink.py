"""Unit tests for symlink mirroring.

Tests single-file links, idempotent re-linking, target replacement,
tree mirroring as links, exclusive mode, and pruning.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from treemirror.filesystem.mirror import symlink
from treemirror.filesystem.models import MirrorFlags
from treemirror.filesystem.removal import remove
from treemirror.filesystem.walker import walk


def _paths(root: Path) -> list[str]:
    """Return all entry paths below root, sorted."""
    paths: list[str] = []
    walk(root, lambda entry: paths.append(entry.path))
    return sorted(paths)


class TestSymlinkFile:
    """Tests for linking a single file."""

    def test_creates_absolute_link(self, source_tree: Path, tmp_path: Path) -> None:
        """The link points at the absolute source path."""
        dest = tmp_path / "link.txt"

        symlink(source_tree / "f1.txt", dest)

        assert dest.is_symlink()
        assert os.readlink(dest) == str((source_tree / "f1.txt").absolute())
        assert dest.read_text() == "f1"

    def test_relative_source_is_made_absolute(
        self, source_tree: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A relative source is resolved against the working directory."""
        monkeypatch.chdir(source_tree)
        dest = tmp_path / "link.txt"

        symlink("f1.txt", dest)

        assert os.readlink(dest) == os.path.join(os.getcwd(), "f1.txt")

    def test_creates_missing_parents(self, source_tree: Path, tmp_path: Path) -> None:
        """Missing parent directories of the link are created."""
        dest = tmp_path / "a" / "b" / "link.txt"

        symlink(source_tree / "f1.txt", dest)

        assert dest.is_symlink()

    def test_second_call_is_noop(self, source_tree: Path, tmp_path: Path) -> None:
        """Re-linking to the same target performs no filesystem mutation."""
        dest = tmp_path / "link.txt"
        symlink(source_tree / "f1.txt", dest)

        with (
            patch.object(Path, "symlink_to") as mock_symlink_to,
            patch.object(Path, "unlink") as mock_unlink,
            patch.object(Path, "mkdir", autospec=True, side_effect=Path.mkdir) as mock_mkdir,
            patch("treemirror.filesystem.mirror.remove", wraps=remove) as mock_remove,
        ):
            symlink(source_tree / "f1.txt", dest)

        mock_symlink_to.assert_not_called()
        mock_unlink.assert_not_called()
        mock_remove.assert_not_called()
        for call in mock_mkdir.call_args_list:
            assert call.args[0].is_dir()

    def test_replaces_link_target(self, source_tree: Path, tmp_path: Path) -> None:
        """Linking a different source replaces the old target."""
        dest = tmp_path / "link.txt"
        symlink(source_tree / "f1.txt", dest)

        symlink(source_tree / "p1" / "p1f1.txt", dest)

        assert os.readlink(dest) == str((source_tree / "p1" / "p1f1.txt").absolute())
        assert dest.read_text() == "p1f1"

    def test_replaces_regular_file(self, source_tree: Path, tmp_path: Path) -> None:
        """An existing regular file is replaced by the link."""
        dest = tmp_path / "link.txt"
        dest.write_text("regular")

        symlink(source_tree / "f1.txt", dest)

        assert dest.is_symlink()
        assert dest.read_text() == "f1"

    def test_replaces_directory(self, source_tree: Path, tmp_path: Path) -> None:
        """An existing directory is removed and replaced by the link."""
        dest = tmp_path / "link.txt"
        (dest / "nested").mkdir(parents=True)

        symlink(source_tree / "f1.txt", dest)

        assert dest.is_symlink()

    def test_replaces_dangling_link(self, source_tree: Path, tmp_path: Path) -> None:
        """A dangling link at the destination is replaced."""
        dest = tmp_path / "link.txt"
        dest.symlink_to(tmp_path / "missing")

        symlink(source_tree / "f1.txt", dest)

        assert dest.read_text() == "f1"

    def test_exclusive_rejects_existing(self, source_tree: Path, tmp_path: Path) -> None:
        """Exclusive mode fails even if the link already points at the source."""
        dest = tmp_path / "link.txt"
        symlink(source_tree / "f1.txt", dest)

        with pytest.raises(FileExistsError):
            symlink(source_tree / "f1.txt", dest, MirrorFlags(exclusive=True))

    def test_exclusive_new_link(self, source_tree: Path, tmp_path: Path) -> None:
        """Exclusive mode creates a link at a free destination."""
        dest = tmp_path / "link.txt"

        symlink(source_tree / "f1.txt", dest, MirrorFlags(exclusive=True))

        assert dest.is_symlink()

    def test_missing_source(self, tmp_path: Path) -> None:
        """Linking a nonexistent source raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            symlink(tmp_path / "missing", tmp_path / "link")

        assert not (tmp_path / "link").is_symlink()


class TestSymlinkTree:
    """Tests for mirroring a directory tree as links."""

    def test_mirrors_structure(self, source_tree: Path, tmp_path: Path) -> None:
        """Directories are created and files become links."""
        dest = tmp_path / "links"

        symlink(source_tree, dest)

        assert _paths(dest) == _paths(source_tree)
        assert (dest / "p1").is_dir()
        assert not (dest / "p1").is_symlink()
        assert (dest / "p1" / "p1f1.txt").is_symlink()
        assert os.readlink(dest / "p1" / "p1f1.txt") == str(
            (source_tree / "p1" / "p1f1.txt").absolute()
        )

    def test_second_call_is_noop(self, source_tree: Path, tmp_path: Path) -> None:
        """Re-mirroring an unchanged tree creates and removes nothing."""
        dest = tmp_path / "links"
        symlink(source_tree, dest)

        with (
            patch.object(Path, "symlink_to") as mock_symlink_to,
            patch.object(Path, "unlink") as mock_unlink,
            patch("treemirror.filesystem.mirror.remove", wraps=remove) as mock_remove,
        ):
            symlink(source_tree, dest, MirrorFlags(prune_stale=True))

        mock_symlink_to.assert_not_called()
        mock_unlink.assert_not_called()
        mock_remove.assert_not_called()

    def test_follows_source_changes(self, source_tree: Path, tmp_path: Path) -> None:
        """New source files get links on the next run."""
        dest = tmp_path / "links"
        symlink(source_tree, dest)
        (source_tree / "p2" / "p2f2.txt").write_text("p2f2")

        symlink(source_tree, dest)

        assert (dest / "p2" / "p2f2.txt").read_text() == "p2f2"

    def test_prune_removes_stale_links(self, source_tree: Path, tmp_path: Path) -> None:
        """Links for deleted source files are pruned."""
        dest = tmp_path / "links"
        symlink(source_tree, dest)
        (source_tree / "p1" / "p1f2.txt").unlink()
        (dest / "unrelated").mkdir()

        symlink(source_tree, dest, MirrorFlags(prune_stale=True))

        assert _paths(dest) == _paths(source_tree)

    def test_exclusive_rejects_existing_directory(self, source_tree: Path, tmp_path: Path) -> None:
        """Exclusive mode fails when the destination directory exists."""
        dest = tmp_path / "links"
        dest.mkdir()

        with pytest.raises(FileExistsError):
            symlink(source_tree, dest, MirrorFlags(exclusive=True))

    def test_source_symlink_to_directory_is_linked(self, source_tree: Path, tmp_path: Path) -> None:
        """A symlink inside the source is linked to, not descended into."""
        (source_tree / "dirlink").symlink_to(source_tree / "p2")
        dest = tmp_path / "links"

        symlink(source_tree, dest)

        assert os.readlink(dest / "dirlink") == str((source_tree / "dirlink").absolute())

    def test_directory_link_in_destination_is_replaced(
        self, source_tree: Path, tmp_path: Path
    ) -> None:
        """A link standing where a directory belongs is replaced, not followed."""
        dest = tmp_path / "links"
        dest.mkdir()
        (dest / "p1").symlink_to(source_tree / "p1")

        symlink(source_tree, dest, MirrorFlags(prune_stale=True))

        assert not (source_tree / "p1" / "p1f1.txt").is_symlink()
        assert (source_tree / "p1" / "p1f1.txt").read_text() == "p1f1"
        assert (dest / "p1").is_dir()
        assert not (dest / "p1").is_symlink()
        assert os.readlink(dest / "p1" / "p1f1.txt") == str(source_tree / "p1" / "p1f1.txt")
        assert _paths(dest) == _paths(source_tree)

    def test_destination_root_link_is_replaced(self, source_tree: Path, tmp_path: Path) -> None:
        """A destination that is itself a link to the source is not written through."""
        dest = tmp_path / "links"
        dest.symlink_to(source_tree)

        symlink(source_tree, dest)

        assert not dest.is_symlink()
        assert not (source_tree / "f1.txt").is_symlink()
        assert (source_tree / "f1.txt").read_text() == "f1"
        assert _paths(dest) == _paths(source_tree)
