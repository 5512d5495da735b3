"""Unit tests for the copy and link commands."""

import os
from pathlib import Path
from unittest.mock import patch

from treemirror.cli.main import app
from treemirror.filesystem.models import MirrorFlags
from typer.testing import CliRunner

runner = CliRunner()


class TestCopyCommand:
    """Tests for treemirror copy."""

    def test_copy_tree(self, source_tree: Path, tmp_path: Path) -> None:
        """The tree is copied and success is reported."""
        dest = tmp_path / "copy"

        result = runner.invoke(app, ["copy", str(source_tree), str(dest)])

        assert result.exit_code == 0
        assert (dest / "p1" / "p1f1.txt").read_text() == "p1f1"
        assert "Copied" in result.stdout

    def test_flags_are_passed(self, source_tree: Path, tmp_path: Path) -> None:
        """--exclusive and --prune map onto MirrorFlags."""
        dest = tmp_path / "copy"

        with patch("treemirror.cli.commands.mirror.copy") as mock_copy:
            result = runner.invoke(
                app, ["copy", str(source_tree), str(dest), "--exclusive", "--prune"]
            )

        assert result.exit_code == 0
        mock_copy.assert_called_once_with(
            source_tree, dest, MirrorFlags(exclusive=True, prune_stale=True)
        )

    def test_prune(self, source_tree: Path, tmp_path: Path) -> None:
        """--prune removes stale destination entries."""
        dest = tmp_path / "copy"
        dest.mkdir()
        (dest / "stale.txt").write_text("stale")

        result = runner.invoke(app, ["copy", str(source_tree), str(dest), "-p"])

        assert result.exit_code == 0
        assert not (dest / "stale.txt").exists()

    def test_exclusive_collision(self, source_tree: Path, tmp_path: Path) -> None:
        """An exclusive collision exits with an error."""
        dest = tmp_path / "copy"
        dest.mkdir()

        result = runner.invoke(app, ["copy", str(source_tree), str(dest), "-x"])

        assert result.exit_code == 1
        assert "Copy failed" in result.output

    def test_quiet(self, source_tree: Path, tmp_path: Path) -> None:
        """--quiet suppresses the success message."""
        result = runner.invoke(app, ["-q", "copy", str(source_tree), str(tmp_path / "copy")])

        assert result.exit_code == 0
        assert "Copied" not in result.stdout


class TestLinkCommand:
    """Tests for treemirror link."""

    def test_link_file(self, source_tree: Path, tmp_path: Path) -> None:
        """A single file is linked."""
        dest = tmp_path / "link.txt"

        result = runner.invoke(app, ["link", str(source_tree / "f1.txt"), str(dest)])

        assert result.exit_code == 0
        assert dest.is_symlink()
        assert os.readlink(dest) == str(source_tree / "f1.txt")

    def test_link_tree(self, source_tree: Path, tmp_path: Path) -> None:
        """A tree is mirrored as links."""
        dest = tmp_path / "links"

        result = runner.invoke(app, ["link", str(source_tree), str(dest)])

        assert result.exit_code == 0
        assert (dest / "p2" / "p2f1.txt").is_symlink()

    def test_missing_source(self, tmp_path: Path) -> None:
        """A missing source exits with an error."""
        result = runner.invoke(app, ["link", str(tmp_path / "missing"), str(tmp_path / "l")])

        assert result.exit_code == 1
        assert "Link failed" in result.output
