"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

# Relative paths of the sample tree, in pre-order with siblings sorted
SAMPLE_TREE_PATHS: list[str] = [
    "f1.txt",
    "p1",
    "p1/p1f1.txt",
    "p1/p1f2.txt",
    "p2",
    "p2/p2f1.txt",
]


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create the sample tree {f1.txt, p1/{p1f1.txt, p1f2.txt}, p2/{p2f1.txt}}."""
    root = tmp_path / "src"
    (root / "p1").mkdir(parents=True)
    (root / "p2").mkdir()
    (root / "f1.txt").write_text("f1")
    (root / "p1" / "p1f1.txt").write_text("p1f1")
    (root / "p1" / "p1f2.txt").write_text("p1f2")
    (root / "p2" / "p2f1.txt").write_text("p2f1")
    return root


@pytest.fixture
def sample_paths() -> list[str]:
    """Expected entry paths of the sample tree, sorted."""
    return list(SAMPLE_TREE_PATHS)
