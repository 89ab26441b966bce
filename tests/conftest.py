"""Test configuration and fixtures for micro-fs."""

import pytest


@pytest.fixture
def temp_dir(tmp_path):
    """Create a scratch directory seeded with an empty .gitkeep."""
    root = tmp_path / "tmp"
    root.mkdir()
    (root / ".gitkeep").write_text("")
    return root


@pytest.fixture
def sample_tree(tmp_path):
    """Create a small directory tree with nested files and an empty directory."""
    root = tmp_path / "tree"
    (root / "nested" / "deeper").mkdir(parents=True)
    (root / "empty").mkdir()

    (root / "a.txt").write_text("alpha")
    (root / "nested" / "b.txt").write_text("beta")
    (root / "nested" / "deeper" / "c.bin").write_bytes(b"\x00\x01\xff")

    return root
