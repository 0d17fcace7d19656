from __future__ import annotations

"""
Unit tests for Directory Snapshot.

Verifies ordering, indentation and the snapshot -> parse -> build round
trip.
"""

import os
from pathlib import Path

import pytest

from ctkbiru.core.builder import build_tree
from ctkbiru.core.parser import parse_line
from ctkbiru.core.snapshot import snapshot_directory


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Structure:
    /project
      /src
        /pkg
          core.py
        main.py
      /empty
      README.md
      setup.py
    """
    root = tmp_path / "project"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "src" / "pkg" / "core.py").write_text("x = 1", encoding="utf-8")
    (root / "src" / "main.py").write_text("", encoding="utf-8")
    (root / "README.md").write_text("# hi", encoding="utf-8")
    (root / "setup.py").write_text("", encoding="utf-8")
    return root


def test_snapshot_orders_directories_first(sample_tree: Path) -> None:
    """TC-01: Directories precede files; each group sorted by name."""
    assert snapshot_directory(str(sample_tree)) == [
        "empty/",
        "src/",
        "  pkg/",
        "    core.py",
        "  main.py",
        "README.md",
        "setup.py",
    ]


def test_snapshot_custom_indent(sample_tree: Path) -> None:
    """TC-02: Indentation width is configurable."""
    lines = snapshot_directory(str(sample_tree / "src"), indent_width=4)
    assert lines == ["pkg/", "    core.py", "main.py"]


def test_snapshot_rejects_non_positive_indent(sample_tree: Path) -> None:
    with pytest.raises(ValueError):
        snapshot_directory(str(sample_tree), indent_width=0)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_snapshot_skips_symlinks(sample_tree: Path) -> None:
    """TC-03: Symlinks cannot be expressed in a blueprint and are omitted."""
    try:
        os.symlink(sample_tree / "README.md", sample_tree / "link.md")
    except OSError:
        pytest.skip("symlink creation not permitted")

    assert "link.md" not in snapshot_directory(str(sample_tree))


def test_round_trip_reproduces_tree(sample_tree: Path, tmp_path: Path) -> None:
    """TC-04: snapshot -> parse -> build yields the same names, levels and kinds."""
    original = snapshot_directory(str(sample_tree))

    parsed = [parse_line(line, i) for i, line in enumerate(original, start=1)]
    target = tmp_path / "copy"
    target.mkdir()
    build_tree(parsed, str(target))

    assert snapshot_directory(str(target)) == original
    # generated files are empty; contents are not part of a blueprint
    assert (target / "README.md").stat().st_size == 0


@pytest.mark.parametrize("bad_name", [" lead", "   ", "two\nlines"])
def test_snapshot_rejects_names_that_do_not_round_trip(tmp_path: Path, bad_name: str) -> None:
    """TC-05: Leading spaces or line breaks in a name cannot be expressed as a blueprint line."""
    root = tmp_path / "project"
    (root / "pkg").mkdir(parents=True)
    try:
        (root / "pkg" / bad_name).write_text("", encoding="utf-8")
    except OSError:
        pytest.skip("file name not supported by this filesystem")

    with pytest.raises(ValueError, match="unsupported name"):
        snapshot_directory(str(root))


def test_snapshot_accepts_inner_spaces(tmp_path: Path) -> None:
    """TC-06: Spaces after the first character are part of the name."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "my notes.txt").write_text("", encoding="utf-8")

    assert snapshot_directory(str(root)) == ["my notes.txt"]
