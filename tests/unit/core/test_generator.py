from __future__ import annotations

"""
Unit tests for the Blueprint Generation Service.

Verifies:
1. Status mapping (generated, not_found, not_empty, failed).
2. Wrapper and destination directory creation.
3. That a failed run leaves the filesystem exactly as it found it.
"""

import os
from pathlib import Path
from typing import List

import pytest

from ctkbiru.core.generator import generate_blueprint
from ctkbiru.domain.blueprint_models import (
    STATUS_FAILED,
    STATUS_GENERATED,
    STATUS_NOT_EMPTY,
    STATUS_NOT_FOUND,
)


def listing(root: Path) -> List[str]:
    entries = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel = os.path.relpath(dirpath, root)
        for d in dirnames:
            entries.append(os.path.normpath(os.path.join(rel, d)).replace(os.sep, "/") + "/")
        for f in filenames:
            entries.append(os.path.normpath(os.path.join(rel, f)).replace(os.sep, "/"))
    return sorted(entries)


SCENARIO_A = "a/\n  b\n  c/\n    d\n"


# -----------------------------------------------------------------------------
# SUCCESS PATHS
# -----------------------------------------------------------------------------

def test_generate_into_empty_destination(store_with, empty_destination: Path) -> None:
    """TC-01: Basic generation into an existing empty directory."""
    store = store_with("web", SCENARIO_A)

    result = generate_blueprint(store, "web", target_path=str(empty_destination))

    assert result.ok
    assert result.status == STATUS_GENERATED
    assert result.destination == str(empty_destination)
    assert result.directories == 2
    assert result.files == 2
    assert listing(empty_destination) == ["a/", "a/b", "a/c/", "a/c/d"]


def test_generate_with_wrapper_into_non_empty_destination(store_with, tmp_path: Path) -> None:
    """TC-02: A wrapper lifts the empty-destination rule."""
    store = store_with("web", SCENARIO_A)
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "existing.txt").write_text("keep", encoding="utf-8")

    result = generate_blueprint(store, "web", target_path=str(dest), wrapper_name="proj")

    assert result.ok
    assert result.wrapper_created
    assert result.destination == str(dest / "proj")
    assert listing(dest) == ["existing.txt", "proj/", "proj/a/", "proj/a/b", "proj/a/c/", "proj/a/c/d"]


def test_generate_creates_missing_destination(store_with, tmp_path: Path) -> None:
    """TC-03: A missing destination is created (one level) and filled."""
    store = store_with("web", SCENARIO_A)
    dest = tmp_path / "fresh"

    result = generate_blueprint(store, "web", target_path=str(dest))

    assert result.ok
    assert (dest / "a" / "c" / "d").is_file()


def test_generate_defaults_to_working_directory(store_with, tmp_path: Path, monkeypatch) -> None:
    """TC-04: Without a path the current directory is the destination."""
    store = store_with("one", "only.txt\n")
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)

    result = generate_blueprint(store, "one")

    assert result.ok
    assert (cwd / "only.txt").is_file()


def test_generate_empty_blueprint(store_with, empty_destination: Path) -> None:
    """TC-05: A blueprint with only blank lines generates nothing and succeeds."""
    store = store_with("blank", "\n\n/\n")

    result = generate_blueprint(store, "blank", target_path=str(empty_destination))

    assert result.ok
    assert listing(empty_destination) == []

# -----------------------------------------------------------------------------
# REFUSALS
# -----------------------------------------------------------------------------

def test_generate_unknown_blueprint(blueprint_store, empty_destination: Path) -> None:
    """TC-06: Unknown names report not_found and touch nothing."""
    result = generate_blueprint(blueprint_store, "ghost", target_path=str(empty_destination))

    assert not result.ok
    assert result.status == STATUS_NOT_FOUND
    assert "ghost" in result.error
    assert listing(empty_destination) == []


def test_generate_refuses_non_empty_destination(store_with, tmp_path: Path) -> None:
    """TC-07: Without a wrapper a populated destination is refused."""
    store = store_with("web", SCENARIO_A)
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "x").write_text("", encoding="utf-8")

    result = generate_blueprint(store, "web", target_path=str(dest))

    assert result.status == STATUS_NOT_EMPTY
    assert listing(dest) == ["x"]


def test_generate_existing_wrapper_raises(store_with, empty_destination: Path) -> None:
    """TC-08: The wrapper must be new; an existing one is an OS-level failure."""
    store = store_with("web", SCENARIO_A)
    (empty_destination / "proj").mkdir()

    with pytest.raises(FileExistsError):
        generate_blueprint(store, "web", target_path=str(empty_destination), wrapper_name="proj")

    assert listing(empty_destination) == ["proj/"]

# -----------------------------------------------------------------------------
# ROLLBACK
# -----------------------------------------------------------------------------

def test_failure_on_last_line_restores_destination(store_with, empty_destination: Path) -> None:
    """TC-09: A collision on the final line leaves the destination untouched."""
    store = store_with("dup", "a/\n  b\n  c/\n    d\n  b\n")
    before = listing(empty_destination)

    result = generate_blueprint(store, "dup", target_path=str(empty_destination))

    assert result.status == STATUS_FAILED
    assert "line 5" in result.error
    assert listing(empty_destination) == before


def test_failure_removes_created_wrapper(store_with, tmp_path: Path) -> None:
    """TC-10: The wrapper created for a failed run is removed as well."""
    store = store_with("bad", "a/\n  b/\n      c\n")
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "keep.txt").write_text("data", encoding="utf-8")

    result = generate_blueprint(store, "bad", target_path=str(dest), wrapper_name="proj")

    assert result.status == STATUS_FAILED
    assert result.wrapper_created
    assert listing(dest) == ["keep.txt"]


def test_failure_removes_created_destination(store_with, tmp_path: Path) -> None:
    """TC-11: A destination created by the run does not survive its failure."""
    store = store_with("bad", "a/\n  b\n    c\n")
    dest = tmp_path / "fresh"

    result = generate_blueprint(store, "bad", target_path=str(dest), wrapper_name="proj")

    assert result.status == STATUS_FAILED
    assert not dest.exists()


def test_undecodable_blueprint_fails_cleanly(blueprint_store, empty_destination: Path) -> None:
    """TC-12: Invalid UTF-8 mid-file is a failure with full rollback."""
    blueprint_store.write("bin", b"a/\n  ok\n  \xff\xfe\n")

    result = generate_blueprint(blueprint_store, "bin", target_path=str(empty_destination))

    assert result.status == STATUS_FAILED
    assert "line 3" in result.error
    assert listing(empty_destination) == []
