from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the blueprint storage directory from the real user home.
3. Shared fixtures for stores and blueprint files.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from ctkbiru.infra.logging import shutdown_logging  # noqa: E402
from ctkbiru.infra.store import BlueprintStore  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_storage(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Point CTKBIRU_HOME at a per-test directory.

    The directory is not created, matching a fresh installation.
    """
    storage = tmp_path / "storage"
    monkeypatch.setenv("CTKBIRU_HOME", str(storage))
    return storage


@pytest.fixture(autouse=True)
def reset_app_logging():
    """Detach handlers installed by in-process CLI runs after each test."""
    yield
    shutdown_logging()


@pytest.fixture
def blueprint_store(isolated_storage: Path) -> BlueprintStore:
    """Return a store over the isolated (initially missing) storage directory."""
    return BlueprintStore(str(isolated_storage))


@pytest.fixture
def store_with(blueprint_store: BlueprintStore):
    """
    Factory fixture: save raw blueprint text under a name and return the store.

    Usage:
        store = store_with("web", "app/\\n  main.py\\n")
    """
    def _make(name: str, content: str) -> BlueprintStore:
        blueprint_store.write(name, content.encode("utf-8"))
        return blueprint_store
    return _make


@pytest.fixture
def empty_destination(tmp_path: Path) -> Path:
    """An existing, empty target directory."""
    dest = tmp_path / "dest"
    dest.mkdir()
    return dest
