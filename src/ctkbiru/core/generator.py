from __future__ import annotations

"""
Blueprint Generation Service.

Coordinates one `gen` run:
1. Resolves the blueprint in the store.
2. Resolves the destination (current directory by default).
3. Enforces the empty-destination rule, or creates a fresh wrapper directory.
4. Streams the blueprint through the parser into the tree builder.
5. On failure, removes the directories this run created around the tree.
"""

import logging
import os
from typing import List, Optional

from ctkbiru.core.builder import build_tree
from ctkbiru.core.parser import iter_blueprint_lines
from ctkbiru.domain.blueprint_models import (
    STATUS_FAILED,
    STATUS_NOT_EMPTY,
    STATUS_NOT_FOUND,
    GenerationResult,
    create_error_result,
    create_success_result,
)
from ctkbiru.domain.errors import BlueprintError, BlueprintNotFoundError, DestinationNotEmptyError
from ctkbiru.infra.fs import is_directory_empty, normalize_path
from ctkbiru.infra.store import BlueprintStore

logger = logging.getLogger(__name__)


def generate_blueprint(
        store: BlueprintStore,
        name: str,
        target_path: Optional[str] = None,
        wrapper_name: Optional[str] = None,
) -> GenerationResult:
    """
    Generate the directory tree described by a stored blueprint.

    Args:
        store: Blueprint store to read from.
        name: Blueprint name (without extension).
        target_path: Destination directory. Defaults to the working directory
                     and is created (one level) if it does not exist.
        wrapper_name: Optional name of a new directory, created inside the
                      destination, that becomes the root of the tree.

    Returns:
        GenerationResult: Outcome of the run. Filesystem failures and malformed
                          blueprints are reported as status 'failed' after
                          rollback.

    Raises:
        OSError: If the destination cannot be prepared or inspected, before
                 any part of the tree has been written.
    """
    logger.info(f"Generation requested for blueprint '{name}'.")

    # -------------------------------------------------------------------------
    # 1) Blueprint resolution
    # -------------------------------------------------------------------------
    if not store.contains(name):
        msg = str(BlueprintNotFoundError(name))
        logger.info(msg)
        return create_error_result(STATUS_NOT_FOUND, msg, name)

    # -------------------------------------------------------------------------
    # 2) Destination preparation
    # -------------------------------------------------------------------------
    destination = normalize_path(target_path, os.getcwd())
    run_dirs: List[str] = []

    if not os.path.exists(destination):
        os.mkdir(destination)
        run_dirs.append(destination)
        logger.debug(f"Created destination directory {destination}")

    build_root = destination
    wrapper_created = False
    if wrapper_name:
        build_root = os.path.join(destination, wrapper_name)
        try:
            os.mkdir(build_root)
        except OSError:
            _remove_run_dirs(run_dirs)
            raise
        run_dirs.append(build_root)
        wrapper_created = True
    elif not is_directory_empty(destination):
        msg = str(DestinationNotEmptyError(destination))
        logger.info(msg)
        return create_error_result(STATUS_NOT_EMPTY, msg, name, destination)

    # -------------------------------------------------------------------------
    # 3) Parse and build
    # -------------------------------------------------------------------------
    try:
        with store.open(name) as stream:
            report = build_tree(iter_blueprint_lines(stream), build_root)
    except (BlueprintError, OSError) as e:
        _remove_run_dirs(run_dirs)
        msg = f"Failed to generate blueprint: {e}"
        logger.info(msg)
        return create_error_result(STATUS_FAILED, msg, name, build_root, wrapper_created)
    except BaseException:
        _remove_run_dirs(run_dirs)
        raise

    return create_success_result(name, report, wrapper_created=wrapper_created)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _remove_run_dirs(run_dirs: List[str]) -> None:
    """
    Remove the destination and wrapper directories created for this run.

    The builder has already removed its own entries, so these directories are
    expected to be empty; a non-empty one is left in place and logged.
    """
    for path in reversed(run_dirs):
        try:
            os.rmdir(path)
            logger.debug(f"Removed run directory {path}")
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.error(f"Could not remove run directory '{path}': {e}")
