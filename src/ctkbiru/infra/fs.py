from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides storage directory resolution, path normalization and small
filesystem probes shared by the store and the generation service.
"""

import os
from typing import Optional

from ctkbiru.domain.constants import STORAGE_DIR_NAME, STORAGE_ENV_VAR
from ctkbiru.domain.errors import StorageLocationError

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the per-user directory that holds the blueprint store.

    Resolution order:
    - $CTKBIRU_HOME when set and non-empty.
    - ~/.ctkbiru otherwise.

    The directory is not created here; the store creates it on first write.

    Returns:
        str: Absolute path to the storage directory.

    Raises:
        StorageLocationError: If no home directory can be determined.
    """
    override = os.environ.get(STORAGE_ENV_VAR, "").strip()
    if override:
        return os.path.abspath(os.path.expandvars(os.path.expanduser(override)))

    home = os.path.expanduser("~")
    if not home or home == "~":
        raise StorageLocationError(
            "Something went wrong, user's home directory does not exist!"
        )
    return os.path.abspath(os.path.join(home, STORAGE_DIR_NAME))


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# FILESYSTEM PROBES
# -----------------------------------------------------------------------------

def is_directory_empty(path: str) -> bool:
    """
    Check whether a directory has no entries at all (hidden ones included).

    Raises:
        OSError: If the path cannot be listed.
    """
    with os.scandir(path) as it:
        return next(it, None) is None


def has_extension(path: str, extension: str) -> bool:
    """Compare the final suffix of a path against an extension like '.txt'."""
    _, ext = os.path.splitext(path)
    return ext == extension
