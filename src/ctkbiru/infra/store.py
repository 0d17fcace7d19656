from __future__ import annotations

"""
Blueprint Store.

Flat directory of '<name>.txt' blueprint files. Files with any other
extension, and anything that is not a regular file, are invisible to the
store.
"""

import logging
import os
import shutil
from typing import BinaryIO, List, Optional

from ctkbiru.domain.constants import BLUEPRINT_EXTENSION
from ctkbiru.domain.errors import BlueprintNotFoundError, InvalidBlueprintFileError
from ctkbiru.infra.fs import has_extension

logger = logging.getLogger(__name__)


def is_valid_blueprint_file(path: str) -> bool:
    """True for an existing regular file carrying the blueprint extension."""
    return os.path.isfile(path) and has_extension(path, BLUEPRINT_EXTENSION)


class BlueprintStore:
    """
    Access layer over the per-user storage directory.

    Args:
        storage_dir: Absolute path of the storage directory. It may not
                     exist yet; it is created on the first save.
    """

    def __init__(self, storage_dir: str):
        self.storage_dir = storage_dir

    # -------------------------------------------------------------------------
    # LOCATION
    # -------------------------------------------------------------------------

    def exists(self) -> bool:
        return os.path.isdir(self.storage_dir)

    def ensure(self) -> None:
        """
        Create the storage directory if missing.

        Raises:
            OSError: If the directory cannot be created.
        """
        if not self.exists():
            os.makedirs(self.storage_dir, exist_ok=True)
            logger.info(f"Created blueprint storage at {self.storage_dir}")

    def path_for(self, name: str) -> str:
        return os.path.join(self.storage_dir, f"{name}{BLUEPRINT_EXTENSION}")

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def list(self) -> List[str]:
        """
        Return the names (file stems) of all stored blueprints, sorted.

        A missing storage directory simply yields an empty list.
        """
        if not self.exists():
            return []

        names: List[str] = []
        with os.scandir(self.storage_dir) as entries:
            for entry in entries:
                if is_valid_blueprint_file(entry.path):
                    names.append(os.path.splitext(entry.name)[0])
        return sorted(names)

    def contains(self, name: str) -> bool:
        return self.exists() and is_valid_blueprint_file(self.path_for(name))

    def open(self, name: str) -> BinaryIO:
        """
        Open a stored blueprint for binary reading.

        Raises:
            BlueprintNotFoundError: If the store or the blueprint is missing.
        """
        if not self.contains(name):
            raise BlueprintNotFoundError(name)
        return open(self.path_for(name), "rb")

    def read_lines(self, name: str) -> List[str]:
        """
        Read a blueprint for display.

        Undecodable bytes are replaced rather than failing, since the raw
        content is only being shown to the user.

        Raises:
            BlueprintNotFoundError: If the store or the blueprint is missing.
        """
        with self.open(name) as f:
            data = f.read()
        return data.decode("utf-8", errors="replace").splitlines()

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def save(self, source_path: str, name: Optional[str] = None) -> str:
        """
        Copy an external blueprint file into the store byte for byte.

        Args:
            source_path: File to import. Must be an existing '.txt' file.
            name: Optional blueprint name. Defaults to the source file name.

        Returns:
            str: Absolute path of the stored copy.

        Raises:
            InvalidBlueprintFileError: If the source is not a valid blueprint
                                       file. Nothing is written in that case.
            OSError: If the storage directory or the copy cannot be written.
        """
        if not is_valid_blueprint_file(source_path):
            raise InvalidBlueprintFileError(source_path)

        self.ensure()
        if name:
            target = self.path_for(name)
        else:
            target = os.path.join(self.storage_dir, os.path.basename(source_path))

        shutil.copyfile(source_path, target)
        logger.info(f"Stored blueprint '{source_path}' as '{target}'")
        return target

    def write(self, name: str, content: bytes) -> str:
        """
        Store raw blueprint content under a name, replacing any previous one.

        Returns:
            str: Absolute path of the stored blueprint.

        Raises:
            OSError: If the storage directory or the file cannot be written.
        """
        self.ensure()
        target = self.path_for(name)
        with open(target, "wb") as f:
            f.write(content)
        logger.info(f"Wrote blueprint '{name}' ({len(content)} bytes)")
        return target

    def delete(self, name: str) -> None:
        """
        Remove a stored blueprint.

        Raises:
            BlueprintNotFoundError: If the store or the blueprint is missing.
            OSError: If the file cannot be removed.
        """
        if not self.contains(name):
            raise BlueprintNotFoundError(name)
        os.remove(self.path_for(name))
        logger.info(f"Removed blueprint '{name}'")
