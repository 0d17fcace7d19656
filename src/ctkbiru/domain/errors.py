from __future__ import annotations

"""
Domain Exception Hierarchy.

Every failure raised by the core and the store derives from CtkbiruError so
that the command dispatcher can tell expected conditions (missing blueprints,
malformed content, filesystem refusals) apart from programming errors.
"""

from typing import Optional


class CtkbiruError(Exception):
    """Base class for all application errors."""


# -----------------------------------------------------------------------------
# STORE AND ENVIRONMENT
# -----------------------------------------------------------------------------

class StorageLocationError(CtkbiruError):
    """The per-user storage directory could not be resolved."""


class BlueprintNotFoundError(CtkbiruError):
    """The named blueprint (or the store itself) does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Blueprint not found: {name}")
        self.name = name


class InvalidBlueprintFileError(CtkbiruError):
    """A source file is missing, not a regular file, or has the wrong extension."""

    def __init__(self, path: str):
        super().__init__(f"Invalid file format or file doesn't exist: {path}")
        self.path = path


class DestinationNotEmptyError(CtkbiruError):
    """Generation target already holds entries and no wrapper name was given."""

    def __init__(self, path: str):
        super().__init__(f"Directory must be empty: {path}")
        self.path = path


# -----------------------------------------------------------------------------
# BLUEPRINT CONTENT
# -----------------------------------------------------------------------------

class BlueprintError(CtkbiruError):
    """Base class for failures while turning a blueprint into a tree."""


class MalformedBlueprintError(BlueprintError):
    """
    A blueprint line cannot be placed in the tree.

    Attributes:
        line_number: 1-based line in the blueprint file, 0 when unknown.
        reason: Human readable description without the line prefix.
    """

    def __init__(self, reason: str, line_number: int = 0):
        prefix = f"line {line_number}: " if line_number else ""
        super().__init__(f"{prefix}{reason}")
        self.reason = reason
        self.line_number = line_number


class BlueprintDecodeError(MalformedBlueprintError):
    """A blueprint line is not valid UTF-8."""


class TreeCreationError(BlueprintError):
    """
    The filesystem refused to create an entry.

    Attributes:
        path: Absolute path of the entry that failed.
        line_number: Blueprint line that produced the entry.
    """

    def __init__(self, path: str, cause: Optional[OSError] = None, line_number: int = 0):
        detail = f": {cause.strerror or cause}" if cause is not None else ""
        prefix = f"line {line_number}: " if line_number else ""
        super().__init__(f"{prefix}cannot create '{path}'{detail}")
        self.path = path
        self.line_number = line_number
