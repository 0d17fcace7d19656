from __future__ import annotations

"""
Blueprint Domain Data Models.

Defines the per-line record produced by the parser and the immutable
reports and results that travel from the builder and the generation
service up to the command surface.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

# -----------------------------------------------------------------------------
# LINE RECORDS
# -----------------------------------------------------------------------------

class BlueprintKind(Enum):
    """Type of node a blueprint line describes."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class BlueprintLine:
    """
    One parsed blueprint entry.

    Attributes:
        name: Segment name without indentation or trailing directory marker.
        depth: Count of leading space characters.
        kind: FILE or DIRECTORY.
        line_number: 1-based position in the source file (0 if standalone).
    """
    name: str
    depth: int
    kind: BlueprintKind = BlueprintKind.FILE
    line_number: int = 0

    @property
    def is_dir(self) -> bool:
        return self.kind is BlueprintKind.DIRECTORY

# -----------------------------------------------------------------------------
# BUILD OUTCOMES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildReport:
    """
    Summary of a successful tree build.

    Attributes:
        destination: Root directory the tree was written under.
        directories: Number of directories created.
        files: Number of empty files created.
        created: Absolute paths of created entries in creation order.
    """
    destination: str
    directories: int = 0
    files: int = 0
    created: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class GenerationResult:
    """
    Unified result of one `gen` invocation.

    Attributes:
        ok: True when the tree was generated.
        status: 'generated', 'not_found', 'not_empty' or 'failed'.
        error: Descriptive message on failure.
        blueprint: Name of the blueprint requested.
        destination: Build root (wrapper directory when one was requested).
        wrapper_created: Whether a wrapper directory was created for the run.
        directories: Directories created.
        files: Files created.
    """
    ok: bool
    status: str
    error: str
    blueprint: str
    destination: str
    wrapper_created: bool = False
    directories: int = 0
    files: int = 0

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

STATUS_GENERATED = "generated"
STATUS_NOT_FOUND = "not_found"
STATUS_NOT_EMPTY = "not_empty"
STATUS_FAILED = "failed"


def create_error_result(
        status: str,
        error: str,
        blueprint: str,
        destination: str = "",
        wrapper_created: bool = False,
) -> GenerationResult:
    """
    Create a failed generation result.

    Args:
        status: One of the non-success status identifiers.
        error: Detailed error description.
        blueprint: Requested blueprint name.
        destination: Resolved build root, if known.
        wrapper_created: Whether a wrapper was created (and removed again).

    Returns:
        GenerationResult: Immutable error result.
    """
    return GenerationResult(
        ok=False,
        status=status,
        error=error,
        blueprint=blueprint,
        destination=destination,
        wrapper_created=wrapper_created,
    )


def create_success_result(
        blueprint: str,
        report: BuildReport,
        wrapper_created: bool = False,
        destination: Optional[str] = None,
) -> GenerationResult:
    """Create a successful generation result from a build report."""
    return GenerationResult(
        ok=True,
        status=STATUS_GENERATED,
        error="",
        blueprint=blueprint,
        destination=destination or report.destination,
        wrapper_created=wrapper_created,
        directories=report.directories,
        files=report.files,
    )
