from __future__ import annotations

"""
Blueprint Tree Builder.

Materializes a stream of parsed blueprint lines under a destination
directory in a single forward pass.

The working state is a PathStack: a list of path segments indexed by tree
level, where slot d holds the name chosen for level d in the branch being
built. Each line either replaces the top slot (sibling), pushes a new slot
(child) or pops back to an open level (dedent) before its path is joined and
created. Every entry created in the pass is journaled so that a failure at
any line removes exactly what this pass wrote.
"""

import logging
import os
from typing import Iterable, List, Optional

from ctkbiru.domain.blueprint_models import BlueprintKind, BlueprintLine, BuildReport
from ctkbiru.domain.errors import MalformedBlueprintError, TreeCreationError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH STACK
# -----------------------------------------------------------------------------

class PathStack:
    """
    Depth-indexed segment stack for one generation pass.

    Levels are derived from indentation ordering, not magnitude: the first
    indentation increase fixes the step, a deeper line must be exactly one
    step deeper, and a dedent must land on the indentation of a level that
    is still open.
    """

    def __init__(self) -> None:
        self.segments: List[str] = []
        self.indents: List[int] = []
        self.kinds: List[BlueprintKind] = []
        self.indent_step: Optional[int] = None

    @property
    def current_depth(self) -> int:
        """Level of the most recently placed line (-1 before the first one)."""
        return len(self.segments) - 1

    def advance(self, line: BlueprintLine) -> List[str]:
        """
        Place a line in the stack and return the segments of its path.

        Raises:
            MalformedBlueprintError: On a skipped level, a dedent that does not
                                     align with an open level, or nesting
                                     under a file.
        """
        if not self.segments:
            self._push(line)
            return self.segments

        top_indent = self.indents[-1]

        if line.depth == top_indent:
            self._replace(line)

        elif line.depth > top_indent:
            step = line.depth - top_indent
            if self.indent_step is None:
                self.indent_step = step
            elif step != self.indent_step:
                raise MalformedBlueprintError(
                    f"'{line.name}' is indented {step} spaces deeper than its parent, "
                    f"expected {self.indent_step} (skipped level)",
                    line.line_number,
                )
            if self.kinds[-1] is not BlueprintKind.DIRECTORY:
                raise MalformedBlueprintError(
                    f"'{line.name}' is nested under file '{self.segments[-1]}'",
                    line.line_number,
                )
            self._push(line)

        else:
            while self.indents and self.indents[-1] > line.depth:
                self._pop()
            if not self.indents or self.indents[-1] != line.depth:
                raise MalformedBlueprintError(
                    f"'{line.name}' is dedented to column {line.depth}, "
                    f"which does not match any open level",
                    line.line_number,
                )
            self._replace(line)

        return self.segments

    def relative_path(self) -> str:
        return os.path.join(*self.segments) if self.segments else ""

    def _push(self, line: BlueprintLine) -> None:
        self.segments.append(line.name)
        self.indents.append(line.depth)
        self.kinds.append(line.kind)

    def _replace(self, line: BlueprintLine) -> None:
        self.segments[-1] = line.name
        self.kinds[-1] = line.kind

    def _pop(self) -> None:
        self.segments.pop()
        self.indents.pop()
        self.kinds.pop()

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(lines: Iterable[BlueprintLine], destination_root: str) -> BuildReport:
    """
    Create the directories and empty files described by the blueprint lines.

    Args:
        lines: Parsed blueprint lines in file order.
        destination_root: Existing directory the tree is created under.

    Returns:
        BuildReport: Counts and paths of the created entries.

    Raises:
        MalformedBlueprintError: If a line cannot be placed in the tree, or its
                                 path would leave destination_root.
        TreeCreationError: If the filesystem refuses an entry.
        Any error raised while iterating `lines` (e.g. decoding errors).

        On any error, every entry created during this call has already been
        removed when the exception propagates.
    """
    root = os.path.abspath(destination_root)
    stack = PathStack()
    created: List[str] = []
    directories = 0
    files = 0

    try:
        for line in lines:
            stack.advance(line)
            target = os.path.normpath(os.path.join(root, stack.relative_path()))
            if not _is_below(root, target):
                raise MalformedBlueprintError(
                    f"'{line.name}' resolves outside the destination directory",
                    line.line_number,
                )

            if line.is_dir:
                _create_directory(target, line.line_number)
                directories += 1
            else:
                _create_file(target, line.line_number)
                files += 1
            created.append(target)
            logger.debug(f"Created {line.kind.value}: {target}")

    except BaseException as e:
        logger.debug(f"Blueprint build aborted: {e}")
        rollback(created)
        raise

    logger.info(f"Tree built under {root}: {directories} directories, {files} files.")
    return BuildReport(destination=root, directories=directories, files=files, created=created)


def rollback(created: List[str]) -> None:
    """
    Remove journaled entries in reverse creation order.

    Children are always journaled after their parent, so walking backwards
    empties each directory before it is removed. Entries that already
    disappeared are ignored; any other removal failure is logged and the
    remaining entries are still processed.
    """
    if not created:
        return

    logger.info(f"Rolling back {len(created)} created entries.")
    for path in reversed(created):
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            else:
                os.remove(path)
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.error(f"Rollback could not remove '{path}': {e}")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_below(root: str, target: str) -> bool:
    """True when target is a strict descendant of root."""
    try:
        return target != root and os.path.commonpath([root, target]) == root
    except ValueError:
        # different drives on Windows
        return False


def _create_directory(path: str, line_number: int) -> None:
    try:
        os.mkdir(path)
    except OSError as e:
        raise TreeCreationError(path, e, line_number) from e


def _create_file(path: str, line_number: int) -> None:
    """Create an empty file, refusing to touch an existing entry."""
    try:
        with open(path, "xb"):
            pass
    except OSError as e:
        raise TreeCreationError(path, e, line_number) from e
