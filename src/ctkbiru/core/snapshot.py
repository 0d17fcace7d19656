from __future__ import annotations

"""
Directory Snapshot.

Derives blueprint text from an existing directory. The output lists each
directory's subdirectories first and then its files, each group sorted by
name. It parses back into the same names, levels and kinds, so generating
it into an empty directory reproduces the tree.
"""

import logging
import os
from typing import List

from ctkbiru.domain.constants import DEFAULT_SNAPSHOT_INDENT, DIR_MARKER, INDENT_CHAR

logger = logging.getLogger(__name__)


def snapshot_directory(root: str, indent_width: int = DEFAULT_SNAPSHOT_INDENT) -> List[str]:
    """
    Walk a directory depth-first and emit one blueprint line per entry.

    Symbolic links are skipped, since blueprints cannot describe them.

    Args:
        root: Directory to describe. The root itself is not emitted.
        indent_width: Spaces per level (must be positive).

    Returns:
        List[str]: Blueprint lines without terminators.

    Raises:
        ValueError: If indent_width is not positive, or an entry name starts
                    with a space or contains a line break.
        OSError: If a directory cannot be listed.
    """
    if indent_width < 1:
        raise ValueError(f"indent_width must be positive, got {indent_width}")

    lines: List[str] = []
    _walk(os.path.abspath(root), 0, indent_width, lines)
    logger.debug(f"Snapshot of {root}: {len(lines)} entries.")
    return lines


def _walk(path: str, level: int, indent_width: int, lines: List[str]) -> None:
    with os.scandir(path) as it:
        entries = [e for e in it if not e.is_symlink()]

    dirs = sorted((e for e in entries if e.is_dir(follow_symlinks=False)), key=lambda e: e.name)
    files = sorted((e for e in entries if not e.is_dir(follow_symlinks=False)), key=lambda e: e.name)

    indent = INDENT_CHAR * (level * indent_width)
    for e in dirs + files:
        _check_name(e)
    for d in dirs:
        lines.append(f"{indent}{d.name}{DIR_MARKER}")
        _walk(d.path, level + 1, indent_width, lines)
    for f in files:
        lines.append(f"{indent}{f.name}")


def _check_name(entry: os.DirEntry) -> None:
    """
    Reject names that would not parse back to themselves.

    Leading spaces would be read as indentation and line breaks would split
    the entry across lines.
    """
    name = entry.name
    if name.startswith(INDENT_CHAR) or "\n" in name or "\r" in name:
        raise ValueError(f"cannot describe {entry.path!r} in a blueprint: unsupported name {name!r}")
