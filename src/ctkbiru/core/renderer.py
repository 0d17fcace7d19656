from __future__ import annotations

"""
Blueprint Tree Renderer.

Converts parsed blueprint lines into a visual ASCII tree for `show --tree`.
Levels are resolved with the same PathStack rules as generation, so a
blueprint that renders cleanly will also place cleanly on disk.
"""

from typing import Iterable, List, Tuple

from ctkbiru.core.builder import PathStack
from ctkbiru.domain.blueprint_models import BlueprintLine

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_blueprint_tree(lines: Iterable[BlueprintLine], title: str = "") -> List[str]:
    """
    Render blueprint lines with standard ASCII connectors (├──, └──).

    Entries keep blueprint order; directories carry a trailing '/'.

    Args:
        lines: Parsed blueprint lines.
        title: Optional first output line (usually the blueprint name).

    Returns:
        List[str]: Rendered lines.

    Raises:
        MalformedBlueprintError: If indentation cannot be resolved to levels.
    """
    entries = _resolve_levels(lines)

    out: List[str] = [title] if title else []
    # open_branches[d] is True while level d still has siblings coming
    open_branches: List[bool] = []

    for i, (level, line) in enumerate(entries):
        is_last = not _has_later_sibling(entries, i, level)
        del open_branches[level:]

        prefix = "".join("│   " if is_open else "    " for is_open in open_branches)
        connector = "└── " if is_last else "├── "
        suffix = "/" if line.is_dir else ""
        out.append(f"{prefix}{connector}{line.name}{suffix}")

        open_branches.append(not is_last)

    return out

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _resolve_levels(lines: Iterable[BlueprintLine]) -> List[Tuple[int, BlueprintLine]]:
    """Assign a tree level to each line using the builder's stack rules."""
    stack = PathStack()
    resolved: List[Tuple[int, BlueprintLine]] = []
    for line in lines:
        stack.advance(line)
        resolved.append((stack.current_depth, line))
    return resolved


def _has_later_sibling(entries: List[Tuple[int, BlueprintLine]], index: int, level: int) -> bool:
    """Look ahead until the branch closes (a shallower level) or a sibling appears."""
    for next_level, _ in entries[index + 1:]:
        if next_level < level:
            return False
        if next_level == level:
            return True
    return False
