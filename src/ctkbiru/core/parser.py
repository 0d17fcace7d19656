from __future__ import annotations

"""
Blueprint Line Parser.

Turns raw blueprint lines into BlueprintLine records. The parser is
stateless: it only looks at one line at a time. Placement of the line in
the tree (and every check that depends on previous lines) belongs to the
builder.

Line grammar:
    <spaces><name>[/]

- Leading spaces are counted as the depth. Tabs are not indentation.
- A trailing '/' marks a directory. A '/' anywhere else is part of the name.
- Empty lines and lines made of a single '/' are skipped.
"""

import logging
from typing import BinaryIO, Iterator, Optional, Union

from ctkbiru.domain.blueprint_models import BlueprintKind, BlueprintLine
from ctkbiru.domain.constants import DIR_MARKER, INDENT_CHAR
from ctkbiru.domain.errors import BlueprintDecodeError, MalformedBlueprintError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_line(raw_line: Union[str, bytes], line_number: int = 0) -> Optional[BlueprintLine]:
    """
    Parse a single blueprint line.

    Args:
        raw_line: Line content, with or without its line terminator. Bytes are
                  decoded as strict UTF-8.
        line_number: 1-based position in the source, used in error messages.

    Returns:
        Optional[BlueprintLine]: The parsed record, or None when the line
                                 contributes nothing to the tree.

    Raises:
        BlueprintDecodeError: If bytes input is not valid UTF-8.
        MalformedBlueprintError: If the line has indentation but no name.
    """
    line = _decode(raw_line, line_number) if isinstance(raw_line, bytes) else raw_line
    line = _strip_terminator(line)

    if line == "" or line == DIR_MARKER:
        return None

    depth = _count_indent(line)

    kind = BlueprintKind.FILE
    end = len(line)
    if line.endswith(DIR_MARKER):
        kind = BlueprintKind.DIRECTORY
        end -= 1

    name = line[depth:end]
    if not name:
        raise MalformedBlueprintError("entry has indentation but no name", line_number)

    return BlueprintLine(name=name, depth=depth, kind=kind, line_number=line_number)


def iter_blueprint_lines(stream: BinaryIO) -> Iterator[BlueprintLine]:
    """
    Lazily parse every line of a binary blueprint stream.

    Skipped lines (blank, lone '/') are not yielded. Lines are numbered
    from 1 so that errors point at the offending line of the file.

    Args:
        stream: Readable binary file object.

    Yields:
        BlueprintLine: Parsed records in file order.
    """
    skipped = 0
    for line_number, raw in enumerate(stream, start=1):
        parsed = parse_line(raw, line_number)
        if parsed is None:
            skipped += 1
            continue
        yield parsed

    if skipped:
        logger.debug(f"Skipped {skipped} blank line(s) in blueprint.")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _decode(raw: bytes, line_number: int) -> str:
    """Decode one line as strict UTF-8."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BlueprintDecodeError(f"invalid UTF-8 data ({e.reason})", line_number) from e


def _strip_terminator(line: str) -> str:
    """Remove one trailing '\\n' or '\\r\\n'."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _count_indent(line: str) -> int:
    depth = 0
    for ch in line:
        if ch != INDENT_CHAR:
            break
        depth += 1
    return depth
