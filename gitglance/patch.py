"""Parsing of unified-diff patches into numbered diff lines."""

from __future__ import annotations

import enum
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from gitglance.styles import Style

_INT_RE = re.compile(r"[+-]?[0-9]+")

_COMMENT_MARKER = " ← comment here"
_CONTEXT_BEFORE = 5
_CONTEXT_AFTER = 5


class LineType(enum.Enum):
    """The kind of a line in a diff."""

    ADD = "add"
    DELETE = "delete"
    CONTEXT = "context"
    HUNK_HEADER = "hunk_header"

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]


_PREFIXES = {
    LineType.ADD: "+",
    LineType.DELETE: "-",
    LineType.CONTEXT: " ",
    LineType.HUNK_HEADER: "@@",
}


@dataclass
class DiffLineData:
    """One displayed line of a file's diff."""

    line_type: LineType
    content: str
    old_line_no: Optional[int] = None
    new_line_no: Optional[int] = None
    highlighted: list[tuple[Style, str]] = field(default_factory=list)
    badge: Optional[Any] = None


def _lines(text: str) -> Iterator[str]:
    """Split on newlines, dropping a final empty line and a CR before each newline."""
    pieces = text.split("\n")
    last = pieces.pop()
    for piece in pieces:
        yield piece[:-1] if piece.endswith("\r") else piece
    if last:
        yield last


def _parse_start(field_text: str, sign: str) -> int:
    number = field_text.lstrip(sign).split(",", 1)[0]
    return int(number) if _INT_RE.fullmatch(number) else 0


def parse_hunk_header(line: str) -> Optional[tuple[int, int]]:
    """Return the (old, new) start line numbers of a hunk header.

    Returns None when the line is not a hunk header or has too few fields.
    A start that cannot be read counts as 0.
    """
    if not line.startswith("@@"):
        return None
    parts = line.split()
    if len(parts) < 3:
        return None
    return (_parse_start(parts[1], "-"), _parse_start(parts[2], "+"))


def parse_patch_to_diff_lines(patch: str) -> list[DiffLineData]:
    """Turn a file's patch text into diff lines carrying old and new line numbers."""
    result: list[DiffLineData] = []
    old_num = 0
    new_num = 0

    for line in _lines(patch):
        if line.startswith("@@"):
            starts = parse_hunk_header(line)
            if starts is not None:
                old_num, new_num = starts
            result.append(DiffLineData(LineType.HUNK_HEADER, line))
        elif line.startswith("+"):
            result.append(DiffLineData(LineType.ADD, line[1:], new_line_no=new_num))
            new_num += 1
        elif line.startswith("-"):
            result.append(DiffLineData(LineType.DELETE, line[1:], old_line_no=old_num))
            old_num += 1
        elif line.startswith("\\"):
            continue
        else:
            content = line[1:] if line.startswith(" ") else line
            result.append(
                DiffLineData(LineType.CONTEXT, content, old_line_no=old_num, new_line_no=new_num)
            )
            old_num += 1
            new_num += 1

    return result


def build_diff_context(lines: Sequence[Any], cursor: int) -> str:
    """Render the diff lines around ``cursor`` as text, marking the cursor line.

    Items of ``lines`` that are not diff lines are skipped.
    """
    start = max(cursor - _CONTEXT_BEFORE, 0)
    end = min(cursor + _CONTEXT_AFTER + 1, len(lines))
    out = []
    for i in range(start, end):
        item = lines[i]
        if not isinstance(item, DiffLineData):
            continue
        marker = _COMMENT_MARKER if i == cursor else ""
        out.append(f"{item.line_type.prefix}{item.content}{marker}")
    return "\n".join(out)