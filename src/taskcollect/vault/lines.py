"""Recognise Markdown bullet lines and split documents into list hunks."""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

# "<indent>- <content>" and the empty bullet "<indent>-"
_LIST_WITH_CONTENT_RE = re.compile(r"^([ \t]*)-[ \t]+(\S.*)$")
_LIST_EMPTY_RE = re.compile(r"^([ \t]*)-[ \t]*$")

# "[<c>] <rest>"; a single space for <c> means undone
_CHECKBOX_RE = re.compile(r"^\[(.)\] (.+)$")
CHECKBOX_UNDONE = " "


def parse_checkbox(content: str) -> tuple[str, str] | None:
    """Split a checkbox prefix off bullet content.

    Returns:
        ``(mark, rest)`` where ``mark`` is the single character between the
        brackets, or None when the content carries no checkbox.
    """
    match = _CHECKBOX_RE.match(content)
    if not match:
        return None
    return match.group(1), match.group(2)


@dataclass(frozen=True)
class ListLine:
    """One bullet line with its raw indentation width and content."""

    raw_text: str
    indent_len: int
    content: str

    @classmethod
    def from_line(cls, line: str) -> "ListLine | None":
        """Classify a raw line, returning None if it is not a bullet."""
        match = _LIST_WITH_CONTENT_RE.match(line)
        if match:
            return cls(raw_text=line, indent_len=len(match.group(1)), content=match.group(2))
        match = _LIST_EMPTY_RE.match(line)
        if match:
            return cls(raw_text=line, indent_len=len(match.group(1)), content="")
        return None

    def indent_level(self, step: int) -> int | None:
        """Indentation depth for a given step, or None if not a whole multiple."""
        if self.indent_len % step != 0:
            return None
        return self.indent_len // step


def split_hunks(content: str) -> Iterator[list[ListLine]]:
    """Yield maximal runs of consecutive bullet lines in document order."""
    buffer: list[ListLine] = []
    for line in content.splitlines():
        list_line = ListLine.from_line(line)
        if list_line is None:
            if buffer:
                yield buffer
                buffer = []
            continue
        buffer.append(list_line)
    if buffer:
        yield buffer


class CheckState(StrEnum):
    """State of a checkbox marker; a bullet without one has no state."""

    DONE = "done"
    UNDONE = "undone"

    @classmethod
    def from_mark(cls, mark: str | None) -> "CheckState | None":
        if mark is None:
            return None
        return cls.UNDONE if mark == CHECKBOX_UNDONE else cls.DONE
