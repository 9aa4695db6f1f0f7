"""Line-oriented text buffer edited in original-document coordinates.

Every edit except :meth:`LineBuffer.insert` keeps the line count and, apart
from the first line of a multi-line replace, the length of every line it
touches: removed text is overwritten with spaces instead of deleted. Positions
computed from the parse tree therefore stay valid while other edits land.
"""

import re

from .trace import Trace, Traced

_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


def split_lines(text):
    """Split text on any line break; a trailing break does not open a line."""
    if not text:
        return []
    lines = _LINE_BREAK_PATTERN.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def blank(line, start, end):
    """Replace ``line[start:end]`` with the same number of spaces."""
    if end <= start:
        return line
    return line[:start] + " " * (end - start) + line[end:]


class LineBuffer(Traced):
    __slots__ = ("lines", "trace")

    def __init__(self, lines, trace=None):
        self.lines = list(lines)
        self.trace = trace or Trace()

    @classmethod
    def from_text(cls, text, trace=None):
        return cls(split_lines(text), trace)

    def replace(self, start, end, text):
        """Replace the region between two positions with ``text``.

        Returns False when the region is a single-line span shorter than
        ``text``: the span is blanked but ``text`` is not written, and the
        caller has to place it some other way.
        """
        lines = self.lines
        start = start.copy().clamp(lines)
        end = end.copy().clamp(lines)

        if start.line != end.line:
            lines[start.line] = lines[start.line][:start.column] + text
            for index in range(start.line + 1, end.line):
                lines[index] = blank(lines[index], 0, len(lines[index]))
            lines[end.line] = blank(lines[end.line], 0, end.column)
            self.debug(f"replaced {start}..{end} with {text!r}")
            return True

        line = lines[start.line]
        if end.column - start.column >= len(text):
            text_end = start.column + len(text)
            line = line[:start.column] + text + line[text_end:]
            lines[start.line] = blank(line, text_end, end.column)
            self.debug(f"replaced {start}..{end} with {text!r}")
            return True

        lines[start.line] = blank(line, start.column, end.column)
        self.debug(f"blanked {start}..{end}, {text!r} does not fit")
        return False

    def insert(self, position, text):
        """Insert ``text`` at ``position``, shifting the rest of that line."""
        position = position.copy().clamp(self.lines)
        line = self.lines[position.line]
        self.lines[position.line] = line[:position.column] + text + line[position.column:]
        self.debug(f"inserted {text!r} at {position}")

    def rfind(self, needle, line_index):
        """Find the last ``needle`` on ``line_index`` or the closest line above it.

        Returns ``(line, column)`` or None.
        """
        for index in range(line_index, -1, -1):
            column = self.lines[index].rfind(needle)
            if column >= 0:
                return index, column
        return None

    def to_text(self, line_separator="\n"):
        return line_separator.join(self.lines)

    def __len__(self):
        return len(self.lines)

    def __getitem__(self, index):
        return self.lines[index]
