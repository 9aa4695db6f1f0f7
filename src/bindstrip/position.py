class Position:
    """A 0-based (line, column) coordinate into a line buffer."""

    __slots__ = ("column", "line")

    def __init__(self, line, column):
        self.line = line
        self.column = column

    def clamp(self, lines):
        """Pull ``column`` back to the end of its line.

        Earlier edits may have shortened the line this position points into.
        Returns self so calls can be chained.
        """
        length = len(lines[self.line])
        if self.column > length:
            self.column = length
        return self

    def copy(self):
        return Position(self.line, self.column)

    def key(self):
        return (self.line, self.column)

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.key() == other.key()

    def __lt__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.key() < other.key()

    __hash__ = None

    def __repr__(self):
        return f"Position(line={self.line}, column={self.column})"
