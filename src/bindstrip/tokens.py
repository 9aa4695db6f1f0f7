from .position import Position


class TokenKind:
    __slots__ = ()

    COMMENT = "COMMENT"
    CDATA = "CDATA"
    ENTITY_REF = "ENTITY_REF"
    CHAR_REF = "CHAR_REF"
    SEA_WS = "SEA_WS"
    TEXT = "TEXT"
    OPEN = "OPEN"
    XML_DECL_OPEN = "XML_DECL_OPEN"
    SPECIAL_CLOSE = "SPECIAL_CLOSE"
    CLOSE = "CLOSE"
    SLASH_CLOSE = "SLASH_CLOSE"
    SLASH = "SLASH"
    EQUALS = "EQUALS"
    STRING = "STRING"
    NAME = "NAME"
    PI = "PI"
    EOF = "EOF"


class Token:
    """A lexed token with its exact source text.

    ``line`` is 1-based and ``column`` is 0-based, matching the positions an
    editor or compiler reports for the original file.
    """

    __slots__ = ("column", "kind", "line", "text")

    def __init__(self, kind, text, line, column):
        self.kind = kind
        self.text = text
        self.line = line
        self.column = column

    def start_position(self):
        return Position(self.line - 1, self.column)

    def end_position(self):
        # Tokens spanning several lines end on their last line.
        newline = max(self.text.rfind("\n"), self.text.rfind("\r"))
        if newline < 0:
            return Position(self.line - 1, self.column + len(self.text))
        breaks = self.text.count("\n") + self.text.count("\r") - self.text.count("\r\n")
        return Position(self.line - 1 + breaks, len(self.text) - newline - 1)

    def __repr__(self):
        return f"<{self.kind} {self.text!r} @{self.line}:{self.column}>"


class ParseError:
    """Represents a parse error with location information."""

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is not None and self.column is not None:
            if self.message != self.code:
                return f"({self.line},{self.column}): {self.code} - {self.message}"
            return f"({self.line},{self.column}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code
