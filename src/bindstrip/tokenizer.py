import re

from .errors import MarkupSyntaxError
from .tokens import ParseError, Token, TokenKind

_NAME_START = ":A-Z_a-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d\u037f-\u1fff\u200c-\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff\uf900-\ufdcf\ufdf0-\ufffd"
_NAME_CHAR = _NAME_START + "\\-.0-9\u00b7\u0300-\u036f\u203f-\u2040"

_NAME_PATTERN = re.compile(f"[{_NAME_START}][{_NAME_CHAR}]*")
_STRING_PATTERN = re.compile(r"\"[^<\"]*\"|'[^<']*'")
_TEXT_PATTERN = re.compile(r"[^<&]+")
_SPACE_PATTERN = re.compile(r"[ \t\r\n]+")
_ENTITY_REF_PATTERN = re.compile(f"&[{_NAME_START}][{_NAME_CHAR}]*;")
_CHAR_REF_PATTERN = re.compile(r"&#[0-9]+;|&#x[0-9a-fA-F]+;")
_XML_DECL_PATTERN = re.compile(r"<\?xml[ \t\r\n]")
_PI_OPEN_PATTERN = re.compile(f"<\\?[{_NAME_START}][{_NAME_CHAR}]*")
_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")
_SEA_WS_CHARS = frozenset(" \t\r\n")


class Tokenizer:
    """Position-tracking XML lexer.

    Runs in two modes like a conventional XML lexer: DATA for document
    content and INSIDE for the markup between ``<`` and ``>``. Each token is
    handed to ``sink.process_token`` as soon as it is recognised, and a final
    EOF token closes the stream.
    """

    DATA = 0
    INSIDE = 1

    __slots__ = (
        "buffer",
        "column",
        "length",
        "line",
        "pos",
        "sink",
        "state",
    )

    def __init__(self, sink):
        self.sink = sink
        self.state = self.DATA
        self.buffer = ""
        self.length = 0
        self.pos = 0
        self.line = 1
        self.column = 0

    def run(self, text):
        self.buffer = text or ""
        self.length = len(self.buffer)
        self.pos = 0
        self.line = 1
        self.column = 0
        self.state = self.DATA

        while self.pos < self.length:
            if self.state == self.DATA:
                self._state_data()
            else:
                self._state_inside()

        if self.state == self.INSIDE:
            self._error("eof-in-tag")
        self.sink.process_token(Token(TokenKind.EOF, "", self.line, self.column))

    # ---------------------
    # Modes
    # ---------------------

    def _state_data(self):
        buffer = self.buffer
        pos = self.pos

        if buffer.startswith("<!--", pos):
            end = buffer.find("-->", pos + 4)
            if end < 0:
                self._error("eof-in-comment")
            self._emit(TokenKind.COMMENT, end + 3)
            return

        if buffer.startswith("<![CDATA[", pos):
            end = buffer.find("]]>", pos + 9)
            if end < 0:
                self._error("eof-in-cdata")
            self._emit(TokenKind.CDATA, end + 3)
            return

        if buffer.startswith("<!", pos):
            # DOCTYPE and other declarations are dropped from the token stream.
            end = buffer.find(">", pos + 2)
            if end < 0:
                self._error("eof-in-doctype")
            self._skip(end + 1)
            return

        if buffer.startswith("<?", pos):
            if _XML_DECL_PATTERN.match(buffer, pos):
                self._emit(TokenKind.XML_DECL_OPEN, pos + 5)
                self.state = self.INSIDE
                return
            if not _PI_OPEN_PATTERN.match(buffer, pos):
                self._error("invalid-processing-instruction")
            end = buffer.find("?>", pos + 2)
            if end < 0:
                self._error("eof-in-processing-instruction")
            self._emit(TokenKind.PI, end + 2)
            return

        char = buffer[pos]
        if char == "<":
            self._emit(TokenKind.OPEN, pos + 1)
            self.state = self.INSIDE
            return

        if char == "&":
            match = _CHAR_REF_PATTERN.match(buffer, pos)
            if match:
                self._emit(TokenKind.CHAR_REF, match.end())
                return
            match = _ENTITY_REF_PATTERN.match(buffer, pos)
            if match:
                self._emit(TokenKind.ENTITY_REF, match.end())
                return
            self._error("invalid-reference")

        match = _TEXT_PATTERN.match(buffer, pos)
        end = match.end()
        kind = TokenKind.TEXT
        if all(c in _SEA_WS_CHARS for c in buffer[pos:end]):
            kind = TokenKind.SEA_WS
        self._emit(kind, end)

    def _state_inside(self):
        buffer = self.buffer
        pos = self.pos
        char = buffer[pos]

        if char in _SEA_WS_CHARS:
            end = _SPACE_PATTERN.match(buffer, pos).end()
            self._skip(end)
            return
        if char == ">":
            self._emit(TokenKind.CLOSE, pos + 1)
            self.state = self.DATA
            return
        if buffer.startswith("?>", pos):
            self._emit(TokenKind.SPECIAL_CLOSE, pos + 2)
            self.state = self.DATA
            return
        if buffer.startswith("/>", pos):
            self._emit(TokenKind.SLASH_CLOSE, pos + 2)
            self.state = self.DATA
            return
        if char == "/":
            self._emit(TokenKind.SLASH, pos + 1)
            return
        if char == "=":
            self._emit(TokenKind.EQUALS, pos + 1)
            return
        if char in "\"'":
            match = _STRING_PATTERN.match(buffer, pos)
            if not match:
                self._error("unterminated-attribute-value")
            self._emit(TokenKind.STRING, match.end())
            return

        match = _NAME_PATTERN.match(buffer, pos)
        if not match:
            self._error("unexpected-character-in-tag", f"unexpected {char!r}")
        self._emit(TokenKind.NAME, match.end())

    # ---------------------
    # Low-level helpers
    # ---------------------

    def _emit(self, kind, end):
        text = self.buffer[self.pos:end]
        token = Token(kind, text, self.line, self.column)
        self._advance(text)
        self.pos = end
        self.sink.process_token(token)

    def _skip(self, end):
        self._advance(self.buffer[self.pos:end])
        self.pos = end

    def _advance(self, text):
        last = None
        breaks = 0
        for last in _LINE_BREAK_PATTERN.finditer(text):
            breaks += 1
        if last is None:
            self.column += len(text)
        else:
            self.line += breaks
            self.column = len(text) - last.end()

    def _error(self, code, message=None):
        raise MarkupSyntaxError(ParseError(code, line=self.line, column=self.column, message=message))


class TokenCollector:
    """Sink that just records the token stream."""

    __slots__ = ("tokens",)

    def __init__(self):
        self.tokens = []

    def process_token(self, token):
        self.tokens.append(token)


def tokenize(text):
    collector = TokenCollector()
    Tokenizer(collector).run(text)
    return collector.tokens
