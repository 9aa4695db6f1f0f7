from .errors import MarkupSyntaxError
from .node import Attribute, Document, ElementNode
from .tokenizer import Tokenizer
from .tokens import ParseError, TokenKind

_MISC_TOKENS = frozenset((TokenKind.SEA_WS, TokenKind.COMMENT, TokenKind.PI))
_CONTENT_TOKENS = frozenset(
    (
        TokenKind.TEXT,
        TokenKind.SEA_WS,
        TokenKind.COMMENT,
        TokenKind.CDATA,
        TokenKind.ENTITY_REF,
        TokenKind.CHAR_REF,
        TokenKind.PI,
    )
)


class TreeBuilder:
    """Token sink assembling ElementNodes.

    Keeps a stack of open elements; text and comments are accepted but not
    materialised since nothing downstream needs them.
    """

    BEFORE_ROOT = 0
    XML_DECL = 1
    TAG_OPEN = 2
    ATTRIBUTES = 3
    ATTRIBUTE_EQUALS = 4
    ATTRIBUTE_VALUE = 5
    CONTENT = 6
    END_TAG_NAME = 7
    END_TAG_CLOSE = 8
    AFTER_ROOT = 9
    DONE = 10

    __slots__ = (
        "attr_name",
        "awaiting_content",
        "current",
        "open_elements",
        "open_token",
        "root",
        "state",
        "tokens",
    )

    def __init__(self):
        self.state = self.BEFORE_ROOT
        self.tokens = []
        self.open_elements = []
        self.root = None
        self.current = None
        self.open_token = None
        self.attr_name = None
        self.awaiting_content = None

    def process_token(self, token):
        self.tokens.append(token)
        kind = token.kind

        if self.awaiting_content is not None:
            self.awaiting_content.content_start = token
            self.awaiting_content = None

        state = self.state
        if state == self.BEFORE_ROOT:
            self._before_root(token, kind)
        elif state == self.XML_DECL:
            if kind == TokenKind.SPECIAL_CLOSE:
                self.state = self.BEFORE_ROOT
            elif kind not in (TokenKind.NAME, TokenKind.EQUALS, TokenKind.STRING):
                self._error(token, "malformed-xml-declaration")
        elif state == self.TAG_OPEN:
            self._tag_open(token, kind)
        elif state == self.ATTRIBUTES:
            self._attributes(token, kind)
        elif state == self.ATTRIBUTE_EQUALS:
            if kind != TokenKind.EQUALS:
                self._error(token, "missing-attribute-value", f"attribute {self.attr_name.text!r} has no value")
            self.state = self.ATTRIBUTE_VALUE
        elif state == self.ATTRIBUTE_VALUE:
            if kind != TokenKind.STRING:
                self._error(token, "missing-attribute-value", f"attribute {self.attr_name.text!r} has no value")
            self.current.attributes.append(Attribute(self.attr_name, token))
            self.attr_name = None
            self.state = self.ATTRIBUTES
        elif state == self.CONTENT:
            if kind == TokenKind.OPEN:
                self.open_token = token
                self.state = self.TAG_OPEN
            elif kind == TokenKind.EOF:
                self._error(token, "eof-in-element", f"<{self.open_elements[-1].name}> is never closed")
            elif kind not in _CONTENT_TOKENS:
                self._error(token, "unexpected-token-in-content")
        elif state == self.END_TAG_NAME:
            self._end_tag_name(token, kind)
        elif state == self.END_TAG_CLOSE:
            if kind != TokenKind.CLOSE:
                self._error(token, "malformed-end-tag")
            element = self.open_elements.pop()
            element.stop = token
            self.state = self.CONTENT if self.open_elements else self.AFTER_ROOT
        elif state == self.AFTER_ROOT:
            if kind == TokenKind.EOF:
                self.state = self.DONE
            elif kind not in _MISC_TOKENS:
                self._error(token, "content-after-root")
        else:
            self._error(token, "token-after-eof")

    def _before_root(self, token, kind):
        if kind == TokenKind.OPEN:
            self.open_token = token
            self.state = self.TAG_OPEN
        elif kind == TokenKind.XML_DECL_OPEN:
            if len(self.tokens) != 1:
                self._error(token, "misplaced-xml-declaration")
            self.state = self.XML_DECL
        elif kind == TokenKind.EOF:
            self.state = self.DONE
        elif kind not in _MISC_TOKENS:
            self._error(token, "content-before-root")

    def _tag_open(self, token, kind):
        if kind == TokenKind.SLASH and self.open_elements:
            self.state = self.END_TAG_NAME
            return
        if kind != TokenKind.NAME:
            self._error(token, "invalid-tag-name")
        element = ElementNode(token, self.open_token)
        if self.open_elements:
            self.open_elements[-1].append_child(element)
        elif self.root is None:
            self.root = element
        else:
            self._error(token, "content-after-root")
        self.current = element
        self.state = self.ATTRIBUTES

    def _attributes(self, token, kind):
        element = self.current
        if kind == TokenKind.NAME:
            self.attr_name = token
            self.state = self.ATTRIBUTE_EQUALS
        elif kind == TokenKind.CLOSE:
            self.open_elements.append(element)
            self.awaiting_content = element
            self.current = None
            self.state = self.CONTENT
        elif kind == TokenKind.SLASH_CLOSE:
            element.stop = token
            element.self_closing = True
            self.current = None
            self.state = self.CONTENT if self.open_elements else self.AFTER_ROOT
        else:
            self._error(token, "unexpected-token-in-tag")

    def _end_tag_name(self, token, kind):
        if kind != TokenKind.NAME:
            self._error(token, "malformed-end-tag")
        expected = self.open_elements[-1].name
        if token.text != expected:
            self._error(token, "mismatched-end-tag", f"expected </{expected}>, found </{token.text}>")
        self.state = self.END_TAG_CLOSE

    def _error(self, token, code, message=None):
        raise MarkupSyntaxError(ParseError(code, line=token.line, column=token.column, message=message))

    def finish(self):
        return Document(self.root, self.tokens)


def parse_document(text):
    builder = TreeBuilder()
    Tokenizer(builder).run(text)
    return builder.finish()
