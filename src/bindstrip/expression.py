"""Just enough of the binding expression language to find default values.

A binding body looks like ``user.name, default="Bob"``: an expression,
optionally followed by a top-level ``default`` clause holding a constant.
The expression itself is only lexed (to skip strings and nesting), never
evaluated.
"""

import re

from .errors import ExpressionSyntaxError

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<double>"(?:[^"\\]|\\.)*")
  | (?P<backtick>`(?:[^`\\]|\\.)*`)
  | (?P<single>'(?:[^'\\]|\\.)*')
  | (?P<resource>@(?:[A-Za-z_][\w.]*:)?[A-Za-z_]\w*/[A-Za-z_][\w.]*)
  | (?P<number>
        0[xX][0-9a-fA-F_]+[lL]?
      | 0[bB][01_]+[lL]?
      | (?:[0-9][0-9_]*(?:\.[0-9_]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdDlL]?
    )
  | (?P<name>[A-Za-z_$][\w$]*)
  | (?P<op>\?\?|==|!=|<=|>=|&&|\|\||>>>|<<|>>|::|->|[-+*/%!~?:.,=<>&|^()\[\]{}])
    """,
    re.VERBOSE | re.DOTALL,
)

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())
_CHAR_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\(?:u[0-9a-fA-F]{4}|.))'", re.DOTALL)
_DEFAULT_KEYWORD = "default"


class Literal:
    """The constant of a default clause.

    ``kind`` is one of the ``Literal.*`` constants; ``quote`` is set only for
    strings. ``text`` is the constant as written.
    """

    __slots__ = ("kind", "quote", "text")

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    CHAR = "char"
    RESOURCE = "resource"
    IDENTIFIER = "identifier"

    DOUBLE = "double"
    SINGLE = "single"

    def __init__(self, kind, text, quote=None):
        self.kind = kind
        self.text = text
        self.quote = quote

    @property
    def unquoted(self):
        if self.kind in (self.STRING, self.CHAR):
            return self.text[1:-1]
        return self.text

    def __repr__(self):
        return f"Literal({self.kind}, {self.text!r})"


class BindingSyntax:
    __slots__ = ("default", "expression")

    def __init__(self, expression, default=None):
        self.expression = expression
        self.default = default


def lex_expression(text):
    """Split an expression body into (kind, text, offset) tuples."""
    tokens = []
    pos = 0
    length = len(text)
    while pos < length:
        match = _TOKEN_PATTERN.match(text, pos)
        if not match:
            raise ExpressionSyntaxError(f"unexpected {text[pos]!r} at offset {pos}", text)
        kind = match.lastgroup
        if kind != "space":
            tokens.append((kind, match.group(0), pos))
        pos = match.end()
    return tokens


def _constant(kind, text):
    if kind == "double":
        return Literal(Literal.STRING, text, Literal.DOUBLE)
    if kind == "backtick":
        return Literal(Literal.STRING, text, Literal.SINGLE)
    if kind == "single":
        if _CHAR_LITERAL_PATTERN.fullmatch(text):
            return Literal(Literal.CHAR, text)
        return Literal(Literal.STRING, text, Literal.SINGLE)
    if kind == "number":
        return Literal(Literal.NUMBER, text)
    if kind == "resource":
        return Literal(Literal.RESOURCE, text)
    if kind == "name":
        if text in ("true", "false"):
            return Literal(Literal.BOOLEAN, text)
        if text == "null":
            return Literal(Literal.NULL, text)
        return Literal(Literal.IDENTIFIER, text)
    return None


def _find_default_clause(tokens):
    depth = 0
    for index, (kind, text, _) in enumerate(tokens):
        if kind != "op":
            continue
        if text in _OPENERS:
            depth += 1
        elif text in _CLOSERS:
            depth -= 1
        elif text == "," and depth == 0:
            rest = tokens[index + 1:index + 3]
            if len(rest) == 2 and rest[0][:2] == ("name", _DEFAULT_KEYWORD) and rest[1][:2] == ("op", "="):
                return index
    return -1


def parse_binding(body):
    """Parse the text between ``@{`` and ``}``.

    Raises ExpressionSyntaxError when a default clause is present but does
    not hold exactly one constant.
    """
    tokens = lex_expression(body)
    index = _find_default_clause(tokens)
    if index < 0:
        return BindingSyntax(body.strip())

    expression = body[:tokens[index][2]].strip()
    value_tokens = tokens[index + 3:]
    if len(value_tokens) != 1:
        raise ExpressionSyntaxError("default value must be a single constant", body)
    kind, text, _ = value_tokens[0]
    constant = _constant(kind, text)
    if constant is None:
        raise ExpressionSyntaxError(f"default value {text!r} is not a constant", body)
    return BindingSyntax(expression, constant)
