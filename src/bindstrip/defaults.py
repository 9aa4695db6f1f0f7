from .constants import EXPRESSION_CLOSE, EXPRESSION_OPEN
from .entities import escape_xml10, unescape_xml
from .expression import Literal, parse_binding


def expression_body(value):
    """Return the unescaped body of a ``"@{...}"`` value, or None."""
    inner = value[1:-1]
    if not (inner.startswith(EXPRESSION_OPEN) and inner.endswith(EXPRESSION_CLOSE)):
        return None
    return unescape_xml(inner[len(EXPRESSION_OPEN):-len(EXPRESSION_CLOSE)])


def default_replacement(attribute):
    """Markup text that can stand in for an expression attribute's value.

    Returns None when the value is not a binding expression or has no
    ``default`` clause.
    """
    body = expression_body(attribute.value)
    if body is None:
        return None
    constant = parse_binding(body).default
    if constant is None:
        return None
    if constant.kind == Literal.STRING:
        unquoted = constant.unquoted
        if constant.quote == Literal.SINGLE:
            unquoted = unquoted.replace('"', '\\"').replace("\\`", "`")
        return escape_xml10(unquoted)
    return constant.text
