from .editor import LayoutStripper, strip, strip_text
from .errors import BindingLayoutError, ExpressionSyntaxError, InvariantError, MarkupSyntaxError
from .tokens import ParseError
from .treebuilder import parse_document

__all__ = [
    "BindingLayoutError",
    "ExpressionSyntaxError",
    "InvariantError",
    "LayoutStripper",
    "MarkupSyntaxError",
    "ParseError",
    "parse_document",
    "strip",
    "strip_text",
]
