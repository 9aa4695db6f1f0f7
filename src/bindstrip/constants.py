"""Tag names and attribute names recognised by the layout stripper."""

import enum

LAYOUT_TAG = "layout"
DATA_TAG = "data"
MERGE_TAG = "merge"
INCLUDE_TAG = "include"

TAG_ATTRIBUTE = "android:tag"
DEFAULT_TAG_PREFIX = "binding"
# Tag value for every default-named <include>. The binder finds included
# layouts by their position in the parent rather than by ordinal, so an
# include needs a tag that marks it without reserving a binding index.
INCLUDE_TAG_VALUE = "binding_include"

EXPRESSION_OPEN = "@{"
EXPRESSION_CLOSE = "}"

XML_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}

LINE_SEPARATORS = {
    "lf": "\n",
    "crlf": "\r\n",
}


class NodeKind(enum.Enum):
    WRAPPER = "wrapper"
    METADATA = "metadata"
    MERGE = "merge"
    INCLUDE = "include"
    ELEMENT = "element"


NODE_KINDS = {
    LAYOUT_TAG: NodeKind.WRAPPER,
    DATA_TAG: NodeKind.METADATA,
    MERGE_TAG: NodeKind.MERGE,
    INCLUDE_TAG: NodeKind.INCLUDE,
}


def classify(name):
    """Return the NodeKind for an element name."""
    return NODE_KINDS.get(name, NodeKind.ELEMENT)
