from .constants import DATA_TAG, LAYOUT_TAG, NodeKind
from .errors import BindingLayoutError


class LayoutParts:
    """The three structural pieces of a binding layout."""

    __slots__ = ("content_root", "data_nodes", "wrapper")

    def __init__(self, wrapper, data_nodes, content_root):
        self.wrapper = wrapper
        self.data_nodes = data_nodes
        self.content_root = content_root


def find_layout_parts(root, source=None):
    """Split a parsed document into wrapper, metadata blocks and content root.

    Returns None when ``root`` is not a ``<layout>`` wrapper, meaning the
    document is not a binding layout. Raises BindingLayoutError when the
    wrapper holds more than one ``<data>`` block or not exactly one other
    element.
    """
    if root is None or root.kind is not NodeKind.WRAPPER:
        return None

    data_nodes = root.children_of_kind(NodeKind.METADATA)
    if len(data_nodes) > 1:
        msg = f"Multiple binding <{DATA_TAG}> blocks. Expecting a maximum of one."
        raise BindingLayoutError(msg, source)

    content = [child for child in root.children if child.kind is not NodeKind.METADATA]
    if len(content) != 1:
        msg = f"Only one layout element and one <{DATA_TAG}> element are allowed in <{LAYOUT_TAG}>, found {len(content)} layout elements."
        raise BindingLayoutError(msg, source)

    return LayoutParts(root, data_nodes, content[0])
