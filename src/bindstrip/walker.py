from .constants import DEFAULT_TAG_PREFIX, INCLUDE_TAG_VALUE, TAG_ATTRIBUTE, NodeKind
from .defaults import default_replacement
from .scheduler import PendingTag
from .trace import Trace, Traced


def synthetic_tag(value):
    return f'{TAG_ATTRIBUTE}="{value}"'


class TagAnnotationWalker(Traced):
    """Rewrites expression attributes and decides which elements get a tag.

    Each element that needs a runtime handle ends up with exactly one
    ``android:tag`` attribute. The tag text is written over the first
    expression attribute long enough to hold it; when none is, a PendingTag
    is recorded so the scheduler can insert it after the walk.
    """

    __slots__ = ("buffer", "pending", "resolve_default", "trace")

    def __init__(self, buffer, pending=None, resolve_default=default_replacement, trace=None):
        self.buffer = buffer
        self.pending = pending if pending is not None else []
        self.resolve_default = resolve_default
        self.trace = trace or Trace()

    def visit(self, node, binding_index=0, new_tag=None, depth=0):
        """Annotate ``node`` and its subtree; return the next free binding index."""
        next_index = binding_index
        kind = node.kind
        is_merge = kind is NodeKind.MERGE
        contains_include = any(child.kind is NodeKind.INCLUDE for child in node.children)
        expressions = node.expression_attributes()

        needs_tag = new_tag is not None or contains_include or kind is NodeKind.INCLUDE or node.has_expression_attributes()
        if not is_merge and needs_tag:
            if new_tag is not None:
                tag = synthetic_tag(f"{new_tag}_{binding_index}")
                next_index += 1
            elif kind is NodeKind.INCLUDE:
                tag = synthetic_tag(INCLUDE_TAG_VALUE)
            else:
                tag = synthetic_tag(f"{DEFAULT_TAG_PREFIX}_{binding_index}")
                next_index += 1
            self.debug(f"<{node.name}> at {node.start_position()} needs {tag}", indent=4 + 2 * depth)

            overflow = []
            for attribute in expressions:
                start = attribute.start_position()
                end = attribute.end_position()
                default = self.resolve_default(attribute)
                if default is not None:
                    literal = f'{attribute.name}="{default}"'
                    if not self.buffer.replace(start, end, literal):
                        overflow.append(literal)
                elif self.buffer.replace(start, end, tag):
                    tag = ""
            # One entry per element keeps the tag ahead of any displaced literals.
            deferred = " ".join(text for text in [tag, *overflow] if text)
            if deferred:
                self.debug(f"deferring {deferred} for <{node.name}>", indent=4 + 2 * depth)
                self.pending.append(PendingTag(deferred, node))

        # A top-level <merge> hands its tag request to its own children only.
        child_tag = new_tag if depth == 0 and is_merge else None
        for child in node.children:
            next_index = self.visit(child, next_index, child_tag, depth + 1)
        return next_index
