"""Entry points turning a binding layout into plain layout markup."""

import os
from pathlib import Path

from .errors import InvariantError, MarkupSyntaxError
from .lines import LineBuffer
from .position import Position
from .scheduler import DeferredInsertionScheduler, merge_root_attributes
from .trace import Trace, Traced
from .treebuilder import parse_document
from .validator import find_layout_parts
from .walker import TagAnnotationWalker


class LayoutStripper(Traced):
    """One strip run over one document.

    Usage:
        stripper = LayoutStripper(text, new_tag="main", source="main.xml")
        output = stripper.run()  # None when the text is not a binding layout
    """

    __slots__ = ("buffer", "line_separator", "new_tag", "source", "text", "trace")

    def __init__(self, text, new_tag=None, *, line_separator=os.linesep, source=None, debug=False, trace=None):
        if text and text[0] == "\ufeff":
            text = text[1:]
        self.text = text or ""
        self.new_tag = new_tag
        self.line_separator = line_separator
        self.source = source
        self.trace = trace or Trace(debug)
        self.buffer = None

    def run(self):
        try:
            document = parse_document(self.text)
        except MarkupSyntaxError as exc:
            raise MarkupSyntaxError(exc.error, self.source) from exc

        parts = find_layout_parts(document.root, self.source)
        if parts is None:
            self.debug(f"{self.source or '<text>'} is not a binding layout", indent=0)
            return None

        self.debug(f"stripping {self.source or '<text>'}", indent=0)
        buffer = self.buffer = LineBuffer.from_text(self.text, self.trace)

        for data in parts.data_nodes:
            buffer.replace(data.start_position(), data.end_position(), "")

        pending = []
        walker = TagAnnotationWalker(buffer, pending, trace=self.trace)
        walker.visit(parts.content_root, 0, self.new_tag)

        wrapper = parts.wrapper
        buffer.replace(wrapper.start_position(), wrapper.content_start.start_position(), "")
        close_start, close_end = self._close_tag_span(wrapper)
        buffer.replace(close_start, close_end, "")

        merge_root_attributes(pending, parts.content_root, wrapper)
        DeferredInsertionScheduler(buffer, self.trace).apply(pending)
        return buffer.to_text(self.line_separator)

    def _close_tag_span(self, wrapper):
        end = wrapper.end_position()
        found = self.buffer.rfind("</", wrapper.stop.line - 1)
        if found is None:
            msg = f"no closing tag found for <{wrapper.name}>"
            raise InvariantError(msg)
        return Position(*found), end


def strip_text(text, new_tag=None, *, line_separator=os.linesep, source=None, debug=False):
    """Strip a binding layout held in memory.

    Returns the rewritten markup, or None when ``text`` is not rooted in a
    ``<layout>`` element.
    """
    stripper = LayoutStripper(text, new_tag, line_separator=line_separator, source=source, debug=debug)
    return stripper.run()


def strip(path, new_tag=None, *, line_separator=os.linesep, debug=False):
    """Strip the binding layout stored at ``path`` (read as UTF-8)."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return strip_text(text, new_tag, line_separator=line_separator, source=str(path), debug=debug)
