from .errors import InvariantError
from .trace import Trace, Traced


class PendingTag:
    """Attribute text still to be inserted into ``element``'s open tag."""

    __slots__ = ("element", "text")

    def __init__(self, text, element):
        self.text = text
        self.element = element

    def __repr__(self):
        return f"PendingTag({self.text!r}, {self.element!r})"


def _step_back(position, steps, element):
    if position.column < steps or position.column <= 0:
        msg = f"cannot step back {steps} columns from {position} in <{element.name}>"
        raise InvariantError(msg)
    position.column -= steps
    return position


def insertion_position(element):
    """Position just before the ``/>`` or ``>`` that ends the open tag."""
    if element.self_closing:
        return _step_back(element.stop.end_position(), 2, element)
    return _step_back(element.content_start.start_position(), 1, element)


def merge_root_attributes(pending, content_root, wrapper):
    """Carry the wrapper's attributes over to the new document root.

    They join the content root's own pending tag when it has one; otherwise a
    new entry is added. Nothing is added when the wrapper has no attributes.
    """
    hoisted = " ".join(attribute.text for attribute in wrapper.attributes)
    for index, entry in enumerate(pending):
        if entry.element is content_root:
            if hoisted:
                pending[index] = PendingTag(f"{entry.text} {hoisted}", content_root)
            return pending
    if hoisted:
        pending.append(PendingTag(hoisted, content_root))
    return pending


class DeferredInsertionScheduler(Traced):
    """Inserts pending tags, last element first.

    An insertion only shifts text to its right on the same line, and every
    element still waiting starts earlier in the document, so their positions
    are unaffected.
    """

    __slots__ = ("buffer", "trace")

    def __init__(self, buffer, trace=None):
        self.buffer = buffer
        self.trace = trace or Trace()

    def apply(self, pending):
        ordered = sorted(pending, key=lambda entry: entry.element.start_position().key(), reverse=True)
        for entry in ordered:
            position = insertion_position(entry.element)
            self.debug(f"inserting {entry.text!r} into <{entry.element.name}> at {position}")
            self.buffer.insert(position, " " + entry.text)
        return len(ordered)
