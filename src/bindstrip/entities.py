"""XML character reference decoding and XML 1.0 escaping.

Only the five predefined XML entities are named; everything else must be a
numeric reference (&#60; or &#x3C;).
"""

import re

from .constants import XML_ESCAPES, XML_NAMED_ENTITIES

_REFERENCE_PATTERN = re.compile(r"&(#[xX][0-9a-fA-F]+|#[0-9]+|[A-Za-z][A-Za-z0-9]*);")

# Characters XML 1.0 cannot carry at all
_INVALID_XML10_PATTERN = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
# C1 controls that are legal but written as numeric references
_C1_CONTROL_PATTERN = re.compile("[\x7f-\x84\x86-\x9f]")


def decode_numeric_entity(text, is_hex=False):
    """Decode the digits of a numeric character reference.

    Returns the decoded character, or None if the code point is out of range.
    """
    try:
        codepoint = int(text, 16) if is_hex else int(text, 10)
        return chr(codepoint)
    except (ValueError, OverflowError):
        return None


def _decode_reference(match):
    body = match.group(1)
    if body[0] == "#":
        if body[1] in "xX":
            decoded = decode_numeric_entity(body[2:], is_hex=True)
        else:
            decoded = decode_numeric_entity(body[1:])
        return decoded if decoded is not None else match.group(0)
    return XML_NAMED_ENTITIES.get(body, match.group(0))


def unescape_xml(text):
    """Decode XML entities in text, leaving unknown references verbatim."""
    if "&" not in text:
        return text
    return _REFERENCE_PATTERN.sub(_decode_reference, text)


def escape_xml10(text):
    """Escape text for use in XML 1.0 content or a quoted attribute value."""
    text = _INVALID_XML10_PATTERN.sub("", text)
    text = "".join(XML_ESCAPES.get(c, c) for c in text)
    return _C1_CONTROL_PATTERN.sub(lambda m: f"&#{ord(m.group(0))};", text)
