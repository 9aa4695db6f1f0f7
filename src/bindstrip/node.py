from .constants import TAG_ATTRIBUTE, classify


class Attribute:
    """An attribute as it appears in the source.

    ``value`` is the raw value token text, surrounding quotes included.
    """

    __slots__ = ("name_token", "value_token")

    def __init__(self, name_token, value_token):
        self.name_token = name_token
        self.value_token = value_token

    @property
    def name(self):
        return self.name_token.text

    @property
    def value(self):
        return self.value_token.text

    @property
    def text(self):
        return f"{self.name}={self.value}"

    def start_position(self):
        return self.name_token.start_position()

    def end_position(self):
        return self.value_token.end_position()

    def is_expression(self):
        if self.name == TAG_ATTRIBUTE:
            return True
        value = self.value
        return (value.startswith('"@{') and value.endswith('}"')) or (
            value.startswith("'@{") and value.endswith("}'")
        )

    def __repr__(self):
        return f"Attribute({self.text!r})"


class ElementNode:
    """Read-only view of one element of the parsed layout.

    - name_token: the element name token
    - attributes: ordered list of Attribute
    - children: ordered list of child ElementNodes (text is not kept)
    - start: the ``<`` token opening the element
    - stop: the last token of the element (``>`` of the end tag, or ``/>``)
    - content_start: first token after the open tag's ``>``; None when the
      element is self-closing
    """

    __slots__ = (
        "attributes",
        "children",
        "content_start",
        "kind",
        "name_token",
        "parent",
        "self_closing",
        "start",
        "stop",
    )

    def __init__(self, name_token, start):
        self.name_token = name_token
        self.start = start
        self.stop = None
        self.content_start = None
        self.self_closing = False
        self.attributes = []
        self.children = []
        self.parent = None
        self.kind = classify(name_token.text)

    @property
    def name(self):
        return self.name_token.text

    def append_child(self, child):
        if child.parent is not None:
            msg = f"<{child.name}> already has a parent"
            raise ValueError(msg)
        child.parent = self
        self.children.append(child)

    def expression_attributes(self):
        return [attr for attr in self.attributes if attr.is_expression()]

    def has_expression_attributes(self):
        """True unless the only expression attribute is a plain tag attribute."""
        expressions = self.expression_attributes()
        return len(expressions) > 1 or (len(expressions) == 1 and expressions[0].name != TAG_ATTRIBUTE)

    def children_of_kind(self, kind):
        return [child for child in self.children if child.kind is kind]

    def start_position(self):
        return self.start.start_position()

    def end_position(self):
        return self.stop.end_position()

    def __repr__(self):
        return f"<ElementNode {self.name} @{self.start.line}:{self.start.column}>"


class Document:
    __slots__ = ("root", "tokens")

    def __init__(self, root, tokens):
        self.root = root
        self.tokens = tokens
