"""Exceptions raised while stripping a binding layout."""


class BindingLayoutError(ValueError):
    """The layout breaks a structural rule and cannot be stripped."""

    def __init__(self, message, source=None):
        self.source = source
        if source is not None:
            message = f"{source}: {message}"
        super().__init__(message)


class MarkupSyntaxError(ValueError):
    """Raised by the tokenizer or tree builder on malformed markup."""

    def __init__(self, error, source=None):
        self.error = error
        self.source = source
        prefix = f"{source}: " if source is not None else ""
        super().__init__(f"{prefix}{error}")


class ExpressionSyntaxError(ValueError):
    def __init__(self, message, expression=None):
        self.expression = expression
        if expression is not None:
            message = f"{message} in expression {expression!r}"
        super().__init__(message)


class InvariantError(RuntimeError):
    """A computed position broke the tokenizer's position contract."""
