"""
Errors raised while converting a class-definition call.

Every error is fatal for the call being converted. A missing superclass
namespace is the one recoverable condition and is reported as a warning on
the conversion result instead.
"""


class ConversionError(Exception):
    """Base class for conversion failures."""

    pass


class MissingParametersError(ConversionError):
    """The class-definition call has no arguments."""

    def __init__(self, message: str = "Class definition call has no parameters"):
        super().__init__(message)


class InvalidArityError(ConversionError):
    """The class-definition call has neither 2 nor 3 arguments."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Class definition call takes 2 or 3 arguments, got {count}"
        )


class InvalidNamespaceError(ConversionError):
    """The namespace is not a non-empty dotted string of non-empty segments."""

    def __init__(self, namespace: object, reason: str = "empty namespace segment"):
        self.namespace = namespace
        super().__init__(f"Invalid namespace {namespace!r}: {reason}")


class InvalidMemberTableError(ConversionError):
    """A member table argument is not an object literal."""

    def __init__(self, position: int, node_type: str | None):
        self.position = position
        self.node_type = node_type
        super().__init__(
            f"Argument {position} must be an object literal, got {node_type or 'nothing'}"
        )
