"""
Error taxonomy for shapesnap.

Configuration and shape-kind errors are raised synchronously, before any
pixel work starts. EmptyScanlineSet marks a broken internal contract.
"""


class ShapesnapError(Exception):
    """Base class for all shapesnap errors."""


class InvalidConfiguration(ShapesnapError, ValueError):
    """Raised when search settings are out of range or incomplete."""


class UnknownShapeKind(ShapesnapError, ValueError):
    """Raised when a shape allow-list names a kind that is not registered."""

    def __init__(self, kind, known=None):
        self.kind = kind
        self.known = sorted(known) if known else []
        message = f"Unknown shape kind: {kind!r}"
        if self.known:
            message += f" (expected one of {', '.join(self.known)})"
        super().__init__(message)


class EmptyScanlineSet(ShapesnapError, RuntimeError):
    """Raised when a color is requested for a shape that covers no pixels."""
