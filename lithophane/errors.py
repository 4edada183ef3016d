"""Errors raised by the lithophane core.

Nothing here is retried: every stage is a pure computation, so the error is
reported to the caller as-is. File errors are the builtin ``OSError``.
"""


class LithophaneError(Exception):
    pass


class InvalidPixelLength(LithophaneError, ValueError):
    """A pixel (or pixel buffer) does not carry exactly three channels."""


class DegenerateInputError(LithophaneError, ValueError):
    """A zero width or height reached a generator."""


class MalformedMeshError(LithophaneError, RuntimeError):
    """Vertex count is not a multiple of three. Always a generator bug."""
