"""
Exceptions raised by thumbkit
"""


class ThumbHashError(ValueError):
    """Base class for all thumbkit errors."""


class InvalidDimensions(ThumbHashError):
    """Raised when an input image is empty or exceeds the size cap."""


class BufferLengthMismatch(ThumbHashError):
    """Raised when a pixel buffer does not hold exactly width*height*4 bytes."""


class MalformedHash(ThumbHashError):
    """Raised when hash bytes are truncated or inconsistent with their header."""
