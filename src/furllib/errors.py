"""furllib.errors
Exception types raised by furllib. Each one also derives from the builtin
exception a caller would naturally catch for it.
"""

from typing import Self


class FurlError(Exception):
    """Base class for every error raised by furllib."""


class ParseError(FurlError, ValueError):
    """Raised when a URL, netloc, port or path string doesn't fit the grammar."""

    def __init__(self: Self, message: str, text: str, position: int) -> None:
        super().__init__(f"{message}: {text!r} at offset {position}")
        self.text: str = text
        self.position: int = position


class InvalidOperationError(FurlError, LookupError):
    """Raised when popping a key that isn't present and no default was given."""


class InvalidStateError(FurlError, ValueError):
    """Raised when a change would break an invariant, like a relative path under a netloc."""


class IndexOutOfRangeError(FurlError, IndexError):
    """Raised when positional access into an OMDict falls outside [0, size)."""
