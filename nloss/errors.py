"""Error types reported by the toolkit.

All errors derive from ``NlossError`` which itself is a ``ValueError``, so
callers can catch either the specific type or ``ValueError`` at a boundary.
"""


class NlossError(ValueError):
    """Base class for toolkit errors."""


class MalformedInputError(NlossError):
    """Bad signature, truncated header or truncated pixel data."""


class UnsupportedFormatError(NlossError):
    """Valid BMP container with a bit depth or compression we do not handle."""


class InvalidParameterError(NlossError):
    """Non-positive size, unknown axis token, out-of-range slot and similar."""


class NoBufferLoadedError(NlossError):
    """Operation requested on an empty buffer slot."""

    def __init__(self, message: str = "No image loaded"):
        super().__init__(message)
