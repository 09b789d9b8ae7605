"""SCPI protocol error types.

This module defines exception classes for SCPI protocol errors that may occur
while talking to an instrument. All exceptions inherit from
:class:`scopekit_core.errors.ScopekitError`.

Exception hierarchy:
    ScpiError
    +-- ScpiTransportError: I/O failure reported by a transport
    +-- ScpiInvalidArgumentError: Caller input rejected before any I/O
    +-- ScpiDecodeError: Response bytes are not the expected type
        +-- ScpiParseError: Text is valid but not a boolean/number literal
"""

from __future__ import annotations

from scopekit_core.errors import ScopekitError


class ScpiError(ScopekitError):
    """Base exception for SCPI protocol errors.

    All SCPI-related exceptions inherit from this class, allowing callers
    to catch all SCPI errors with a single except clause.
    """


class ScpiTransportError(ScpiError):
    """Raised by a transport when the instrument cannot be reached.

    Covers I/O failures, timeouts, and using a transport that is not open.
    The protocol layers above propagate it unchanged.
    """


class ScpiInvalidArgumentError(ScpiError, ValueError):
    """Raised when a caller-supplied argument is rejected.

    Raised for unknown registry indices, channel ordinals outside the
    instrument's range, and values outside a canonical enumeration. No
    command is sent to the instrument when this is raised.
    """


class ScpiDecodeError(ScpiError, ValueError):
    """Raised when response bytes cannot be interpreted as the expected type.

    Example:
        >>> from scopekit_scpi.number import decode_text
        >>> try:
        ...     decode_text(b"\\xff")
        ... except ScpiDecodeError as e:
        ...     print(e)
        Cannot convert response into string: b'\\xff'
    """


class ScpiParseError(ScpiDecodeError):
    """Raised when a response is not a valid boolean or numeric literal."""
