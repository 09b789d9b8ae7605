"""Exception types for scopekit-core.

This module defines the root of the exception hierarchy used throughout the
scopekit packages. All scopekit exceptions inherit from ScopekitError, allowing
consumers to catch all framework-specific errors with a single except clause.

Exception hierarchy:
    ScopekitError (base)
    +-- ConfigError: Invalid or unreadable instrument configuration
    +-- ScpiError (scopekit_scpi): SCPI protocol failures
"""


class ScopekitError(Exception):
    """Base exception for all scopekit errors.

    This is the root of the scopekit exception hierarchy. Catch this to handle
    any framework-specific error.
    """


class ConfigError(ScopekitError):
    """Raised when an instrument configuration cannot be loaded.

    Common causes include a missing file, malformed YAML, missing required
    keys, or values of the wrong type.
    """
