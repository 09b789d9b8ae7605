"""Core library for the scopekit oscilloscope drivers.

This package provides the foundational data types and error types shared by
the scopekit packages. It is stdlib-only so it can serve as the base layer for
the SCPI and instrument driver packages.

Key components:
    - Types: InstrumentIdentity, the parsed form of a ``*IDN?`` response.
    - Errors: ScopekitError, the root of the exception hierarchy, and
      ConfigError for configuration loading failures.

Example:
    >>> from scopekit_core import InstrumentIdentity
    >>> identity = InstrumentIdentity("Hantek", "DSO2C10", "CN221", "3.0.0")
    >>> print(identity.model)
    DSO2C10
"""

from scopekit_core.errors import ConfigError, ScopekitError
from scopekit_core.types import InstrumentIdentity

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Common types
    "InstrumentIdentity",
    # Errors
    "ConfigError",
    "ScopekitError",
]
