"""Core data types for scopekit.

Submodules:
    common: Base types (InstrumentIdentity)
"""

from scopekit_core.types.common import InstrumentIdentity

__all__ = [
    "InstrumentIdentity",
]
