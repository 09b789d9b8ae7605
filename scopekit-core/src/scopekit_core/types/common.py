"""Common types used across scopekit modules.

Classes:
    InstrumentIdentity: Instrument identification metadata.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InstrumentIdentity:
    """Instrument identification metadata.

    Represents the four standard fields returned by the SCPI ``*IDN?`` query.

    Attributes:
        manufacturer: Instrument manufacturer name (e.g., "Hantek").
        model: Instrument model number or name (e.g., "DSO2C10").
        serial: Serial number string.
        firmware: Firmware or hardware version string.

    Example:
        >>> identity = InstrumentIdentity(
        ...     manufacturer="Hantek",
        ...     model="DSO2C10",
        ...     serial="CN2210000000000",
        ...     firmware="3.0.0(220407.00)"
        ... )
    """

    manufacturer: str
    model: str
    serial: str
    firmware: str

    def __str__(self) -> str:
        """Return the identity in ``*IDN?`` wire order.

        Returns:
            Comma-separated ``manufacturer,model,serial,firmware``.
        """
        return f"{self.manufacturer},{self.model},{self.serial},{self.firmware}"
