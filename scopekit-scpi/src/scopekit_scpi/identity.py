"""Parsing of IEEE 488.2 ``*IDN?`` responses."""

from __future__ import annotations

from scopekit_core.types.common import InstrumentIdentity

IDN_QUERY = "*IDN?"


def parse_idn_response(response: str) -> InstrumentIdentity:
    """Parse a SCPI ``*IDN?`` response into an :class:`InstrumentIdentity`.

    The standard ``*IDN?`` response format is four comma-separated fields::

        manufacturer,model,serial_number,firmware_version

    If the response contains more than four comma-separated fields, the
    extra fields are joined into the firmware string.

    Args:
        response: The raw ``*IDN?`` response string.

    Returns:
        Parsed identity with manufacturer, model, serial, and firmware.

    Raises:
        ValueError: If the response has fewer than four fields.
    """
    parts = [p.strip() for p in response.split(",")]
    if len(parts) < 4:
        raise ValueError(
            f"Expected at least 4 comma-separated fields in *IDN? response, "
            f"got {len(parts)}: {response!r}"
        )
    return InstrumentIdentity(
        manufacturer=parts[0],
        model=parts[1],
        serial=parts[2],
        firmware=",".join(parts[3:]),
    )
