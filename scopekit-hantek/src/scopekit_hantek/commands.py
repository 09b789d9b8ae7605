"""DSO2C10 parameter paths.

Channel parameters live under ``CHANnel<n>:<FIELD>``; timebase and measure
flags use fixed ungrouped paths. Paths carry neither the ``?`` query suffix
nor a value; see :mod:`scopekit_scpi.command` for those forms.
"""

from __future__ import annotations

from enum import Enum

from scopekit_scpi.errors import ScpiInvalidArgumentError

CHANNEL_IDS: tuple[int, ...] = (1, 2)
"""Physical input channels of the DSO2C10."""

TIMEBASE_WINDOW_ENABLE = "TIMebase:WINDow:ENABle"
MEASURE_ENABLE = "MEASure:ENABle"
MEASURE_ALL_DISPLAY = "MEASure:ADISplay"
MEASURE_GATE_ENABLE = "MEASure:GATE:ENABle"


class ChannelField(str, Enum):
    """Per-channel SCPI fields, valued by their mixed-case keyword."""

    BW_LIMIT = "BWLimit"
    DISPLAY = "DISPlay"
    INVERT = "INVert"
    VERNIER = "VERNier"
    OFFSET = "OFFSet"
    SCALE = "SCALe"
    COUPLING = "COUPling"
    PROBE = "PROBe"


def check_channel(channel: int) -> int:
    """Validate a channel ordinal.

    Args:
        channel: Channel number (1-based).

    Returns:
        The channel number, unchanged.

    Raises:
        ScpiInvalidArgumentError: If *channel* is not one of :data:`CHANNEL_IDS`.
    """
    if isinstance(channel, bool) or not isinstance(channel, int) or channel not in CHANNEL_IDS:
        raise ScpiInvalidArgumentError(
            f"Channel {channel!r} out of range ({CHANNEL_IDS[0]}-{CHANNEL_IDS[-1]})"
        )
    return channel


def channel_path(channel: int, field: ChannelField) -> str:
    """Build the path of a channel-scoped parameter.

    Example:
        >>> channel_path(2, ChannelField.OFFSET)
        'CHANnel2:OFFSet'

    Raises:
        ScpiInvalidArgumentError: If *channel* is out of range.
    """
    return f"CHANnel{check_channel(channel)}:{field.value}"
