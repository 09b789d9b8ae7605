"""Index registries for the indexed accessor API.

An attribute-hosting layer binds to instrument parameters by small integer
indices instead of per-parameter methods. Each value kind has a closed
enumeration of indices and a table mapping every member to exactly one
parameter descriptor. Supporting a new parameter means adding one enum member
and one table entry; nothing else changes.

Index values are part of the external contract and must never be renumbered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from scopekit_scpi.errors import ScpiInvalidArgumentError
from scopekit_scpi.number import format_number

from scopekit_hantek.commands import (
    MEASURE_ALL_DISPLAY,
    MEASURE_ENABLE,
    MEASURE_GATE_ENABLE,
    TIMEBASE_WINDOW_ENABLE,
    ChannelField,
    channel_path,
)
from scopekit_hantek.quantize import PROBE_TABLE, SCALE_TABLE, QuantizedTable, normalize_coupling


class BooleanIndex(IntEnum):
    """Indices of boolean-valued parameters."""

    CHANNEL1_BW_LIMIT = 0
    CHANNEL1_DISPLAY = 1
    CHANNEL1_INVERT = 2
    CHANNEL1_VERNIER = 3
    CHANNEL2_BW_LIMIT = 4
    CHANNEL2_DISPLAY = 5
    CHANNEL2_INVERT = 6
    CHANNEL2_VERNIER = 7
    TIMEBASE_WINDOW_ENABLE = 8
    MEASURE_ENABLE = 9
    MEASURE_ALL_DISPLAY = 10
    MEASURE_GATE_ENABLE = 11


class StringIndex(IntEnum):
    """Indices of string/enum-valued parameters."""

    CHANNEL1_COUPLING = 0
    CHANNEL1_SCALE = 1
    CHANNEL1_PROBE = 2
    CHANNEL2_COUPLING = 3
    CHANNEL2_SCALE = 4
    CHANNEL2_PROBE = 5


@dataclass(frozen=True)
class BooleanParameter:
    """Descriptor of a boolean parameter.

    Attributes:
        index: Registry index.
        path: Parameter path, without query suffix.
        channel: Channel number for channel-scoped parameters, else None.
    """

    index: BooleanIndex
    path: str
    channel: int | None = None


@dataclass(frozen=True)
class StringParameter:
    """Descriptor of a string/enum parameter.

    Quantized parameters are read as numbers and shown through *table*;
    writes are validated against the same table and sent in numeric form.
    Other string parameters are read as raw text and written after
    canonicalization (coupling).

    Attributes:
        index: Registry index.
        path: Parameter path, without query suffix.
        channel: Channel number for channel-scoped parameters, else None.
        table: Quantized label table, or None for plain text parameters.
    """

    index: StringIndex
    path: str
    channel: int | None = None
    table: QuantizedTable | None = None

    def encode(self, value: str) -> str:
        """Validate *value* and return the text to put on the wire.

        Raises:
            ScpiInvalidArgumentError: If *value* is not a canonical member.
        """
        if self.table is not None:
            return format_number(self.table.value_for(value))
        return normalize_coupling(value)


def _channel_bool(index: BooleanIndex, channel: int, field: ChannelField) -> BooleanParameter:
    return BooleanParameter(index=index, path=channel_path(channel, field), channel=channel)


def _channel_string(
    index: StringIndex,
    channel: int,
    field: ChannelField,
    table: QuantizedTable | None = None,
) -> StringParameter:
    return StringParameter(
        index=index, path=channel_path(channel, field), channel=channel, table=table
    )


BOOLEAN_PARAMETERS: dict[BooleanIndex, BooleanParameter] = {
    BooleanIndex.CHANNEL1_BW_LIMIT: _channel_bool(
        BooleanIndex.CHANNEL1_BW_LIMIT, 1, ChannelField.BW_LIMIT
    ),
    BooleanIndex.CHANNEL1_DISPLAY: _channel_bool(
        BooleanIndex.CHANNEL1_DISPLAY, 1, ChannelField.DISPLAY
    ),
    BooleanIndex.CHANNEL1_INVERT: _channel_bool(
        BooleanIndex.CHANNEL1_INVERT, 1, ChannelField.INVERT
    ),
    BooleanIndex.CHANNEL1_VERNIER: _channel_bool(
        BooleanIndex.CHANNEL1_VERNIER, 1, ChannelField.VERNIER
    ),
    BooleanIndex.CHANNEL2_BW_LIMIT: _channel_bool(
        BooleanIndex.CHANNEL2_BW_LIMIT, 2, ChannelField.BW_LIMIT
    ),
    BooleanIndex.CHANNEL2_DISPLAY: _channel_bool(
        BooleanIndex.CHANNEL2_DISPLAY, 2, ChannelField.DISPLAY
    ),
    BooleanIndex.CHANNEL2_INVERT: _channel_bool(
        BooleanIndex.CHANNEL2_INVERT, 2, ChannelField.INVERT
    ),
    BooleanIndex.CHANNEL2_VERNIER: _channel_bool(
        BooleanIndex.CHANNEL2_VERNIER, 2, ChannelField.VERNIER
    ),
    BooleanIndex.TIMEBASE_WINDOW_ENABLE: BooleanParameter(
        BooleanIndex.TIMEBASE_WINDOW_ENABLE, TIMEBASE_WINDOW_ENABLE
    ),
    BooleanIndex.MEASURE_ENABLE: BooleanParameter(BooleanIndex.MEASURE_ENABLE, MEASURE_ENABLE),
    BooleanIndex.MEASURE_ALL_DISPLAY: BooleanParameter(
        BooleanIndex.MEASURE_ALL_DISPLAY, MEASURE_ALL_DISPLAY
    ),
    BooleanIndex.MEASURE_GATE_ENABLE: BooleanParameter(
        BooleanIndex.MEASURE_GATE_ENABLE, MEASURE_GATE_ENABLE
    ),
}

STRING_PARAMETERS: dict[StringIndex, StringParameter] = {
    StringIndex.CHANNEL1_COUPLING: _channel_string(
        StringIndex.CHANNEL1_COUPLING, 1, ChannelField.COUPLING
    ),
    StringIndex.CHANNEL1_SCALE: _channel_string(
        StringIndex.CHANNEL1_SCALE, 1, ChannelField.SCALE, SCALE_TABLE
    ),
    StringIndex.CHANNEL1_PROBE: _channel_string(
        StringIndex.CHANNEL1_PROBE, 1, ChannelField.PROBE, PROBE_TABLE
    ),
    StringIndex.CHANNEL2_COUPLING: _channel_string(
        StringIndex.CHANNEL2_COUPLING, 2, ChannelField.COUPLING
    ),
    StringIndex.CHANNEL2_SCALE: _channel_string(
        StringIndex.CHANNEL2_SCALE, 2, ChannelField.SCALE, SCALE_TABLE
    ),
    StringIndex.CHANNEL2_PROBE: _channel_string(
        StringIndex.CHANNEL2_PROBE, 2, ChannelField.PROBE, PROBE_TABLE
    ),
}


def _check_index(index: int, kind: str) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise ScpiInvalidArgumentError(f"Unknown {kind} index: {index!r}")
    return index


def resolve_boolean_index(index: int) -> BooleanParameter:
    """Look up the descriptor of a boolean index.

    Args:
        index: Integer index as received from the hosting layer.

    Returns:
        The parameter descriptor.

    Raises:
        ScpiInvalidArgumentError: If *index* is not a declared boolean index.
    """
    _check_index(index, "boolean")
    try:
        member = BooleanIndex(index)
    except ValueError:
        raise ScpiInvalidArgumentError(f"Unknown boolean index: {index!r}") from None
    return BOOLEAN_PARAMETERS[member]


def resolve_string_index(index: int) -> StringParameter:
    """Look up the descriptor of a string index.

    Args:
        index: Integer index as received from the hosting layer.

    Returns:
        The parameter descriptor.

    Raises:
        ScpiInvalidArgumentError: If *index* is not a declared string index.
    """
    _check_index(index, "string")
    try:
        member = StringIndex(index)
    except ValueError:
        raise ScpiInvalidArgumentError(f"Unknown string index: {index!r}") from None
    return STRING_PARAMETERS[member]
