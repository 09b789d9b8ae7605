"""Hantek DSO2C10 oscilloscope emulator.

Provides an in-process SCPI emulator implementing the ``ScpiTransport`` protocol.
It models the channel, timebase-window and measure settings that
:class:`~scopekit_hantek.interface.Dso2c10Interface` reads and writes, plus the
IEEE 488.2 common commands and the ``SYST:ERR?`` error queue.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

from scopekit_scpi.boolean import format_bool, format_bool_digit, parse_bool
from scopekit_scpi.errors import ScpiParseError, ScpiTransportError
from scopekit_scpi.number import format_number, parse_number

from scopekit_hantek.commands import CHANNEL_IDS
from scopekit_hantek.quantize import COUPLING_CHOICES, PROBE_TABLE, SCALE_TABLE

# ---------------------------------------------------------------------------
# Long-form → short-form SCPI keyword map
# ---------------------------------------------------------------------------

_LONG_TO_SHORT: dict[str, str] = {
    "CHANNEL": "CHAN",
    "BWLIMIT": "BWL",
    "DISPLAY": "DISP",
    "INVERT": "INV",
    "VERNIER": "VERN",
    "OFFSET": "OFFS",
    "SCALE": "SCAL",
    "COUPLING": "COUP",
    "PROBE": "PROB",
    "TIMEBASE": "TIM",
    "WINDOW": "WIND",
    "ENABLE": "ENAB",
    "MEASURE": "MEAS",
    "ADISPLAY": "ADIS",
    "SYSTEM": "SYST",
    "ERROR": "ERR",
}

_SEGMENT_RE = re.compile(r"([A-Z]+)(\d*)")


def _normalize_header(header: str) -> str:
    """Normalize a SCPI header to canonical short form.

    1. Uppercase
    2. Strip leading colon
    3. Split on ``:``
    4. Map long forms to short forms, keeping numeric suffixes
    5. Rejoin with ``:``

    ``CHANnel2:BWLimit`` and ``chan2:bwl`` both normalize to ``CHAN2:BWL``.
    """
    upper = header.upper()
    if upper.startswith(":"):
        upper = upper[1:]
    segments = []
    for seg in upper.split(":"):
        match = _SEGMENT_RE.fullmatch(seg)
        if match is None:
            segments.append(seg)
            continue
        keyword, suffix = match.groups()
        segments.append(_LONG_TO_SHORT.get(keyword, keyword) + suffix)
    return ":".join(segments)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

BOOLEAN_STYLES: tuple[str, ...] = ("word", "digit")


@dataclass(frozen=True)
class Dso2c10EmulatorConfig:
    """Configuration for a DSO2C10 emulator instance.

    Args:
        identity: ``*IDN?`` response string.
        boolean_style: ``"word"`` answers boolean queries with ``ON``/``OFF``,
            ``"digit"`` with ``1``/``0``.
    """

    identity: str
    boolean_style: str = "word"

    def __post_init__(self) -> None:
        if not self.identity:
            raise ValueError("identity must be non-empty")
        if self.boolean_style not in BOOLEAN_STYLES:
            raise ValueError(f"boolean_style must be one of {BOOLEAN_STYLES}")


# ---------------------------------------------------------------------------
# Internal state
# ---------------------------------------------------------------------------


@dataclass
class _ChannelState:
    bw_limit: bool = False
    display: bool = True
    invert: bool = False
    vernier: bool = False
    offset: float = 0.0
    scale: float = 1.0
    coupling: str = "DC"
    probe: float = 1.0


@dataclass
class _GlobalState:
    timebase_window: bool = False
    measure_enable: bool = False
    measure_all_display: bool = False
    measure_gate_enable: bool = False
    channels: dict[int, _ChannelState] = field(
        default_factory=lambda: {ch: _ChannelState() for ch in CHANNEL_IDS}
    )


class _ParameterError(Exception):
    """Raised by set handlers on a malformed argument."""


def _parse_bool_arg(args: str) -> bool:
    try:
        return parse_bool(args)
    except ScpiParseError:
        raise _ParameterError(args) from None


def _parse_float_arg(args: str) -> float:
    try:
        return parse_number(args)
    except ScpiParseError:
        raise _ParameterError(args) from None


def _parse_table_arg(args: str, values: tuple[float, ...]) -> float:
    value = _parse_float_arg(args)
    if value not in values:
        raise _ParameterError(args)
    return value


_SCALE_VALUES = tuple(value for value, _ in SCALE_TABLE.entries)
_PROBE_VALUES = tuple(value for value, _ in PROBE_TABLE.entries)


# ---------------------------------------------------------------------------
# Emulator
# ---------------------------------------------------------------------------


class Dso2c10Emulator:
    """In-process DSO2C10 emulator implementing ``ScpiTransport``.

    Every line handed to :meth:`execute`, :meth:`send` or :meth:`evaluate` is
    recorded in :attr:`received`, which tests use to assert the exact wire
    traffic.

    Args:
        config: Emulator configuration.
    """

    def __init__(self, config: Dso2c10EmulatorConfig) -> None:
        self._config = config
        self._state = _GlobalState()
        self._error_queue: list[tuple[int, str]] = []
        self._closed = False
        self.received: list[str] = []

        # Channel fields, keyed by normalized field keyword
        self._channel_setters: dict[str, Callable[[_ChannelState, str], None]] = {
            "BWL": lambda ch, a: setattr(ch, "bw_limit", _parse_bool_arg(a)),
            "DISP": lambda ch, a: setattr(ch, "display", _parse_bool_arg(a)),
            "INV": lambda ch, a: setattr(ch, "invert", _parse_bool_arg(a)),
            "VERN": lambda ch, a: setattr(ch, "vernier", _parse_bool_arg(a)),
            "OFFS": lambda ch, a: setattr(ch, "offset", _parse_float_arg(a)),
            "SCAL": lambda ch, a: setattr(ch, "scale", _parse_table_arg(a, _SCALE_VALUES)),
            "PROB": lambda ch, a: setattr(ch, "probe", _parse_table_arg(a, _PROBE_VALUES)),
            "COUP": self._set_coupling,
        }
        self._channel_getters: dict[str, Callable[[_ChannelState], str]] = {
            "BWL": lambda ch: self._format_bool(ch.bw_limit),
            "DISP": lambda ch: self._format_bool(ch.display),
            "INV": lambda ch: self._format_bool(ch.invert),
            "VERN": lambda ch: self._format_bool(ch.vernier),
            "OFFS": lambda ch: format_number(ch.offset),
            "SCAL": lambda ch: format_number(ch.scale),
            "PROB": lambda ch: format_number(ch.probe),
            "COUP": lambda ch: ch.coupling,
        }

        # Ungrouped boolean flags, keyed by normalized header
        self._flags: dict[str, str] = {
            "TIM:WIND:ENAB": "timebase_window",
            "MEAS:ENAB": "measure_enable",
            "MEAS:ADIS": "measure_all_display",
            "MEAS:GATE:ENAB": "measure_gate_enable",
        }

    # -- Transport interface ------------------------------------------------

    def execute(self, request: bytes) -> bytes:
        """Process a query and return its response payload."""
        return self._process(request.decode("ascii", errors="replace")).encode("ascii")

    def send(self, request: bytes) -> None:
        """Process a command; any response is discarded."""
        self._process(request.decode("ascii", errors="replace"))

    def evaluate(self, command: str) -> str:
        """Process a raw console line and return the response text."""
        return self._process(command)

    def close(self) -> None:
        """Close the emulator. Further exchanges raise ``ScpiTransportError``."""
        self._closed = True

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def config(self) -> Dso2c10EmulatorConfig:
        return self._config

    # -- Test helpers -------------------------------------------------------

    def channel_state(self, channel: int) -> _ChannelState:
        """Return the live state of *channel* for inspection in tests."""
        if channel not in self._state.channels:
            raise ValueError(f"Channel {channel} out of range (1-{len(CHANNEL_IDS)})")
        return self._state.channels[channel]

    def pending_errors(self) -> list[tuple[int, str]]:
        """Return a copy of the error queue without draining it."""
        return list(self._error_queue)

    # -- Line processing ----------------------------------------------------

    def _process(self, message: str) -> str:
        if self._closed:
            raise ScpiTransportError("Emulator is closed")
        line = message.strip()
        self.received.append(line)
        if not line:
            return ""

        is_query, header, args = self._parse_line(line)

        common = self._handle_common_command(header, is_query)
        if common is not None:
            return common

        return self._dispatch(header, args, is_query)

    def _parse_line(self, line: str) -> tuple[bool, str, str]:
        """Parse a SCPI line into (is_query, header, args)."""
        parts = line.split(None, 1)
        header = parts[0]
        args = parts[1].strip() if len(parts) > 1 else ""
        is_query = header.endswith("?")
        return is_query, header.rstrip("?"), args

    def _handle_common_command(self, header: str, is_query: bool) -> str | None:
        """Handle IEEE 488.2 and SYST:ERR? commands. Returns None if unhandled."""
        upper_header = header.upper()
        if is_query and upper_header == "*IDN":
            return self._config.identity
        if is_query and upper_header == "*OPC":
            return "1"
        if not is_query and upper_header == "*RST":
            self._state = _GlobalState()
            return ""
        if not is_query and upper_header == "*CLS":
            self._error_queue.clear()
            return ""
        if is_query and _normalize_header(header) == "SYST:ERR":
            return self._pop_error()
        return None

    def _dispatch(self, header: str, args: str, is_query: bool) -> str:
        norm = _normalize_header(header)
        if norm in self._flags:
            attr = self._flags[norm]
            if is_query:
                return self._format_bool(getattr(self._state, attr))
            return self._apply(lambda: setattr(self._state, attr, _parse_bool_arg(args)))

        channel, _, field_name = norm.partition(":")
        if channel.startswith("CHAN") and channel[4:].isdigit():
            state = self._state.channels.get(int(channel[4:]))
            if state is not None:
                if is_query and field_name in self._channel_getters:
                    return self._channel_getters[field_name](state)
                if not is_query and field_name in self._channel_setters:
                    setter = self._channel_setters[field_name]
                    return self._apply(lambda: setter(state, args))

        self._error_queue.append((-100, "Command error"))
        return ""

    def _apply(self, action: Callable[[], None]) -> str:
        try:
            action()
        except _ParameterError:
            self._error_queue.append((-220, "Parameter error"))
        return ""

    def _set_coupling(self, state: _ChannelState, args: str) -> None:
        token = args.strip().upper()
        if token not in COUPLING_CHOICES:
            raise _ParameterError(args)
        state.coupling = token

    def _format_bool(self, value: bool) -> str:
        if self._config.boolean_style == "digit":
            return format_bool_digit(value)
        return format_bool(value)

    def _pop_error(self) -> str:
        if self._error_queue:
            code, msg = self._error_queue.pop(0)
            return f'{code},"{msg}"'
        return '0,"No error"'


# ---------------------------------------------------------------------------
# Factory functions
# ---------------------------------------------------------------------------


def make_dso2c10_emulator(
    serial: str = "CN2210000000001", *, boolean_style: str = "word"
) -> Dso2c10Emulator:
    """Create an emulator for a Hantek DSO2C10 oscilloscope.

    Args:
        serial: Serial number reported in ``*IDN?``.
        boolean_style: Boolean response form, ``"word"`` or ``"digit"``.

    Returns:
        A fresh emulator with power-on defaults.
    """
    return Dso2c10Emulator(
        Dso2c10EmulatorConfig(
            identity=f"Hantek,DSO2C10,{serial},3.0.0(220407.00)",
            boolean_style=boolean_style,
        )
    )
