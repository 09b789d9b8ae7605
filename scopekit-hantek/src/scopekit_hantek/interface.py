"""Protocol adapter for the Hantek DSO2C10 oscilloscope.

:class:`Dso2c10Interface` owns the transport to one instrument and turns typed
get/set calls into SCPI text and raw responses back into typed values. It
serves two kinds of callers:

- driver code using the named channel, timebase and measure accessors;
- attribute-hosting layers using the indexed accessors
  (:meth:`~Dso2c10Interface.get_boolean_at` and friends) keyed by
  :class:`~scopekit_hantek.registry.BooleanIndex` and
  :class:`~scopekit_hantek.registry.StringIndex`.

Every exchange holds the transport lock for its full duration, so concurrent
callers never interleave bytes on the wire.

Example:
    >>> from scopekit_hantek import Dso2c10Interface, make_dso2c10_emulator
    >>> scope = Dso2c10Interface(make_dso2c10_emulator())
    >>> scope.set_channel_bw_limit(1, True)
    >>> scope.get_channel_bw_limit(1)
    True
"""

from __future__ import annotations

import logging
import threading
import time

from scopekit_core.types.common import InstrumentIdentity
from scopekit_scpi import (
    IDN_QUERY,
    ScpiBoolean,
    ScpiDecodeError,
    ScpiTransport,
    decode_number,
    decode_text,
    encode_command,
    format_number,
    parse_idn_response,
    query_command,
    set_command,
)

from scopekit_hantek.commands import (
    MEASURE_ALL_DISPLAY,
    MEASURE_ENABLE,
    MEASURE_GATE_ENABLE,
    TIMEBASE_WINDOW_ENABLE,
    ChannelField,
    channel_path,
)
from scopekit_hantek.quantize import PROBE_TABLE, SCALE_TABLE, normalize_coupling
from scopekit_hantek.registry import resolve_boolean_index, resolve_string_index

logger = logging.getLogger(__name__)

IDN_FALLBACK = "Cannot convert the payload into string"
"""Returned by :meth:`Dso2c10Interface.read_idn` when the reply is not UTF-8."""


class Dso2c10Interface:
    """Typed SCPI access to a DSO2C10.

    The adapter keeps no state besides the transport, its lock and a logger;
    all settings live on the instrument. Share one instance between every
    facade that talks to the same instrument.

    Args:
        transport: An open transport implementing :class:`ScpiTransport`.
        lock: Lock guarding the transport. Pass an existing lock when the
            transport is also used outside this adapter.
        log: Logger for exchange tracing. Defaults to the module logger.
    """

    def __init__(
        self,
        transport: ScpiTransport,
        *,
        lock: threading.Lock | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._transport = transport
        self._lock = lock if lock is not None else threading.Lock()
        self._logger = log if log is not None else logger
        self._logger.info("Create Dso2c10Interface with %s transport", type(transport).__name__)

    @property
    def transport(self) -> ScpiTransport:
        """The underlying transport."""
        return self._transport

    # -- Exchanges -----------------------------------------------------------

    def _ask(self, command: str) -> bytes:
        """Run one query exchange under the transport lock."""
        request = encode_command(command)
        start = time.perf_counter()
        with self._lock:
            response = self._transport.execute(request)
        self._logger.debug(
            "ASK <=> %r - %r - %.2fms", command, response, (time.perf_counter() - start) * 1000
        )
        return response

    def _send(self, command: str) -> None:
        """Send one command under the transport lock."""
        request = encode_command(command)
        with self._lock:
            self._transport.send(request)
        self._logger.debug("SEND => %r", command)

    # -- Generic parameter access --------------------------------------------

    def get_boolean_parameter(self, path: str) -> bool:
        """Query a boolean parameter.

        Args:
            path: Parameter path, e.g. ``"MEASure:ENABle"``.

        Returns:
            The decoded value.

        Raises:
            ScpiDecodeError: If the response is not a boolean token.
            ScpiTransportError: If the exchange fails.
        """
        return ScpiBoolean.from_bytes(self._ask(query_command(path))).value

    def set_boolean_parameter(self, path: str, value: bool) -> None:
        """Set a boolean parameter using the ``0``/``1`` form. No read-back."""
        self._send(set_command(path, ScpiBoolean(bool(value)).to_digit_str()))

    def get_string_parameter(self, path: str) -> str:
        """Query a parameter and return the response text unmodified.

        Raises:
            ScpiDecodeError: If the response is not UTF-8.
            ScpiTransportError: If the exchange fails.
        """
        return decode_text(self._ask(query_command(path)))

    def set_string_parameter(self, path: str, value: str) -> None:
        """Set a parameter to raw, unvalidated text."""
        self._send(set_command(path, value))

    def get_numeric_parameter(self, path: str) -> float:
        """Query a numeric parameter.

        Raises:
            ScpiParseError: If the response is not a decimal literal.
            ScpiTransportError: If the exchange fails.
        """
        return decode_number(self._ask(query_command(path)))

    def set_numeric_parameter(self, path: str, value: float) -> None:
        """Set a numeric parameter (``1.0`` is sent as ``1``)."""
        self._send(set_command(path, format_number(value)))

    # -- Channel parameters --------------------------------------------------

    def get_channel_bw_limit(self, channel: int) -> bool:
        """Query whether the 20 MHz bandwidth limit is on."""
        return self.get_boolean_parameter(channel_path(channel, ChannelField.BW_LIMIT))

    def set_channel_bw_limit(self, channel: int, value: bool) -> None:
        """Turn the 20 MHz bandwidth limit on or off.

        Limiting the bandwidth reduces waveform noise but attenuates the
        high-frequency components of the signal.
        """
        self.set_boolean_parameter(channel_path(channel, ChannelField.BW_LIMIT), value)

    def get_channel_display(self, channel: int) -> bool:
        return self.get_boolean_parameter(channel_path(channel, ChannelField.DISPLAY))

    def set_channel_display(self, channel: int, value: bool) -> None:
        self.set_boolean_parameter(channel_path(channel, ChannelField.DISPLAY), value)

    def get_channel_invert(self, channel: int) -> bool:
        return self.get_boolean_parameter(channel_path(channel, ChannelField.INVERT))

    def set_channel_invert(self, channel: int, value: bool) -> None:
        self.set_boolean_parameter(channel_path(channel, ChannelField.INVERT), value)

    def get_channel_vernier(self, channel: int) -> bool:
        """Query whether fine (vernier) vertical scale adjustment is on."""
        return self.get_boolean_parameter(channel_path(channel, ChannelField.VERNIER))

    def set_channel_vernier(self, channel: int, value: bool) -> None:
        self.set_boolean_parameter(channel_path(channel, ChannelField.VERNIER), value)

    def get_channel_offset(self, channel: int) -> float:
        """Query the vertical offset in volts."""
        return self.get_numeric_parameter(channel_path(channel, ChannelField.OFFSET))

    def set_channel_offset(self, channel: int, value: float) -> None:
        """Set the vertical offset in volts.

        The legal range depends on the vertical scale and probe ratio; the
        instrument clamps out-of-range values to the closest legal value.
        """
        self.set_numeric_parameter(channel_path(channel, ChannelField.OFFSET), value)

    def get_channel_scale(self, channel: int) -> float:
        """Query the vertical scale in volts per division."""
        return self.get_numeric_parameter(channel_path(channel, ChannelField.SCALE))

    def set_channel_scale(self, channel: int, value: float) -> None:
        self.set_numeric_parameter(channel_path(channel, ChannelField.SCALE), value)

    def get_channel_scale_label(self, channel: int) -> str:
        """Query the vertical scale as a display label such as ``"500mV"``."""
        return SCALE_TABLE.label_for(self.get_channel_scale(channel))

    def set_channel_scale_label(self, channel: int, label: str) -> None:
        """Set the vertical scale from a canonical label.

        Raises:
            ScpiInvalidArgumentError: If *label* is not a front-panel scale.
        """
        self.set_channel_scale(channel, SCALE_TABLE.value_for(label))

    def get_channel_probe(self, channel: int) -> float:
        """Query the probe attenuation ratio."""
        return self.get_numeric_parameter(channel_path(channel, ChannelField.PROBE))

    def set_channel_probe(self, channel: int, value: float) -> None:
        self.set_numeric_parameter(channel_path(channel, ChannelField.PROBE), value)

    def get_channel_probe_label(self, channel: int) -> str:
        return PROBE_TABLE.label_for(self.get_channel_probe(channel))

    def set_channel_probe_label(self, channel: int, label: str) -> None:
        """Set the probe ratio from a canonical label (``"1"`` to ``"1000"``).

        Raises:
            ScpiInvalidArgumentError: If *label* is not a supported ratio.
        """
        self.set_channel_probe(channel, PROBE_TABLE.value_for(label))

    def get_channel_coupling(self, channel: int) -> str:
        """Query the input coupling (``AC``, ``DC`` or ``GND``) as reported."""
        return self.get_string_parameter(channel_path(channel, ChannelField.COUPLING))

    def set_channel_coupling(self, channel: int, value: str) -> None:
        """Set the input coupling.

        Raises:
            ScpiInvalidArgumentError: If *value* is not AC, DC or GND.
        """
        path = channel_path(channel, ChannelField.COUPLING)
        self.set_string_parameter(path, normalize_coupling(value))

    # -- Timebase / measure flags --------------------------------------------

    def get_timebase_window_enable(self) -> bool:
        """Query whether the zoomed (delayed) timebase window is shown."""
        return self.get_boolean_parameter(TIMEBASE_WINDOW_ENABLE)

    def set_timebase_window_enable(self, value: bool) -> None:
        self.set_boolean_parameter(TIMEBASE_WINDOW_ENABLE, value)

    def get_measure_enable(self) -> bool:
        return self.get_boolean_parameter(MEASURE_ENABLE)

    def set_measure_enable(self, value: bool) -> None:
        self.set_boolean_parameter(MEASURE_ENABLE, value)

    def get_measure_all_display(self) -> bool:
        """Query whether all measurement results are displayed."""
        return self.get_boolean_parameter(MEASURE_ALL_DISPLAY)

    def set_measure_all_display(self, value: bool) -> None:
        self.set_boolean_parameter(MEASURE_ALL_DISPLAY, value)

    def get_measure_gate_enable(self) -> bool:
        return self.get_boolean_parameter(MEASURE_GATE_ENABLE)

    def set_measure_gate_enable(self, value: bool) -> None:
        self.set_boolean_parameter(MEASURE_GATE_ENABLE, value)

    # -- Indexed accessors ---------------------------------------------------

    def get_boolean_at(self, index: int) -> bool:
        """Read the boolean parameter registered at *index*.

        Raises:
            ScpiInvalidArgumentError: If *index* is unknown. Nothing is sent.
        """
        parameter = resolve_boolean_index(index)
        return self.get_boolean_parameter(parameter.path)

    def set_boolean_at(self, index: int, value: bool) -> None:
        """Write the boolean parameter registered at *index*.

        Raises:
            ScpiInvalidArgumentError: If *index* is unknown. Nothing is sent.
        """
        parameter = resolve_boolean_index(index)
        self.set_boolean_parameter(parameter.path, value)

    def get_string_at(self, index: int) -> str:
        """Read the string parameter registered at *index*.

        Scale and probe readings are shown through their label tables;
        coupling is returned as reported.

        Raises:
            ScpiInvalidArgumentError: If *index* is unknown. Nothing is sent.
        """
        parameter = resolve_string_index(index)
        if parameter.table is not None:
            return parameter.table.label_for(self.get_numeric_parameter(parameter.path))
        return self.get_string_parameter(parameter.path)

    def set_string_at(self, index: int, value: str) -> None:
        """Write the string parameter registered at *index*.

        The value must belong to the parameter's canonical set; scale and
        probe accept a label or the equal numeric literal.

        Raises:
            ScpiInvalidArgumentError: If *index* is unknown or *value* is not
                a canonical member. Nothing is sent.
        """
        parameter = resolve_string_index(index)
        self.set_string_parameter(parameter.path, parameter.encode(value))

    # -- Identification / console --------------------------------------------

    def read_idn(self) -> str:
        """Read the identification string (``*IDN?``).

        Identification is informational: a reply that is not UTF-8 yields
        :data:`IDN_FALLBACK` instead of an error. Transport errors still
        propagate.
        """
        response = self._ask(IDN_QUERY)
        try:
            return decode_text(response)
        except ScpiDecodeError:
            self._logger.warning("*IDN? reply is not UTF-8: %r", response)
            return IDN_FALLBACK

    def get_identity(self) -> InstrumentIdentity:
        """Read and parse the identification.

        Raises:
            ValueError: If the reply has fewer than four fields.
        """
        return parse_idn_response(self.read_idn().strip())

    def eval(self, command: str) -> str:
        """Pass a raw console line to the transport, bypassing typed access."""
        with self._lock:
            return self._transport.evaluate(command)

    def close(self) -> None:
        """Close the underlying transport."""
        with self._lock:
            self._transport.close()
