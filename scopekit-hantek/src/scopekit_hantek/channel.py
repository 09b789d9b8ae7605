"""DSO2C10 channel wrapper for logical naming.

This module provides a per-channel interface to the oscilloscope, allowing
test code to interact with individual inputs by logical name. All channel
facades of one device share a single :class:`Dso2c10Interface`, whose lock
serializes their exchanges.

Example:
    scope = create_device(load_config("scope.yaml"))

    probe = scope.get_channel_by_name("probe_a")
    probe.set_coupling("AC")
    probe.set_scale(0.5)
    print(probe.get_scale_label())  # "500mV"
"""

from __future__ import annotations

import logging
from typing import Any

from scopekit_core.errors import ConfigError
from scopekit_core.types.common import InstrumentIdentity
from scopekit_scpi import ScpiTransport, VisaResource

from scopekit_hantek.config import DEFAULT_TIMEOUT_MS, ChannelConfig, DeviceConfig
from scopekit_hantek.emulator import make_dso2c10_emulator
from scopekit_hantek.interface import Dso2c10Interface

logger = logging.getLogger(__name__)


class Dso2c10Channel:
    """A single input channel of a DSO2C10.

    Args:
        scope: The shared protocol adapter.
        config: Channel configuration.
    """

    def __init__(self, scope: Dso2c10Interface, config: ChannelConfig) -> None:
        self._scope = scope
        self._config = config

    @property
    def logical_name(self) -> str:
        """The logical name of this channel."""
        return self._config.logical_name

    @property
    def channel_id(self) -> int:
        """The physical channel ID."""
        return self._config.id

    # -- Booleans -------------------------------------------------------------

    def is_bw_limited(self) -> bool:
        return self._scope.get_channel_bw_limit(self.channel_id)

    def set_bw_limit(self, enabled: bool) -> None:
        self._scope.set_channel_bw_limit(self.channel_id, enabled)

    def is_displayed(self) -> bool:
        return self._scope.get_channel_display(self.channel_id)

    def set_display(self, enabled: bool) -> None:
        self._scope.set_channel_display(self.channel_id, enabled)

    def is_inverted(self) -> bool:
        return self._scope.get_channel_invert(self.channel_id)

    def set_invert(self, enabled: bool) -> None:
        self._scope.set_channel_invert(self.channel_id, enabled)

    def is_vernier(self) -> bool:
        return self._scope.get_channel_vernier(self.channel_id)

    def set_vernier(self, enabled: bool) -> None:
        self._scope.set_channel_vernier(self.channel_id, enabled)

    # -- Vertical -------------------------------------------------------------

    def get_offset(self) -> float:
        """Query the vertical offset in volts."""
        return self._scope.get_channel_offset(self.channel_id)

    def set_offset(self, volts: float) -> None:
        """Set the vertical offset.

        Args:
            volts: Offset in volts.
        """
        self._scope.set_channel_offset(self.channel_id, volts)

    def get_scale(self) -> float:
        """Query the vertical scale in volts per division."""
        return self._scope.get_channel_scale(self.channel_id)

    def set_scale(self, volts_per_div: float) -> None:
        self._scope.set_channel_scale(self.channel_id, volts_per_div)

    def get_scale_label(self) -> str:
        return self._scope.get_channel_scale_label(self.channel_id)

    def get_probe(self) -> float:
        """Query the probe attenuation ratio."""
        return self._scope.get_channel_probe(self.channel_id)

    def set_probe(self, ratio: float) -> None:
        self._scope.set_channel_probe(self.channel_id, ratio)

    def get_probe_label(self) -> str:
        return self._scope.get_channel_probe_label(self.channel_id)

    def get_coupling(self) -> str:
        return self._scope.get_channel_coupling(self.channel_id)

    def set_coupling(self, coupling: str) -> None:
        """Set the input coupling.

        Args:
            coupling: ``"AC"``, ``"DC"`` or ``"GND"`` (case-insensitive).
        """
        self._scope.set_channel_coupling(self.channel_id, coupling)

    def snapshot(self) -> dict[str, Any]:
        """Read every channel setting.

        Returns:
            Mapping of setting name to current value, with scale and probe
            shown through their label tables.
        """
        return {
            "bw_limit": self.is_bw_limited(),
            "display": self.is_displayed(),
            "invert": self.is_inverted(),
            "vernier": self.is_vernier(),
            "offset": self.get_offset(),
            "scale": self.get_scale_label(),
            "probe": self.get_probe_label(),
            "coupling": self.get_coupling(),
        }


class Dso2c10:
    """A DSO2C10 with its channels addressable by ID or logical name.

    Args:
        scope: The protocol adapter for the instrument.
        channels: Channel configurations with logical names.
    """

    def __init__(self, scope: Dso2c10Interface, channels: tuple[ChannelConfig, ...]) -> None:
        self._scope = scope
        self._channels_by_id: dict[int, Dso2c10Channel] = {}
        self._channels_by_name: dict[str, Dso2c10Channel] = {}

        for config in channels:
            channel = Dso2c10Channel(scope, config)
            self._channels_by_id[config.id] = channel
            self._channels_by_name[config.logical_name] = channel

    @property
    def interface(self) -> Dso2c10Interface:
        """The shared protocol adapter."""
        return self._scope

    def identify(self) -> str:
        """Query instrument identification string (``*IDN?``)."""
        return self._scope.read_idn()

    def get_identity(self) -> InstrumentIdentity:
        """Query and parse instrument identification (``*IDN?``).

        Returns:
            Parsed identity with manufacturer, model, serial, and firmware.
        """
        return self._scope.get_identity()

    def close(self) -> None:
        """Close the underlying transport."""
        self._scope.close()

    def get_channel(self, channel_id: int) -> Dso2c10Channel:
        """Get a channel interface by physical channel ID.

        Raises:
            KeyError: If channel ID not configured.
        """
        if channel_id not in self._channels_by_id:
            raise KeyError(f"Channel {channel_id} not configured")
        return self._channels_by_id[channel_id]

    def get_channel_by_name(self, logical_name: str) -> Dso2c10Channel | None:
        """Get a channel interface by logical name, or None if not registered."""
        return self._channels_by_name.get(logical_name)

    def list_channels(self) -> list[Dso2c10Channel]:
        return list(self._channels_by_id.values())

    def list_logical_names(self) -> list[str]:
        return list(self._channels_by_name.keys())


def create_instrument(visa_address: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Dso2c10Interface:
    """Create a DSO2C10 protocol adapter from a VISA address.

    Opens the VISA resource and returns a ready-to-use adapter.

    Args:
        visa_address: VISA resource string
            (e.g. ``"USB0::0x049F::0x505E::CN2210000000000::INSTR"``).
        timeout_ms: VISA I/O timeout in milliseconds.

    Returns:
        Connected adapter instance.
    """
    resource = VisaResource(visa_address, timeout_ms=timeout_ms)
    resource.open()
    return Dso2c10Interface(resource)


def create_device(config: DeviceConfig) -> Dso2c10:
    """Create a DSO2C10 device from a parsed configuration.

    Args:
        config: Device configuration, typically from
            :func:`~scopekit_hantek.config.load_config`.

    Returns:
        Device with one facade per configured channel.

    Raises:
        ConfigError: If a real instrument is requested without a VISA address.
    """
    if config.emulate:
        logger.info("Using DSO2C10 emulator")
        transport: ScpiTransport = make_dso2c10_emulator()
        scope = Dso2c10Interface(transport)
    else:
        if not config.visa_address:
            raise ConfigError("Missing required field: instrument.visa_address")
        scope = create_instrument(config.visa_address, config.timeout_ms)
    return Dso2c10(scope, config.channels)
