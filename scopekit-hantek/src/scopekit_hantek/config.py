"""YAML configuration loading for a DSO2C10 device.

Example YAML configuration:
    instrument:
      visa_address: "USB0::0x049F::0x505E::CN2210000000000::INSTR"
      timeout_ms: 5000
      emulate: false
      channels:
        - id: 1
          logical_name: "probe_a"
        - id: 2
          logical_name: "probe_b"

``channels`` is optional; when omitted both inputs are exposed as ``ch1``
and ``ch2``. With ``emulate: true`` the address may be left out and the
in-process emulator is used instead of a VISA resource.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from scopekit_core.errors import ConfigError

from scopekit_hantek.commands import CHANNEL_IDS

DEFAULT_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class ChannelConfig:
    """Configuration for an oscilloscope input channel.

    Attributes:
        id: Physical channel ID (1 or 2).
        logical_name: Logical name for this channel (e.g., "probe_a").
    """

    id: int
    logical_name: str

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or self.id not in CHANNEL_IDS:
            raise ConfigError(f"Channel id must be one of {CHANNEL_IDS}, got {self.id!r}")
        if not isinstance(self.logical_name, str) or not self.logical_name:
            raise ConfigError(f"Channel {self.id} logical_name must be a non-empty string")


def _default_channels() -> tuple[ChannelConfig, ...]:
    return tuple(ChannelConfig(id=ch, logical_name=f"ch{ch}") for ch in CHANNEL_IDS)


@dataclass(frozen=True)
class DeviceConfig:
    """Configuration for one DSO2C10.

    Attributes:
        visa_address: VISA resource string, or None when emulated.
        timeout_ms: VISA I/O timeout in milliseconds.
        emulate: Use the in-process emulator instead of VISA.
        channels: Logical channel configurations.
    """

    visa_address: str | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    emulate: bool = False
    channels: tuple[ChannelConfig, ...] = field(default_factory=_default_channels)

    def __post_init__(self) -> None:
        if not self.emulate and not self.visa_address:
            raise ConfigError("Missing required field: instrument.visa_address")
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int):
            raise ConfigError("instrument.timeout_ms must be an integer")
        if self.timeout_ms <= 0:
            raise ConfigError("instrument.timeout_ms must be > 0")
        ids = [ch.id for ch in self.channels]
        if len(set(ids)) != len(ids):
            raise ConfigError("Duplicate channel id in instrument.channels")
        names = [ch.logical_name for ch in self.channels]
        if len(set(names)) != len(names):
            raise ConfigError("Duplicate logical_name in instrument.channels")


def _parse_channels(channels_data: Any) -> tuple[ChannelConfig, ...]:
    if not isinstance(channels_data, list):
        raise ConfigError("instrument.channels must be a list")

    channels: list[ChannelConfig] = []
    for ch_data in channels_data:
        if not isinstance(ch_data, dict):
            raise ConfigError("Each channel entry must be a mapping")

        ch_id = ch_data.get("id")
        logical_name = ch_data.get("logical_name") or ch_data.get("name")
        if ch_id is None or logical_name is None:
            raise ConfigError("Channel entries require 'id' and 'logical_name'")

        channels.append(ChannelConfig(id=ch_id, logical_name=logical_name))
    return tuple(channels)


def parse_config(data: Any) -> DeviceConfig:
    """Build a device configuration from already-loaded YAML data.

    Args:
        data: The top-level YAML document.

    Returns:
        Parsed device configuration.

    Raises:
        ConfigError: If the structure is invalid or required fields are missing.
    """
    if not isinstance(data, dict):
        raise ConfigError("Config must be a YAML mapping")

    section = data.get("instrument")
    if not isinstance(section, dict):
        raise ConfigError("Missing required section: instrument")

    emulate = section.get("emulate", False)
    if not isinstance(emulate, bool):
        raise ConfigError("instrument.emulate must be a boolean")

    kwargs: dict[str, Any] = {
        "visa_address": section.get("visa_address"),
        "timeout_ms": section.get("timeout_ms", DEFAULT_TIMEOUT_MS),
        "emulate": emulate,
    }
    if "channels" in section:
        kwargs["channels"] = _parse_channels(section["channels"])

    return DeviceConfig(**kwargs)


def load_config(path: str | Path) -> DeviceConfig:
    """Load device configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Parsed device configuration.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    return parse_config(data)
