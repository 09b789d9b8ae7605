"""Hantek DSO2C10 oscilloscope driver and emulator for scopekit.

This package provides a SCPI protocol adapter for the Hantek DSO2C10
two-channel oscilloscope, plus the pieces built around it.

Modules:
    interface: Protocol adapter with typed and indexed parameter access.
    registry: Index registries binding integer indices to parameter paths.
    quantize: Label tables for vertical scale and probe ratio.
    channel: Per-channel facades with logical naming.
    config: YAML device configuration.
    emulator: In-process SCPI emulator for testing without hardware.
    cli: ``scopekit-dso2c10`` command-line tool.

Example:
    Connect to a real instrument::

        from scopekit_hantek import create_instrument

        scope = create_instrument("USB0::0x049F::0x505E::CN2210000000000::INSTR")
        scope.set_channel_coupling(1, "AC")
        print(scope.get_channel_scale_label(1))

    Use an emulator for testing::

        from scopekit_hantek import Dso2c10Interface, StringIndex, make_dso2c10_emulator

        scope = Dso2c10Interface(make_dso2c10_emulator())
        scope.set_string_at(StringIndex.CHANNEL1_SCALE, "500mV")
"""

from scopekit_hantek.channel import Dso2c10, Dso2c10Channel, create_device, create_instrument
from scopekit_hantek.commands import CHANNEL_IDS, ChannelField, channel_path
from scopekit_hantek.config import ChannelConfig, DeviceConfig, load_config, parse_config
from scopekit_hantek.emulator import (
    Dso2c10Emulator,
    Dso2c10EmulatorConfig,
    make_dso2c10_emulator,
)
from scopekit_hantek.interface import IDN_FALLBACK, Dso2c10Interface
from scopekit_hantek.quantize import PROBE_TABLE, SCALE_TABLE, QuantizedTable
from scopekit_hantek.registry import (
    BOOLEAN_PARAMETERS,
    STRING_PARAMETERS,
    BooleanIndex,
    BooleanParameter,
    StringIndex,
    StringParameter,
    resolve_boolean_index,
    resolve_string_index,
)

__all__ = [
    # Adapter
    "IDN_FALLBACK",
    "Dso2c10Interface",
    # Paths
    "CHANNEL_IDS",
    "ChannelField",
    "channel_path",
    # Registries
    "BOOLEAN_PARAMETERS",
    "STRING_PARAMETERS",
    "BooleanIndex",
    "BooleanParameter",
    "StringIndex",
    "StringParameter",
    "resolve_boolean_index",
    "resolve_string_index",
    # Label tables
    "PROBE_TABLE",
    "SCALE_TABLE",
    "QuantizedTable",
    # Channel facades
    "Dso2c10",
    "Dso2c10Channel",
    "create_device",
    "create_instrument",
    # Configuration
    "ChannelConfig",
    "DeviceConfig",
    "load_config",
    "parse_config",
    # Emulator
    "Dso2c10Emulator",
    "Dso2c10EmulatorConfig",
    "make_dso2c10_emulator",
]
