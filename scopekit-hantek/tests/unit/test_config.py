"""Tests for DSO2C10 YAML configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from scopekit_core.errors import ConfigError, ScopekitError
from scopekit_hantek.config import ChannelConfig, DeviceConfig, load_config, parse_config

_ADDRESS = "USB0::0x049F::0x505E::CN2210000000000::INSTR"


class TestChannelConfig:
    """Tests for ChannelConfig validation."""

    def test_valid(self) -> None:
        config = ChannelConfig(id=2, logical_name="probe_b")
        assert config.id == 2

    def test_frozen(self) -> None:
        config = ChannelConfig(id=1, logical_name="probe_a")
        with pytest.raises(AttributeError):
            config.logical_name = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("channel_id", [0, 3, True])
    def test_bad_id(self, channel_id: int) -> None:
        with pytest.raises(ConfigError, match="Channel id"):
            ChannelConfig(id=channel_id, logical_name="x")

    def test_empty_name(self) -> None:
        with pytest.raises(ConfigError, match="logical_name"):
            ChannelConfig(id=1, logical_name="")


class TestDeviceConfig:
    """Tests for DeviceConfig validation."""

    def test_defaults(self) -> None:
        config = DeviceConfig(visa_address=_ADDRESS)
        assert config.timeout_ms == 5000
        assert config.emulate is False
        assert [ch.logical_name for ch in config.channels] == ["ch1", "ch2"]

    def test_address_required_unless_emulated(self) -> None:
        with pytest.raises(ConfigError, match="visa_address"):
            DeviceConfig()
        assert DeviceConfig(emulate=True).visa_address is None

    def test_bad_timeout(self) -> None:
        with pytest.raises(ConfigError, match="timeout_ms"):
            DeviceConfig(visa_address=_ADDRESS, timeout_ms=0)

    def test_duplicate_ids(self) -> None:
        with pytest.raises(ConfigError, match="Duplicate channel id"):
            DeviceConfig(
                visa_address=_ADDRESS,
                channels=(ChannelConfig(1, "a"), ChannelConfig(1, "b")),
            )

    def test_duplicate_names(self) -> None:
        with pytest.raises(ConfigError, match="Duplicate logical_name"):
            DeviceConfig(
                visa_address=_ADDRESS,
                channels=(ChannelConfig(1, "a"), ChannelConfig(2, "a")),
            )


class TestParseConfig:
    """Tests for parse_config."""

    def test_full(self) -> None:
        config = parse_config(
            {
                "instrument": {
                    "visa_address": _ADDRESS,
                    "timeout_ms": 2000,
                    "channels": [
                        {"id": 1, "logical_name": "probe_a"},
                        {"id": 2, "name": "probe_b"},
                    ],
                }
            }
        )
        assert config.visa_address == _ADDRESS
        assert config.timeout_ms == 2000
        assert config.channels == (
            ChannelConfig(1, "probe_a"),
            ChannelConfig(2, "probe_b"),
        )

    def test_emulate(self) -> None:
        assert parse_config({"instrument": {"emulate": True}}).emulate is True

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigError, match="YAML mapping"):
            parse_config(["instrument"])

    def test_missing_section(self) -> None:
        with pytest.raises(ConfigError, match="instrument"):
            parse_config({"rack": {}})

    def test_emulate_must_be_bool(self) -> None:
        with pytest.raises(ConfigError, match="emulate"):
            parse_config({"instrument": {"emulate": "yes"}})

    def test_channels_must_be_list(self) -> None:
        with pytest.raises(ConfigError, match="must be a list"):
            parse_config({"instrument": {"emulate": True, "channels": {"id": 1}}})

    def test_channel_missing_name(self) -> None:
        with pytest.raises(ConfigError, match="logical_name"):
            parse_config({"instrument": {"emulate": True, "channels": [{"id": 1}]}})

    def test_config_error_is_scopekit_error(self) -> None:
        with pytest.raises(ScopekitError):
            parse_config(None)


class TestLoadConfig:
    """Tests for load_config."""

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "scope.yaml"
        path.write_text(
            "instrument:\n"
            f'  visa_address: "{_ADDRESS}"\n'
            "  channels:\n"
            "    - id: 2\n"
            "      logical_name: probe_b\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.visa_address == _ADDRESS
        assert config.channels == (ChannelConfig(2, "probe_b"),)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("instrument: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)
