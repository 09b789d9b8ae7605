"""Tests for the DSO2C10 emulator."""

from __future__ import annotations

import pytest

from scopekit_hantek.emulator import (
    Dso2c10Emulator,
    Dso2c10EmulatorConfig,
    _normalize_header,
    make_dso2c10_emulator,
)
from scopekit_hantek.interface import Dso2c10Interface
from scopekit_hantek.registry import StringIndex
from scopekit_scpi.errors import ScpiTransportError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _query(emu: Dso2c10Emulator, cmd: str) -> str:
    """Send a query and return the response."""
    return emu.execute(cmd.encode()).decode()


def _command(emu: Dso2c10Emulator, cmd: str) -> None:
    """Send a command (no response expected)."""
    emu.send(cmd.encode())


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestDso2c10EmulatorConfig:
    """Tests for Dso2c10EmulatorConfig validation."""

    def test_defaults(self) -> None:
        config = Dso2c10EmulatorConfig(identity="Hantek,DSO2C10,SN,1")
        assert config.boolean_style == "word"

    def test_frozen(self) -> None:
        config = Dso2c10EmulatorConfig(identity="Test")
        with pytest.raises(AttributeError):
            config.identity = "Changed"  # type: ignore[misc]

    def test_empty_identity_raises(self) -> None:
        with pytest.raises(ValueError, match="identity"):
            Dso2c10EmulatorConfig(identity="")

    def test_bad_boolean_style_raises(self) -> None:
        with pytest.raises(ValueError, match="boolean_style"):
            Dso2c10EmulatorConfig(identity="Test", boolean_style="yes")


# ---------------------------------------------------------------------------
# Header normalization
# ---------------------------------------------------------------------------


class TestNormalizeHeader:
    """Tests for _normalize_header."""

    def test_long_form(self) -> None:
        assert _normalize_header("CHANnel2:BWLimit") == "CHAN2:BWL"

    def test_short_lowercase(self) -> None:
        assert _normalize_header("chan1:offs") == "CHAN1:OFFS"

    def test_leading_colon(self) -> None:
        assert _normalize_header(":TIMebase:WINDow:ENABle") == "TIM:WIND:ENAB"

    def test_system_error(self) -> None:
        assert _normalize_header("SYSTem:ERRor") == "SYST:ERR"


# ---------------------------------------------------------------------------
# Common commands
# ---------------------------------------------------------------------------


class TestCommonCommands:
    """Tests for IEEE 488.2 commands and the error queue."""

    def test_idn(self) -> None:
        emu = make_dso2c10_emulator(serial="CN0001")
        assert _query(emu, "*IDN?") == "Hantek,DSO2C10,CN0001,3.0.0(220407.00)"

    def test_opc(self) -> None:
        assert _query(make_dso2c10_emulator(), "*OPC?") == "1"

    def test_rst_restores_defaults(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "CHANnel1:OFFSet 2.5")
        _command(emu, "MEASure:ENABle 1")
        _command(emu, "*RST")
        assert _query(emu, "CHANnel1:OFFSet?") == "0"
        assert _query(emu, "MEASure:ENABle?") == "OFF"

    def test_no_error(self) -> None:
        assert _query(make_dso2c10_emulator(), "SYST:ERR?") == '0,"No error"'

    def test_unknown_header_queues_command_error(self) -> None:
        emu = make_dso2c10_emulator()
        assert _query(emu, "FOO:BAR?") == ""
        assert _query(emu, "SYSTem:ERRor?") == '-100,"Command error"'
        assert _query(emu, "SYST:ERR?") == '0,"No error"'

    def test_bad_argument_queues_parameter_error(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "CHANnel1:BWLimit maybe")
        assert emu.pending_errors() == [(-220, "Parameter error")]

    def test_cls_clears_queue(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "NOPE 1")
        _command(emu, "*CLS")
        assert emu.pending_errors() == []

    def test_channel_out_of_range_is_command_error(self) -> None:
        emu = make_dso2c10_emulator()
        assert _query(emu, "CHANnel3:SCALe?") == ""
        assert emu.pending_errors() == [(-100, "Command error")]


# ---------------------------------------------------------------------------
# Channel state
# ---------------------------------------------------------------------------


class TestChannelState:
    """Tests for channel parameters."""

    def test_defaults(self) -> None:
        emu = make_dso2c10_emulator()
        assert _query(emu, "CHANnel1:BWLimit?") == "OFF"
        assert _query(emu, "CHANnel1:DISPlay?") == "ON"
        assert _query(emu, "CHANnel1:SCALe?") == "1"
        assert _query(emu, "CHANnel1:PROBe?") == "1"
        assert _query(emu, "CHANnel1:COUPling?") == "DC"

    def test_booleans_accept_word_and_digit(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "CHANnel2:INVert ON")
        _command(emu, "CHAN2:VERN 1")
        assert emu.channel_state(2).invert is True
        assert emu.channel_state(2).vernier is True
        assert emu.channel_state(1).invert is False

    def test_digit_boolean_style(self) -> None:
        emu = make_dso2c10_emulator(boolean_style="digit")
        _command(emu, "CHANnel1:BWLimit 1")
        assert _query(emu, "CHANnel1:BWLimit?") == "1"

    def test_offset(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "CHANnel1:OFFSet -0.25")
        assert _query(emu, "CHANnel1:OFFSet?") == "-0.25"

    def test_scale_must_be_table_value(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "CHANnel1:SCALe 0.5")
        _command(emu, "CHANnel1:SCALe 0.3")
        assert _query(emu, "CHANnel1:SCALe?") == "0.5"
        assert emu.pending_errors() == [(-220, "Parameter error")]

    def test_probe(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "CHANnel2:PROBe 100")
        assert _query(emu, "CHANnel2:PROBe?") == "100"

    def test_coupling(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "CHANnel1:COUPling ac")
        assert _query(emu, "CHANnel1:COUPling?") == "AC"
        _command(emu, "CHANnel1:COUPling HF")
        assert emu.pending_errors() == [(-220, "Parameter error")]

    def test_channel_state_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            make_dso2c10_emulator().channel_state(3)


class TestUngroupedFlags:
    """Tests for timebase and measure flags."""

    @pytest.mark.parametrize(
        "path",
        ["TIMebase:WINDow:ENABle", "MEASure:ENABle", "MEASure:ADISplay", "MEASure:GATE:ENABle"],
    )
    def test_round_trip(self, path: str) -> None:
        emu = make_dso2c10_emulator()
        assert _query(emu, f"{path}?") == "OFF"
        _command(emu, f"{path} 1")
        assert _query(emu, f"{path}?") == "ON"


# ---------------------------------------------------------------------------
# Transport behavior
# ---------------------------------------------------------------------------


class TestTransport:
    """Tests for the transport contract."""

    def test_received_records_lines(self) -> None:
        emu = make_dso2c10_emulator()
        _command(emu, "CHANnel1:BWLimit 1")
        _query(emu, "CHANnel1:BWLimit?")
        assert emu.received == ["CHANnel1:BWLimit 1", "CHANnel1:BWLimit?"]

    def test_evaluate(self) -> None:
        emu = make_dso2c10_emulator()
        assert emu.evaluate("*IDN?").startswith("Hantek,DSO2C10")
        assert emu.evaluate("CHANnel1:INVert 1") == ""

    def test_close(self) -> None:
        emu = make_dso2c10_emulator()
        emu.close()
        assert emu.is_closed
        with pytest.raises(ScpiTransportError, match="closed"):
            _query(emu, "*IDN?")


class TestWithInterface:
    """End-to-end through Dso2c10Interface."""

    def test_scale_label_round_trip(self) -> None:
        scope = Dso2c10Interface(make_dso2c10_emulator())
        scope.set_string_at(StringIndex.CHANNEL2_SCALE, "500mV")
        assert scope.get_string_at(StringIndex.CHANNEL2_SCALE) == "500mV"
        assert scope.get_channel_scale(2) == 0.5

    def test_bw_limit(self) -> None:
        scope = Dso2c10Interface(make_dso2c10_emulator())
        scope.set_channel_bw_limit(1, True)
        assert scope.get_channel_bw_limit(1) is True
        assert scope.get_channel_bw_limit(2) is False

    def test_identity(self) -> None:
        scope = Dso2c10Interface(make_dso2c10_emulator(serial="CN42"))
        identity = scope.get_identity()
        assert identity.model == "DSO2C10"
        assert identity.serial == "CN42"
