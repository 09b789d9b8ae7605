"""Tests for DSO2C10 parameter paths."""

from __future__ import annotations

import pytest

from scopekit_hantek.commands import CHANNEL_IDS, ChannelField, channel_path, check_channel
from scopekit_scpi.errors import ScpiInvalidArgumentError


class TestChannelPath:
    """Tests for channel_path."""

    @pytest.mark.parametrize(
        ("field", "expected"),
        [
            (ChannelField.BW_LIMIT, "CHANnel1:BWLimit"),
            (ChannelField.DISPLAY, "CHANnel1:DISPlay"),
            (ChannelField.INVERT, "CHANnel1:INVert"),
            (ChannelField.VERNIER, "CHANnel1:VERNier"),
            (ChannelField.OFFSET, "CHANnel1:OFFSet"),
            (ChannelField.SCALE, "CHANnel1:SCALe"),
            (ChannelField.COUPLING, "CHANnel1:COUPling"),
            (ChannelField.PROBE, "CHANnel1:PROBe"),
        ],
    )
    def test_channel1_fields(self, field: ChannelField, expected: str) -> None:
        assert channel_path(1, field) == expected

    def test_channel2(self) -> None:
        assert channel_path(2, ChannelField.OFFSET) == "CHANnel2:OFFSet"

    @pytest.mark.parametrize("channel", [0, 3, -1])
    def test_out_of_range(self, channel: int) -> None:
        with pytest.raises(ScpiInvalidArgumentError, match="out of range"):
            channel_path(channel, ChannelField.SCALE)


class TestCheckChannel:
    """Tests for check_channel."""

    def test_valid_ids(self) -> None:
        assert [check_channel(ch) for ch in CHANNEL_IDS] == [1, 2]

    def test_bool_rejected(self) -> None:
        with pytest.raises(ScpiInvalidArgumentError):
            check_channel(True)

    def test_non_int_rejected(self) -> None:
        with pytest.raises(ScpiInvalidArgumentError):
            check_channel("1")  # type: ignore[arg-type]

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            check_channel(5)
