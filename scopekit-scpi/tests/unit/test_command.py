"""Tests for SCPI command builders and IDN parsing."""

from __future__ import annotations

import pytest

from scopekit_core.types.common import InstrumentIdentity
from scopekit_scpi.command import encode_command, query_command, set_command
from scopekit_scpi.errors import ScpiInvalidArgumentError
from scopekit_scpi.identity import parse_idn_response


class TestQueryCommand:
    """Tests for query_command."""

    def test_appends_question_mark(self) -> None:
        assert query_command("CHANnel1:OFFSet") == "CHANnel1:OFFSet?"

    def test_existing_query_unchanged(self) -> None:
        assert query_command("*IDN?") == "*IDN?"


class TestSetCommand:
    """Tests for set_command."""

    def test_single_separating_space(self) -> None:
        assert set_command("CHANnel2:BWLimit", "1") == "CHANnel2:BWLimit 1"

    def test_value_verbatim(self) -> None:
        assert set_command("CHANnel1:COUPling", "AC") == "CHANnel1:COUPling AC"


class TestEncodeCommand:
    """Tests for encode_command."""

    def test_ascii(self) -> None:
        assert encode_command("MEASure:ENABle 1") == b"MEASure:ENABle 1"

    def test_non_ascii_rejected(self) -> None:
        with pytest.raises(ScpiInvalidArgumentError, match="ASCII"):
            encode_command("CHANnel1:SCALe 5µV")


class TestParseIdnResponse:
    """Tests for parse_idn_response."""

    def test_standard_response(self) -> None:
        result = parse_idn_response("Hantek,DSO2C10,CN2210000000001,3.0.0(220407.00)")
        assert result == InstrumentIdentity(
            manufacturer="Hantek",
            model="DSO2C10",
            serial="CN2210000000001",
            firmware="3.0.0(220407.00)",
        )

    def test_extra_fields_joined_into_firmware(self) -> None:
        result = parse_idn_response("Hantek,DSO2C10,SN1,1.0,build2")
        assert result.firmware == "1.0,build2"

    def test_whitespace_stripped(self) -> None:
        result = parse_idn_response(" Hantek , DSO2C10 , SN1 , 1.0 ")
        assert result.manufacturer == "Hantek"
        assert result.firmware == "1.0"

    def test_too_few_fields(self) -> None:
        with pytest.raises(ValueError, match="at least 4"):
            parse_idn_response("Hantek,DSO2C10")
