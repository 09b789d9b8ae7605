"""SCPI protocol library for scopekit instrument drivers.

This package provides SCPI (Standard Commands for Programmable Instruments)
communication infrastructure shared by the scopekit drivers. It includes:

- Transport abstraction for byte-level SCPI request/response exchanges
- PyVISA-backed transport for real instruments (USB-TMC, LAN)
- Boolean codec accepting both ``0``/``1`` and ``OFF``/``ON`` forms
- Number and text decoding of raw response payloads
- Query/set command builders
- Custom exception types for SCPI protocol errors

Typical usage::

    from scopekit_scpi import VisaResource, decode_number, encode_command

    transport = VisaResource("USB0::0x049F::0x505E::CN2210000000000::INSTR")
    transport.open()
    offset = decode_number(transport.execute(encode_command("CHANnel1:OFFSet?")))
    transport.close()
"""

from scopekit_scpi.boolean import (
    ScpiBoolean,
    decode_bool,
    format_bool,
    format_bool_digit,
    parse_bool,
)
from scopekit_scpi.command import encode_command, query_command, set_command
from scopekit_scpi.errors import (
    ScpiDecodeError,
    ScpiError,
    ScpiInvalidArgumentError,
    ScpiParseError,
    ScpiTransportError,
)
from scopekit_scpi.identity import IDN_QUERY, parse_idn_response
from scopekit_scpi.number import decode_number, decode_text, format_number, parse_number
from scopekit_scpi.transport import ScpiTransport
from scopekit_scpi.visa import VisaResource

__all__ = [
    # Boolean codec
    "ScpiBoolean",
    "decode_bool",
    "format_bool",
    "format_bool_digit",
    "parse_bool",
    # Command builders
    "encode_command",
    "query_command",
    "set_command",
    # Errors
    "ScpiDecodeError",
    "ScpiError",
    "ScpiInvalidArgumentError",
    "ScpiParseError",
    "ScpiTransportError",
    # Identification
    "IDN_QUERY",
    "parse_idn_response",
    # Number/text decoding
    "decode_number",
    "decode_text",
    "format_number",
    "parse_number",
    # Transport
    "ScpiTransport",
    # VISA
    "VisaResource",
]
