"""SCPI boolean codec.

Instruments answer boolean queries either with ``0``/``1`` or with
``OFF``/``ON``, in whatever case the firmware prefers. Decoding accepts all of
these forms; encoding produces ``ON``/``OFF`` for display and the terse
``1``/``0`` form for set commands.
"""

from __future__ import annotations

from dataclasses import dataclass

from scopekit_scpi.errors import ScpiDecodeError, ScpiParseError

_TRUE_TOKENS: frozenset[str] = frozenset({"ON", "1"})
_FALSE_TOKENS: frozenset[str] = frozenset({"OFF", "0"})


def parse_bool(text: str) -> bool:
    """Parse a SCPI boolean response.

    Accepts ``"1"`` / ``"0"`` and ``"ON"`` / ``"OFF"`` (case-insensitive).

    Args:
        text: The raw response string.

    Returns:
        The parsed boolean.

    Raises:
        ScpiParseError: If *text* is not a recognized boolean token.
    """
    token = text.strip().upper()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ScpiParseError(f"Invalid SCPI boolean: {text!r}")


def decode_bool(payload: bytes) -> bool:
    """Decode a response payload as a SCPI boolean.

    Args:
        payload: Raw response bytes.

    Returns:
        The parsed boolean.

    Raises:
        ScpiDecodeError: If *payload* is not UTF-8.
        ScpiParseError: If the text is not a recognized boolean token.
    """
    try:
        text = bytes(payload).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ScpiDecodeError(f"Invalid SCPI boolean payload: {payload!r}") from exc
    return parse_bool(text)


def format_bool(value: bool) -> str:
    """Format a boolean for display.

    Returns:
        ``"ON"`` for True, ``"OFF"`` for False.
    """
    return "ON" if value else "OFF"


def format_bool_digit(value: bool) -> str:
    """Format a boolean for use in a SCPI set command.

    Returns:
        ``"1"`` for True, ``"0"`` for False.
    """
    return "1" if value else "0"


@dataclass(frozen=True)
class ScpiBoolean:
    """A boolean value with its SCPI textual forms.

    Attributes:
        value: The logical value.

    Example:
        >>> ScpiBoolean.from_text("on").to_digit_str()
        '1'
    """

    value: bool

    @classmethod
    def from_text(cls, text: str) -> ScpiBoolean:
        """Build from a SCPI token (see :func:`parse_bool`)."""
        return cls(parse_bool(text))

    @classmethod
    def from_bytes(cls, payload: bytes) -> ScpiBoolean:
        """Build from a raw response payload (see :func:`decode_bool`)."""
        return cls(decode_bool(payload))

    def to_str(self) -> str:
        return format_bool(self.value)

    def to_digit_str(self) -> str:
        return format_bool_digit(self.value)

    def __bool__(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return self.to_str()
