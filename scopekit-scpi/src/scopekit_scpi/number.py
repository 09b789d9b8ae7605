"""SCPI number and text decoding utilities.

Handles NR1 (integer), NR2 (fixed-point), and NR3 (scientific notation)
numeric formats, the special values defined by SCPI (NAN, INF, NINF), and the
conversion of raw response bytes into text.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from scopekit_scpi.errors import ScpiDecodeError, ScpiParseError

_SPECIAL_FLOAT_MAP: dict[str, float] = {
    "NAN": float("nan"),
    "INF": float("inf"),
    "NINF": float("-inf"),
    "-INF": float("-inf"),
}

# NR1, NR2 and NR3 forms; no digit separators, no word forms
_DECIMAL_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def decode_text(payload: bytes) -> str:
    """Decode a response payload as UTF-8 text.

    The text is returned unmodified; framing has already been removed by the
    transport.

    Args:
        payload: Raw response bytes.

    Returns:
        The decoded text.

    Raises:
        ScpiDecodeError: If *payload* is not valid UTF-8.
    """
    try:
        return bytes(payload).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ScpiDecodeError(f"Cannot convert response into string: {payload!r}") from exc


def parse_number(text: str) -> float:
    """Parse a SCPI numeric response into a float.

    Accepts NR1 (``"42"``), NR2 (``"1.23"``), NR3 (``"1.23E+4"``),
    and the special tokens ``NAN``, ``INF``, ``NINF``, and ``-INF``.

    Args:
        text: The raw response string (leading/trailing whitespace is stripped).

    Returns:
        The parsed float value.

    Raises:
        ScpiParseError: If *text* cannot be parsed as a SCPI number.
    """
    token = text.strip().upper()
    special = _SPECIAL_FLOAT_MAP.get(token)
    if special is not None:
        return special
    if _DECIMAL_RE.fullmatch(token) is None:
        raise ScpiParseError(f"Invalid SCPI number: {text!r}")
    return float(token)


def decode_number(payload: bytes) -> float:
    """Decode a response payload as a SCPI number.

    Args:
        payload: Raw response bytes.

    Returns:
        The parsed float value.

    Raises:
        ScpiParseError: If *payload* is not UTF-8 or not a numeric literal.
    """
    try:
        text = bytes(payload).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ScpiParseError(f"Cannot convert response into float: {payload!r}") from exc
    return parse_number(text)


def format_number(value: float) -> str:
    """Format a float for use in a SCPI command or as display text.

    ``nan``, ``inf``, and ``-inf`` are rendered as ``NAN``, ``INF``, and
    ``NINF`` respectively. Integral values drop the fractional part
    (``1.0`` becomes ``"1"``), other finite values use the shortest
    round-tripping digits written positionally, never in exponent form
    (``0.00005`` stays ``"0.00005"``).

    Args:
        value: The numeric value to format.

    Returns:
        A SCPI-compatible string representation.
    """
    value = float(value)
    if math.isnan(value):
        return "NAN"
    if math.isinf(value):
        return "NINF" if value < 0 else "INF"
    text = f"{Decimal(repr(value)):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
