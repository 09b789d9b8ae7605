"""Canonical value tables for enumerated numeric parameters.

The oscilloscope reports vertical scale and probe attenuation as plain
numbers. These tables map the values the front panel offers to the labels an
operator expects (``0.1`` to ``"100mV"``). Lookups are best effort on the read
side: a value missing from the table is shown as its decimal text. On the
write side the same tables are the set of accepted inputs.
"""

from __future__ import annotations

from dataclasses import dataclass

from scopekit_scpi.errors import ScpiInvalidArgumentError, ScpiParseError
from scopekit_scpi.number import format_number, parse_number


@dataclass(frozen=True)
class QuantizedTable:
    """An ordered table of ``(value, label)`` pairs.

    Attributes:
        name: Parameter name used in error messages.
        entries: Pairs in ascending value order.
    """

    name: str
    entries: tuple[tuple[float, str], ...]

    @property
    def labels(self) -> tuple[str, ...]:
        """All labels, in table order."""
        return tuple(label for _, label in self.entries)

    def label_for(self, value: float) -> str:
        """Return the label of *value*, or its decimal text when absent.

        Matching is exact; no rounding or interpolation is applied.

        Example:
            >>> SCALE_TABLE.label_for(0.5)
            '500mV'
            >>> SCALE_TABLE.label_for(3.3)
            '3.3'
        """
        for entry_value, label in self.entries:
            if value == entry_value:
                return label
        return format_number(value)

    def value_for(self, text: str) -> float:
        """Resolve a label or numeric literal to a table value.

        Labels match case-insensitively. A numeric literal is accepted when it
        equals one of the table values.

        Args:
            text: User input such as ``"100mV"`` or ``"0.1"``.

        Returns:
            The table value.

        Raises:
            ScpiInvalidArgumentError: If *text* is not a member of the table.
        """
        token = text.strip()
        for entry_value, label in self.entries:
            if token.lower() == label.lower():
                return entry_value
        try:
            number = parse_number(token)
        except ScpiParseError:
            number = None
        if number is not None:
            for entry_value, _ in self.entries:
                if number == entry_value:
                    return entry_value
        raise ScpiInvalidArgumentError(
            f"Invalid {self.name} {text!r}; expected one of: {', '.join(self.labels)}"
        )


SCALE_TABLE = QuantizedTable(
    name="scale",
    entries=(
        (0.002, "2mV"),
        (0.005, "5mV"),
        (0.01, "10mV"),
        (0.02, "20mV"),
        (0.05, "50mV"),
        (0.1, "100mV"),
        (0.2, "200mV"),
        (0.5, "500mV"),
        (1.0, "1V"),
        (2.0, "2V"),
        (5.0, "5V"),
        (10.0, "10V"),
    ),
)
"""Vertical scale in volts per division."""

PROBE_TABLE = QuantizedTable(
    name="probe",
    entries=(
        (1.0, "1"),
        (10.0, "10"),
        (100.0, "100"),
        (1000.0, "1000"),
    ),
)
"""Probe attenuation ratio."""

COUPLING_CHOICES: tuple[str, ...] = ("AC", "DC", "GND")


def normalize_coupling(text: str) -> str:
    """Return the canonical coupling token for *text*.

    Raises:
        ScpiInvalidArgumentError: If *text* is not AC, DC or GND.
    """
    token = text.strip().upper()
    if token not in COUPLING_CHOICES:
        raise ScpiInvalidArgumentError(
            f"Invalid coupling {text!r}; expected one of: {', '.join(COUPLING_CHOICES)}"
        )
    return token
