"""SCPI transport protocol definition.

This module defines the :class:`ScpiTransport` protocol, which specifies the
interface that all SCPI transport implementations must provide. Transports
handle the physical layer communication with instruments, including message
framing and termination characters.

Implementations include:
- :class:`scopekit_scpi.VisaResource`: PyVISA-backed transport (USB-TMC, LAN)
- :class:`scopekit_hantek.Dso2c10Emulator`: in-process DSO2C10 emulator
"""

from __future__ import annotations

from typing import Protocol


class ScpiTransport(Protocol):
    """Protocol for SCPI message transport.

    Implementations provide the physical layer for sending commands to and
    receiving responses from SCPI instruments. Callers are responsible for
    opening the transport before handing it to a protocol adapter.

    Transports are not required to be thread-safe; the protocol adapter
    serializes every exchange.

    Example:
        >>> class MyTransport:
        ...     def execute(self, request: bytes) -> bytes:
        ...         return b"ON"
        ...     def send(self, request: bytes) -> None:
        ...         pass
        ...     def evaluate(self, command: str) -> str:
        ...         return ""
        ...     def close(self) -> None:
        ...         pass
        ...
        >>> transport: ScpiTransport = MyTransport()  # Type checks OK
    """

    def execute(self, request: bytes) -> bytes:
        """Send a query and wait for exactly one response.

        Args:
            request: The encoded SCPI query (without termination).

        Returns:
            The response payload with the termination removed.

        Raises:
            ScpiTransportError: If the exchange fails.
        """
        ...

    def send(self, request: bytes) -> None:
        """Send a command without waiting for a response.

        Args:
            request: The encoded SCPI command (without termination).

        Raises:
            ScpiTransportError: If the write fails.
        """
        ...

    def evaluate(self, command: str) -> str:
        """Pass a raw console line through to the instrument.

        Queries (lines containing ``?``) return the instrument's answer;
        commands return an empty string.

        Args:
            command: Raw SCPI text typed by an operator.

        Returns:
            The decoded response, or ``""`` for commands.
        """
        ...

    def close(self) -> None:
        """Close the transport and release resources."""
        ...
