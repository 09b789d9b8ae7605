"""PyVISA transport for SCPI instruments.

This module provides a VISA-based transport implementation for communicating
with SCPI instruments. It wraps the PyVISA library, which is lazily imported
to allow the rest of scopekit-scpi to work without VISA installed.

Supported resource string formats include:
- USB-TMC: ``USB0::0x049F::0x505E::CN2210000000000::INSTR``
- TCPIP: ``TCPIP::192.168.1.100::INSTR`` (LAN instruments)
- Serial: ``ASRL1::INSTR``
"""

from __future__ import annotations

import logging
from typing import Any

from scopekit_core.errors import ScopekitError

from scopekit_scpi.command import encode_command
from scopekit_scpi.errors import ScpiTransportError

logger = logging.getLogger(__name__)


class VisaResource:
    """SCPI transport backed by PyVISA.

    Uses NI-style VISA resource strings (e.g.
    ``"USB0::0x049F::0x505E::CN2210000000000::INSTR"``) to address
    instruments. The ``pyvisa`` library is imported lazily on :meth:`open` so
    the rest of ``scopekit-scpi`` works without it installed.

    This class implements the :class:`ScpiTransport` protocol. Requests are
    written raw with the write termination appended; the read termination is
    stripped from every response.

    Attributes:
        resource_string: The VISA resource address string.
        is_open: Whether the resource is currently open.

    Args:
        resource_string: VISA resource address.
        timeout_ms: I/O timeout in milliseconds (applied on open).
        read_termination: Character(s) that terminate read operations.
        write_termination: Character(s) appended to write operations.

    Example:
        >>> resource = VisaResource("USB0::0x049F::0x505E::CN2210000000000::INSTR")
        >>> resource.open()
        >>> print(resource.execute(b"*IDN?"))
        >>> resource.close()
    """

    def __init__(
        self,
        resource_string: str,
        *,
        timeout_ms: int = 5000,
        read_termination: str = "\n",
        write_termination: str = "\n",
    ) -> None:
        """Initialize the VISA resource.

        Args:
            resource_string: VISA resource address string.
            timeout_ms: I/O timeout in milliseconds. Defaults to 5000.
            read_termination: Character(s) that terminate read operations.
                Defaults to newline.
            write_termination: Character(s) appended to write operations.
                Defaults to newline.
        """
        self._resource_string = resource_string
        self._timeout_ms = timeout_ms
        self._read_termination = read_termination
        self._write_termination = write_termination
        self._rm: Any = None
        self._resource: Any = None

    # -- Properties ----------------------------------------------------------

    @property
    def resource_string(self) -> str:
        """The VISA resource string."""
        return self._resource_string

    @property
    def is_open(self) -> bool:
        """Return True if the resource is currently open."""
        return self._resource is not None

    # -- Lifecycle -----------------------------------------------------------

    def open(self) -> None:
        """Open the VISA resource.

        Lazily imports ``pyvisa`` and creates a :class:`ResourceManager`.

        Raises:
            ScopekitError: If ``pyvisa`` is not installed.
            ScpiTransportError: If the resource cannot be opened.
        """
        if self._resource is not None:
            return

        try:
            import pyvisa  # type: ignore[import-not-found]  # pylint: disable=import-outside-toplevel
        except ImportError as exc:
            raise ScopekitError(
                "pyvisa library is not installed. Install with: pip install pyvisa"
            ) from exc

        try:
            self._rm = pyvisa.ResourceManager()
            self._resource = self._rm.open_resource(
                self._resource_string,
                read_termination=self._read_termination,
                write_termination=self._write_termination,
            )
            self._resource.timeout = self._timeout_ms
        except Exception as exc:
            self._resource = None
            if self._rm is not None:
                try:
                    self._rm.close()
                except Exception:  # pylint: disable=broad-except
                    pass
            self._rm = None
            raise ScpiTransportError(
                f"Failed to open VISA resource {self._resource_string!r}: {exc}"
            ) from exc
        logger.debug("Opened VISA resource %s", self._resource_string)

    def close(self) -> None:
        """Close the VISA resource and resource manager.

        Safe to call multiple times.
        """
        if self._resource is not None:
            try:
                self._resource.close()
            except Exception:  # pylint: disable=broad-except
                pass
            self._resource = None
        if self._rm is not None:
            try:
                self._rm.close()
            except Exception:  # pylint: disable=broad-except
                pass
            self._rm = None

    # -- Transport interface -------------------------------------------------

    def execute(self, request: bytes) -> bytes:
        """Send a query and return the raw response.

        Args:
            request: The encoded SCPI query.

        Returns:
            The response payload without the read termination.

        Raises:
            ScpiTransportError: If the resource is not open or I/O fails.
        """
        resource = self._require_open()
        try:
            resource.write_raw(self._frame(request))
            payload: bytes = resource.read_raw()
        except Exception as exc:
            raise ScpiTransportError(f"VISA query {request!r} failed: {exc}") from exc
        return self._unframe(payload)

    def send(self, request: bytes) -> None:
        """Send a command without reading a response.

        Args:
            request: The encoded SCPI command.

        Raises:
            ScpiTransportError: If the resource is not open or I/O fails.
        """
        resource = self._require_open()
        try:
            resource.write_raw(self._frame(request))
        except Exception as exc:
            raise ScpiTransportError(f"VISA write {request!r} failed: {exc}") from exc

    def evaluate(self, command: str) -> str:
        """Pass a raw console line through to the instrument.

        Args:
            command: Raw SCPI text.

        Returns:
            The decoded response for queries, ``""`` for commands. Bytes that
            are not valid UTF-8 are replaced rather than rejected.

        Raises:
            ScpiInvalidArgumentError: If *command* contains non-ASCII
                characters; nothing is written in that case.
            ScpiTransportError: If the resource is not open or I/O fails.
        """
        request = encode_command(command.strip())
        if b"?" not in request:
            self.send(request)
            return ""
        return self.execute(request).decode("utf-8", errors="replace")

    # -- Private helpers -----------------------------------------------------

    def _require_open(self) -> Any:
        if self._resource is None:
            raise ScpiTransportError("VISA resource is not open")
        return self._resource

    def _frame(self, request: bytes) -> bytes:
        return bytes(request) + self._write_termination.encode("ascii")

    def _unframe(self, payload: bytes) -> bytes:
        termination = self._read_termination.encode("ascii")
        if termination and payload.endswith(termination):
            return payload[: -len(termination)]
        return payload
