"""SCPI command string builders.

A parameter path such as ``CHANnel1:OFFSet`` becomes a query by appending
``?`` and a set command by appending one space and the encoded value.
"""

from __future__ import annotations

from scopekit_scpi.errors import ScpiInvalidArgumentError


def query_command(path: str) -> str:
    """Build the query form of *path*.

    Paths that are already queries (``*IDN?``) are returned unchanged.
    """
    return path if path.endswith("?") else f"{path}?"


def set_command(path: str, value: str) -> str:
    """Build the set form of *path* carrying an already-encoded *value*."""
    return f"{path} {value}"


def encode_command(command: str) -> bytes:
    """Encode a command string for the wire.

    Args:
        command: A complete SCPI command or query.

    Returns:
        The ASCII bytes of *command*.

    Raises:
        ScpiInvalidArgumentError: If *command* contains non-ASCII characters.
    """
    try:
        return command.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ScpiInvalidArgumentError(f"SCPI commands must be ASCII: {command!r}") from exc
