"""Command-line interface for the DSO2C10 adapter.

Provides identification, indexed parameter access and a raw SCPI console.

Usage:
    # Print the identification of a USB-attached scope
    scopekit-dso2c10 --address USB0::0x049F::0x505E::CN2210000000000::INSTR idn

    # Read channel 1 scale through the string registry
    scopekit-dso2c10 --config scope.yaml get-str 1

    # Turn channel 2 bandwidth limit on against the emulator
    scopekit-dso2c10 --emulate set-bool 4 on

    # Type raw SCPI lines
    scopekit-dso2c10 --emulate repl
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from scopekit_core.errors import ScopekitError
from scopekit_scpi import parse_bool

from scopekit_hantek.channel import create_device, create_instrument
from scopekit_hantek.config import DEFAULT_TIMEOUT_MS, load_config
from scopekit_hantek.emulator import make_dso2c10_emulator
from scopekit_hantek.interface import Dso2c10Interface
from scopekit_hantek.registry import BOOLEAN_PARAMETERS, STRING_PARAMETERS

_REPL_EXIT = ("quit", "exit")


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def open_scope(args: argparse.Namespace) -> Dso2c10Interface:
    """Build the adapter selected by the global options.

    ``--config`` takes precedence, then ``--emulate``, then ``--address``.

    Raises:
        ScopekitError: If no instrument is selected or it cannot be opened.
    """
    if args.config:
        return create_device(load_config(args.config)).interface
    if args.emulate:
        return Dso2c10Interface(make_dso2c10_emulator())
    if args.address:
        return create_instrument(args.address, args.timeout_ms)
    raise ScopekitError("No instrument selected; use --config, --address or --emulate")


def cmd_idn(scope: Dso2c10Interface, args: argparse.Namespace) -> int:
    """Print the identification string."""
    print(scope.read_idn())
    return 0


def cmd_get_bool(scope: Dso2c10Interface, args: argparse.Namespace) -> int:
    """Print a boolean parameter by registry index."""
    print("ON" if scope.get_boolean_at(args.index) else "OFF")
    return 0


def cmd_set_bool(scope: Dso2c10Interface, args: argparse.Namespace) -> int:
    """Set a boolean parameter by registry index."""
    scope.set_boolean_at(args.index, parse_bool(args.value))
    return 0


def cmd_get_str(scope: Dso2c10Interface, args: argparse.Namespace) -> int:
    """Print a string parameter by registry index."""
    print(scope.get_string_at(args.index))
    return 0


def cmd_set_str(scope: Dso2c10Interface, args: argparse.Namespace) -> int:
    """Set a string parameter by registry index."""
    scope.set_string_at(args.index, args.value)
    return 0


def cmd_list(scope: Dso2c10Interface | None, args: argparse.Namespace) -> int:
    """List registry indices and their parameter paths."""
    print("Boolean parameters:")
    for member, parameter in BOOLEAN_PARAMETERS.items():
        print(f"  {int(member):2d}  {member.name:<24s} {parameter.path}")
    print("String parameters:")
    for member, parameter in STRING_PARAMETERS.items():
        choices = ", ".join(parameter.table.labels) if parameter.table else "AC, DC, GND"
        print(f"  {int(member):2d}  {member.name:<24s} {parameter.path}  [{choices}]")
    return 0


def cmd_repl(scope: Dso2c10Interface, args: argparse.Namespace) -> int:
    """Read raw SCPI lines from stdin and print each response."""
    interactive = sys.stdin.isatty()
    while True:
        if interactive:
            print("scpi> ", end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            break
        command = line.strip()
        if not command:
            continue
        if command.lower() in _REPL_EXIT:
            break
        try:
            response = scope.eval(command)
        except ScopekitError as exc:
            print(f"Error: {exc}")
            continue
        if response:
            print(response)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="scopekit-dso2c10",
        description="Hantek DSO2C10 SCPI CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", "-c", help="Device YAML configuration file")
    parser.add_argument("--address", "-a", help="VISA resource string")
    parser.add_argument(
        "--timeout-ms", type=int, default=DEFAULT_TIMEOUT_MS,
        help=f"VISA I/O timeout with --address (default: {DEFAULT_TIMEOUT_MS})"
    )
    parser.add_argument(
        "--emulate", action="store_true",
        help="Use the in-process emulator instead of a real instrument"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("idn", help="Print the instrument identification")

    get_bool = subparsers.add_parser("get-bool", help="Read a boolean parameter by index")
    get_bool.add_argument("index", type=int, help="Boolean registry index")

    set_bool = subparsers.add_parser("set-bool", help="Write a boolean parameter by index")
    set_bool.add_argument("index", type=int, help="Boolean registry index")
    set_bool.add_argument("value", help="ON, OFF, 1 or 0")

    get_str = subparsers.add_parser("get-str", help="Read a string parameter by index")
    get_str.add_argument("index", type=int, help="String registry index")

    set_str = subparsers.add_parser("set-str", help="Write a string parameter by index")
    set_str.add_argument("index", type=int, help="String registry index")
    set_str.add_argument("value", help="Canonical label, e.g. 500mV, 10 or AC")

    subparsers.add_parser("list", help="List registry indices")
    subparsers.add_parser("repl", help="Interactive raw SCPI console")

    return parser


_COMMANDS = {
    "idn": cmd_idn,
    "get-bool": cmd_get_bool,
    "set-bool": cmd_set_bool,
    "get-str": cmd_get_str,
    "set-str": cmd_set_str,
    "repl": cmd_repl,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(args.debug)

    if args.command == "list":
        return cmd_list(None, args)

    try:
        scope = open_scope(args)
    except ScopekitError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        return _COMMANDS[args.command](scope, args)
    except ScopekitError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        scope.close()


if __name__ == "__main__":
    sys.exit(main())
