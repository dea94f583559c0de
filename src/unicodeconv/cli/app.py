"""Argument parsing, command dispatch and the process exit boundary.

:func:`cli` is where every failure becomes an exit code:

* ``ConversionError`` (malformed input rejected by a backend) exits
  with :data:`exit_codes.CONVERSION_FAILED` and reports the direction
  and the backend's error code.
* Any other ``UnicodeConvError`` prints its message and hint and exits
  with :data:`exit_codes.GENERAL_ERROR`.
* Ctrl+C and unexpected exceptions get their own codes.

Handlers never transcode anything themselves; they parse input, call
:class:`UnicodeConverter` and render.  Results are written to stdout;
errors and log records to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from unicodeconv.cli import exit_codes
from unicodeconv.cli.console import console, escape_markup
from unicodeconv.cli.logging_setup import configure_logging
from unicodeconv.core.converter import UnicodeConverter
from unicodeconv.exceptions import ConversionError, InputFormatError, UnicodeConvError
from unicodeconv.utils.constants import BACKEND_CHOICES, BACKEND_ENV_VAR, describe_error_code
from unicodeconv.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``unicodeconv to-utf8 UNIT...``      — UTF-16 code units → UTF-8
    * ``unicodeconv to-utf16 BYTE...``     — UTF-8 bytes → UTF-16
    * ``unicodeconv convert IN OUT``       — whole-file conversion
    * ``unicodeconv doctor``               — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="unicodeconv",
        description="Strict UTF-16 <-> UTF-8 conversion.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )
    parser.add_argument(
        "--backend",
        choices=BACKEND_CHOICES,
        default=None,
        help=f"Transcoding backend (default: ${BACKEND_ENV_VAR} or 'auto').",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    to_utf8 = commands.add_parser(
        "to-utf8",
        help="Convert UTF-16 code units (hex) to UTF-8.",
    )
    to_utf8.add_argument("units", nargs="*", help="UTF-16 code units in hex, e.g. 5B66.")
    to_utf8.add_argument("--text", default=None, help="Convert the UTF-16 form of TEXT.")

    to_utf16 = commands.add_parser(
        "to-utf16",
        help="Convert UTF-8 bytes (hex) to UTF-16.",
    )
    to_utf16.add_argument("bytes", nargs="*", help="UTF-8 bytes in hex, e.g. E5 AD A6.")
    to_utf16.add_argument("--text", default=None, help="Convert the UTF-8 form of TEXT.")

    convert = commands.add_parser(
        "convert",
        help="Convert a whole file between UTF-16LE and UTF-8.",
    )
    convert.add_argument("input", type=Path, help="Source file.")
    convert.add_argument("output", type=Path, help="Destination file (overwritten).")
    convert.add_argument(
        "--to",
        dest="target",
        choices=("utf-8", "utf-16"),
        default=None,
        help="Target encoding. Asked interactively when omitted.",
    )

    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _make_converter(backend: str | None) -> UnicodeConverter:
    from unicodeconv.infra import resolve_primitive

    return UnicodeConverter(resolve_primitive(backend))


def _handle_to_utf8(args: argparse.Namespace) -> int:
    """Convert code units given on the command line and render the result."""
    from unicodeconv.cli.render import parse_hex_units, render_conversion
    from unicodeconv.core.models import ConversionDirection, utf16_code_units

    if args.text is not None:
        units = list(utf16_code_units(args.text))
    else:
        units = parse_hex_units(args.units)
    if not units and args.text is None:
        raise InputFormatError(
            "No UTF-16 code units given.",
            hint="Pass hex code units (e.g. 5B66) or --text.",
        )

    utf8 = _make_converter(args.backend).utf8_from_utf16(units)
    render_conversion(ConversionDirection.UTF16_TO_UTF8, units, utf8, text=args.text)
    return exit_codes.SUCCESS


def _handle_to_utf16(args: argparse.Namespace) -> int:
    """Convert bytes given on the command line and render the result."""
    from unicodeconv.cli.render import parse_hex_bytes, render_conversion
    from unicodeconv.core.models import ConversionDirection

    if args.text is not None:
        utf8 = args.text.encode("utf-8", "surrogatepass")
    else:
        utf8 = parse_hex_bytes(args.bytes)
    if not utf8 and args.text is None:
        raise InputFormatError(
            "No UTF-8 bytes given.",
            hint="Pass hex bytes (e.g. E5 AD A6) or --text.",
        )

    utf16 = _make_converter(args.backend).utf16_from_utf8(utf8)
    render_conversion(ConversionDirection.UTF8_TO_UTF16, utf8, utf16, text=args.text)
    return exit_codes.SUCCESS


def _handle_convert(args: argparse.Namespace) -> int:
    """Convert a whole file.

    Flow:
    1. Resolve the target encoding (``--to`` or interactive prompt).
    2. Read the source in the opposite encoding.
    3. Convert through the configured backend.
    4. Write the destination.
    """
    from unicodeconv.cli.encoding_prompt import UTF8, prompt_target_encoding
    from unicodeconv.infra.file_io import (
        read_bytes,
        read_utf16_units,
        write_bytes,
        write_utf16_units,
    )

    source: Path = args.input
    destination: Path = args.output
    target: str = args.target or prompt_target_encoding(source)
    converter = _make_converter(args.backend)

    if target == UTF8:
        units = read_utf16_units(source)
        utf8 = converter.utf8_from_utf16(units)
        write_bytes(destination, utf8)
        written = len(utf8)
    else:
        data = read_bytes(source)
        utf16 = converter.utf16_from_utf8(data)
        write_utf16_units(destination, utf16)
        written = 2 * len(utf16)

    logger.info("Converted %s -> %s (%s, %d bytes)", source, destination, target, written)
    console.print(
        f"[bold green]Converted[/bold green] "
        f"{escape_markup(source)} -> {escape_markup(destination)} "
        f"({target}, {written} bytes)"
    )
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from unicodeconv.cli.doctor import run_doctor

    return run_doctor(args.backend)


_HANDLERS = {
    "to-utf8": _handle_to_utf8,
    "to-utf16": _handle_to_utf16,
    "convert": _handle_convert,
    "doctor": _handle_doctor,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Parse *argv* (default ``sys.argv[1:]``), run one command, return its exit code.

    Domain errors propagate; :func:`cli` turns them into exit codes.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    return _HANDLERS[args.command](args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: run :func:`main` and map errors to exit codes."""
    try:
        code = main()
        sys.exit(code)
    except ConversionError as exc:
        console.print(f"[bold red]Conversion failed:[/bold red] {escape_markup(exc)}")
        console.print(
            f"  direction: {exc.direction.label}, "
            f"error code: {describe_error_code(exc.error_code)}"
        )
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.CONVERSION_FAILED)
    except UnicodeConvError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
