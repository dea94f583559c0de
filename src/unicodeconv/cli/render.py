"""Hex input parsing and result rendering for the CLI layer.

This module is responsible for:

* Parsing hex code units / bytes given on the command line.
* Formatting UTF-16 and UTF-8 buffers as hex strings.
* Rendering a Rich table that summarises a conversion.

No conversion logic lives here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from unicodeconv.cli.console import escape_markup, output
from unicodeconv.core.models import ConversionDirection
from unicodeconv.exceptions import EnvironmentError, InputFormatError

_HEX_PREFIXES: tuple[str, ...] = ("0x", "0X", "U+", "u+", "\\x", "\\u")


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for result rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Parsing (pure)
# ---------------------------------------------------------------------------

def _strip_prefix(token: str) -> str:
    for prefix in _HEX_PREFIXES:
        if token.startswith(prefix):
            return token[len(prefix):]
    return token


def parse_hex_units(tokens: Sequence[str]) -> list[int]:
    """Parse UTF-16 code units such as ``["5B66", "0x0041", "U+00E9"]``.

    Tokens may also be comma-separated.  Each unit must fit in 16 bits.
    """
    units: list[int] = []
    for token in tokens:
        for part in token.replace(",", " ").split():
            digits = _strip_prefix(part)
            try:
                value = int(digits, 16)
            except ValueError:
                raise InputFormatError(
                    f"Not a hexadecimal code unit: {part!r}",
                    hint="Write UTF-16 code units in hex, e.g. 5B66 or 0x0041.",
                ) from None
            if not 0 <= value <= 0xFFFF:
                raise InputFormatError(
                    f"Code unit out of range: {part!r}",
                    hint="UTF-16 code units are 16-bit (0000-FFFF); "
                    "encode supplementary characters as a surrogate pair.",
                )
            units.append(value)
    return units


def parse_hex_bytes(tokens: Sequence[str]) -> bytes:
    """Parse UTF-8 bytes such as ``["E5", "AD", "A6"]`` or ``["E5ADA6"]``."""
    digits: list[str] = []
    for token in tokens:
        for part in token.replace(",", " ").split():
            digits.append(_strip_prefix(part))
    joined = "".join(digits)
    try:
        return bytes.fromhex(joined)
    except ValueError:
        raise InputFormatError(
            f"Not a hexadecimal byte sequence: {' '.join(tokens)!r}",
            hint="Write UTF-8 bytes in hex, e.g. E5 AD A6 or E5ADA6.",
        ) from None


# ---------------------------------------------------------------------------
# Formatting (pure)
# ---------------------------------------------------------------------------

def format_utf8_hex(data: bytes) -> str:
    """Render bytes as ``"E5 AD A6"``."""
    return " ".join(f"{byte:02X}" for byte in data)


def format_utf16_hex(units: Sequence[int]) -> str:
    """Render code units as ``"5B66 0041"``."""
    return " ".join(f"{unit:04X}" for unit in units)


def _format_units(direction: ConversionDirection, source: Any, result: Any) -> tuple[str, str]:
    if direction is ConversionDirection.UTF16_TO_UTF8:
        return format_utf16_hex(source), format_utf8_hex(result)
    return format_utf8_hex(source), format_utf16_hex(result)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_conversion(
    direction: ConversionDirection,
    source: Sequence[int],
    result: Sequence[int],
    *,
    text: str | None = None,
) -> None:
    """Print a summary of one conversion to stdout.

    Falls back to two plain ``label: hex`` lines when Rich is missing.
    """
    source_hex, result_hex = _format_units(direction, source, result)
    source_label, result_label = (
        ("UTF-16", "UTF-8")
        if direction is ConversionDirection.UTF16_TO_UTF8
        else ("UTF-8", "UTF-16")
    )

    try:
        table_class = _import_rich_table()
    except EnvironmentError:
        output.print(f"{source_label} ({len(source)}): {source_hex}")
        output.print(f"{result_label} ({len(result)}): {result_hex}")
        return

    table = table_class(
        title=direction.label,
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Encoding", style="bold", min_width=8)
    table.add_column("Units", justify="right", min_width=5)
    table.add_column("Hex")
    table.add_row(source_label, str(len(source)), source_hex)
    table.add_row(result_label, str(len(result)), result_hex)

    output.print(table)
    if text is not None:
        output.print(f"[bold cyan]Text:[/bold cyan] {escape_markup(text)}")
