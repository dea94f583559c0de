"""``unicodeconv doctor``: can this interpreter convert text?

Each check yields a ``(label, value, status)`` row.  A failing backend
or self-test makes the command exit with GENERAL_ERROR; a missing
optional UI package is only a warning.
"""

from __future__ import annotations

import platform
import sys

from unicodeconv.cli import exit_codes
from unicodeconv.cli.console import console, escape_markup
from unicodeconv.core.converter import UnicodeConverter
from unicodeconv.exceptions import UnicodeConvError
from unicodeconv.infra import configured_backend_name, resolve_primitive
from unicodeconv.version import __version__

# U+5B66 (Japanese kanji "learn, study")
SELF_TEST_UTF16: tuple[int, ...] = (0x5B66,)
SELF_TEST_UTF8: bytes = b"\xe5\xad\xa6"

Check = tuple[str, str, str]

MIN_PYTHON: tuple[int, int] = (3, 10)


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Interpreter row: implementation and version, FAIL below MIN_PYTHON."""
    value = f"{platform.python_implementation()} {platform.python_version()}"
    if sys.version_info[:2] < MIN_PYTHON:
        wanted = ".".join(map(str, MIN_PYTHON))
        return "Python", value, f"[red]FAIL (>={wanted} required)[/red]"
    return "Python", value, "[green]OK[/green]"


def _backend_check(backend: str | None) -> Check:
    """Return (label, value, status) for the transcoding backend row."""
    try:
        name = configured_backend_name(backend)
        resolve_primitive(name)
    except UnicodeConvError as exc:
        return "backend", str(exc), "[red]FAIL[/red]"
    return "backend", name, "[green]OK[/green]"


def _self_test_check(backend: str | None) -> Check:
    """Round-trip U+5B66 through the backend and compare bytes."""
    try:
        converter = UnicodeConverter(resolve_primitive(backend))
        utf8 = converter.utf8_from_utf16(SELF_TEST_UTF16)
        utf16 = converter.utf16_from_utf8(utf8)
    except UnicodeConvError as exc:
        return "self-test", str(exc), "[red]FAIL[/red]"

    if utf8 != SELF_TEST_UTF8 or tuple(utf16) != SELF_TEST_UTF16:
        return "self-test", "U+5B66 mismatch", "[red]FAIL[/red]"
    return "self-test", "U+5B66 <-> E5 AD A6", "[green]OK[/green]"


def _optional_module_check(label: str, module: str) -> Check:
    """Return (label, value, status) for an optional UI dependency."""
    try:
        imported = __import__(module)
    except ImportError:
        return label, "NOT INSTALLED", "[yellow]WARN[/yellow]"
    version = getattr(imported, "__version__", None)
    if version is None:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as dist_version

        try:
            version = dist_version(module)
        except PackageNotFoundError:
            version = "unknown"
    return label, str(version), "[green]OK[/green]"


def _os_check() -> Check:
    # UTF-16 files are always little-endian; the byte order only tells
    # whether reads and writes need a byteswap.
    value = f"{platform.system() or 'unknown'} {platform.machine()} ({sys.byteorder}-endian)"
    return "OS", value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nunicodeconv doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def collect_checks(backend: str | None = None) -> list[Check]:
    """Run every diagnostic and return the rows in display order."""
    return [
        ("unicodeconv", __version__, "[green]OK[/green]"),
        _python_version_check(),
        _os_check(),
        _backend_check(backend),
        _self_test_check(backend),
        _optional_module_check("rich", "rich"),
        _optional_module_check("questionary", "questionary"),
    ]


def run_doctor(backend: str | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = collect_checks(backend)
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="unicodeconv doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape_markup(value), status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
