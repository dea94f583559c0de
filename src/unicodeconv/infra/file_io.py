"""Infrastructure: whole-file reads and writes for ``unicodeconv convert``.

Files are read and written in one piece; there is no streaming.  UTF-16
files hold little-endian code units with no BOM handling (a leading
``FF FE`` is just the code unit U+FEFF).

Rules
-----
* ``OSError`` never escapes; it is mapped to :class:`InputFormatError`
  or :class:`UnicodeConvError`.
* No ``print()``.
"""

from __future__ import annotations

from array import array
from pathlib import Path

from unicodeconv.core.models import utf16_from_le_bytes, utf16_to_le_bytes
from unicodeconv.exceptions import InputFormatError, UnicodeConvError


def read_bytes(path: Path) -> bytes:
    """Read *path* fully."""
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InputFormatError(
            f"Cannot read {path}: {exc.strerror or exc}",
        ) from exc


def read_utf16_units(path: Path) -> array:
    """Read *path* as little-endian UTF-16 code units."""
    data = read_bytes(path)
    if len(data) % 2:
        raise InputFormatError(
            f"{path} has an odd number of bytes ({len(data)}); "
            "it cannot hold UTF-16 code units.",
            hint="Is the file UTF-8? Try: --to utf-16",
        )
    return utf16_from_le_bytes(data)


def write_bytes(path: Path, data: bytes) -> None:
    """Write *data* to *path*, replacing any existing file."""
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise UnicodeConvError(
            f"Cannot write {path}: {exc.strerror or exc}",
        ) from exc


def write_utf16_units(path: Path, units: array) -> None:
    """Write *units* to *path* as little-endian UTF-16."""
    write_bytes(path, utf16_to_le_bytes(units))
