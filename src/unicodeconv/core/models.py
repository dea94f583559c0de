"""Domain types for unicodeconv.

UTF-16 text is modelled as a sequence of 16-bit code units and UTF-8
text as a bytes-like sequence of 8-bit code units.  Inputs are read-only
views; outputs are owned, exactly-sized buffers:

* UTF-16 in  — any ``Sequence[int]`` (``list``, ``tuple``, ``array('H')``)
* UTF-16 out — ``array.array('H')``
* UTF-8 in   — ``bytes``, ``bytearray`` or ``memoryview``
* UTF-8 out  — ``bytes``
"""

from __future__ import annotations

import enum
import sys
from array import array
from collections.abc import Sequence
from typing import Union

Utf16View = Sequence[int]
"""Borrowed UTF-16 input: any sequence of 16-bit code units."""

Utf8View = Union[bytes, bytearray, memoryview]
"""Borrowed UTF-8 input: any bytes-like object."""

UTF16_TYPECODE: str = "H"
"""``array`` typecode for unsigned 16-bit code units."""


class ConversionDirection(enum.Enum):
    """Which way a conversion runs.  Attached to every conversion error."""

    UTF16_TO_UTF8 = "utf16-to-utf8"
    UTF8_TO_UTF16 = "utf8-to-utf16"

    @property
    def label(self) -> str:
        """Human-readable form, e.g. ``"UTF-16 to UTF-8"``."""
        if self is ConversionDirection.UTF16_TO_UTF8:
            return "UTF-16 to UTF-8"
        return "UTF-8 to UTF-16"


def utf8_byte_length(utf8: Utf8View) -> int:
    """Size of *utf8* in bytes.

    ``len()`` of a ``memoryview`` counts items, which are wider than a
    byte for formats such as ``"H"``; ``nbytes`` is the byte count.
    """
    if isinstance(utf8, memoryview):
        return utf8.nbytes
    return len(utf8)


def new_utf16_buffer(length: int) -> array:
    """Allocate a zero-filled UTF-16 buffer of exactly *length* units."""
    return array(UTF16_TYPECODE, bytes(2 * length))


def utf16_from_le_bytes(data: bytes) -> array:
    """Interpret little-endian *data* as UTF-16 code units."""
    units = array(UTF16_TYPECODE)
    units.frombytes(data)
    if sys.byteorder == "big":
        units.byteswap()
    return units


def utf16_to_le_bytes(units: Sequence[int]) -> bytes:
    """Serialise code units as little-endian bytes.

    Raises :class:`OverflowError` when a value is not a 16-bit unit.
    """
    buffer = array(UTF16_TYPECODE, units)
    if sys.byteorder == "big":
        buffer.byteswap()
    return buffer.tobytes()


# ---------------------------------------------------------------------------
# str <-> code-unit helpers
# ---------------------------------------------------------------------------

def utf16_code_units(text: str) -> array:
    """Return the UTF-16 code units of a Python ``str``.

    Characters outside the Basic Multilingual Plane become surrogate
    pairs.  Lone surrogates already present in *text* are kept as-is so
    that malformed input can be built for testing.
    """
    return utf16_from_le_bytes(text.encode("utf-16-le", "surrogatepass"))


def text_from_utf16(units: Sequence[int]) -> str:
    """Decode well-formed UTF-16 code units into a Python ``str``."""
    return utf16_to_le_bytes(units).decode("utf-16-le")
