"""Core conversion service — the two-pass measure-then-fill protocol.

This is the central service class consumed by the public API and the
CLI.  It depends on a :class:`~unicodeconv.core.protocols.TranscodingPrimitive`
injected at construction time, keeping the core free of any
platform-specific imports.

Each conversion runs the same fixed sequence:

1. Empty input returns an empty result without calling the primitive.
2. The source length is narrowed with :func:`safe_length_cast`.
3. The source is snapshotted so both passes see identical data.
4. **Measure** — the primitive reports the exact output length.
5. **Allocate** — an output buffer of exactly that length.
6. **Fill** — the primitive writes into the buffer.

Both passes always run in strict mode.

Guarantees
----------
* No I/O, no ``print()``.
* Only :class:`~unicodeconv.exceptions.UnicodeConvError` subclasses and
  ``ValueError`` escape.
* No partial results: a call either returns an exact-length buffer or
  raises.
"""

from __future__ import annotations

import logging
from array import array
from typing import NoReturn

from unicodeconv.core.length import safe_length_cast
from unicodeconv.core.models import (
    UTF16_TYPECODE,
    ConversionDirection,
    Utf8View,
    Utf16View,
    new_utf16_buffer,
    utf8_byte_length,
)
from unicodeconv.core.protocols import TranscodingPrimitive
from unicodeconv.exceptions import ConversionError
from unicodeconv.utils.constants import ERROR_INVALID_DATA

logger = logging.getLogger(__name__)


class UnicodeConverter:
    """Stateless converter between UTF-16 and UTF-8.

    Parameters
    ----------
    primitive:
        Any object satisfying the :class:`TranscodingPrimitive` protocol.

    The source must not be mutated by another thread while a call is in
    progress; the converter copies it before the measure pass so that a
    concurrent mutation cannot split the two passes.
    """

    def __init__(self, primitive: TranscodingPrimitive) -> None:
        self._primitive: TranscodingPrimitive = primitive

    @property
    def primitive(self) -> TranscodingPrimitive:
        return self._primitive

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def utf8_from_utf16(self, utf16: Utf16View) -> bytes:
        """Convert UTF-16 code units to UTF-8 bytes.

        Raises
        ------
        LengthOverflowError
            If the source is longer than the primitive can address.
        ConversionError
            If the source is not well-formed UTF-16 (e.g. it holds an
            unpaired surrogate) or the fill pass fails.
        """
        if len(utf16) == 0:
            return b""

        direction = ConversionDirection.UTF16_TO_UTF8
        utf16_length = safe_length_cast(len(utf16))
        source = tuple(utf16)

        utf8_length = self._primitive.utf16_to_utf8(
            source,
            utf16_length,
            strict=True,
        )
        if utf8_length == 0:
            self._fail(direction, "Can't get result UTF-8 string length: length query failed.")

        logger.debug(
            "%s measure pass: %d units -> %d units",
            direction.label,
            utf16_length,
            utf8_length,
        )

        utf8 = bytearray(utf8_length)
        written = self._primitive.utf16_to_utf8(
            source,
            utf16_length,
            strict=True,
            destination=utf8,
            capacity=utf8_length,
        )
        if written == 0:
            self._fail(direction, "Can't convert from UTF-16 to UTF-8: conversion failed.")
        self._check_fill_length(direction, written, utf8_length)

        return bytes(utf8)

    def utf16_from_utf8(self, utf8: Utf8View) -> array:
        """Convert UTF-8 bytes to UTF-16 code units.

        Raises
        ------
        LengthOverflowError
            If the source is longer than the primitive can address.
        ConversionError
            If the source is not well-formed UTF-8 (overlong forms,
            invalid continuation bytes, encoded surrogates, truncated
            sequences) or the fill pass fails.
        """
        size = utf8_byte_length(utf8)
        if size == 0:
            return array(UTF16_TYPECODE)

        direction = ConversionDirection.UTF8_TO_UTF16
        utf8_length = safe_length_cast(size)
        source = bytes(utf8)

        utf16_length = self._primitive.utf8_to_utf16(
            source,
            utf8_length,
            strict=True,
        )
        if utf16_length == 0:
            self._fail(direction, "Can't get result UTF-16 string length: length query failed.")

        logger.debug(
            "%s measure pass: %d units -> %d units",
            direction.label,
            utf8_length,
            utf16_length,
        )

        utf16 = new_utf16_buffer(utf16_length)
        written = self._primitive.utf8_to_utf16(
            source,
            utf8_length,
            strict=True,
            destination=utf16,
            capacity=utf16_length,
        )
        if written == 0:
            self._fail(direction, "Can't convert from UTF-8 to UTF-16: conversion failed.")
        self._check_fill_length(direction, written, utf16_length)

        return utf16

    # ------------------------------------------------------------------
    # Failure helpers
    # ------------------------------------------------------------------

    def _fail(self, direction: ConversionDirection, message: str) -> NoReturn:
        """Capture the primitive's error code and raise.  Always raises."""
        error_code = self._primitive.last_error()
        logger.debug("%s failed with code %d: %s", direction.label, error_code, message)
        raise ConversionError(error_code, direction, message)

    @staticmethod
    def _check_fill_length(
        direction: ConversionDirection,
        written: int,
        expected: int,
    ) -> None:
        """Treat a fill count that differs from the measurement as a failure."""
        if written == expected:
            return
        logger.debug(
            "%s fill pass wrote %d units, measured %d",
            direction.label,
            written,
            expected,
        )
        raise ConversionError(
            ERROR_INVALID_DATA,
            direction,
            f"Can't convert {direction.label}: conversion failed "
            f"(wrote {written} units, expected {expected}).",
            hint="The source may have been modified during the conversion.",
        )
