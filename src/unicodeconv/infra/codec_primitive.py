"""Portable implementation of :class:`~unicodeconv.core.protocols.TranscodingPrimitive`.

Built on Python's own ``utf-16-le`` and ``utf-8`` codecs.  It follows
the Win32 calling convention (a size query when no destination is
given, ``0`` plus a per-thread last-error code on failure), so the
core converter drives it exactly like the native backend.

Error codes
-----------
* ``ERROR_INVALID_PARAMETER``   — bad length, bad capacity, or a value
  that is not a 16-bit code unit.
* ``ERROR_NO_UNICODE_TRANSLATION`` — malformed input in strict mode.
* ``ERROR_INSUFFICIENT_BUFFER`` — destination smaller than required.
"""

from __future__ import annotations

import threading
from array import array
from collections.abc import Sequence

from unicodeconv.core.models import (
    Utf8View,
    Utf16View,
    utf16_from_le_bytes,
    utf16_to_le_bytes,
    utf8_byte_length,
)
from unicodeconv.utils.constants import (
    ERROR_INSUFFICIENT_BUFFER,
    ERROR_INVALID_PARAMETER,
    ERROR_NO_UNICODE_TRANSLATION,
    ERROR_SUCCESS,
)


class CodecPrimitive:
    """Concrete :class:`TranscodingPrimitive` backed by Python codecs.

    Usage::

        primitive = CodecPrimitive()
        needed = primitive.utf16_to_utf8((0x5B66,), 1, strict=True)   # 3

    This class satisfies the :class:`~unicodeconv.core.protocols.TranscodingPrimitive`
    protocol structurally.
    """

    name: str = "codec"

    def __init__(self) -> None:
        self._state = threading.local()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def utf16_to_utf8(
        self,
        source: Utf16View,
        source_length: int,
        *,
        strict: bool,
        destination: bytearray | None = None,
        capacity: int = 0,
    ) -> int:
        if not self._valid_source_length(source_length, len(source)):
            return self._error(ERROR_INVALID_PARAMETER)

        try:
            raw = utf16_to_le_bytes(source[:source_length])
        except (OverflowError, TypeError):
            return self._error(ERROR_INVALID_PARAMETER)

        try:
            text = raw.decode("utf-16-le", self._errors(strict))
        except UnicodeDecodeError:
            return self._error(ERROR_NO_UNICODE_TRANSLATION)

        return self._emit(text.encode("utf-8"), destination, capacity)

    def utf8_to_utf16(
        self,
        source: Utf8View,
        source_length: int,
        *,
        strict: bool,
        destination: array | None = None,
        capacity: int = 0,
    ) -> int:
        if not self._valid_source_length(source_length, utf8_byte_length(source)):
            return self._error(ERROR_INVALID_PARAMETER)

        try:
            text = bytes(source)[:source_length].decode("utf-8", self._errors(strict))
        except UnicodeDecodeError:
            return self._error(ERROR_NO_UNICODE_TRANSLATION)

        return self._emit(
            utf16_from_le_bytes(text.encode("utf-16-le")),
            destination,
            capacity,
        )

    def last_error(self) -> int:
        return getattr(self._state, "error", ERROR_SUCCESS)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _errors(strict: bool) -> str:
        """Codec error handler: reject, or substitute U+FFFD."""
        return "strict" if strict else "replace"

    @staticmethod
    def _valid_source_length(source_length: int, available: int) -> bool:
        # Zero is rejected like the native API does.
        return 0 < source_length <= available

    def _emit(
        self,
        encoded: Sequence[int],
        destination: bytearray | array | None,
        capacity: int,
    ) -> int:
        """Return the required size, or copy *encoded* into *destination*."""
        required = len(encoded)
        if destination is None or capacity == 0:
            return required

        if capacity < 0 or capacity > len(destination):
            return self._error(ERROR_INVALID_PARAMETER)
        if capacity < required:
            return self._error(ERROR_INSUFFICIENT_BUFFER)

        destination[:required] = encoded
        return required

    def _error(self, code: int) -> int:
        """Record *code* as this thread's last error and signal failure."""
        self._state.error = code
        return 0
