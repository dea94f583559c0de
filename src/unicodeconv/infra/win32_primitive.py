"""Win32 implementation of :class:`~unicodeconv.core.protocols.TranscodingPrimitive`.

This module is the **only** place in the codebase that touches
``kernel32``.  It calls ``WideCharToMultiByte`` / ``MultiByteToWideChar``
through :mod:`ctypes` with ``CP_UTF8`` and the strict
``WC_ERR_INVALID_CHARS`` / ``MB_ERR_INVALID_CHARS`` flags, and reads
``GetLastError`` through ctypes' per-thread ``use_last_error`` slot.

Loading fails with :class:`~unicodeconv.exceptions.BackendUnavailableError`
on every platform other than Windows.
"""

from __future__ import annotations

import ctypes
import sys
import threading
from array import array
from typing import Any

from unicodeconv.core.models import UTF16_TYPECODE, Utf8View, Utf16View, utf8_byte_length
from unicodeconv.exceptions import BackendUnavailableError
from unicodeconv.utils.constants import ERROR_INVALID_PARAMETER

CP_UTF8: int = 65001
WC_ERR_INVALID_CHARS: int = 0x00000080
MB_ERR_INVALID_CHARS: int = 0x00000008


def _load_kernel32() -> Any:
    """Load ``kernel32`` with typed signatures or raise ``BackendUnavailableError``."""
    if sys.platform != "win32":
        raise BackendUnavailableError(
            "The win32 backend is only available on Windows.",
            hint="Use the portable backend: --backend codec",
        )
    try:
        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]
    except OSError as exc:
        raise BackendUnavailableError(f"Cannot load kernel32: {exc}") from exc

    from ctypes import wintypes

    kernel32.WideCharToMultiByte.argtypes = [
        wintypes.UINT,     # CodePage
        wintypes.DWORD,    # dwFlags
        ctypes.c_void_p,   # lpWideCharStr
        ctypes.c_int,      # cchWideChar
        ctypes.c_void_p,   # lpMultiByteStr
        ctypes.c_int,      # cbMultiByte
        ctypes.c_void_p,   # lpDefaultChar
        ctypes.c_void_p,   # lpUsedDefaultChar
    ]
    kernel32.WideCharToMultiByte.restype = ctypes.c_int

    kernel32.MultiByteToWideChar.argtypes = [
        wintypes.UINT,     # CodePage
        wintypes.DWORD,    # dwFlags
        ctypes.c_void_p,   # lpMultiByteStr
        ctypes.c_int,      # cbMultiByte
        ctypes.c_void_p,   # lpWideCharStr
        ctypes.c_int,      # cchWideChar
    ]
    kernel32.MultiByteToWideChar.restype = ctypes.c_int
    return kernel32


def _marshal_units(source: Utf16View) -> array:
    """Copy UTF-16 code units into a contiguous ``array('H')``.

    Raises ``OverflowError`` for values outside ``0..0xFFFF`` and
    ``TypeError`` for non-integers; a ctypes array would keep only the
    low 16 bits.
    """
    return array(UTF16_TYPECODE, source)


class Win32Primitive:
    """Concrete :class:`TranscodingPrimitive` backed by the Win32 API.

    Destination buffers are handed to the API in place through
    ``from_buffer``, so the fill pass writes straight into the
    converter's ``bytearray`` / ``array('H')``.
    """

    name: str = "win32"

    def __init__(self) -> None:
        self._kernel32: Any = _load_kernel32()
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
        if not self._valid_lengths(source_length, len(source), destination, capacity):
            return self._reject()
        try:
            units = _marshal_units(source)
        except (OverflowError, TypeError):
            return self._reject()
        wide = (ctypes.c_uint16 * len(units)).from_buffer(units) if units else None
        self._state.invalid_input = False

        out = None
        if destination is not None and capacity:
            out = (ctypes.c_char * len(destination)).from_buffer(destination)

        return self._kernel32.WideCharToMultiByte(
            CP_UTF8,
            WC_ERR_INVALID_CHARS if strict else 0,
            ctypes.addressof(wide) if wide is not None else None,
            source_length,
            ctypes.addressof(out) if out is not None else None,
            capacity if out is not None else 0,
            None,
            None,
        )

    def utf8_to_utf16(
        self,
        source: Utf8View,
        source_length: int,
        *,
        strict: bool,
        destination: array | None = None,
        capacity: int = 0,
    ) -> int:
        available = utf8_byte_length(source)
        if not self._valid_lengths(source_length, available, destination, capacity):
            return self._reject()
        data = bytes(source)
        narrow = ctypes.create_string_buffer(data, len(data) or 1)
        self._state.invalid_input = False

        out = None
        if destination is not None and capacity:
            out = (ctypes.c_uint16 * len(destination)).from_buffer(destination)

        return self._kernel32.MultiByteToWideChar(
            CP_UTF8,
            MB_ERR_INVALID_CHARS if strict else 0,
            ctypes.addressof(narrow),
            source_length,
            ctypes.addressof(out) if out is not None else None,
            capacity if out is not None else 0,
        )

    def last_error(self) -> int:
        if getattr(self._state, "invalid_input", False):
            return ERROR_INVALID_PARAMETER
        return ctypes.get_last_error()  # type: ignore[attr-defined]

    @staticmethod
    def _valid_lengths(
        source_length: int,
        available: int,
        destination: bytearray | array | None,
        capacity: int,
    ) -> bool:
        """Keep the API from reading or writing past the Python buffers."""
        if not 0 <= source_length <= available:
            return False
        if destination is None:
            return True
        return 0 <= capacity <= len(destination)

    def _reject(self) -> int:
        """Fail a call whose arguments cannot be marshalled safely."""
        self._state.invalid_input = True
        return 0
