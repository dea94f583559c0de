"""Module-level conversion functions.

Thin wrappers that run :class:`~unicodeconv.core.converter.UnicodeConverter`
against the configured default backend (see
:func:`~unicodeconv.infra.resolve_primitive`).  Pass *primitive* to use
a specific backend for a single call.
"""

from __future__ import annotations

import functools
from array import array

from unicodeconv.core.converter import UnicodeConverter
from unicodeconv.core.models import Utf8View, Utf16View
from unicodeconv.core.protocols import TranscodingPrimitive
from unicodeconv.infra import configured_backend_name, resolve_primitive


@functools.lru_cache(maxsize=None)
def _default_primitive(backend: str) -> TranscodingPrimitive:
    return resolve_primitive(backend)


def default_converter() -> UnicodeConverter:
    """Return a converter bound to the currently configured backend."""
    return UnicodeConverter(_default_primitive(configured_backend_name()))


def _converter(primitive: TranscodingPrimitive | None) -> UnicodeConverter:
    if primitive is None:
        return default_converter()
    return UnicodeConverter(primitive)


def utf8_from_utf16(
    utf16: Utf16View,
    *,
    primitive: TranscodingPrimitive | None = None,
) -> bytes:
    """Convert UTF-16 code units to UTF-8 bytes.

    Raises
    ------
    LengthOverflowError
        If *utf16* is too long for the backend.
    ConversionError
        If *utf16* is not well-formed UTF-16.
    """
    return _converter(primitive).utf8_from_utf16(utf16)


def utf16_from_utf8(
    utf8: Utf8View,
    *,
    primitive: TranscodingPrimitive | None = None,
) -> array:
    """Convert UTF-8 bytes to UTF-16 code units.

    Raises
    ------
    LengthOverflowError
        If *utf8* is too long for the backend.
    ConversionError
        If *utf8* is not well-formed UTF-8.
    """
    return _converter(primitive).utf16_from_utf8(utf8)
