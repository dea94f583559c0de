"""Protocols (interfaces) consumed by the core layer.

These define the contract that infrastructure backends must satisfy.
Core code depends only on this protocol, never on a concrete backend.
"""

from __future__ import annotations

from array import array
from typing import Protocol

from unicodeconv.core.models import Utf8View, Utf16View


class TranscodingPrimitive(Protocol):
    """Contract for code-unit transcoding backends.

    The shape follows the Win32 ``WideCharToMultiByte`` /
    ``MultiByteToWideChar`` pair: one call sizes the output, a second
    call fills a caller-owned buffer.

    * With no *destination* (or a zero *capacity*) a method returns the
      number of output code units required.
    * With a *destination* it writes into it and returns the number of
      code units written.
    * On any failure it returns ``0`` and records a per-thread error
      code retrievable through :meth:`last_error`.

    *strict* must reject malformed input instead of substituting
    replacement characters.
    """

    name: str
    """Short backend identifier (e.g. ``"codec"``)."""

    def utf16_to_utf8(
        self,
        source: Utf16View,
        source_length: int,
        *,
        strict: bool,
        destination: bytearray | None = None,
        capacity: int = 0,
    ) -> int:
        """Transcode the first *source_length* UTF-16 units to UTF-8."""
        ...  # pragma: no cover

    def utf8_to_utf16(
        self,
        source: Utf8View,
        source_length: int,
        *,
        strict: bool,
        destination: array | None = None,
        capacity: int = 0,
    ) -> int:
        """Transcode the first *source_length* UTF-8 bytes to UTF-16."""
        ...  # pragma: no cover

    def last_error(self) -> int:
        """Return the error code recorded by this thread's last failed call."""
        ...  # pragma: no cover
