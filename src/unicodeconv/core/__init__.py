"""Core / service layer — the conversion engine.

Rules
-----
* No ``print()`` calls.
* No filesystem or platform I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from unicodeconv.core.converter import UnicodeConverter
from unicodeconv.core.length import safe_length_cast
from unicodeconv.core.models import (
    ConversionDirection,
    Utf8View,
    Utf16View,
    text_from_utf16,
    utf16_code_units,
)
from unicodeconv.core.protocols import TranscodingPrimitive

__all__: list[str] = [
    "ConversionDirection",
    "TranscodingPrimitive",
    "UnicodeConverter",
    "Utf8View",
    "Utf16View",
    "safe_length_cast",
    "text_from_utf16",
    "utf16_code_units",
]
