"""unicodeconv — strict UTF-16 <-> UTF-8 conversion.

Two-pass (measure, then fill) conversion against a pluggable
transcoding backend, with strict rejection of malformed input and
overflow-safe length handling.
"""

from unicodeconv.api import default_converter, utf8_from_utf16, utf16_from_utf8
from unicodeconv.core.converter import UnicodeConverter
from unicodeconv.core.length import safe_length_cast
from unicodeconv.core.models import ConversionDirection, text_from_utf16, utf16_code_units
from unicodeconv.exceptions import ConversionError, LengthOverflowError, UnicodeConvError
from unicodeconv.version import __version__

__all__: list[str] = [
    "ConversionDirection",
    "ConversionError",
    "LengthOverflowError",
    "UnicodeConvError",
    "UnicodeConverter",
    "__version__",
    "default_converter",
    "safe_length_cast",
    "text_from_utf16",
    "utf16_code_units",
    "utf16_from_utf8",
    "utf8_from_utf16",
]
