"""Custom exception hierarchy for unicodeconv.

All exceptions that cross layer boundaries must inherit from
:class:`UnicodeConvError`.  Raw third-party and OS exceptions (e.g. an
``OSError`` while loading ``kernel32``) must NEVER propagate beyond the
infrastructure layer; they are caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
UnicodeConvError
├── ConversionError
├── LengthOverflowError   (also an ``OverflowError``)
├── InputFormatError
├── BackendUnavailableError
└── EnvironmentError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from unicodeconv.core.models import ConversionDirection


class UnicodeConvError(Exception):
    """Base exception for all unicodeconv errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Conversion --------------------------------------------------------------

class ConversionError(UnicodeConvError):
    """Raised when the transcoding primitive rejects a conversion.

    Carries the platform error code reported by the primitive (passed
    through unmodified) and the direction of the failed conversion.  The
    message is available through ``str(exc)``.
    """

    def __init__(
        self,
        error_code: int,
        direction: ConversionDirection,
        message: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self._error_code = error_code
        self._direction = direction

    @property
    def error_code(self) -> int:
        """Opaque error code reported by the transcoding primitive."""
        return self._error_code

    @property
    def direction(self) -> ConversionDirection:
        """Which conversion failed."""
        return self._direction


# --- Length limits -----------------------------------------------------------

class LengthOverflowError(UnicodeConvError, OverflowError):
    """Raised when a sequence length does not fit the primitive's ``int``.

    This is a programming-limits error, not a data-validity error, so it
    is deliberately *not* a :class:`ConversionError`.
    """

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"Length {length} is too large: it doesn't fit into a "
            f"{limit.bit_length() + 1}-bit signed int (max {limit}).",
        )
        self.length: int = length
        self.limit: int = limit


# --- Input handling ----------------------------------------------------------

class InputFormatError(UnicodeConvError):
    """Raised when command-line or file input cannot be interpreted."""


# --- Backends / environment --------------------------------------------------

class BackendUnavailableError(UnicodeConvError):
    """Raised when the requested transcoding backend cannot be used."""


class EnvironmentError(UnicodeConvError):
    """Raised when a required runtime dependency is not available."""
