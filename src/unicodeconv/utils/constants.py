"""Numeric limits, platform error codes, and configuration names.

The error codes mirror the Win32 values reported by
``WideCharToMultiByte`` / ``MultiByteToWideChar`` so that every backend
speaks the same vocabulary.  Callers treat them as opaque numbers and
may cross-reference them against the Windows system error code table.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Length limits
# ---------------------------------------------------------------------------

INT32_MAX: int = 2**31 - 1
"""Largest length the transcoding primitive accepts (a signed C ``int``)."""

# ---------------------------------------------------------------------------
# Platform error codes
# ---------------------------------------------------------------------------

ERROR_SUCCESS: int = 0
ERROR_INVALID_DATA: int = 13
ERROR_INVALID_PARAMETER: int = 87
ERROR_INSUFFICIENT_BUFFER: int = 122
ERROR_INVALID_FLAGS: int = 1004
ERROR_NO_UNICODE_TRANSLATION: int = 1113

ERROR_NAMES: dict[int, str] = {
    ERROR_SUCCESS: "ERROR_SUCCESS",
    ERROR_INVALID_DATA: "ERROR_INVALID_DATA",
    ERROR_INVALID_PARAMETER: "ERROR_INVALID_PARAMETER",
    ERROR_INSUFFICIENT_BUFFER: "ERROR_INSUFFICIENT_BUFFER",
    ERROR_INVALID_FLAGS: "ERROR_INVALID_FLAGS",
    ERROR_NO_UNICODE_TRANSLATION: "ERROR_NO_UNICODE_TRANSLATION",
}
"""Symbolic names used when rendering error codes to users."""

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

BACKEND_ENV_VAR: str = "UNICODECONV_BACKEND"
"""Environment variable selecting the transcoding backend."""

BACKEND_AUTO: str = "auto"
BACKEND_CODEC: str = "codec"
BACKEND_WIN32: str = "win32"

BACKEND_CHOICES: tuple[str, ...] = (BACKEND_AUTO, BACKEND_CODEC, BACKEND_WIN32)


def describe_error_code(code: int) -> str:
    """Render *code* as ``"1113 (ERROR_NO_UNICODE_TRANSLATION)"``."""
    name = ERROR_NAMES.get(code)
    if name is None:
        return str(code)
    return f"{code} ({name})"
