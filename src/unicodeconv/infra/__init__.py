"""Infrastructure layer — transcoding backends.

This layer wraps Python's codecs and the Win32 API.  Every raw OS
exception must be caught here and re-raised as a
:class:`~unicodeconv.exceptions.UnicodeConvError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from __future__ import annotations

import logging
import os
import sys

from unicodeconv.core.protocols import TranscodingPrimitive
from unicodeconv.exceptions import BackendUnavailableError
from unicodeconv.infra.codec_primitive import CodecPrimitive
from unicodeconv.utils.constants import (
    BACKEND_AUTO,
    BACKEND_CHOICES,
    BACKEND_CODEC,
    BACKEND_ENV_VAR,
    BACKEND_WIN32,
)

logger = logging.getLogger(__name__)


def configured_backend_name(name: str | None = None) -> str:
    """Resolve a backend name: explicit *name*, then the env var, then ``auto``.

    ``auto`` is resolved to the platform's native backend.

    Raises
    ------
    BackendUnavailableError
        If the name is not one of :data:`BACKEND_CHOICES`.
    """
    raw = name if name is not None else os.environ.get(BACKEND_ENV_VAR, BACKEND_AUTO)
    normalized = raw.strip().lower() or BACKEND_AUTO
    if normalized not in BACKEND_CHOICES:
        raise BackendUnavailableError(
            f"Unknown backend: {raw!r}",
            hint=f"Choose one of: {', '.join(BACKEND_CHOICES)}",
        )
    if normalized == BACKEND_AUTO:
        return BACKEND_WIN32 if sys.platform == "win32" else BACKEND_CODEC
    return normalized


def resolve_primitive(name: str | None = None) -> TranscodingPrimitive:
    """Instantiate the transcoding backend selected by *name* or configuration."""
    backend = configured_backend_name(name)
    logger.debug("Using %s transcoding backend", backend)
    if backend == BACKEND_WIN32:
        from unicodeconv.infra.win32_primitive import Win32Primitive

        return Win32Primitive()
    return CodecPrimitive()


__all__: list[str] = [
    "CodecPrimitive",
    "configured_backend_name",
    "resolve_primitive",
]
