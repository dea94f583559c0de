"""Shared pytest fixtures and configuration for the unicodeconv test suite.

Guidelines
----------
* The core converter is tested against a recording fake primitive.
* Backend tests exercise the real codec backend; Win32 tests only run
  on Windows.
* Tests must not depend on OS state (the backend env var is cleared).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from unicodeconv.infra.codec_primitive import CodecPrimitive
from unicodeconv.utils.constants import BACKEND_ENV_VAR


@dataclass(frozen=True)
class PrimitiveCall:
    """One recorded call into the fake primitive."""

    method: str
    source_length: int
    strict: bool
    fill: bool
    capacity: int


class FakePrimitive:
    """Recording primitive that delegates to :class:`CodecPrimitive`.

    ``measure`` / ``fill`` override the value returned by the size query
    or the fill pass; ``error_code`` overrides :meth:`last_error`.
    """

    name = "fake"

    def __init__(
        self,
        *,
        measure: int | None = None,
        fill: int | None = None,
        error_code: int | None = None,
    ) -> None:
        self._real = CodecPrimitive()
        self._measure = measure
        self._fill = fill
        self._error_code = error_code
        self.calls: list[PrimitiveCall] = []

    def utf16_to_utf8(self, source: Any, source_length: int, *, strict: bool,
                      destination: Any = None, capacity: int = 0) -> int:
        return self._call(self._real.utf16_to_utf8, source, source_length,
                          strict, destination, capacity)

    def utf8_to_utf16(self, source: Any, source_length: int, *, strict: bool,
                      destination: Any = None, capacity: int = 0) -> int:
        return self._call(self._real.utf8_to_utf16, source, source_length,
                          strict, destination, capacity)

    def last_error(self) -> int:
        if self._error_code is not None:
            return self._error_code
        return self._real.last_error()

    def _call(
        self,
        real: Callable[..., int],
        source: Any,
        source_length: int,
        strict: bool,
        destination: Any,
        capacity: int,
    ) -> int:
        fill = destination is not None
        self.calls.append(
            PrimitiveCall(real.__name__, source_length, strict, fill, capacity),
        )
        override = self._fill if fill else self._measure
        if override is not None:
            return override
        return real(
            source,
            source_length,
            strict=strict,
            destination=destination,
            capacity=capacity,
        )


@pytest.fixture()
def fake_primitive() -> Callable[..., FakePrimitive]:
    """Factory fixture: ``fake_primitive(measure=0, error_code=1113)``."""
    return FakePrimitive


@pytest.fixture(autouse=True)
def _clear_backend_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(BACKEND_ENV_VAR, raising=False)
