"""Tests for the Win32 backend (infra/win32_primitive.py).

Behavioural tests call the real ``kernel32`` functions and therefore
only run on Windows.  Elsewhere, loading the backend must fail with a
typed :class:`BackendUnavailableError`.
"""

from __future__ import annotations

import sys
from array import array

import pytest

from unicodeconv.core.converter import UnicodeConverter
from unicodeconv.exceptions import BackendUnavailableError, ConversionError
from unicodeconv.infra import resolve_primitive
from unicodeconv.utils.constants import (
    ERROR_INSUFFICIENT_BUFFER,
    ERROR_INVALID_PARAMETER,
    ERROR_NO_UNICODE_TRANSLATION,
)

windows_only = pytest.mark.skipif(sys.platform != "win32", reason="requires kernel32")


@pytest.mark.skipif(sys.platform == "win32", reason="kernel32 is available")
class TestUnavailableOffWindows:
    def test_direct_construction_raises(self) -> None:
        from unicodeconv.infra.win32_primitive import Win32Primitive

        with pytest.raises(BackendUnavailableError, match="only available on Windows") as exc_info:
            Win32Primitive()
        assert exc_info.value.hint is not None

    def test_resolve_raises(self) -> None:
        with pytest.raises(BackendUnavailableError):
            resolve_primitive("win32")


@windows_only
class TestWin32Primitive:
    @pytest.fixture()
    def primitive(self):
        from unicodeconv.infra.win32_primitive import Win32Primitive

        return Win32Primitive()

    def test_size_query_and_fill(self, primitive) -> None:
        assert primitive.utf16_to_utf8((0x5B66,), 1, strict=True) == 3
        buffer = bytearray(3)
        assert primitive.utf16_to_utf8(
            (0x5B66,), 1, strict=True, destination=buffer, capacity=3,
        ) == 3
        assert bytes(buffer) == b"\xe5\xad\xa6"

    def test_utf8_fill(self, primitive) -> None:
        buffer = array("H", [0])
        assert primitive.utf8_to_utf16(
            b"\xe5\xad\xa6", 3, strict=True, destination=buffer, capacity=1,
        ) == 1
        assert buffer == array("H", [0x5B66])

    def test_strict_rejects_lone_surrogate(self, primitive) -> None:
        assert primitive.utf16_to_utf8((0xD800,), 1, strict=True) == 0
        assert primitive.last_error() == ERROR_NO_UNICODE_TRANSLATION

    def test_strict_rejects_invalid_utf8(self, primitive) -> None:
        assert primitive.utf8_to_utf16(b"\xc3\x28", 2, strict=True) == 0
        assert primitive.last_error() == ERROR_NO_UNICODE_TRANSLATION

    def test_insufficient_buffer(self, primitive) -> None:
        buffer = bytearray(2)
        assert primitive.utf16_to_utf8(
            (0x5B66,), 1, strict=True, destination=buffer, capacity=2,
        ) == 0
        assert primitive.last_error() == ERROR_INSUFFICIENT_BUFFER

    def test_source_length_past_buffer_is_rejected(self, primitive) -> None:
        assert primitive.utf8_to_utf16(b"ab", 3, strict=True) == 0
        assert primitive.last_error() == ERROR_INVALID_PARAMETER

    def test_wide_code_unit_is_rejected_not_truncated(self, primitive) -> None:
        assert primitive.utf16_to_utf8((0x10041,), 1, strict=True) == 0
        assert primitive.last_error() == ERROR_INVALID_PARAMETER

    def test_converter_round_trip(self, primitive) -> None:
        converter = UnicodeConverter(primitive)
        utf8 = converter.utf8_from_utf16([0x43, 0x69, 0x61, 0x6F, 0xD83D, 0xDE00])
        assert utf8 == "Ciao\U0001F600".encode("utf-8")
        assert list(converter.utf16_from_utf8(utf8)) == [0x43, 0x69, 0x61, 0x6F, 0xD83D, 0xDE00]

    def test_converter_reports_platform_code(self, primitive) -> None:
        with pytest.raises(ConversionError) as exc_info:
            UnicodeConverter(primitive).utf8_from_utf16([0xDC00])
        assert exc_info.value.error_code == ERROR_NO_UNICODE_TRANSLATION


class TestMarshalUnits:
    """Code-unit marshalling is plain Python and runs everywhere."""

    def test_copies_into_contiguous_array(self) -> None:
        from unicodeconv.infra.win32_primitive import _marshal_units

        assert _marshal_units((0x5B66, 0x41)) == array("H", [0x5B66, 0x41])
        assert _marshal_units([]) == array("H")

    @pytest.mark.parametrize("unit", [0x10041, 0x10000, -1])
    def test_rejects_values_outside_16_bits(self, unit: int) -> None:
        from unicodeconv.infra.win32_primitive import _marshal_units

        with pytest.raises(OverflowError):
            _marshal_units([0x41, unit])

    def test_rejects_non_integers(self) -> None:
        from unicodeconv.infra.win32_primitive import _marshal_units

        with pytest.raises(TypeError):
            _marshal_units([0x41, "B"])  # type: ignore[list-item]
