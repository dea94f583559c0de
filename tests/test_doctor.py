"""Tests for the ``unicodeconv doctor`` command (cli/doctor.py).

Backends are resolved for real (the codec backend needs nothing from
the OS); failure paths are mocked.

Coverage:
* Individual check functions return correct tuples.
* Doctor returns SUCCESS on a healthy environment.
* Doctor returns GENERAL_ERROR when the backend or self-test fails.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from unicodeconv.cli import exit_codes
from unicodeconv.cli.app import main
from unicodeconv.cli.doctor import (
    _backend_check,
    _optional_module_check,
    _os_check,
    _python_version_check,
    _self_test_check,
    _status_plain,
    collect_checks,
    run_doctor,
)
from unicodeconv.utils.constants import BACKEND_ENV_VAR


class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestBackendCheck:
    def test_codec_backend_ok(self) -> None:
        label, value, status = _backend_check("codec")
        assert label == "backend"
        assert value == "codec"
        assert "OK" in status

    @pytest.mark.skipif(sys.platform == "win32", reason="win32 backend is available")
    def test_unavailable_backend_fails(self) -> None:
        label, value, status = _backend_check("win32")
        assert label == "backend"
        assert "Windows" in value
        assert "FAIL" in status


class TestSelfTestCheck:
    def test_codec_passes(self) -> None:
        label, value, status = _self_test_check("codec")
        assert label == "self-test"
        assert "E5 AD A6" in value
        assert "OK" in status

    @patch("unicodeconv.cli.doctor.resolve_primitive")
    def test_broken_backend_fails(self, mock_resolve: MagicMock) -> None:
        primitive = MagicMock()
        primitive.utf16_to_utf8.return_value = 0
        primitive.last_error.return_value = 1113
        mock_resolve.return_value = primitive

        label, value, status = _self_test_check("codec")
        assert label == "self-test"
        assert "length query failed" in value
        assert "FAIL" in status


class TestOptionalModuleCheck:
    def test_installed(self) -> None:
        label, value, status = _optional_module_check("pytest", "pytest")
        assert label == "pytest"
        assert value == pytest.__version__
        assert "OK" in status

    @patch.dict("sys.modules", {"questionary": None})
    def test_missing_is_warning(self) -> None:
        label, value, status = _optional_module_check("questionary", "questionary")
        assert value == "NOT INSTALLED"
        assert "WARN" in status


class TestOsCheck:
    def test_returns_tuple(self) -> None:
        label, value, status = _os_check()
        assert label == "OS"
        assert value
        assert "OK" in status


class TestStatusPlain:
    @pytest.mark.parametrize(
        ("markup", "plain"),
        [
            ("[green]OK[/green]", "OK"),
            ("[yellow]WARN[/yellow]", "WARN"),
            ("[red]FAIL (>=3.10 required)[/red]", "FAIL"),
            ("other", "other"),
        ],
    )
    def test_conversion(self, markup: str, plain: str) -> None:
        assert _status_plain(markup) == plain


class TestRunDoctor:
    def test_healthy_environment(self) -> None:
        assert run_doctor("codec") == exit_codes.SUCCESS

    def test_collect_checks_order(self) -> None:
        labels = [label for label, _, _ in collect_checks("codec")]
        assert labels == [
            "unicodeconv",
            "Python",
            "OS",
            "backend",
            "self-test",
            "rich",
            "questionary",
        ]

    @patch("unicodeconv.cli.doctor._self_test_check")
    def test_failure_returns_general_error(self, mock_self_test: MagicMock) -> None:
        mock_self_test.return_value = ("self-test", "broken", "[red]FAIL[/red]")
        assert run_doctor("codec") == exit_codes.GENERAL_ERROR

    def test_markup_like_backend_name_is_shown_literally(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("COLUMNS", "500")
        monkeypatch.setenv(BACKEND_ENV_VAR, "[/x]")
        assert run_doctor() == exit_codes.GENERAL_ERROR
        assert "[/x]" in capsys.readouterr().err

    @patch("unicodeconv.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_cli_routing(self, mock_doctor: MagicMock) -> None:
        assert main(["--backend", "codec", "doctor"]) == exit_codes.SUCCESS
        mock_doctor.assert_called_once_with("codec")
