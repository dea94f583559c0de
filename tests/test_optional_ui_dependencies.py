"""Regression tests for optional CLI UI dependencies (rich/questionary).

These tests verify bootstrap commands and conversions keep working when
the optional UI packages are missing, and the interactive prompt fails
cleanly only when it is actually exercised.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from unicodeconv.cli import exit_codes
from unicodeconv.cli.app import cli, main
from unicodeconv.cli.console import escape_markup
from unicodeconv.cli.logging_setup import configure_logging
from unicodeconv.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_doctor_works_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    assert main(["--backend", "codec", "doctor"]) == exit_codes.SUCCESS
    err = capsys.readouterr().err
    assert "unicodeconv doctor" in err
    assert "NOT INSTALLED" in err


def test_conversion_prints_plain_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    assert main(["to-utf8", "5B66"]) == exit_codes.SUCCESS
    out = capsys.readouterr().out
    assert "UTF-16 (1): 5B66" in out
    assert "UTF-8 (3): E5 AD A6" in out


def test_logging_falls_back_to_stream_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    logger = configure_logging(verbose=True)
    try:
        assert logger.level == logging.DEBUG
        assert any(type(handler) is logging.StreamHandler for handler in logger.handlers)
    finally:
        configure_logging(verbose=False)


def test_convert_prompt_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    _hide_questionary(monkeypatch)
    source = tmp_path / "in.txt"
    source.write_bytes(b"hi")

    with pytest.raises(EnvironmentError, match="questionary is not installed") as exc_info:
        main(["convert", str(source), str(tmp_path / "out.txt")])
    assert "--to" in (exc_info.value.hint or "")


def test_convert_with_explicit_target_needs_no_questionary(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    _hide_questionary(monkeypatch)
    source = tmp_path / "in.txt"
    target = tmp_path / "out.txt"
    source.write_bytes(b"hi")

    assert main(["convert", str(source), str(target), "--to", "utf-16"]) == exit_codes.SUCCESS
    assert target.read_bytes() == b"h\x00i\x00"


def test_markup_escape_is_identity_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    assert escape_markup("[/x] a.txt") == "[/x] a.txt"


def test_error_with_markup_like_text_prints_plain_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setattr(sys, "argv", ["unicodeconv", "to-utf8", "[/x]"])

    with pytest.raises(SystemExit) as exc_info:
        cli()
    assert exc_info.value.code == exit_codes.GENERAL_ERROR
    assert "'[/x]'" in capsys.readouterr().err
