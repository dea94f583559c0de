"""Interactive target-encoding selection for ``unicodeconv convert``.

Used when ``--to`` is omitted: the user picks the target encoding with
questionary arrow keys.  Returns one of :data:`TARGET_ENCODINGS`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from unicodeconv.exceptions import EnvironmentError, InputFormatError

UTF8: str = "utf-8"
UTF16: str = "utf-16"

TARGET_ENCODINGS: tuple[str, ...] = (UTF8, UTF16)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Or pass the target encoding explicitly: --to utf-8 / --to utf-16",
        ) from exc
    return questionary


def _build_choice_label(encoding: str, source: Path) -> str:
    """Label shown in the selector, e.g. ``"UTF-8   (read input.txt as UTF-16LE)"``."""
    if encoding == UTF8:
        return f"UTF-8    (read {source.name} as UTF-16LE)"
    return f"UTF-16LE (read {source.name} as UTF-8)"


def prompt_target_encoding(source: Path) -> str:
    """Ask which encoding *source* should be converted to.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during selection.
    InputFormatError
        If the user cancels the prompt (Esc / None return).
    """
    questionary = _import_questionary()

    choices = [
        questionary.Choice(title=_build_choice_label(encoding, source), value=encoding)
        for encoding in TARGET_ENCODINGS
    ]

    selected: str | None = questionary.select(
        "Convert to:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise InputFormatError(
            "No target encoding selected.",
            hint="Use arrow keys to pick an encoding, or pass --to.",
        )

    return selected
