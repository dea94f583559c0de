"""Terminal output for the CLI, through Rich when it is importable.

Rich is imported on first use only, so ``--help``, ``--version`` and
plain-text output keep working without it.

Two proxies are exported: :data:`console` (diagnostics, errors, and
prompts on stderr) and :data:`output` (conversion results on stdout).
"""

from __future__ import annotations

import sys
from typing import Any

from unicodeconv.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr, highlight=False)


def escape_markup(text: object) -> str:
    """Escape Rich markup in user-controlled *text* (paths, input tokens).

    Without Rich nothing parses markup, so the text is returned as is.
    """
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return str(text)
    return escape(str(text))


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain print."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except EnvironmentError:
            print(*objects, file=sys.stderr if self._stderr else sys.stdout)
            return
        rich_console.print(*objects)


console = _ConsoleProxy(stderr=True)
output = _ConsoleProxy(stderr=False)
