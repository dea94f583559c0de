"""Logging configuration for the CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers;
a handler is installed here, once per run, by the CLI entry point.  It
is attached to the ``unicodeconv`` logger rather than the root logger so
that embedding applications keep control of their own logging.

Records go to stderr through Rich's ``RichHandler`` when Rich is
installed, and through a plain stream handler otherwise.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_installed_handler: logging.Handler | None = None


def _build_handler() -> logging.Handler:
    """Return a Rich handler on stderr, or a plain stream handler."""
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        return handler

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt=LOG_DATE_FORMAT))
    return handler


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``unicodeconv`` logger hierarchy.

    Args:
        verbose: Log at DEBUG instead of WARNING.

    Returns:
        The configured package logger.  Calling again replaces the
        handler installed by the previous call.
    """
    global _installed_handler

    package_logger = logging.getLogger("unicodeconv")
    if _installed_handler is not None:
        package_logger.removeHandler(_installed_handler)

    _installed_handler = _build_handler()
    package_logger.addHandler(_installed_handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return package_logger
