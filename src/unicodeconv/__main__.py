"""Allow ``python -m unicodeconv`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m unicodeconv`` behaves identically to the
``unicodeconv`` console script.
"""

from __future__ import annotations

from unicodeconv.cli.app import cli

if __name__ == "__main__":
    cli()
