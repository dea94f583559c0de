"""Single source of truth for the unicodeconv version string."""

from __future__ import annotations

__version__: str = "1.2.0"
