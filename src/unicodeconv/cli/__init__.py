"""Command-line front end: argparse commands, rendering, prompts.

Only this package talks to the terminal.  ``core`` and ``infra`` never
import from it.
"""
