"""Utility modules for saferm.

This module exports the output helpers used by the CLI.
"""

from saferm.utils.formatting import Reporter, create_console, pluralize, summary_line

__all__ = [
    "Reporter",
    "create_console",
    "pluralize",
    "summary_line",
]
