"""CLI package for saferm.

This package contains the Typer application.
"""

from saferm.cli.main import app

__all__ = ["app"]
