"""Rich console formatting utilities.

Provides the Reporter, the single output sink of a removal run. It is
created once per run with the verbosity chosen at startup and passed
explicitly to whoever produces output.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from saferm.core.config import Verbosity
from saferm.core.theme import ThemeColors, get_rich_theme
from saferm.fs.models import display_path

if TYPE_CHECKING:
    from saferm.core.remover import RemovalResult
    from saferm.core.runner import RunSummary
    from saferm.fs.models import EntryError

# Logger that every saferm module logs below
ROOT_LOGGER = "saferm"

DRY_RUN_HINT = "(use '--force' to remove)"


def _detect_color_system(stderr: bool = False) -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    stream = sys.stderr if stderr else sys.stdout
    if stream.isatty():
        return "truecolor"
    return None


def create_console(theme: Theme | None = None, stderr: bool = False) -> Console:
    """Create a console for plain line-oriented output.

    Lines are never wrapped or highlighted, so paths come out exactly
    as they are.

    Args:
        theme: Rich theme to use. Defaults to the built-in colors.
        stderr: Write to stderr instead of stdout.

    Returns:
        Configured Rich Console.
    """
    return Console(
        theme=theme or get_rich_theme(ThemeColors()),
        stderr=stderr,
        color_system=_detect_color_system(stderr),
        highlight=False,
        soft_wrap=True,
    )


def pluralize(noun: str, count: int) -> str:
    """Pluralize a noun for a count, including the count.

    Example:
        >>> pluralize("error", 1)
        '1 error'
    """
    if count == 1:
        return f"{count} {noun}"
    return f"{count} {noun}s"


def summary_line(removed: int, errored: int, dry_run: bool) -> str:
    """Render the final tally of a run."""
    if dry_run:
        hint = f" {DRY_RUN_HINT}" if removed > 0 else ""
        done = f"{removed} would be removed{hint}"
    else:
        done = f"{removed} removed"
    return f"{done}, {pluralize('error', errored)} occurred"


class Reporter:
    """Output sink for a removal run.

    Results go to stdout, errors to stderr. Quiet runs only show errors;
    verbose runs additionally show trace messages in brackets.

    Attributes:
        verbosity: Output verbosity, fixed for the lifetime of the reporter.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.NORMAL,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        """Initialize the Reporter.

        Args:
            verbosity: Output verbosity.
            console: Console for regular output. Defaults to stdout.
            err_console: Console for errors. Defaults to stderr.
        """
        self.verbosity = verbosity
        self._console = console or create_console()
        self._err_console = err_console or create_console(stderr=True)

    @property
    def verbose(self) -> bool:
        """Check if trace messages are shown."""
        return self.verbosity == Verbosity.VERBOSE

    @property
    def quiet(self) -> bool:
        """Check if only errors are shown."""
        return self.verbosity == Verbosity.QUIET

    def report(self, result: RemovalResult) -> None:
        """Show the result for a single path."""
        if result.error is not None:
            self.error(result.error)
        elif result.action is not None and not self.quiet:
            style = "info" if result.dry_run else "success"
            before, _, after = result.action.value.partition("{path}")
            text = Text.assemble(
                (before, style), (display_path(result.path), "path"), (after, style)
            )
            self._console.print(text)

    def error(self, error: EntryError) -> None:
        """Show an error for a single path. Always shown."""
        text = Text.assemble(
            "Cannot remove ",
            (display_path(error.path), "path"),
            ": ",
            (error.kind.description, "error"),
        )
        if error.tip:
            text.append(" ")
            text.append(f"({error.tip})", style="tip")
        self._err_console.print(text)

    def trace(self, message: str) -> None:
        """Show a trace message, only in verbose mode."""
        if self.verbose:
            # messages embed paths
            self._console.print(Text(f"[{display_path(message)}]", style="trace"))

    def summary(self, summary: RunSummary, dry_run: bool) -> None:
        """Show the final tally of a run."""
        if self.quiet:
            return
        if summary.removed > 0 or summary.errored > 0 or self.verbose:
            self._console.print()
        self._console.print(summary_line(summary.removed, summary.errored, dry_run))

    def usage_error(self, message: str) -> None:
        """Show a usage error."""
        self._err_console.print(Text.assemble(("Error:", "error"), " ", message))

    @contextmanager
    def capture_logs(self) -> Iterator[None]:
        """Route saferm's debug logging to trace output for a block.

        Does nothing unless the reporter is verbose.
        """
        if not self.verbose:
            yield
            return

        logger = logging.getLogger(ROOT_LOGGER)
        handler = _TraceHandler(self)
        previous_level = logger.level
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        try:
            yield
        finally:
            logger.removeHandler(handler)
            logger.setLevel(previous_level)


class _TraceHandler(logging.Handler):
    """Logging handler that forwards records to Reporter.trace."""

    def __init__(self, reporter: Reporter) -> None:
        super().__init__(level=logging.DEBUG)
        self._reporter = reporter

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._reporter.trace(record.getMessage())
        except Exception:
            self.handleError(record)
