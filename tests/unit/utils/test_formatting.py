"""Unit tests for output formatting.

Tests for pluralize, summary_line and the Reporter output sink.
"""

import io
import os
import logging

import pytest
from rich.console import Console
from saferm.core.config import Verbosity
from saferm.core.remover import RemovalAction, RemovalResult
from saferm.core.runner import RunSummary
from saferm.core.theme import ThemeColors, get_rich_theme
from saferm.fs.models import EntryError, ErrorKind
from saferm.utils.formatting import ROOT_LOGGER, Reporter, pluralize, summary_line


def _console() -> Console:
    return Console(
        file=io.StringIO(),
        theme=get_rich_theme(ThemeColors()),
        highlight=False,
        soft_wrap=True,
    )


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def out() -> Console:
    return _console()


@pytest.fixture
def err() -> Console:
    return _console()


class TestPluralize:
    """Tests for pluralize function."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "0 errors"), (1, "1 error"), (2, "2 errors")],
    )
    def test_pluralize(self, count: int, expected: str) -> None:
        """Only a count of one is singular."""
        assert pluralize("error", count) == expected


class TestSummaryLine:
    """Tests for summary_line function."""

    def test_removed(self) -> None:
        """Real runs report what was removed."""
        assert summary_line(2, 1, dry_run=False) == "2 removed, 1 error occurred"

    def test_dry_run_with_hint(self) -> None:
        """Dry runs hint at --force when something would be removed."""
        assert (
            summary_line(1, 0, dry_run=True)
            == "1 would be removed (use '--force' to remove), 0 errors occurred"
        )

    def test_dry_run_without_hint(self) -> None:
        """No hint when nothing would be removed."""
        assert summary_line(0, 2, dry_run=True) == "0 would be removed, 2 errors occurred"


class TestReporter:
    """Tests for Reporter."""

    def test_report_success(self, out: Console, err: Console) -> None:
        """Successful results go to stdout."""
        reporter = Reporter(console=out, err_console=err)

        reporter.report(RemovalResult(path="file", success=True, action=RemovalAction.REMOVED))

        assert _output(out) == "Removed file\n"
        assert _output(err) == ""

    def test_report_trash(self, out: Console, err: Console) -> None:
        """The path sits inside the action message."""
        reporter = Reporter(console=out, err_console=err)

        reporter.report(RemovalResult(path="dir", success=True, action=RemovalAction.TRASHED))

        assert _output(out) == "Moved dir to trash\n"

    def test_report_error(self, out: Console, err: Console) -> None:
        """Errors go to stderr with their tip."""
        reporter = Reporter(console=out, err_console=err)
        error = EntryError(path="dir", kind=ErrorKind.IS_A_DIRECTORY, tip="use '--dir' to remove")

        reporter.report(RemovalResult.from_error(error))

        assert _output(out) == ""
        assert _output(err) == "Cannot remove dir: Is a directory (use '--dir' to remove)\n"

    def test_error_without_tip(self, out: Console, err: Console) -> None:
        """Errors without a tip have no parentheses."""
        reporter = Reporter(console=out, err_console=err)

        reporter.error(EntryError(path="/", kind=ErrorKind.REFUSED))

        assert _output(err) == "Cannot remove /: Refused to remove\n"

    def test_paths_with_markup_are_literal(self, out: Console, err: Console) -> None:
        """Paths are never interpreted as markup."""
        reporter = Reporter(console=out, err_console=err)

        reporter.report(
            RemovalResult(path="[bold]x[/bold]", success=True, action=RemovalAction.REMOVED)
        )

        assert _output(out) == "Removed [bold]x[/bold]\n"

    def test_undecodable_paths_replaced(self, out: Console, err: Console) -> None:
        """Bytes that are not UTF-8 are shown as replacement characters."""
        reporter = Reporter(Verbosity.VERBOSE, console=out, err_console=err)
        name = os.fsdecode(b"\xff")

        reporter.report(RemovalResult(path=name, success=True, action=RemovalAction.REMOVED))
        reporter.error(EntryError(path=name, kind=ErrorKind.NOT_FOUND))
        reporter.trace(f"found file at {name}")

        assert _output(out) == "Removed \ufffd\n[found file at \ufffd]\n"
        assert _output(err) == "Cannot remove \ufffd: Not found\n"

    def test_quiet_hides_results_not_errors(self, out: Console, err: Console) -> None:
        """Quiet mode only shows errors."""
        reporter = Reporter(Verbosity.QUIET, console=out, err_console=err)

        reporter.report(RemovalResult(path="file", success=True, action=RemovalAction.REMOVED))
        reporter.report(RemovalResult.from_error(EntryError(path="x", kind=ErrorKind.UNKNOWN)))
        reporter.summary(RunSummary(removed=1, errored=1), dry_run=False)

        assert _output(out) == ""
        assert _output(err) == "Cannot remove x: Unknown error\n"

    def test_trace_only_when_verbose(self, out: Console, err: Console) -> None:
        """Trace messages are bracketed and only shown in verbose mode."""
        Reporter(console=out, err_console=err).trace("hidden")
        Reporter(Verbosity.VERBOSE, console=out, err_console=err).trace("start processing")

        assert _output(out) == "[start processing]\n"

    def test_summary_empty_run(self, out: Console, err: Console) -> None:
        """Nothing happened, so no blank line."""
        Reporter(console=out, err_console=err).summary(RunSummary(), dry_run=False)

        assert _output(out) == "0 removed, 0 errors occurred\n"

    def test_summary_after_results(self, out: Console, err: Console) -> None:
        """A blank line separates results from the summary."""
        Reporter(console=out, err_console=err).summary(RunSummary(removed=1), dry_run=True)

        assert _output(out) == "\n1 would be removed (use '--force' to remove), 0 errors occurred\n"

    def test_summary_verbose(self, out: Console, err: Console) -> None:
        """Verbose runs always separate the summary."""
        Reporter(Verbosity.VERBOSE, console=out, err_console=err).summary(
            RunSummary(), dry_run=False
        )

        assert _output(out) == "\n0 removed, 0 errors occurred\n"

    def test_usage_error(self, out: Console, err: Console) -> None:
        """Usage errors go to stderr."""
        Reporter(console=out, err_console=err).usage_error("bad options")

        assert _output(err) == "Error: bad options\n"

    def test_capture_logs_verbose(self, out: Console, err: Console) -> None:
        """saferm debug logging becomes trace output in verbose mode."""
        reporter = Reporter(Verbosity.VERBOSE, console=out, err_console=err)
        logger = logging.getLogger(f"{ROOT_LOGGER}.test")
        root = logging.getLogger(ROOT_LOGGER)
        handlers_before = list(root.handlers)

        with reporter.capture_logs():
            logger.debug("found file at %s", "file")

        logger.debug("after")
        assert _output(out) == "[found file at file]\n"
        assert root.handlers == handlers_before

    def test_capture_logs_normal(self, out: Console, err: Console) -> None:
        """Nothing is captured outside verbose mode."""
        reporter = Reporter(console=out, err_console=err)

        with reporter.capture_logs():
            logging.getLogger(f"{ROOT_LOGGER}.test").debug("found file at %s", "file")

        assert _output(out) == ""
