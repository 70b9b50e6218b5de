"""Main CLI application entry point.

Defines the Typer application. Nothing is removed unless --force or
--interactive is given; otherwise every path is reported as what would
be removed.
"""

from typing import Annotated

import typer
from pydantic import ValidationError

from saferm import __version__
from saferm.core.config import EnvSettings, GnuModeError, RunConfig
from saferm.core.runner import RemovalRun, RunSummary
from saferm.core.theme import get_rich_theme
from saferm.utils.formatting import Reporter, create_console

# Exit code for invalid usage, matching click's usage errors
USAGE_ERROR = 2

app = typer.Typer(
    name="saferm",
    help="Remove (unlink) the PATH(s).",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"saferm version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    paths: Annotated[
        list[str] | None,
        typer.Argument(help="The paths to remove.", show_default=False),
    ] = None,
    blind: Annotated[
        bool,
        typer.Option("--blind", "-b", help="Ignore nonexistent files and directories."),
    ] = False,
    dir_mode: Annotated[
        bool,
        typer.Option("--dir", "-d", help="Remove empty directories."),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Remove without prompt."),
    ] = False,
    interactive: Annotated[
        bool,
        typer.Option(
            "--interactive",
            "-i",
            help='Prompt to remove. Answer "y" or "yes" to remove, "n" or "no" to keep.',
        ),
    ] = False,
    no_preserve_root: Annotated[
        bool,
        typer.Option("--no-preserve-root", help="Do not treat the file system root specially."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Don't output to stdout. Only with --force."),
    ] = False,
    recursive: Annotated[
        bool,
        typer.Option(
            "--recursive", "-r", help="Recursively remove directories and their contents."
        ),
    ] = False,
    trash: Annotated[
        bool,
        typer.Option("--trash", "-t", help="Move to the trash bin instead of removing."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Explain what is being done."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Remove (unlink) the PATH(s).

    Does not remove anything by default, use either --force or
    --interactive to perform the removal. Does not remove directories
    by default either, use --dir to remove empty directories or
    --recursive to remove directories and their contents.

    To remove a file whose name starts with a '-', for example '-foo',
    use the special '--' option or prefix the path with './'.
    """
    theme = get_rich_theme()
    err_console = create_console(theme, stderr=True)

    try:
        config = RunConfig(
            blind=blind,
            dir_mode=dir_mode,
            force=force,
            interactive=interactive,
            no_preserve_root=no_preserve_root,
            quiet=quiet,
            recursive=recursive,
            trash=trash,
            verbose=verbose,
        ).with_environment(EnvSettings.from_environ())
    except (ValidationError, GnuModeError) as e:
        Reporter(err_console=err_console).usage_error(_usage_message(e))
        raise typer.Exit(code=USAGE_ERROR) from e

    reporter = Reporter(
        config.verbosity,
        console=create_console(theme),
        err_console=err_console,
    )

    summary = RunSummary()
    with reporter.capture_logs():
        run = RemovalRun(config)
        for result in run.execute(paths or []):
            reporter.report(result)
            summary.record(result)

    reporter.summary(summary, dry_run=config.dry_run)

    if summary.failed:
        raise typer.Exit(code=1)


def _usage_message(error: Exception) -> str:
    """Extract a one-line message from a configuration error."""
    if isinstance(error, ValidationError):
        return "; ".join(
            str(detail["ctx"]["error"]) if "ctx" in detail else detail["msg"]
            for detail in error.errors()
        )
    return str(error)


if __name__ == "__main__":
    app()
