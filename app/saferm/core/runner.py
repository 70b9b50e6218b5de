"""Removal run orchestration.

Assembles the pipeline, walker and remover for a configuration and
streams one RemovalResult per terminal outcome. These functions are
the bridge between the CLI and the removal core.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from saferm.core.config import RunConfig
from saferm.core.interactive import InteractiveConfirm, Prompter
from saferm.core.remover import RemovalResult, Remover, get_remover
from saferm.core.transform import (
    Identity,
    Pipeline,
    RefuseDotPaths,
    RefuseRoot,
    SkipNotFound,
    TipNotFound,
    directory_policy,
)
from saferm.core.walker import GivenWalker, RecurseWalker, Walker
from saferm.fs.models import EntryError

logger = logging.getLogger(__name__)


def build_pipeline(config: RunConfig, prompter: Prompter | None = None) -> Pipeline:
    """Assemble the policy pipeline for a configuration.

    The order is fixed: dot paths, filesystem root, missing paths,
    directory admission, and finally interactive confirmation.

    Args:
        config: Run configuration.
        prompter: Prompter for interactive mode. Defaults to stdin/stderr.

    Returns:
        Pipeline with five stages.
    """
    return Pipeline(
        [
            RefuseDotPaths(),
            Identity() if config.no_preserve_root else RefuseRoot(),
            SkipNotFound() if config.blind else TipNotFound(),
            directory_policy(config.dir_mode, config.recursive),
            InteractiveConfirm(prompter) if config.interactive else Identity(),
        ]
    )


def build_walker(config: RunConfig, pipeline: Pipeline) -> Walker:
    """Select the walker for a configuration.

    Trashing a directory moves its whole tree at once, so there is no
    need to descend when --trash is used.
    """
    if config.recursive and not config.trash:
        return RecurseWalker(pipeline)
    return GivenWalker(pipeline)


@dataclass(slots=True)
class RunSummary:
    """Tally of a removal run.

    Attributes:
        removed: Number of paths removed (or that would be removed).
        errored: Number of paths that produced an error.
    """

    removed: int = 0
    errored: int = 0

    @property
    def failed(self) -> bool:
        """Check if any path produced an error."""
        return self.errored > 0

    def record(self, result: RemovalResult) -> None:
        """Count a single result."""
        if result.success:
            self.removed += 1
        else:
            self.errored += 1


class RemovalRun:
    """A configured removal run over any number of root paths.

    Attributes:
        config: The run configuration.
        walker: Walker used for every root path.
        remover: Remover used for every surviving entry.

    Example:
        >>> run = RemovalRun(RunConfig(force=True, recursive=True))
        >>> for result in run.execute(["build"]):
        ...     print(result.message)
    """

    def __init__(
        self,
        config: RunConfig,
        prompter: Prompter | None = None,
        remover: Remover | None = None,
    ) -> None:
        """Initialize the run.

        Args:
            config: Run configuration.
            prompter: Prompter for interactive mode.
            remover: Remover to use instead of the configured one.
        """
        self.config = config
        self.walker = build_walker(config, build_pipeline(config, prompter))
        self.remover = remover or get_remover(trash=config.trash, dry_run=config.dry_run)

    def execute(self, paths: Iterable[str]) -> Iterator[RemovalResult]:
        """Process root paths in order.

        Skipped outcomes are dropped, errors become failed results, and
        every other entry is handed to the remover. One failing path
        never stops the others.

        Args:
            paths: Root paths, as given by the caller.

        Yields:
            One RemovalResult per removed, would-be-removed, or failed path.
        """
        logger.debug("start processing")
        for path in paths:
            for outcome in self.walker.walk(path):
                if outcome.skip_reason is not None:
                    logger.debug("skipped %s: %s", outcome.path, outcome.skip_reason)
                    continue

                result = outcome.result
                if isinstance(result, EntryError):
                    yield RemovalResult.from_error(result, dry_run=self.config.dry_run)
                else:
                    yield self.remover.remove(result)

    def run(self, paths: Iterable[str]) -> RunSummary:
        """Process root paths and return only the tally."""
        summary = RunSummary()
        for result in self.execute(paths):
            summary.record(result)
        return summary
