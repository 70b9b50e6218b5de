"""Safety policies applied to every visited path.

A Transformer maps one Outcome to another: it leaves it untouched,
turns an entry into an error (optionally with a tip), or marks it as
skipped. A Pipeline applies a fixed sequence of transformers left to
right without short-circuiting.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import PurePath

from saferm.fs.models import ErrorKind, Outcome
from saferm.fs.resolver import is_empty

TIP_IS_DIR = "use '--dir' to remove"
TIP_DIR_NOT_EMPTY = "use '--recursive' to remove"
TIP_NOT_FOUND = "use '--blind' to ignore"

SKIP_REASON_NOT_FOUND = "Not found"


class Transformer(ABC):
    """A single policy stage of the pipeline.

    Implementations must be pure with respect to the Outcome: they
    return a new Outcome and never mutate the given one.
    """

    @abstractmethod
    def transform(self, outcome: Outcome) -> Outcome:
        """Map an outcome to a (possibly) different outcome.

        Args:
            outcome: Outcome produced by the previous stage.

        Returns:
            Outcome for the next stage.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Identity(Transformer):
    """Return every outcome untouched."""

    def transform(self, outcome: Outcome) -> Outcome:
        return outcome


class RefuseDotPaths(Transformer):
    """Refuse paths whose last component is `.` or `..`."""

    def transform(self, outcome: Outcome) -> Outcome:
        entry = outcome.entry
        if entry is None or not _is_current_or_parent_dir(entry.path):
            return outcome
        return outcome.replace_result(entry.to_error(ErrorKind.REFUSED))


class RefuseRoot(Transformer):
    """Refuse the filesystem root."""

    def transform(self, outcome: Outcome) -> Outcome:
        entry = outcome.entry
        if entry is None or not is_root(entry.path):
            return outcome
        return outcome.replace_result(entry.to_error(ErrorKind.REFUSED))


class SkipNotFound(Transformer):
    """Silently skip paths that do not exist."""

    def transform(self, outcome: Outcome) -> Outcome:
        error = outcome.error
        if error is None or error.kind != ErrorKind.NOT_FOUND:
            return outcome
        return outcome.skipped(SKIP_REASON_NOT_FOUND)


class TipNotFound(Transformer):
    """Attach a tip on how to ignore paths that do not exist."""

    def transform(self, outcome: Outcome) -> Outcome:
        error = outcome.error
        if error is None or error.kind != ErrorKind.NOT_FOUND:
            return outcome
        return outcome.replace_result(error.with_tip(TIP_NOT_FOUND))


class RefuseAllDirs(Transformer):
    """Turn every directory into an IS_A_DIRECTORY error."""

    def transform(self, outcome: Outcome) -> Outcome:
        entry = outcome.entry
        if entry is None or not entry.is_dir:
            return outcome
        error = entry.to_error(ErrorKind.IS_A_DIRECTORY).with_tip(TIP_IS_DIR)
        return outcome.replace_result(error)


class RefuseFilledDirs(Transformer):
    """Turn non-empty directories into a DIRECTORY_NOT_EMPTY error."""

    def transform(self, outcome: Outcome) -> Outcome:
        entry = outcome.entry
        if entry is None or not entry.is_dir or is_empty(entry):
            return outcome
        error = entry.to_error(ErrorKind.DIRECTORY_NOT_EMPTY).with_tip(TIP_DIR_NOT_EMPTY)
        return outcome.replace_result(error)


class Pipeline:
    """An ordered, fixed sequence of transformers.

    Every stage runs for every outcome, even errors and skipped outcomes;
    stages are expected to leave outcomes they do not care about alone.

    Example:
        >>> pipeline = Pipeline([RefuseDotPaths(), RefuseRoot()])
        >>> result = pipeline.apply(Outcome(resolve(".")))
    """

    def __init__(self, transformers: Iterable[Transformer]) -> None:
        """Initialize the pipeline.

        Args:
            transformers: Stages, in the order they are applied.
        """
        self._transformers = tuple(transformers)

    @property
    def transformers(self) -> tuple[Transformer, ...]:
        """Stages of this pipeline, in order."""
        return self._transformers

    def apply(self, outcome: Outcome) -> Outcome:
        """Run an outcome through every stage, left to right."""
        for transformer in self._transformers:
            outcome = transformer.transform(outcome)
        return outcome

    def __len__(self) -> int:
        return len(self._transformers)


def is_root(path: str) -> bool:
    """Check if a path is the filesystem root (a path without parent)."""
    pure = PurePath(path)
    return bool(pure.anchor) and pure.parent == pure


def _is_current_or_parent_dir(path: str) -> bool:
    """Check if the last component of a path is `.` or `..`."""
    return os.path.basename(path.rstrip(os.sep)) in (".", "..")


def directory_policy(dir_mode: bool, recursive: bool) -> Transformer:
    """Select the directory admission stage.

    Args:
        dir_mode: Whether empty directories may be removed.
        recursive: Whether directories and their content may be removed.

    Returns:
        RefuseAllDirs, RefuseFilledDirs, or Identity when recursive.
    """
    if recursive:
        return Identity()
    if dir_mode:
        return RefuseFilledDirs()
    return RefuseAllDirs()
