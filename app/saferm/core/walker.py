"""Filesystem walkers.

A walker turns a root path into a lazy, single-pass sequence of
outcomes, running the pipeline on every visited node. Skipped outcomes
are yielded too; it is up to the consumer to drop them.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field

from saferm.core.transform import Pipeline
from saferm.fs.models import Entry, ErrorKind, Outcome
from saferm.fs.resolver import is_empty, list_children, resolve

logger = logging.getLogger(__name__)


class Walker(ABC):
    """Abstract base class for filesystem walkers.

    Attributes:
        pipeline: Policies applied to every visited node.

    Example:
        >>> walker = RecurseWalker(pipeline)
        >>> for outcome in walker.walk("build"):
        ...     print(outcome.path, outcome.is_skipped)
    """

    def __init__(self, pipeline: Pipeline) -> None:
        """Initialize the walker.

        Args:
            pipeline: Policies applied to every visited node.
        """
        self._pipeline = pipeline

    @property
    def pipeline(self) -> Pipeline:
        """Policies applied to every visited node."""
        return self._pipeline

    @abstractmethod
    def walk(self, path: str) -> Iterator[Outcome]:
        """Walk the filesystem starting at a root path.

        Args:
            path: Root path, as given by the caller.

        Yields:
            One Outcome per visited node.
        """

    def _visit(self, outcome: Outcome) -> Outcome:
        return self._pipeline.apply(outcome)


class GivenWalker(Walker):
    """Visit only the given path, as a final visit."""

    def walk(self, path: str) -> Iterator[Outcome]:
        yield self._visit(Outcome(resolve(path), visited=True))


@dataclass(slots=True)
class _Frame:
    """A directory whose children are still being walked."""

    directory: Entry
    children: list[str] = field(default_factory=list)


class RecurseWalker(Walker):
    """Visit a tree depth-first, in post-order.

    A non-empty directory that survives the pipeline is descended into.
    All of its children, including their subtrees, are yielded before
    the directory itself is run through the pipeline a second time as a
    final visit. Symlinks are never followed.

    Traversal uses an explicit stack, so tree depth is not limited by
    the interpreter's recursion limit.
    """

    def walk(self, path: str) -> Iterator[Outcome]:
        stack: list[_Frame] = []

        result = self._enter(path, stack)
        if result is not None:
            yield result

        while stack:
            frame = stack[-1]
            if not frame.children:
                stack.pop()
                yield self._visit(Outcome(frame.directory, visited=True))
                continue

            result = self._enter(frame.children.pop(), stack)
            if result is not None:
                yield result

    def _enter(self, path: str, stack: list[_Frame]) -> Outcome | None:
        """Visit a path for the first time.

        Pushes a frame when the path is a directory to descend into.

        Returns:
            The outcome to yield right away, or None if the path was
            pushed and its outcome comes after its children.
        """
        outcome = self._visit(Outcome(resolve(path)))
        entry = outcome.entry
        if outcome.is_skipped or entry is None or not entry.is_dir or is_empty(entry):
            return outcome

        try:
            children = list_children(entry)
        except OSError as e:
            return Outcome(entry.to_error(ErrorKind.from_os_error(e)))

        # Popped from the end, so reverse to keep listing order
        children.reverse()
        stack.append(_Frame(directory=entry, children=children))
        return None
