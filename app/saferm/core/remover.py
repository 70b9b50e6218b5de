"""Removal strategies.

Removers perform the side effect for an entry that survived the
pipeline: delete it, move it to the trash, or (in dry-run mode) only
report what would happen. Every call returns a RemovalResult; races
with other processes surface as ordinary errors.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from send2trash import send2trash

from saferm.core.transform import is_root
from saferm.fs.models import Entry, EntryError, EntryKind, ErrorKind, display_path

logger = logging.getLogger(__name__)


class RemovalAction(Enum):
    """What happened (or would happen) to a removed entry.

    The value is the message template for the action.
    """

    REMOVED = "Removed {path}"
    WOULD_REMOVE = "Would remove {path}"
    TRASHED = "Moved {path} to trash"
    WOULD_TRASH = "Would move {path} to trash"

    def render(self, path: str) -> str:
        """Render the message for a path."""
        return self.value.format(path=display_path(path))


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of handling a single path.

    Attributes:
        path: Path that was operated on.
        success: Whether the path was (or would be) removed.
        action: What was done, set on success.
        error: Why the path was not removed, set on failure.
        dry_run: Whether nothing was actually changed.
    """

    path: str
    success: bool
    action: RemovalAction | None = None
    error: EntryError | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if handling the path failed."""
        return not self.success

    @property
    def message(self) -> str:
        """User-facing message for this result."""
        if self.error is not None:
            return self.error.message
        if self.action is not None:
            return self.action.render(self.path)
        return ""

    @classmethod
    def from_error(cls, error: EntryError, dry_run: bool = False) -> "RemovalResult":
        """Create a failed result for an error."""
        return cls(path=error.path, success=False, error=error, dry_run=dry_run)


class Remover(ABC):
    """Abstract base class for removal strategies.

    Attributes:
        dry_run: If True, only report what would be done.

    Example:
        >>> remover = DeleteRemover(dry_run=True)
        >>> remover.remove(Entry(path="file", kind=EntryKind.FILE)).message
        'Would remove file'
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the remover.

        Args:
            dry_run: If True, only report what would be done.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if remover is in dry-run mode."""
        return self._dry_run

    def remove(self, entry: Entry) -> RemovalResult:
        """Remove a single entry, or report what would be done.

        Args:
            entry: An entry that survived the pipeline.

        Returns:
            RemovalResult indicating success or failure. Dry-run
            results always succeed.
        """
        if self._dry_run:
            return RemovalResult(
                path=entry.path,
                success=True,
                action=self.dry_run_action,
                dry_run=True,
            )

        error = self._remove(entry)
        if error is not None:
            return RemovalResult.from_error(error)
        return RemovalResult(path=entry.path, success=True, action=self.action)

    @property
    @abstractmethod
    def action(self) -> RemovalAction:
        """Action reported for a successful removal."""

    @property
    @abstractmethod
    def dry_run_action(self) -> RemovalAction:
        """Action reported in dry-run mode."""

    @abstractmethod
    def _remove(self, entry: Entry) -> EntryError | None:
        """Perform the removal.

        Returns:
            None on success, the error otherwise.
        """


class DeleteRemover(Remover):
    """Remove entries from the filesystem.

    Directories are removed with rmdir(2), which fails if the directory
    is not empty at that moment. Files and symlinks are unlinked; a
    symlink's target is never touched.
    """

    @property
    def action(self) -> RemovalAction:
        return RemovalAction.REMOVED

    @property
    def dry_run_action(self) -> RemovalAction:
        return RemovalAction.WOULD_REMOVE

    def _remove(self, entry: Entry) -> EntryError | None:
        logger.debug("remove %s", entry.path)
        try:
            if entry.kind == EntryKind.DIRECTORY:
                os.rmdir(entry.path)
            else:
                os.unlink(entry.path)
        except OSError as e:
            return entry.to_error(ErrorKind.from_os_error(e))
        return None


class TrashRemover(Remover):
    """Move entries to the trash bin.

    Directories are moved as a whole, including their content.
    """

    @property
    def action(self) -> RemovalAction:
        return RemovalAction.TRASHED

    @property
    def dry_run_action(self) -> RemovalAction:
        return RemovalAction.WOULD_TRASH

    def _remove(self, entry: Entry) -> EntryError | None:
        logger.debug("dispose of %s", entry.path)
        if is_root(os.path.abspath(entry.path)):
            return entry.to_error(ErrorKind.REFUSED)

        try:
            send2trash(entry.path)
        except PermissionError:
            return entry.to_error(ErrorKind.PERMISSION_DENIED)
        except OSError as e:
            return entry.to_error(ErrorKind.from_os_error(e))
        return None


def get_remover(trash: bool, dry_run: bool) -> Remover:
    """Get the remover for a run.

    Args:
        trash: Move to the trash instead of removing.
        dry_run: Only report what would be done.

    Returns:
        A TrashRemover or DeleteRemover in the requested mode.
    """
    if trash:
        return TrashRemover(dry_run=dry_run)
    return DeleteRemover(dry_run=dry_run)
