"""Filesystem domain models for removal.

This module defines the core data structures threaded through a removal
run: resolved entries, per-path errors, and the outcome envelope that
carries either of them through the transformer pipeline.
"""

import errno
import os
from dataclasses import dataclass, replace
from enum import Enum


class EntryKind(str, Enum):
    """Kind of filesystem entry.

    Attributes:
        DIRECTORY: Directory (never a symlink to one).
        FILE: Regular file, or any other non-directory object.
        SYMLINK: Symbolic link, whether or not its target exists.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


class ErrorKind(str, Enum):
    """Kind of failure to resolve, admit, or remove an entry.

    Attributes:
        DIRECTORY_NOT_EMPTY: A directory still has content.
        IS_A_DIRECTORY: The entry is a directory and directories are not allowed.
        NOT_FOUND: Nothing exists at the path.
        PERMISSION_DENIED: The user has no access to the entry.
        REFUSED: Removal is refused by policy (e.g. the filesystem root).
        UNKNOWN: Any other error.
    """

    DIRECTORY_NOT_EMPTY = "directory_not_empty"
    IS_A_DIRECTORY = "is_a_directory"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    REFUSED = "refused"
    UNKNOWN = "unknown"

    @property
    def description(self) -> str:
        """Human-readable description used in error messages."""
        return _ERROR_DESCRIPTIONS[self]

    @classmethod
    def from_os_error(cls, error: OSError) -> "ErrorKind":
        """Map an OSError onto the error taxonomy.

        Args:
            error: Exception raised by a filesystem call.

        Returns:
            The matching ErrorKind, UNKNOWN if the errno is not recognized.
        """
        return _ERRNO_KINDS.get(error.errno, cls.UNKNOWN)


_ERROR_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.DIRECTORY_NOT_EMPTY: "Directory not empty",
    ErrorKind.IS_A_DIRECTORY: "Is a directory",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.PERMISSION_DENIED: "Permission denied",
    ErrorKind.REFUSED: "Refused to remove",
    ErrorKind.UNKNOWN: "Unknown error",
}

# rmdir(2) may report a non-empty directory as either ENOTEMPTY or EEXIST
_ERRNO_KINDS: dict[int | None, ErrorKind] = {
    errno.ENOTEMPTY: ErrorKind.DIRECTORY_NOT_EMPTY,
    errno.EEXIST: ErrorKind.DIRECTORY_NOT_EMPTY,
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
}


def display_path(path: str) -> str:
    """Render a path for output.

    Bytes that are not valid UTF-8 reach Python as lone surrogates and
    cannot be written to a UTF-8 stream. They are shown as U+FFFD.
    The path itself must still be used for filesystem calls.

    Example:
        >>> display_path(os.fsdecode(b"\\xff.txt")) == "\\ufffd.txt"
        True
    """
    return os.fsencode(path).decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class EntryError:
    """A failure attributed to exactly one path.

    Attributes:
        path: The path the error concerns.
        kind: What went wrong.
        tip: Optional advisory hint on how to avoid the error.
    """

    path: str
    kind: ErrorKind
    tip: str | None = None

    def with_tip(self, tip: str) -> "EntryError":
        """Return a copy of this error with the given tip attached."""
        return replace(self, tip=tip)

    @property
    def message(self) -> str:
        """Render the error as a user-facing message."""
        text = f"Cannot remove {display_path(self.path)}: {self.kind.description}"
        if self.tip:
            text = f"{text} ({self.tip})"
        return text

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class Entry:
    """A resolved filesystem object.

    Attributes:
        path: Path as given by the caller or found while traversing.
            It is never canonicalized.
        kind: Kind of the object at resolution time.
    """

    path: str
    kind: EntryKind

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def is_dir(self) -> bool:
        """Check if this entry is a directory."""
        return self.kind == EntryKind.DIRECTORY

    def to_error(self, kind: ErrorKind) -> EntryError:
        """Create an error of the given kind for this entry's path."""
        return EntryError(path=self.path, kind=kind)

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class Outcome:
    """An Entry or an EntryError on its way through the pipeline.

    Attributes:
        result: The resolved entry, or the error that replaced it.
        skip_reason: Why the outcome must not reach a remover, if at all.
        visited: Whether this is the final (post-descent) visit of the path.
    """

    result: Entry | EntryError
    skip_reason: str | None = None
    visited: bool = False

    @property
    def entry(self) -> Entry | None:
        """The entry, or None if this outcome is an error."""
        return self.result if isinstance(self.result, Entry) else None

    @property
    def error(self) -> EntryError | None:
        """The error, or None if this outcome is an entry."""
        return self.result if isinstance(self.result, EntryError) else None

    @property
    def path(self) -> str:
        """Path of the underlying entry or error."""
        return self.result.path

    @property
    def is_skipped(self) -> bool:
        """Check if this outcome carries a skip marker."""
        return self.skip_reason is not None

    def replace_result(self, result: Entry | EntryError) -> "Outcome":
        """Return a copy with a different entry or error."""
        return replace(self, result=result)

    def skipped(self, reason: str) -> "Outcome":
        """Return a copy marked as skipped for the given reason."""
        return replace(self, skip_reason=reason)

    def as_visited(self) -> "Outcome":
        """Return a copy marked as visited."""
        return replace(self, visited=True)
