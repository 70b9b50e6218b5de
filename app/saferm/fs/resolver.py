"""Resolve paths into filesystem entries.

Probes never follow symbolic links: a link is classified as a link no
matter what it points to.
"""

import logging
import os
import stat

from saferm.fs.models import Entry, EntryError, EntryKind, ErrorKind

logger = logging.getLogger(__name__)


def resolve(path: str) -> Entry | EntryError:
    """Classify the object at a path without following symlinks.

    Args:
        path: Path to probe, as given by the caller.

    Returns:
        An Entry for a directory, file or symlink, or an EntryError if the
        probe failed (NOT_FOUND when nothing exists at the path).
    """
    try:
        mode = os.lstat(path).st_mode
    except OSError as e:
        logger.debug("found nothing at %s", path)
        return EntryError(path=path, kind=ErrorKind.from_os_error(e))

    if stat.S_ISDIR(mode):
        logger.debug("found directory at %s", path)
        return Entry(path=path, kind=EntryKind.DIRECTORY)

    if stat.S_ISLNK(mode):
        logger.debug("found symbolic link at %s", path)
        return Entry(path=path, kind=EntryKind.SYMLINK)

    # Regular files and special files (FIFOs, sockets, devices) are all unlinked
    logger.debug("found file at %s", path)
    return Entry(path=path, kind=EntryKind.FILE)


def is_empty(entry: Entry) -> bool:
    """Check if an entry has no content.

    A directory is empty when listing it yields nothing, a file when
    reading a single byte yields nothing. Symlinks are always empty.
    Failing to check counts as empty, so that checking never blocks a
    removal by itself.

    Args:
        entry: The entry to check.

    Returns:
        True if the entry is considered empty.
    """
    if entry.kind == EntryKind.SYMLINK:
        return True

    if entry.kind == EntryKind.DIRECTORY:
        try:
            with os.scandir(entry.path) as it:
                return next(it, None) is None
        except OSError:
            return True

    try:
        with open(entry.path, "rb") as f:
            return f.read(1) == b""
    except OSError:
        return True


def list_children(entry: Entry) -> list[str]:
    """List the paths of a directory's immediate children.

    Children are joined onto the directory's path as given, in the order
    the OS lists them.

    Args:
        entry: A directory entry.

    Returns:
        Child paths.

    Raises:
        OSError: If the directory cannot be listed.
    """
    return [os.path.join(entry.path, name) for name in os.listdir(entry.path)]
