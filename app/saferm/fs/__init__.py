"""Filesystem entries and their resolution.

This module provides the data model shared by every stage of a removal
run and the read-only probes used to classify paths.
"""

from saferm.fs.models import Entry, EntryError, EntryKind, ErrorKind, Outcome, display_path
from saferm.fs.resolver import is_empty, list_children, resolve

__all__ = [
    "Entry",
    "EntryError",
    "EntryKind",
    "ErrorKind",
    "Outcome",
    "display_path",
    "is_empty",
    "list_children",
    "resolve",
]
