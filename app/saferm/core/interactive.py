"""Interactive confirmation of removals.

Asks a yes/no question on the error stream for every surviving entry
and blocks on a single line of standard input for the answer.
"""

import sys
from typing import TextIO

from saferm.core.transform import Transformer
from saferm.fs.models import Entry, EntryKind, Outcome, display_path
from saferm.fs.resolver import is_empty

SKIP_REASON_ANSWER_NO = "Kept by user"
SKIP_REASON_ANSWER_UNKNOWN = "Unrecognized input"
SKIP_REASON_IO_ERROR = "I/O error"

ANSWERS_YES = ("y", "yes")
ANSWERS_NO = ("n", "no")

# Move the cursor up one line and erase that line
CLEAR_LINE = "\x1b[1A\x1b[2K"


def question_for(entry: Entry, visited: bool) -> str:
    """Build the question to ask about an entry.

    Args:
        entry: The entry about to be removed or descended into.
        visited: Whether this is the final (post-descent) visit.

    Returns:
        The prompt text, including the answer hint.
    """
    if entry.kind == EntryKind.DIRECTORY:
        if is_empty(entry):
            question = "Remove empty directory"
        elif visited:
            question = "Remove directory"
        else:
            question = "Descend into directory"
    elif entry.kind == EntryKind.SYMLINK:
        question = "Remove symbolic link"
    else:
        question = "Remove regular file"

    return f"{question} {display_path(entry.path)}? [Y/n] "


class Prompter:
    """Line-based question and answer on a pair of text streams.

    The streams default to sys.stdin and sys.stderr, looked up on every
    question so that redirected streams are honored.
    """

    def __init__(self, reader: TextIO | None = None, writer: TextIO | None = None) -> None:
        """Initialize the Prompter.

        Args:
            reader: Stream to read answers from.
            writer: Stream to write questions to.
        """
        self._reader = reader
        self._writer = writer

    def ask(self, question: str) -> str:
        """Write a question and wait for a single line of input.

        Args:
            question: Text to show, written without a trailing newline.

        Returns:
            The answer with surrounding whitespace removed. Empty at end
            of input.

        Raises:
            OSError: If writing the question or reading the answer fails.
            UnicodeError: If the answer cannot be decoded.
        """
        reader = sys.stdin if self._reader is None else self._reader
        writer = sys.stderr if self._writer is None else self._writer

        writer.write(question)
        writer.flush()

        answer = reader.readline()

        if writer.isatty():
            writer.write(CLEAR_LINE)
            writer.flush()

        return answer.strip()


class InteractiveConfirm(Transformer):
    """Let the user decide whether each surviving entry is kept.

    Errors and already skipped outcomes are returned untouched without
    asking anything.
    """

    def __init__(self, prompter: Prompter | None = None) -> None:
        """Initialize the stage.

        Args:
            prompter: Where to ask questions. Defaults to stdin/stderr.
        """
        self._prompter = prompter or Prompter()

    def transform(self, outcome: Outcome) -> Outcome:
        entry = outcome.entry
        if entry is None or outcome.is_skipped:
            return outcome

        try:
            answer = self._prompter.ask(question_for(entry, outcome.visited))
        except (OSError, UnicodeError):
            return outcome.skipped(SKIP_REASON_IO_ERROR)

        answer = answer.lower()
        if answer in ANSWERS_YES:
            return outcome
        if answer in ANSWERS_NO:
            return outcome.skipped(SKIP_REASON_ANSWER_NO)
        return outcome.skipped(SKIP_REASON_ANSWER_UNKNOWN)
