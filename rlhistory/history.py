"""In-memory command history with cursor navigation and drafts.

The store holds entries oldest first. The last entry is a placeholder for
the line currently being typed. Navigating with prev()/next() and calling
update(text, commit=False) keeps the user's edits to older lines as
drafts; drafts belong to the current ``version`` and disappear from view
as soon as new() or revert() bumps it.
"""

import logging
from dataclasses import dataclass

from . import search
from .config import HistoryConfig
from .errors import LoadFailure
from .historyfile import HistoryFile, HistoryWriter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Entry:
    """One history line.

    Attributes:
        committed: The submitted text.
        pending_edit: Uncommitted draft of this line.
        edit_version: Store version the draft belongs to, or None if the
            entry was never edited.
    """

    committed: str = ""
    pending_edit: str = ""
    edit_version: int | None = None

    def visible(self, version: int) -> str:
        """Return the draft if it belongs to ``version``, else the committed text."""
        if self.edit_version == version:
            return self.pending_edit
        return self.committed

    def clean(self) -> None:
        self.committed = ""
        self.pending_edit = ""


class HistoryStore:
    """Ordered history entries with a cursor and a persistent log.

    Usage::

        store = HistoryStore(HistoryConfig(history_file="~/.rlhistory"))
        store.init()
        store.update("ls -l", commit=False)   # stash the edit buffer
        text = store.prev()                   # older line, or None
        store.new("ls -la")                   # commit and log

    Not thread-safe: drive it from a single editing session.
    """

    def __init__(self, config: HistoryConfig | None = None) -> None:
        self.config = config or HistoryConfig()
        self.version = 0
        self.cursor: int | None = None
        self.enabled = True
        self._entries: list[Entry] = []
        self._writer: HistoryWriter | None = None

    def __len__(self) -> int:
        return len(self._entries)

    # --- Lifecycle ---

    @property
    def is_history_closed(self) -> bool:
        """True while no log is attached."""
        return self._writer is None

    def init(self) -> None:
        """Attach the configured log and load its lines.

        Does nothing if a log is already attached. With neither a custom
        writer nor a file configured, history stays memory-only.

        Raises:
            LoadFailure: If the log exists but cannot be read. The store
                still ends with an empty placeholder entry.
            RewriteFailure: If the log needed compacting and that failed.
                The loaded lines are not available in that case.
        """
        if not self.is_history_closed:
            return

        if self.config.history_writer is not None:
            self._writer = self.config.history_writer
        elif not self.config.history_file:
            return
        else:
            self._writer = HistoryFile(self.config.history_file, self.config.history_limit)

        try:
            lines = self._writer.load()
        except LoadFailure as exc:
            if isinstance(exc.__cause__, FileNotFoundError):
                logger.debug("No history log yet at %s", exc.path)
                lines = []
            else:
                self._open_placeholder()
                raise
        except Exception:
            self._open_placeholder()
            raise

        for line in lines:
            self.push(line)
        self._open_placeholder()

    def _open_placeholder(self) -> None:
        self.version += 1
        self.push(None)

    def close(self) -> None:
        """Close and detach the log."""
        if self._writer is not None:
            self._writer.close()
            self._writer = None

    def reset(self) -> None:
        """Drop every entry. The log stays attached."""
        self._entries = []
        self.cursor = None

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        """Stop recording new lines, e.g. while reading a password."""
        self.enabled = False

    # --- Entries ---

    def push(self, text: str | None) -> None:
        """Append an entry, move the cursor to it and compact."""
        self._entries.append(Entry(committed=text or ""))
        self.cursor = len(self._entries) - 1
        self.compact()

    def compact(self) -> None:
        """Drop the oldest entries until the store fits its capacity."""
        limit = self.config.history_limit
        if limit <= 0:
            return
        excess = len(self._entries) - limit
        if excess <= 0:
            return
        del self._entries[:excess]
        if self.cursor is not None:
            self.cursor = max(self.cursor - excess, 0)

    def entry_text(self, index: int) -> str:
        """Return the visible text of the entry at ``index``."""
        return self._entries[index].visible(self.version)

    def current_text(self) -> str | None:
        if self.cursor is None:
            return None
        return self.entry_text(self.cursor)

    def lines(self) -> list[str]:
        """Return the visible text of every entry, oldest first."""
        return [entry.visible(self.version) for entry in self._entries]

    def committed_lines(self) -> list[str]:
        """Return the committed text of every non-empty entry, oldest first."""
        return [entry.committed for entry in self._entries if entry.committed]

    def set_cursor(self, index: int) -> None:
        """Move the cursor, e.g. to an entry returned by a search."""
        if not 0 <= index < len(self._entries):
            raise IndexError(f"history index {index} out of range")
        self.cursor = index

    # --- Editing ---

    def update(self, text: str, commit: bool) -> None:
        """Store ``text`` into the entry at the cursor.

        A commit replaces the entry's text and appends it to the log;
        otherwise the text becomes the entry's draft.

        Raises:
            AppendFailure: If the log write failed. The entry is updated
                regardless.
        """
        if self.cursor is None:
            self.push(text)
            return

        entry = self._entries[self.cursor]
        entry.edit_version = self.version
        try:
            if commit:
                entry.committed = text
                if self._writer is not None:
                    self._writer.append(text)
            else:
                entry.pending_edit = text
        finally:
            self.compact()

    def new(self, text: str) -> None:
        """Commit the line being edited and open a fresh placeholder.

        Re-submitting the previous command unchanged, or an empty line,
        only clears the placeholder. If the user had navigated to an older
        entry, that entry's visible text is what gets committed: its draft
        when it has a current one, otherwise its committed text. ``text``
        is ignored in that case.

        Raises:
            AppendFailure: If the log write failed. History is updated and
                a new placeholder opened regardless.
        """
        if not self.enabled:
            return

        if len(self._entries) >= 2 and text == self._entries[-2].committed:
            self._clean_last()
            return

        if not text and self._entries:
            self._clean_last()
            return

        last = len(self._entries) - 1
        if self.cursor is not None and self.cursor != last:
            text = self.entry_text(self.cursor)
            self.cursor = last

        try:
            self.update(text, commit=True)
        finally:
            self.version += 1
            self.push(None)

    def _clean_last(self) -> None:
        self.cursor = len(self._entries) - 1
        self._entries[self.cursor].clean()
        self.version += 1

    def revert(self) -> None:
        """Discard all drafts and return the cursor to the newest entry."""
        self.version += 1
        self.cursor = len(self._entries) - 1 if self._entries else None

    # --- Navigation ---

    def prev(self) -> str | None:
        """Move to the next older entry and return its text.

        Returns None when there is no older entry.
        """
        if self.cursor is None or self.cursor == 0:
            return None
        self.cursor -= 1
        return self.entry_text(self.cursor)

    def next(self) -> tuple[str | None, bool]:
        """Move to the next newer entry.

        Returns:
            ``(text, True)`` after a move, ``(None, False)`` at the newest
            entry.
        """
        if self.cursor is None or self.cursor >= len(self._entries) - 1:
            return None, False
        self.cursor += 1
        return self.entry_text(self.cursor), True

    # --- Search ---

    def find_backward(self, is_new_search: bool, pattern: str, start: int) -> tuple[int, int | None]:
        return search.find_backward(self, is_new_search, pattern, start)

    def find_forward(self, is_new_search: bool, pattern: str, start: int) -> tuple[int, int | None]:
        return search.find_forward(self, is_new_search, pattern, start)

    def dump(self) -> None:
        """Log every entry at debug level."""
        logger.debug("------- version=%d cursor=%s", self.version, self.cursor)
        for index, entry in enumerate(self._entries):
            logger.debug("%d: %r", index, entry)
