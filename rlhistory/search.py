"""Incremental substring search over history entries.

Searches start at the store's cursor and walk toward older (backward) or
newer (forward) entries, matching against each entry's visible text.
Neither direction moves the cursor; the caller does that with
``HistoryStore.set_cursor`` once it accepts a match.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .history import HistoryStore


def runes_equal(a: str, b: str, fold: bool) -> bool:
    """Compare two characters, ignoring case when ``fold`` is set."""
    if a == b:
        return True
    if not fold:
        return False
    return a.lower() == b.lower() or a.upper() == b.upper()


def _matches_at(text: str, pattern: str, i: int, fold: bool) -> bool:
    for j, ch in enumerate(pattern):
        if not runes_equal(text[i + j], ch, fold):
            return False
    return True


def index_all(text: str, pattern: str, fold: bool) -> int:
    """Return the first offset of ``pattern`` in ``text``, or -1."""
    for i in range(len(text)):
        if len(text) - i < len(pattern):
            return -1
        if _matches_at(text, pattern, i, fold):
            return i
    return -1


def index_all_backward(text: str, pattern: str, fold: bool) -> int:
    """Return the last offset of ``pattern`` in ``text``, or -1."""
    for i in range(len(text) - len(pattern), -1, -1):
        if _matches_at(text, pattern, i, fold):
            return i
    return -1


def find_backward(
    store: HistoryStore, is_new_search: bool, pattern: str, start: int
) -> tuple[int, int | None]:
    """Search from the cursor toward older entries.

    Args:
        store: The history to search.
        is_new_search: Widen the window by ``len(pattern)`` at each step.
        pattern: Text to look for.
        start: Caret position in the cursor's entry; only text left of it
            is searched there.

    Returns:
        ``(offset, index)`` of the last occurrence in the nearest matching
        entry, or ``(-1, None)``.
    """
    if store.cursor is None:
        return -1, None
    fold = store.config.history_search_fold
    for index in range(store.cursor, -1, -1):
        item = store.entry_text(index)
        if is_new_search:
            start += len(pattern)
        if index == store.cursor and len(item) >= start:
            item = item[:start]
        idx = index_all_backward(item, pattern, fold)
        if idx < 0:
            continue
        return idx, index
    return -1, None


def find_forward(
    store: HistoryStore, is_new_search: bool, pattern: str, start: int
) -> tuple[int, int | None]:
    """Search from the cursor toward newer entries.

    In the cursor's own entry only the text from ``start`` on is searched,
    and the returned offset is relative to the whole entry.
    """
    if store.cursor is None:
        return -1, None
    fold = store.config.history_search_fold
    for index in range(store.cursor, len(store)):
        item = store.entry_text(index)
        if is_new_search:
            start = max(start - len(pattern), 0)
        if index == store.cursor:
            if len(item) - 1 < start:
                continue
            item = item[start:]
        idx = index_all(item, pattern, fold)
        if idx < 0:
            continue
        if index == store.cursor:
            idx += start
        return idx, index
    return -1, None
