"""rlhistory: command history engine for interactive line editors.

The engine keeps an ordered list of entered lines with a movable cursor,
lets a user keep drafts of older lines while navigating, searches the
visible text in either direction, and persists committed lines to an
append-only log file.

Architecture:
    line editor (keys, rendering)
        |
        | update() / new() / prev() / next() / find_*()
        v
    HistoryStore (history.py) -- search.py
        |
        | load() / append() / close()
        v
    HistoryFile (historyfile.py) -> ~/.rlhistory
"""

__version__ = "0.1.0"

from .config import DEFAULT_HISTORY_PATH, HistoryConfig
from .errors import AppendFailure, HistoryError, LoadFailure, RewriteFailure
from .history import Entry, HistoryStore
from .historyfile import HistoryFile, HistoryWriter

__all__ = [
    "DEFAULT_HISTORY_PATH",
    "AppendFailure",
    "Entry",
    "HistoryConfig",
    "HistoryError",
    "HistoryFile",
    "HistoryStore",
    "HistoryWriter",
    "LoadFailure",
    "RewriteFailure",
]
