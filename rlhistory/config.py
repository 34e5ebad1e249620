"""History configuration.

The line editor owns configuration loading; it hands the engine one of
these. The CLI fills it from command-line options and environment.
"""

import os
from dataclasses import dataclass

from .historyfile import HistoryWriter

# Default log location used by the CLI.
DEFAULT_HISTORY_PATH = os.path.expanduser("~/.rlhistory")

# Maximum entries kept in memory and in the log file.
MAX_HISTORY_ENTRIES = 500


@dataclass(slots=True)
class HistoryConfig:
    """Settings for a HistoryStore.

    Attributes:
        history_file: Log file path. Empty means memory-only history.
        history_limit: Capacity of the store and of the log on load.
            Zero or negative disables the limit.
        history_search_fold: Case-insensitive search when True.
        history_writer: Custom storage backend, used instead of
            history_file when set.
    """

    history_file: str = ""
    history_limit: int = MAX_HISTORY_ENTRIES
    history_search_fold: bool = False
    history_writer: HistoryWriter | None = None
