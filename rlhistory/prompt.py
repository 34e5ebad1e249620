"""prompt_toolkit integration.

Lets a PromptSession use a HistoryStore (and its log file) in place of
prompt_toolkit's own FileHistory, so up/down and Ctrl-R in the prompt see
the same lines the engine records.
"""

import logging
from collections.abc import Iterable

from prompt_toolkit.history import History

from .config import HistoryConfig
from .errors import AppendFailure
from .history import HistoryStore

logger = logging.getLogger(__name__)


class StoreHistory(History):
    """prompt_toolkit History backed by a HistoryStore."""

    def __init__(self, store: HistoryStore) -> None:
        super().__init__()
        self.store = store

    def load_history_strings(self) -> Iterable[str]:
        # prompt_toolkit expects the newest string first.
        return list(reversed(self.store.committed_lines()))

    def store_string(self, string: str) -> None:
        try:
            self.store.new(string)
        except AppendFailure as exc:
            # History keeps working in memory; only the log write is lost.
            logger.warning("History not saved: %s", exc)


def get_history(path: str, limit: int) -> StoreHistory:
    """Return a StoreHistory for a PromptSession.

    The log file is created on the first committed line.
    """
    store = HistoryStore(HistoryConfig(history_file=path, history_limit=limit))
    store.init()
    return StoreHistory(store)
