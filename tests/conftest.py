"""Shared test fixtures for the rlhistory test suite."""

import pytest

from rlhistory.config import HistoryConfig
from rlhistory.history import HistoryStore


class MemoryWriter:
    """HistoryWriter keeping lines in memory, for store tests."""

    def __init__(self, lines=None, fail_append=None):
        self.lines = list(lines or [])
        self.appended = []
        self.closed = 0
        self.fail_append = fail_append

    def load(self):
        return list(self.lines)

    def append(self, line):
        if self.fail_append is not None:
            raise self.fail_append
        self.appended.append(line)

    def close(self):
        self.closed += 1


@pytest.fixture
def make_store():
    """Build an initialized store over an in-memory log.

    Returns (store, writer).
    """

    def _make(lines=(), limit=100, fold=False, **writer_kwargs):
        writer = MemoryWriter(lines, **writer_kwargs)
        config = HistoryConfig(
            history_limit=limit,
            history_search_fold=fold,
            history_writer=writer,
        )
        store = HistoryStore(config)
        store.init()
        return store, writer

    return _make


@pytest.fixture
def history_path(tmp_path):
    """Path of a (not yet created) history log file."""
    return tmp_path / "history"
