"""Tests for the prompt_toolkit history adapter."""

import logging

from prompt_toolkit.history import History

from rlhistory.errors import AppendFailure
from rlhistory.prompt import StoreHistory, get_history


class TestStoreHistory:
    def test_is_prompt_toolkit_history(self, make_store):
        store, _ = make_store([])
        assert isinstance(StoreHistory(store), History)

    def test_strings_newest_first(self, make_store):
        store, _ = make_store(["a", "b"])
        history = StoreHistory(store)
        assert list(history.load_history_strings()) == ["b", "a"]

    def test_store_string_commits(self, make_store):
        store, writer = make_store(["a", "b"])
        history = StoreHistory(store)
        history.store_string("c")
        assert store.lines() == ["a", "b", "c", ""]
        assert writer.appended == ["c"]

    def test_append_failure_is_logged(self, make_store, caplog):
        store, _ = make_store([], fail_append=AppendFailure("disk full"))
        history = StoreHistory(store)
        with caplog.at_level(logging.WARNING, logger="rlhistory.prompt"):
            history.store_string("x")
        assert "disk full" in caplog.text
        assert store.lines() == ["x", ""]


    def test_unencodable_line_is_logged(self, history_path, caplog):
        history = get_history(str(history_path), 100)
        with caplog.at_level(logging.WARNING, logger="rlhistory.prompt"):
            history.store_string("echo \ud800")
        history.store.close()
        assert "History not saved" in caplog.text
        assert history.store.lines() == ["echo \ud800", ""]


class TestGetHistory:
    def test_new_file(self, history_path):
        history = get_history(str(history_path), 100)
        assert list(history.load_history_strings()) == []
        history.store_string("ls")
        history.store.close()
        assert history_path.read_text() == "ls\n"

    def test_existing_file(self, history_path):
        history_path.write_text("one\ntwo\n")
        history = get_history(str(history_path), 100)
        assert list(history.load_history_strings()) == ["two", "one"]
