"""Append-only history log file.

One history line per text line, newline terminated, no escaping. Blank
lines are never written and are skipped on load. When a load finds more
lines than the configured limit, the file is rewritten with only the
newest lines via a temp file and an atomic rename.

Several processes may append to the same file; each line goes out as a
single write on a file opened in append mode. Rewrites are only safe
when no other process is appending at the same moment.
"""

import logging
import os
import stat
import threading
from collections import deque
from tempfile import mkstemp
from typing import Protocol, TextIO

from .errors import AppendFailure, LoadFailure, RewriteFailure

logger = logging.getLogger(__name__)


class HistoryWriter(Protocol):
    """Storage backend for a HistoryStore."""

    def load(self) -> list[str]:
        """Return stored lines, oldest first."""
        ...

    def append(self, line: str) -> None:
        """Persist one committed line."""
        ...

    def close(self) -> None:
        """Release resources. Safe to call more than once."""
        ...


class HistoryFile:
    """File-backed HistoryWriter.

    Usage::

        log = HistoryFile("~/.rlhistory", limit=500)
        lines = log.load()
        log.append("ls -la")
        log.close()

    load, append and close are serialized by a single lock.
    """

    def __init__(self, path: str, limit: int) -> None:
        self.path = os.path.expanduser(path)
        self.limit = limit
        self._fd: TextIO | None = None
        self._lock = threading.Lock()

    def load(self) -> list[str]:
        """Read the newest ``limit`` lines, compacting the file if needed.

        Raises:
            LoadFailure: If the file cannot be read.
            RewriteFailure: If the file needed compacting and the
                rewrite failed. The original file is kept.
        """
        with self._lock:
            lines, total = _load(self.path, self.limit)
            logger.debug("Loaded %d of %d lines from %s", len(lines), total, self.path)
            if self.limit > 0 and total > self.limit:
                _rewrite(self.path, lines)
            return lines

    def append(self, line: str) -> None:
        """Append one line to the log, opening it on first use.

        Raises:
            AppendFailure: If the file cannot be opened or written.
        """
        with self._lock:
            try:
                self._open_append_only()
                # Single write so concurrent appenders don't interleave.
                self._fd.write(line.strip() + "\n")
                self._fd.flush()
            except (OSError, UnicodeError) as exc:
                raise AppendFailure(
                    f"Cannot append to {self.path}: {exc}", self.path
                ) from exc

    def close(self) -> None:
        """Close the append handle if one is open."""
        with self._lock:
            if self._fd is None:
                return
            self._fd.close()
            self._fd = None

    # expects the lock to be held
    def _open_append_only(self) -> None:
        if self._fd is not None:
            return
        self._fd = open(self.path, "a", encoding="utf-8")
        logger.debug("Opened %s for append", self.path)


def _load(path: str, limit: int) -> tuple[list[str], int]:
    """Return the last ``limit`` non-blank lines and the total line count."""
    window: deque[str] = deque(maxlen=limit if limit > 0 else None)
    total = 0
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            for raw in f:
                total += 1
                line = raw.strip()
                if not line:
                    continue
                window.append(line)
    except OSError as exc:
        raise LoadFailure(f"Cannot read {path}: {exc}", path) from exc
    return list(window), total


def _rewrite(path: str, lines: list[str]) -> None:
    """Atomically replace ``path`` with ``lines``."""
    directory = os.path.dirname(path) or "."
    try:
        fd, tmp = mkstemp(prefix=os.path.basename(path) + ".", suffix=".tmp", dir=directory)
    except OSError as exc:
        raise RewriteFailure(f"Cannot create temp file for {path}: {exc}", path) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            # mkstemp creates 0600; keep the log's own permissions.
            os.chmod(tmp, stat.S_IMODE(os.stat(path).st_mode))
            for line in lines:
                f.write(line + "\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except OSError as exc:
        try:
            os.unlink(tmp)
        except OSError:
            logger.warning("Could not remove temp file %s", tmp)
        raise RewriteFailure(f"Cannot rewrite {path}: {exc}", path) from exc

    logger.debug("Rewrote %s with %d lines", path, len(lines))
