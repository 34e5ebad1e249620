"""Exceptions raised by the history log and store."""


class HistoryError(Exception):
    """Base class for history persistence errors.

    Attributes:
        path: The log file involved, or None for custom writers.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class LoadFailure(HistoryError):
    """Raised when the history log cannot be read."""


class AppendFailure(HistoryError):
    """Raised when a committed line could not be written to the log.

    The in-memory history is already updated when this is raised.
    """


class RewriteFailure(HistoryError):
    """Raised when compacting the log file fails.

    The original file is left untouched.
    """
