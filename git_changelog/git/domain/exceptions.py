"""Exceptions for Git domain."""


class HistoryError(RuntimeError):
    """Raised when the commit history of a range cannot be read."""
