"""Engine error hierarchy.

All engine exceptions inherit from StratlensError, so callers can catch
one type at the API boundary.
"""

from __future__ import annotations


class StratlensError(Exception):
    """Base exception for all stratlens errors."""


class InvalidInputError(StratlensError):
    """Caller supplied a record the engine cannot interpret.

    Stores the position of the offending record (None when the whole
    payload is malformed) and the reason.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        self.message = message
        if index is None:
            super().__init__(message)
        else:
            super().__init__(f"Record {index}: {message}")
