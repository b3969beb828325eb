"""Outcome codes of CDDB operations and the exception that carries them."""

from __future__ import annotations

import enum

__all__ = ["Result", "CDDBError", "result_to_string"]


class Result(enum.Enum):
    """Outcome of a lookup, submission or cache operation."""

    SUCCESS = 0
    SERVER_ERROR = 1
    HOST_NOT_FOUND = 2
    NO_RESPONSE = 3
    NO_RECORD_FOUND = 4
    MULTIPLE_RECORD_FOUND = 5
    CANNOT_SAVE = 6
    INVALID_CATEGORY = 7
    UNKNOWN_ERROR = 8


_DESCRIPTIONS = {
    Result.SUCCESS: "Success",
    Result.SERVER_ERROR: "Server error",
    Result.HOST_NOT_FOUND: "Host not found",
    Result.NO_RESPONSE: "No response",
    Result.NO_RECORD_FOUND: "No record found",
    Result.MULTIPLE_RECORD_FOUND: "Multiple records found",
    Result.CANNOT_SAVE: "Cannot save",
    Result.INVALID_CATEGORY: "Invalid category",
}


def result_to_string(result: Result) -> str:
    """Return a human-readable description of *result*."""
    return _DESCRIPTIONS.get(result, "Unknown error")


class CDDBError(Exception):
    """Raised when a CDDB operation does not succeed."""

    def __init__(self, result: Result, message: str | None = None) -> None:
        self.result = result
        self.message = message if message is not None else result_to_string(result)
        super().__init__(self.message)