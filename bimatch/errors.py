"""Exception types raised by bimatch.

All of them derive from built-in exception classes, so callers that already
catch ``ValueError`` or ``IndexError`` keep working.
"""

from __future__ import annotations


class InvalidSizeError(ValueError):
    """A flow network was requested with a negative or unusable node count."""


class NodeIndexOutOfRangeError(IndexError):
    """A node index fell outside ``[0, total_nodes)``."""

    def __init__(self, message: str, *, index: int, total_nodes: int) -> None:
        super().__init__(message)
        self.index = index
        self.total_nodes = total_nodes


class InputFormatError(ValueError):
    """The matching input could not be parsed or failed validation."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
