"""Exceptions raised by the vector and rotation core."""
from __future__ import annotations


class TrackviewError(Exception):
    """Base class for all trackview errors."""


class FrameMismatchError(TrackviewError, TypeError):
    """Operands live in different frames or use different scalar types."""

    def __init__(self, operation: str, expected: str, actual: str):
        super().__init__(f"{operation}: expected {expected}, got {actual}")
        self.operation = operation
        self.expected = expected
        self.actual = actual


class InvalidVectorError(TrackviewError, ValueError):
    """A vector cannot be used for the requested operation (e.g. zero length)."""


class InvalidAxisError(InvalidVectorError):
    """A rotation axis is degenerate."""
