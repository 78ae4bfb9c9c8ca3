"""Error taxonomy for the scoring engine.

Every fatal condition raised while building or rendering a scoring report
derives from :class:`ScoringError`, so the evolutionary driver can catch one
type and decide whether to penalise the candidate or abort the run.  Each
error also subclasses the builtin it most resembles.

Non-numeric actual values and division by zero in the diff percentage are
*not* errors; they degrade to a marker and to inf/NaN respectively.
"""

from __future__ import annotations

from typing import Any


class ScoringError(Exception):
    """Base class for all scoring failures."""


class InvalidArgument(ScoringError, ValueError):
    """A required input is absent or malformed."""


class UnsupportedDirective(ScoringError, ValueError):
    """A directional expected value carries a directive we cannot score."""

    def __init__(self, directive: Any) -> None:
        super().__init__(f"No support for directive: {directive!r}")
        self.directive = directive


class UnsupportedExpectedType(ScoringError, TypeError):
    """An expected value is neither numeric nor directional feedback."""

    def __init__(self, expected: Any) -> None:
        super().__init__(f"No support for expected value of type {type(expected).__name__}")
        self.expected = expected


class MissingValue(ScoringError, LookupError):
    """A report cell was read before a value was recorded for it."""

    def __init__(self, key: str, row: int) -> None:
        super().__init__(f"No value recorded for {key!r} at row {row}")
        self.key = key
        self.row = row
