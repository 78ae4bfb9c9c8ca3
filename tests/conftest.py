"""Shared test fixtures for genscore.

Provides small in-memory test sets, a stub candidate with a fixed score,
and report settings pinned to their defaults so tests ignore the caller's
environment.
"""

from __future__ import annotations

import pytest

from genscore.config.settings import ReportSettings
from genscore.scoring.testset import Grid, TableTestSet, TestSet
from genscore.scoring.values import (
    ColumnType,
    Directive,
    DirectionalFeedback,
    NumericExpected,
)

# ---------------------------------------------------------------------------
# Candidates
# ---------------------------------------------------------------------------


class FixedScoreGrid(Grid):
    """Candidate stub that always reports the same score and counts queries."""

    def __init__(self, score: float = 0.5) -> None:
        self.score = score
        self.calls = 0

    def score_against(self, test_set: TestSet) -> float:
        self.calls += 1
        return self.score


@pytest.fixture()
def grid() -> FixedScoreGrid:
    return FixedScoreGrid(0.5)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def report_settings() -> ReportSettings:
    """Default report settings, independent of ``GENSCORE_*`` variables."""
    return ReportSettings(
        column_width=15,
        non_numeric_marker="?",
        missing_actual_diff=0.0,
        missing_actual_diff_percent=100.0,
        score_unavailable_marker="n/a",
    )


# ---------------------------------------------------------------------------
# Test sets
# ---------------------------------------------------------------------------


@pytest.fixture()
def exact_test_set() -> TableTestSet:
    """One input ``x`` and one numeric output ``y`` expecting 10, 20, 30."""
    return TableTestSet(
        inputs={"x": [1, 2, 3]},
        outputs={"y": [NumericExpected(10), NumericExpected(20), NumericExpected(30)]},
    )


@pytest.fixture()
def directional_test_set() -> TableTestSet:
    """Output ``y`` must reach at least 5 on row 0 and stay at most 5 on row 1."""
    return TableTestSet(
        inputs={"x": [0, 1]},
        outputs={
            "y": [
                DirectionalFeedback(target=5.0, directive=Directive.HIGHER),
                DirectionalFeedback(target=5.0, directive=Directive.LOWER),
            ]
        },
    )


@pytest.fixture()
def mixed_test_set() -> TableTestSet:
    """A numeric output ``y`` next to a text output ``label``."""
    return TableTestSet(
        inputs={"x": [1, 2, 3, 4]},
        outputs={
            "y": [NumericExpected(v) for v in (10, 20, 30, 40)],
            "label": ["a", "b", "c", "d"],
        },
        types={"label": ColumnType.OTHER},
    )
