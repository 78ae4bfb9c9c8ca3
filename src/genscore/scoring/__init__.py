"""Scoring subsystem.

Compares a candidate's actual outputs with a test set's expected outputs,
row by row, and renders the result as a diagnostic text report.
"""

from __future__ import annotations

from genscore.scoring.report import (
    ACTUAL,
    DIFF,
    DIFF_PERCENT,
    EXPECTED,
    OutputColumn,
    ScoringReport,
)
from genscore.scoring.statistics import ColumnStatistics, compute_column_statistics
from genscore.scoring.testset import Grid, TableTestSet, TestSet, load_test_set
from genscore.scoring.values import (
    UNSET,
    ColumnType,
    Directive,
    DirectionalFeedback,
    NumericExpected,
)

__all__ = [
    "ACTUAL",
    "DIFF",
    "DIFF_PERCENT",
    "EXPECTED",
    "UNSET",
    "ColumnStatistics",
    "ColumnType",
    "Directive",
    "DirectionalFeedback",
    "Grid",
    "NumericExpected",
    "OutputColumn",
    "ScoringReport",
    "TableTestSet",
    "TestSet",
    "compute_column_statistics",
    "load_test_set",
]
