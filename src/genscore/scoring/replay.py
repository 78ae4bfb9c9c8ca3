"""Replay previously recorded candidate outputs into a scoring report.

Useful when a candidate has already been run elsewhere (another process, a
cluster job, a saved generation) and only its outputs are at hand.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

import numpy as np

from genscore.config.settings import ReportSettings
from genscore.errors import InvalidArgument
from genscore.scoring.report import ScoringReport
from genscore.scoring.testset import Grid, TestSet
from genscore.scoring.values import ColumnType, is_numeric

logger = logging.getLogger(__name__)

Scorer = Callable[["ReplayGrid", TestSet], float]


def mean_absolute_diff_percent(grid: ReplayGrid, test_set: TestSet) -> float:
    """Mean absolute diff% across all numeric outputs; 0.0 is a perfect fit.

    Absent rows count with the missing-actual penalty their diff% already
    carries; rows with a non-numeric actual count with the same penalty.
    Returns NaN when the test set has no numeric output rows.
    """
    report = ScoringReport(test_set, None, grid.settings)
    grid.feed(report)
    penalty = report.settings.missing_actual_diff_percent
    errors: list[float] = []
    for name in test_set.output_column_names():
        if test_set.declared_type(name) != ColumnType.NUMERIC:
            continue
        errors.extend(
            abs(float(p)) if is_numeric(p) else penalty
            for p in report.column(name).diff_percent
        )
    if not errors:
        return float("nan")
    with np.errstate(invalid="ignore", over="ignore"):
        return float(np.mean(errors))


class ReplayGrid(Grid):
    """A candidate whose outputs were recorded up front.

    Parameters
    ----------
    outputs:
        Output column name → one recorded value per test-set row.  ``None``
        marks a row for which the candidate produced nothing.
    scorer:
        Computes the overall score; defaults to :func:`mean_absolute_diff_percent`.
    settings:
        Report settings used when scoring and when building reports for this
        candidate; defaults to the global settings.
    """

    def __init__(
        self,
        outputs: Mapping[str, Sequence[Any]],
        scorer: Scorer | None = None,
        settings: ReportSettings | None = None,
    ) -> None:
        self._outputs = {name: list(values) for name, values in outputs.items()}
        self._scorer = scorer or mean_absolute_diff_percent
        self.settings = settings

    @property
    def outputs(self) -> dict[str, list[Any]]:
        return self._outputs

    def feed(self, report: ScoringReport) -> None:
        """Record every replayed value into ``report``."""
        for name, values in self._outputs.items():
            for row, value in enumerate(values):
                report.record_actual_value(name, row, value)

    def score_against(self, test_set: TestSet) -> float:
        return self._scorer(self, test_set)


def score_candidate(test_set: TestSet, grid: ReplayGrid) -> ScoringReport:
    """Build a report for ``grid`` on ``test_set`` and fill it from the replay."""
    missing = set(test_set.output_column_names()) - set(grid.outputs)
    if missing:
        raise InvalidArgument(f"Replay has no values for outputs: {sorted(missing)}")

    report = ScoringReport(test_set, grid, grid.settings)
    grid.feed(report)
    logger.info(
        "Scored replay on %d rows x %d outputs",
        test_set.row_count(),
        len(test_set.output_column_names()),
    )
    return report
