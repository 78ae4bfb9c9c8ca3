"""Per-test-case scoring report for a candidate solution.

A :class:`ScoringReport` is built once per (test set, candidate) evaluation.
The evaluator feeds it one actual value per output column per row through
:meth:`ScoringReport.record_actual_value`; :meth:`ScoringReport.render_report`
then lays every column out as a fixed-width table, appends diff statistics
for numeric outputs, and finishes with the candidate's overall score.

Each output column keeps four aligned sequences: expected, actual, diff and
diff%.  Index *i* in all four always refers to test case *i*.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from genscore.config.settings import ReportSettings, get_settings
from genscore.errors import (
    InvalidArgument,
    MissingValue,
    UnsupportedDirective,
    UnsupportedExpectedType,
)
from genscore.scoring.statistics import ColumnStatistics, compute_column_statistics
from genscore.scoring.testset import Grid, TestSet
from genscore.scoring.values import (
    UNSET,
    ColumnType,
    Directive,
    DirectionalFeedback,
    NumericExpected,
    format_cell,
    is_numeric,
    is_unset,
    to_float,
)

logger = logging.getLogger(__name__)

# Column-key suffixes for the flat report layout.
EXPECTED = "_expected"
ACTUAL = "_actual"
DIFF = "_diff"
DIFF_PERCENT = "_diff%"

SUFFIXES = (EXPECTED, ACTUAL, DIFF, DIFF_PERCENT)


@dataclass
class OutputColumn:
    """The four aligned sequences kept for one output column."""

    name: str
    expected: list[Any]
    actual: list[Any] = field(default_factory=list)
    diff: list[Any] = field(default_factory=list)
    diff_percent: list[Any] = field(default_factory=list)

    @classmethod
    def allocate(cls, name: str, expected: list[Any]) -> OutputColumn:
        n = len(expected)
        return cls(
            name=name,
            expected=list(expected),
            actual=[UNSET] * n,
            diff=[UNSET] * n,
            diff_percent=[UNSET] * n,
        )

    def copy(self) -> OutputColumn:
        return OutputColumn(
            name=self.name,
            expected=list(self.expected),
            actual=list(self.actual),
            diff=list(self.diff),
            diff_percent=list(self.diff_percent),
        )

    def by_suffix(self) -> dict[str, list[Any]]:
        return {
            EXPECTED: self.expected,
            ACTUAL: self.actual,
            DIFF: self.diff,
            DIFF_PERCENT: self.diff_percent,
        }


def assure_length(text: str, width: int) -> str:
    """Pad ``text`` with spaces, or cut it, to exactly ``width`` characters."""
    return text[:width].ljust(width)


def _percent(diff: float, base: float) -> float:
    # IEEE semantics: a zero or tiny base yields ±inf or NaN instead of raising.
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.float64(diff) / np.float64(base) * 100)


class ScoringReport:
    """Actual-vs-expected report for one candidate on one test set.

    Parameters
    ----------
    test_set:
        The cases the candidate is evaluated on.  Required.
    grid:
        The candidate.  Only its :meth:`~Grid.score_against` is used, for the
        final score line.  ``None`` renders the score as unavailable.
    settings:
        Display and policy overrides; defaults to the global settings.
    """

    def __init__(
        self,
        test_set: TestSet | None,
        grid: Grid | None = None,
        settings: ReportSettings | None = None,
    ) -> None:
        if test_set is None:
            raise InvalidArgument("test_set is required")

        self._test_set = test_set
        self._grid = grid
        self._settings = settings or get_settings().report
        self._rows = test_set.row_count()

        self._outputs: dict[str, OutputColumn] = {}
        for name in test_set.output_column_names():
            expected = list(test_set.values_for(name))
            self._check_length(name, expected)
            self._outputs[name] = OutputColumn.allocate(name, expected)

        self._inputs: dict[str, list[Any]] = {}
        for name in test_set.input_column_names():
            values = list(test_set.values_for(name))
            self._check_length(name, values)
            self._inputs[name] = values

        logger.debug(
            "ScoringReport allocated: %d inputs, %d outputs, %d rows",
            len(self._inputs), len(self._outputs), self._rows,
        )

    def _check_length(self, name: str, values: list[Any]) -> None:
        if len(values) != self._rows:
            raise InvalidArgument(
                f"Column {name!r} has {len(values)} values, expected {self._rows}"
            )

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_actual_value(self, output_name: str, row_index: int, value: Any) -> None:
        """Store the candidate's output for one cell and derive its diff and diff%."""
        column = self._outputs.get(output_name)
        if column is None:
            raise InvalidArgument(f"Unknown output column: {output_name!r}")
        if not 0 <= row_index < self._rows:
            raise InvalidArgument(f"Row index {row_index} out of range [0, {self._rows})")
        if not is_unset(column.actual[row_index]):
            logger.debug("Overwriting %s row %d", output_name, row_index)

        if value is None:
            diff: Any = self._settings.missing_actual_diff
            diff_percent: Any = self._settings.missing_actual_diff_percent
        elif is_numeric(value):
            diff, diff_percent = self._numeric_diff(to_float(value), column.expected[row_index])
        else:
            diff = diff_percent = self._settings.non_numeric_marker

        column.actual[row_index] = value
        column.diff[row_index] = diff
        column.diff_percent[row_index] = diff_percent

    @staticmethod
    def _numeric_diff(actual: float, expected: Any) -> tuple[float, float]:
        if isinstance(expected, NumericExpected):
            expected = expected.value

        if isinstance(expected, DirectionalFeedback):
            target = to_float(expected.target)
            if expected.directive == Directive.HIGHER:
                diff = max(0.0, target - actual)
            elif expected.directive == Directive.LOWER:
                diff = max(0.0, actual - target)
            else:
                raise UnsupportedDirective(expected.directive)
            return diff, _percent(diff, target)

        if is_numeric(expected):
            base = to_float(expected)
            diff = actual - base
            return diff, _percent(diff, base)

        raise UnsupportedExpectedType(expected)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def column(self, output_name: str) -> OutputColumn:
        """A copy of one output's four sequences; edits do not reach the report."""
        try:
            return self._outputs[output_name].copy()
        except KeyError:
            raise InvalidArgument(f"Unknown output column: {output_name!r}") from None

    @property
    def settings(self) -> ReportSettings:
        return self._settings

    def column_keys(self) -> list[str]:
        """Report column order: inputs, then each output's four suffixed keys."""
        keys = list(self._inputs)
        for name in self._outputs:
            keys.extend(name + suffix for suffix in SUFFIXES)
        return keys

    def columns(self) -> dict[str, list[Any]]:
        """Flat key → values view (copies) keyed as in :meth:`column_keys`."""
        flat: dict[str, list[Any]] = {name: list(v) for name, v in self._inputs.items()}
        for name, column in self._outputs.items():
            for suffix, values in column.by_suffix().items():
                flat[name + suffix] = list(values)
        return flat

    def missing_cells(self) -> list[tuple[str, int]]:
        return [
            (name, i)
            for name, column in self._outputs.items()
            for i, v in enumerate(column.actual)
            if is_unset(v)
        ]

    def is_complete(self) -> bool:
        return not self.missing_cells()

    def statistics(self) -> dict[str, ColumnStatistics]:
        """Diff aggregates for every output whose declared type is numeric."""
        stats: dict[str, ColumnStatistics] = {}
        for name, column in self._outputs.items():
            if self._test_set.declared_type(name) != ColumnType.NUMERIC:
                continue
            result = compute_column_statistics(name, column.diff, column.diff_percent)
            if result is not None:
                stats[name] = result
        return stats

    def score(self) -> float | None:
        if self._grid is None:
            return None
        return self._grid.score_against(self._test_set)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _checked_columns(self) -> tuple[list[str], dict[str, list[Any]]]:
        keys = self.column_keys()
        flat = self.columns()
        for key in keys:
            for row, value in enumerate(flat[key]):
                if is_unset(value):
                    raise MissingValue(key, row)
        return keys, flat

    def render_report(self) -> str:
        """Fixed-width table, per-column diff statistics, and the overall score."""
        keys, flat = self._checked_columns()
        width = self._settings.column_width

        lines = ["".join(assure_length(key, width) for key in keys)]
        for row in range(self._rows):
            lines.append("".join(assure_length(format_cell(flat[key][row]), width) for key in keys))
        parts = ["\n".join(lines), "\n"]

        stats = self.statistics()
        for name in self._outputs:
            if self._test_set.declared_type(name) != ColumnType.NUMERIC:
                continue
            if name in stats:
                parts.append(stats[name].render())
            else:
                parts.append(f"\nstats of {name}: no numeric diffs")

        score = self.score()
        if score is None:
            logger.warning("No candidate attached to report; score unavailable.")
            parts.append(f"\nGridscore:{self._settings.score_unavailable_marker}")
        else:
            parts.append(f"\nGridscore:{score}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe summary: columns, statistics and score."""
        _, flat = self._checked_columns()
        return {
            "rows": self._rows,
            "columns": {key: [_json_cell(v) for v in values] for key, values in flat.items()},
            "statistics": {name: s.to_dict() for name, s in self.statistics().items()},
            "score": _json_cell(self.score()),
        }


def _json_cell(value: Any) -> Any:
    if value is None or isinstance(value, (str, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    return str(value)
