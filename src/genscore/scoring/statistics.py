"""Aggregate error statistics over a column of per-row diffs.

Only numeric entries take part; ``"?"`` markers for non-numeric actual
values are filtered out before sorting.  Infinity and NaN produced by a
zero expected value propagate into the aggregates unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Sequence

import numpy as np

from genscore.scoring.values import is_numeric, to_float

logger = logging.getLogger(__name__)


@dataclass
class ColumnStatistics:
    """Diff aggregates for one numeric output column."""

    name: str
    count: int
    """Number of numeric diffs the aggregates were computed over."""
    min_diff: float
    max_diff: float
    min_diff_percent: float
    max_diff_percent: float
    mean_diff: float
    std_diff: float
    """Population standard deviation (ddof=0)."""

    def to_dict(self) -> dict[str, Any]:
        return {k: _json_float(v) for k, v in asdict(self).items()}

    def render(self) -> str:
        """Text block appended to the report for this column."""
        return (
            f"\nstats of {self.name}:"
            f"\nMin diff%:{self.min_diff_percent} max diff:{self.max_diff_percent}"
            f"\nMin diff:{self.min_diff} max diff:{self.max_diff}"
            f"\ndiff Mean:{self.mean_diff}"
            f"  diff StandardDeviation:{self.std_diff}"
        )


def _json_float(value: Any) -> Any:
    if isinstance(value, float) and not np.isfinite(value):
        return str(value)
    return value


def sorted_numeric(values: Sequence[Any]) -> np.ndarray:
    """Numeric entries of ``values`` as an ascending float array, NaN last."""
    numeric = [to_float(v) for v in values if is_numeric(v)]
    return np.sort(np.asarray(numeric, dtype=float))


def compute_column_statistics(
    name: str,
    diffs: Sequence[Any],
    diff_percents: Sequence[Any],
) -> ColumnStatistics | None:
    """Compute min/max, mean and population std of a column's diffs.

    Returns ``None`` when the column holds no numeric diff at all.
    """
    d = sorted_numeric(diffs)
    p = sorted_numeric(diff_percents)
    if d.size == 0:
        logger.debug("Column %s has no numeric diffs; skipping statistics.", name)
        return None

    with np.errstate(invalid="ignore", over="ignore"):
        mean = float(np.mean(d))
        std = float(np.std(d, ddof=0))

    return ColumnStatistics(
        name=name,
        count=int(d.size),
        min_diff=float(d[0]),
        max_diff=float(d[-1]),
        min_diff_percent=float(p[0]) if p.size else float("nan"),
        max_diff_percent=float(p[-1]) if p.size else float("nan"),
        mean_diff=mean,
        std_diff=std,
    )
