"""Cell and expected-value types for scoring reports.

Expected values form a closed set of variants: :class:`NumericExpected` for
exact-match targets and :class:`DirectionalFeedback` for "at least" / "at
most" targets.  Actual cells are numeric, non-numeric (text and friends),
absent (``None``), or :data:`UNSET` until the evaluator records them.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from genscore.errors import UnsupportedDirective


class Directive(str, Enum):
    """Direction in which a :class:`DirectionalFeedback` target is satisfied."""

    HIGHER = "higher"
    LOWER = "lower"


class ColumnType(str, Enum):
    """Declared type of a test-set column."""

    NUMERIC = "numeric"
    OTHER = "other"


@dataclass(frozen=True)
class NumericExpected:
    """An exact numeric target."""

    value: float

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DirectionalFeedback:
    """No error while the actual value satisfies ``directive`` relative to ``target``."""

    target: float
    directive: Directive

    def __str__(self) -> str:
        symbol = ">=" if self.directive == Directive.HIGHER else "<="
        return f"{symbol}{self.target}"


ExpectedValue = Union[NumericExpected, DirectionalFeedback]


class _Unset:
    """Sentinel type for cells that have not been recorded yet."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


def is_numeric(value: Any) -> bool:
    """True for real numbers, numpy scalars included; ``bool`` is not numeric."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def to_float(value: Any) -> float:
    """``float(value)``, with integers too large for a float becoming ±inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def is_unset(value: Any) -> bool:
    return value is UNSET


def parse_directive(raw: Any) -> Directive:
    """Coerce ``raw`` into a :class:`Directive` (case-insensitive for strings)."""
    if isinstance(raw, Directive):
        return raw
    if isinstance(raw, str):
        try:
            return Directive(raw.strip().lower())
        except ValueError:
            pass
    raise UnsupportedDirective(raw)


def format_cell(value: Any) -> str:
    """Render a cell for the text report.

    Floats use Python's own ``str`` so infinity and NaN appear as ``inf``
    and ``nan``.
    """
    return str(value)
