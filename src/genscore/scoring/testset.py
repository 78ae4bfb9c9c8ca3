"""Test-set and candidate interfaces, plus an in-memory table implementation.

A test set is a table of named input columns and named output columns, all
with the same number of rows.  Output cells hold the *expected* value for
that row: a :class:`NumericExpected` target or :class:`DirectionalFeedback`.

JSON documents loaded by :func:`load_test_set` look like::

    {
      "inputs":  {"x": {"type": "numeric", "values": [1, 2, 3]}},
      "outputs": {"y": {"type": "numeric",
                        "values": [10, {"target": 5, "directive": "higher"}, 30]}}
    }
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Sequence

from genscore.errors import InvalidArgument
from genscore.scoring.values import (
    ColumnType,
    DirectionalFeedback,
    NumericExpected,
    is_numeric,
    parse_directive,
    to_float,
)

logger = logging.getLogger(__name__)


class TestSet(ABC):
    """Read-only table of labelled input/expected-output cases."""

    __test__ = False  # not a pytest test class

    @abstractmethod
    def input_column_names(self) -> list[str]:
        """Ordered input column names."""

    @abstractmethod
    def output_column_names(self) -> list[str]:
        """Ordered output column names."""

    @abstractmethod
    def values_for(self, name: str) -> Sequence[Any]:
        """Values of column ``name``; ``row_count()`` long."""

    @abstractmethod
    def row_count(self) -> int:
        """Number of test cases."""

    @abstractmethod
    def declared_type(self, name: str) -> ColumnType:
        """Declared type of column ``name``."""


class Grid(ABC):
    """A candidate solution, opaque except for its overall score."""

    @abstractmethod
    def score_against(self, test_set: TestSet) -> float:
        """Overall fitness of this candidate on ``test_set``."""


class TableTestSet(TestSet):
    """In-memory :class:`TestSet` backed by plain lists.

    Parameters
    ----------
    inputs:
        Input column name → values.
    outputs:
        Output column name → expected values.
    types:
        Optional column name → :class:`ColumnType`; missing entries default
        to ``NUMERIC``.
    """

    def __init__(
        self,
        inputs: Mapping[str, Sequence[Any]],
        outputs: Mapping[str, Sequence[Any]],
        types: Mapping[str, ColumnType] | None = None,
    ) -> None:
        overlap = set(inputs) & set(outputs)
        if overlap:
            raise InvalidArgument(f"Column names used as both input and output: {sorted(overlap)}")

        self._inputs = {name: list(values) for name, values in inputs.items()}
        self._outputs = {name: list(values) for name, values in outputs.items()}
        self._types = dict(types or {})

        lengths = {len(v) for v in (*self._inputs.values(), *self._outputs.values())}
        if len(lengths) > 1:
            raise InvalidArgument(f"Columns have differing lengths: {sorted(lengths)}")
        self._rows = lengths.pop() if lengths else 0

    def input_column_names(self) -> list[str]:
        return list(self._inputs)

    def output_column_names(self) -> list[str]:
        return list(self._outputs)

    def values_for(self, name: str) -> list[Any]:
        if name in self._inputs:
            return self._inputs[name]
        if name in self._outputs:
            return self._outputs[name]
        raise InvalidArgument(f"Unknown column: {name!r}")

    def row_count(self) -> int:
        return self._rows

    def declared_type(self, name: str) -> ColumnType:
        if name not in self._inputs and name not in self._outputs:
            raise InvalidArgument(f"Unknown column: {name!r}")
        return self._types.get(name, ColumnType.NUMERIC)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _parse_expected(raw: Any) -> Any:
    """Turn one raw output cell into an expected-value variant."""
    if isinstance(raw, Mapping):
        if "target" not in raw or "directive" not in raw:
            raise InvalidArgument(f"Directional entry needs 'target' and 'directive': {dict(raw)}")
        target = raw["target"]
        if not is_numeric(target):
            raise InvalidArgument(f"Directional target must be numeric, got {target!r}")
        return DirectionalFeedback(target=to_float(target), directive=parse_directive(raw["directive"]))
    if is_numeric(raw):
        return NumericExpected(raw)
    # Non-numeric expected cells (text outputs) are kept verbatim.
    return raw


def _parse_columns(section: Any, kind: str) -> tuple[dict[str, list[Any]], dict[str, ColumnType]]:
    if not isinstance(section, Mapping):
        raise InvalidArgument(f"'{kind}' must be an object mapping column names to columns")
    values: dict[str, list[Any]] = {}
    types: dict[str, ColumnType] = {}
    for name, column in section.items():
        if not isinstance(column, Mapping) or not isinstance(column.get("values"), list):
            raise InvalidArgument(f"Column {name!r} in '{kind}' needs a 'values' list")
        try:
            types[name] = ColumnType(str(column.get("type", "numeric")).lower())
        except ValueError as exc:
            raise InvalidArgument(f"Column {name!r} has unknown type {column.get('type')!r}") from exc
        values[name] = column["values"]
    return values, types


def load_test_set_from_dict(data: Mapping[str, Any]) -> TableTestSet:
    """Build a :class:`TableTestSet` from an already-parsed document."""
    if not isinstance(data, Mapping):
        raise InvalidArgument("Test-set document must be a JSON object")

    inputs, input_types = _parse_columns(data.get("inputs", {}), "inputs")
    raw_outputs, output_types = _parse_columns(data.get("outputs", {}), "outputs")
    outputs = {
        name: [
            _parse_expected(v) if output_types[name] == ColumnType.NUMERIC else v
            for v in column
        ]
        for name, column in raw_outputs.items()
    }
    return TableTestSet(inputs, outputs, {**input_types, **output_types})


def load_test_set(path: Path) -> TableTestSet:
    """Load a test set from a JSON file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"{path} is not valid JSON: {exc}") from exc
    test_set = load_test_set_from_dict(raw)
    logger.info(
        "Loaded test set from %s (%d inputs, %d outputs, %d rows)",
        path,
        len(test_set.input_column_names()),
        len(test_set.output_column_names()),
        test_set.row_count(),
    )
    return test_set
