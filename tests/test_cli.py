"""Tests for the genscore CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from genscore.cli import app

runner = CliRunner()


@pytest.fixture()
def files(tmp_path: Path) -> tuple[Path, Path]:
    test_set = {
        "inputs": {"x": {"values": [1, 2, 3]}},
        "outputs": {"y": {"values": [10, 20, {"target": 30, "directive": "higher"}]}},
    }
    actuals = {"y": [11, 18, 25]}
    test_set_path = tmp_path / "testset.json"
    actuals_path = tmp_path / "actuals.json"
    test_set_path.write_text(json.dumps(test_set), encoding="utf-8")
    actuals_path.write_text(json.dumps(actuals), encoding="utf-8")
    return test_set_path, actuals_path


class TestReportCommand:
    def test_text_report(self, files) -> None:
        result = runner.invoke(app, ["report", str(files[0]), str(files[1])])
        assert result.exit_code == 0, result.output
        assert "y_expected" in result.output
        assert "stats of y:" in result.output
        assert "Gridscore:" in result.output

    def test_json_report(self, files) -> None:
        result = runner.invoke(app, ["report", str(files[0]), str(files[1]), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["columns"]["y_diff"] == [1.0, -2.0, 5.0]
        assert data["columns"]["y_expected"][2] == ">=30.0"
        assert data["statistics"]["y"]["count"] == 3

    def test_scoring_error_exits_nonzero(self, files, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"z": [1, 2, 3]}), encoding="utf-8")
        result = runner.invoke(app, ["report", str(files[0]), str(bad)])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_actuals_must_be_lists(self, files, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"y": 3}), encoding="utf-8")
        result = runner.invoke(app, ["report", str(files[0]), str(bad)])
        assert result.exit_code == 1

    def test_missing_file(self, files, tmp_path: Path) -> None:
        result = runner.invoke(app, ["report", str(files[0]), str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_huge_integer_actual_reports_inf(self, files, tmp_path: Path) -> None:
        huge = tmp_path / "huge.json"
        huge.write_text("{\"y\": [1" + "0" * 400 + ", 20, 30]}", encoding="utf-8")
        result = runner.invoke(app, ["report", str(files[0]), str(huge)])
        assert result.exit_code == 0, result.output
        assert "inf" in result.output


class TestStatsCommand:
    def test_table(self, files) -> None:
        result = runner.invoke(app, ["stats", str(files[0]), str(files[1])])
        assert result.exit_code == 0, result.output
        assert "Diff statistics" in result.output
        assert "y" in result.output
