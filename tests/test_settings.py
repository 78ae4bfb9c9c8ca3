"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from genscore.config.settings import ReportSettings, Settings, get_settings


class TestReportSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("COLUMN_WIDTH", "NON_NUMERIC_MARKER", "MISSING_ACTUAL_DIFF", "MISSING_ACTUAL_DIFF_PERCENT"):
            monkeypatch.delenv(f"GENSCORE_{var}", raising=False)
        s = ReportSettings()
        assert s.column_width == 15
        assert s.non_numeric_marker == "?"
        assert s.missing_actual_diff == 0.0
        assert s.missing_actual_diff_percent == 100.0

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GENSCORE_COLUMN_WIDTH", "20")
        monkeypatch.setenv("GENSCORE_NON_NUMERIC_MARKER", "n/a")
        s = ReportSettings()
        assert s.column_width == 20
        assert s.non_numeric_marker == "n/a"

    def test_width_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ReportSettings(column_width=2)


class TestSettings:
    def test_singleton(self) -> None:
        assert get_settings() is get_settings()
        assert isinstance(get_settings(), Settings)
        assert isinstance(get_settings().report, ReportSettings)
