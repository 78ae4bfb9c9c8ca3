"""Environment-driven settings.

Values are loaded from environment variables (prefix ``GENSCORE_``) or a
``.env`` file in the working directory.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportSettings(BaseSettings):
    """Display conventions and scoring policy for text reports."""

    model_config = SettingsConfigDict(env_prefix="GENSCORE_")

    column_width: int = Field(default=15, ge=4, le=80)
    """Every header and value cell is padded or truncated to this width."""
    non_numeric_marker: str = "?"
    """Written to DIFF and DIFF% when the actual value is not a number."""

    # Policy for rows where the candidate produced no result at all.
    missing_actual_diff: float = 0.0
    missing_actual_diff_percent: float = 100.0

    score_unavailable_marker: str = "n/a"
    """Shown on the score line when the report has no candidate to ask."""


class Settings(BaseSettings):
    """Top-level settings aggregator."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    report: ReportSettings = Field(default_factory=ReportSettings)
    log_format: str = "%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s"


# Module-level singleton; import and use directly.
settings = Settings()


def get_settings() -> Settings:
    """Return the module-level Settings singleton."""
    return settings
