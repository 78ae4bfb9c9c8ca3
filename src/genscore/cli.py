"""genscore CLI: Typer-based entry point.

Commands
--------
report      Replay recorded outputs against a test set and print the report.
stats       Print the per-column diff statistics as a table.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from genscore.config.settings import get_settings
from genscore.errors import InvalidArgument, ScoringError
from genscore.scoring.replay import ReplayGrid, score_candidate
from genscore.scoring.report import ScoringReport
from genscore.scoring.testset import load_test_set

app = typer.Typer(
    name="genscore",
    help="Fitness diagnostics for evolved candidate programs.",
    add_completion=False,
)


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=get_settings().log_format)


def _load_actuals(path: Path) -> dict[str, list[Any]]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict) or not all(isinstance(v, list) for v in raw.values()):
        raise InvalidArgument(f"{path} must map output names to lists of values")
    return raw


def _build_report(test_set_path: Path, actuals_path: Path) -> ScoringReport:
    test_set = load_test_set(test_set_path)
    grid = ReplayGrid(_load_actuals(actuals_path))
    return score_candidate(test_set, grid)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def report(
    test_set_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Test-set JSON file."),
    actuals_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Recorded outputs JSON file."),
    as_json: bool = typer.Option(False, "--json", help="Emit the report as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Replay recorded outputs against a test set and print the scoring report."""
    _setup_logging(verbose)
    try:
        scoring_report = _build_report(test_set_path, actuals_path)
        output = (
            json.dumps(scoring_report.to_dict(), indent=2)
            if as_json
            else scoring_report.render_report()
        )
    except ScoringError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    typer.echo(output)


@app.command()
def stats(
    test_set_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Test-set JSON file."),
    actuals_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Recorded outputs JSON file."),
) -> None:
    """Print per-column diff statistics for numeric outputs."""
    _setup_logging()
    try:
        scoring_report = _build_report(test_set_path, actuals_path)
        column_stats = scoring_report.statistics()
    except ScoringError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if not column_stats:
        typer.echo("No numeric diffs to summarise.")
        return

    table = Table(title="Diff statistics")
    for header in ("output", "n", "min diff", "max diff", "min diff%", "max diff%", "mean", "std"):
        table.add_column(header, justify="left" if header == "output" else "right")
    for name, s in column_stats.items():
        table.add_row(
            name,
            str(s.count),
            f"{s.min_diff:.4g}",
            f"{s.max_diff:.4g}",
            f"{s.min_diff_percent:.4g}",
            f"{s.max_diff_percent:.4g}",
            f"{s.mean_diff:.4g}",
            f"{s.std_diff:.4g}",
        )
    Console().print(table)


def main() -> int:
    """Console-script entry point."""
    app()
    return 0
