"""genscore: fitness diagnostics for evolved candidate programs.

Scores a candidate's outputs against a labelled test set, column by column,
and renders a fixed-width report with per-column error statistics and the
candidate's overall score.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
