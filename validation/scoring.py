"""
validation/scoring.py

Data-quality metrics for a validation run.

Formulas
--------
Empty Value %       = 100 * empty_cells / total_cells
Data Quality Score  = max(0, 100 - 10 * errors - 2 * warnings - empty_value_pct)

Both are rounded to two decimals when reported.
"""

from __future__ import annotations

ERROR_PENALTY = 10.0
WARNING_PENALTY = 2.0


def empty_value_percentage(empty_cells: int, total_cells: int) -> float:
    """
    Share of empty cells as a percentage; ``0.0`` when there are no cells.
    """

    if total_cells <= 0:
        return 0.0
    return (empty_cells / total_cells) * 100


def data_quality_score(
    *,
    error_count: int,
    warning_count: int,
    empty_percentage: float,
) -> float:
    """
    Composite 0-100 score penalising errors, warnings and empty cells.

    Non-increasing in every argument and clamped to ``[0, 100]``.
    """

    raw = 100.0 - error_count * ERROR_PENALTY - warning_count * WARNING_PENALTY - empty_percentage
    return round(min(100.0, max(0.0, raw)), 2)
