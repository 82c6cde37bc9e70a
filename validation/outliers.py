"""
validation/outliers.py

IQR-based outlier detection over numeric columns and the warnings built
from it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from validation.models import ErrorType, Severity, ValidationError

MIN_OUTLIER_VALUES = 4
IQR_MULTIPLIER = 1.5


@dataclass(frozen=True)
class OutlierResult:
    """
    Outlying values and their positions in the input sequence.
    """

    outliers: tuple[float, ...] = ()
    outlier_indices: tuple[int, ...] = ()
    lower_bound: float | None = None
    upper_bound: float | None = None


@dataclass
class NumericColumn:
    """
    Parsed numeric values of one column with the 1-based row each came from.

    Per-run accumulator; the two lists always have equal length.
    """

    values: list[float] = field(default_factory=list)
    row_numbers: list[int] = field(default_factory=list)

    def add(self, value: float, row_number: int) -> None:
        self.values.append(value)
        self.row_numbers.append(row_number)


class OutlierDetector:
    """
    Flags values outside ``[Q1 - 1.5*IQR, Q3 + 1.5*IQR]``.

    Quartiles are taken by index into the sorted values
    (``floor(n * 0.25)`` and ``floor(n * 0.75)``), not interpolated.
    """

    def detect(self, values: Sequence[float]) -> OutlierResult:
        if len(values) < MIN_OUTLIER_VALUES:
            return OutlierResult()

        ordered = sorted(values)
        count = len(ordered)
        q1 = ordered[math.floor(count * 0.25)]
        q3 = ordered[math.floor(count * 0.75)]
        iqr = q3 - q1
        lower = q1 - IQR_MULTIPLIER * iqr
        upper = q3 + IQR_MULTIPLIER * iqr

        outliers: list[float] = []
        indices: list[int] = []
        for index, value in enumerate(values):
            if value < lower or value > upper:
                outliers.append(value)
                indices.append(index)

        return OutlierResult(
            outliers=tuple(outliers),
            outlier_indices=tuple(indices),
            lower_bound=lower,
            upper_bound=upper,
        )


class OutlierReporter:
    """
    Turns per-column outlier detections into one aggregated warning each.
    """

    def __init__(self, detector: OutlierDetector | None = None) -> None:
        self._detector = detector or OutlierDetector()

    def report(self, columns: Mapping[str, NumericColumn]) -> list[ValidationError]:
        warnings: list[ValidationError] = []
        for header, column in columns.items():
            result = self._detector.detect(column.values)
            if not result.outliers:
                continue
            rows = [column.row_numbers[index] for index in result.outlier_indices]
            warnings.append(
                ValidationError(
                    field=header,
                    message=(
                        f"{len(result.outliers)} potential outliers detected in {header} "
                        f"(rows: {', '.join(str(row) for row in rows)})"
                    ),
                    type=ErrorType.OUTLIER,
                    severity=Severity.WARNING,
                )
            )
        return warnings
