"""
validation/models.py

Value types produced by the validation engine.

Every problem the engine finds is represented as a ``ValidationError``
value; nothing in this package raises for malformed input rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ErrorType(str, Enum):
    """
    Closed set of problem kinds a validation run can report.
    """

    # Structural
    MISSING_FIELD = "MISSING_FIELD"
    EXTRA_FIELD = "EXTRA_FIELD"
    # Per-cell
    TYPE_MISMATCH = "TYPE_MISMATCH"
    FORMAT_ERROR = "FORMAT_ERROR"
    EMPTY_VALUE = "EMPTY_VALUE"
    # Statistical
    OUTLIER = "OUTLIER"
    # Business-rule kinds reserved for schema-specific rule runners.
    DUPLICATE = "DUPLICATE"
    NEGATIVE_VALUE = "NEGATIVE_VALUE"
    LOW_MARGIN = "LOW_MARGIN"
    DATE_INCONSISTENCY = "DATE_INCONSISTENCY"
    DERIVED_FIELD_ERROR = "DERIVED_FIELD_ERROR"
    BUSINESS_LOGIC_ERROR = "BUSINESS_LOGIC_ERROR"
    INVALID_RANGE = "INVALID_RANGE"
    FUTURE_DATE = "FUTURE_DATE"
    BILLING_ERROR = "BILLING_ERROR"
    DELAYED_PAYMENT = "DELAYED_PAYMENT"
    HIGH_OUTSTANDING = "HIGH_OUTSTANDING"
    LOW_INSURANCE_COVERAGE = "LOW_INSURANCE_COVERAGE"
    LENGTHY_STAY = "LENGTHY_STAY"
    DOCTOR_OVERLOAD = "DOCTOR_OVERLOAD"
    FREQUENT_READMISSION = "FREQUENT_READMISSION"
    SUSPICIOUS_TRANSACTION = "SUSPICIOUS_TRANSACTION"
    PAYMENT_MODE_ANOMALY = "PAYMENT_MODE_ANOMALY"


# Kinds counted when deciding whether a schema fits the file at all.
STRUCTURAL_ERROR_TYPES: frozenset[ErrorType] = frozenset(
    {
        ErrorType.MISSING_FIELD,
        ErrorType.TYPE_MISMATCH,
        ErrorType.FORMAT_ERROR,
    }
)


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FieldType(str, Enum):
    NUMBER = "number"
    DATE = "date"
    STRING = "string"


class FallbackLevel(str, Enum):
    """
    Which layer of the fallback strategy produced a result.
    """

    INDUSTRY = "industry"
    DYNAMIC = "dynamic"
    ALL_PURPOSE = "all-purpose"


# ---------------------------------------------------------------------------
# Result values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationError:
    """
    One detected problem.

    ``row`` is 1-based. Schema-level problems (missing fields, column-wide
    outlier summaries) carry neither ``row`` nor ``column``.
    """

    field: str
    message: str
    type: ErrorType
    severity: Severity
    row: int | None = None
    column: str | None = None


@dataclass(frozen=True)
class ValidationSummary:
    """
    Aggregate counters for one validation run.
    """

    total_rows: int
    total_fields: int
    schema_used: str
    valid_rows: int
    error_rows: int
    warning_count: int
    empty_value_percentage: float
    data_quality_score: float

    @classmethod
    def empty(cls) -> "ValidationSummary":
        return cls(
            total_rows=0,
            total_fields=0,
            schema_used="None",
            valid_rows=0,
            error_rows=0,
            warning_count=0,
            empty_value_percentage=0.0,
            data_quality_score=0.0,
        )


@dataclass(frozen=True)
class ValidationResult:
    """
    Top-level output of a validation call.

    ``fallback_level`` and ``fallback_message`` are set only when a
    fallback layer (dynamic or all-purpose) produced the result.
    """

    is_valid: bool
    errors: tuple[ValidationError, ...]
    warnings: tuple[ValidationError, ...]
    summary: ValidationSummary
    ai_suggestions: tuple[str, ...] | None = None
    fallback_level: FallbackLevel | None = None
    fallback_message: str | None = None
    insights: tuple[str, ...] | None = None
    detected_date_formats: tuple[str, ...] = ()

    def count_errors(self, *, severity: Severity | None = None) -> int:
        """
        Count entries in ``errors``, optionally restricted to one severity.
        """

        if severity is None:
            return len(self.errors)
        return sum(1 for error in self.errors if error.severity is severity)

    def count_structural_errors(self) -> int:
        return sum(1 for error in self.errors if error.type in STRUCTURAL_ERROR_TYPES)
