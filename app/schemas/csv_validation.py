"""
app/schemas/csv_validation.py

Response schemas for CSV validation endpoints.

Keys serialize in camelCase, matching the names the dashboard consumes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from validation.models import ValidationError, ValidationResult, ValidationSummary


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ValidationErrorResponse(_CamelModel):
    """
    API response model for one detected problem.
    """

    field: str
    message: str
    type: str
    severity: str
    row: int | None = Field(default=None, ge=1)
    column: str | None = None

    @classmethod
    def from_error(cls, error: ValidationError) -> "ValidationErrorResponse":
        return cls(
            field=error.field,
            message=error.message,
            type=error.type.value,
            severity=error.severity.value,
            row=error.row,
            column=error.column,
        )


class ValidationSummaryResponse(_CamelModel):
    total_rows: int = Field(..., ge=0)
    total_fields: int = Field(..., ge=0)
    schema_used: str
    valid_rows: int = Field(..., ge=0)
    error_rows: int = Field(..., ge=0)
    warning_count: int = Field(..., ge=0)
    empty_value_percentage: float = Field(..., ge=0.0, le=100.0)
    data_quality_score: float = Field(..., ge=0.0, le=100.0)

    @classmethod
    def from_summary(cls, summary: ValidationSummary) -> "ValidationSummaryResponse":
        return cls(
            total_rows=summary.total_rows,
            total_fields=summary.total_fields,
            schema_used=summary.schema_used,
            valid_rows=summary.valid_rows,
            error_rows=summary.error_rows,
            warning_count=summary.warning_count,
            empty_value_percentage=summary.empty_value_percentage,
            data_quality_score=summary.data_quality_score,
        )


class ValidationResultResponse(_CamelModel):
    """
    API response model for a complete validation run.
    """

    is_valid: bool
    errors: list[ValidationErrorResponse] = Field(default_factory=list)
    warnings: list[ValidationErrorResponse] = Field(default_factory=list)
    summary: ValidationSummaryResponse
    ai_suggestions: list[str] | None = None
    fallback_level: str | None = None
    fallback_message: str | None = None
    insights: list[str] | None = None
    detected_date_formats: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResultResponse":
        return cls(
            is_valid=result.is_valid,
            errors=[ValidationErrorResponse.from_error(error) for error in result.errors],
            warnings=[ValidationErrorResponse.from_error(error) for error in result.warnings],
            summary=ValidationSummaryResponse.from_summary(result.summary),
            ai_suggestions=list(result.ai_suggestions) if result.ai_suggestions is not None else None,
            fallback_level=result.fallback_level.value if result.fallback_level else None,
            fallback_message=result.fallback_message,
            insights=list(result.insights) if result.insights is not None else None,
            detected_date_formats=list(result.detected_date_formats),
        )


class IndustryListResponse(_CamelModel):
    """
    Registered industry schemas and the placeholder used for unknown names.
    """

    industries: list[str]
    generic_industry: str
    default_industry: str


class HealthResponse(BaseModel):
    status: str = "ok"
