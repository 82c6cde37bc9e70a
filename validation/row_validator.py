"""
validation/row_validator.py

Runs one schema against one dataset and produces a ValidationResult.

Pipeline
--------
1. Header mapping     : fuzzy-map schema fields to CSV headers, or map
                        every header to itself for the all-purpose schema.
2. Extra-field check  : headers no schema field claims become warnings.
3. Cell scan          : empty cells, numeric and date checks per cell;
                        valid numbers are collected per column.
4. Outlier pass       : one aggregated warning per outlying column.
5. Metrics            : empty-value percentage and data-quality score.
6. Structural collapse: one extra FORMAT_ERROR when most checks failed.
7. Insights           : short observations about the dataset.

Holds no state between runs; every call builds fresh accumulators.
"""

from __future__ import annotations

import re
from typing import Mapping, Sequence

from validation.field_matcher import FieldMapping, FieldMatcher
from validation.insights import InsightContext, InsightGenerator
from validation.models import (
    STRUCTURAL_ERROR_TYPES,
    ErrorType,
    FallbackLevel,
    FieldType,
    Severity,
    ValidationError,
    ValidationResult,
    ValidationSummary,
)
from validation.outliers import NumericColumn, OutlierReporter
from validation.registry import Schema
from validation.scoring import data_quality_score, empty_value_percentage
from validation.type_validators import is_valid_date, parse_number

Row = Mapping[str, str | None]

# Share of failed structural checks above which the file is reported as
# having an unclear structure. Tunable; the value has no recorded derivation.
STRUCTURAL_COLLAPSE_RATIO = 0.5

_WORD_SPLIT = re.compile(r"[\s_\-]+")


def describe_fallback(level: FallbackLevel) -> str:
    return f"We applied {level.value} format due to column mismatch."


class RowValidator:
    """
    Validates a dataset against a single schema.
    """

    def __init__(
        self,
        *,
        matcher: FieldMatcher | None = None,
        outlier_reporter: OutlierReporter | None = None,
        insight_generator: InsightGenerator | None = None,
        collapse_ratio: float = STRUCTURAL_COLLAPSE_RATIO,
    ) -> None:
        self._matcher = matcher or FieldMatcher()
        self._outlier_reporter = outlier_reporter or OutlierReporter()
        self._insight_generator = insight_generator or InsightGenerator()
        self._collapse_ratio = collapse_ratio

    def run(
        self,
        dataset: Sequence[Row],
        schema: Schema,
        schema_name: str,
        fallback_level: FallbackLevel | None = None,
    ) -> ValidationResult:
        headers = list(dataset[0].keys()) if dataset else []
        all_purpose = schema.is_all_purpose or fallback_level is FallbackLevel.ALL_PURPOSE

        errors: list[ValidationError] = []
        warnings: list[ValidationError] = []
        suggestions: list[str] = []
        missing_fields: list[str] = []

        # --- Step 1: header mapping ---
        if all_purpose:
            mapping = FieldMapping.identity(headers)
        else:
            mapping = self._matcher.resolve_mapping(schema.expected_fields, headers)
            for field_name in schema.required:
                if mapping.header_for(field_name) is not None:
                    continue
                missing_fields.append(field_name)
                errors.append(
                    ValidationError(
                        field=field_name,
                        message=f'Required field "{field_name}" is missing from your CSV headers',
                        type=ErrorType.MISSING_FIELD,
                        severity=Severity.ERROR,
                    )
                )
                hint = self._suggest_header(field_name, headers)
                if hint is not None:
                    suggestions.append(f'Consider mapping "{hint}" to "{field_name}"')

            # --- Step 2: extra fields ---
            warnings.extend(self._extra_field_warnings(schema, mapping, headers))

        # --- Step 3: cell scan ---
        header_types: dict[str, FieldType | None] = {
            header: schema.type_for(mapping.field_for(header)) for header in headers
        }
        issue_severity = Severity.WARNING if all_purpose else Severity.ERROR
        issue_sink = warnings if all_purpose else errors

        numeric_columns: dict[str, NumericColumn] = {}
        date_formats: set[str] = set()
        total_cells = 0
        empty_cells = 0
        valid_rows = 0
        error_rows = 0

        for row_number, row in enumerate(dataset, start=1):
            row_has_errors = False
            for header in headers:
                total_cells += 1
                raw = row.get(header)
                text = "" if raw is None else str(raw)

                if not text.strip():
                    empty_cells += 1
                    warnings.append(
                        ValidationError(
                            field=header,
                            message="Empty value found",
                            type=ErrorType.EMPTY_VALUE,
                            severity=Severity.WARNING,
                            row=row_number,
                            column=header,
                        )
                    )
                    continue

                expected = header_types.get(header)
                issue: ValidationError | None = None

                if expected is FieldType.NUMBER:
                    number = parse_number(text)
                    if number is None:
                        issue = ValidationError(
                            field=header,
                            message=f'Invalid number format: "{text}" at row {row_number}',
                            type=ErrorType.TYPE_MISMATCH,
                            severity=issue_severity,
                            row=row_number,
                            column=header,
                        )
                    else:
                        numeric_columns.setdefault(header, NumericColumn()).add(number, row_number)

                elif expected is FieldType.DATE:
                    check = is_valid_date(text)
                    if not check.is_valid:
                        issue = ValidationError(
                            field=header,
                            message=(
                                f'Invalid date format: "{text}" at row {row_number}. '
                                "Supported formats: YYYY-MM-DD, MM/DD/YYYY, DD.MM.YYYY, etc."
                            ),
                            type=ErrorType.FORMAT_ERROR,
                            severity=issue_severity,
                            row=row_number,
                            column=header,
                        )
                    elif check.detected_format:
                        date_formats.add(check.detected_format)

                if issue is not None:
                    issue_sink.append(issue)
                    if not all_purpose:
                        row_has_errors = True

            if row_has_errors:
                error_rows += 1
            else:
                valid_rows += 1

        # --- Step 4: outliers ---
        warnings.extend(self._outlier_reporter.report(numeric_columns))

        # --- Step 5: metrics ---
        empty_pct = empty_value_percentage(empty_cells, total_cells)
        quality = data_quality_score(
            error_count=len(errors),
            warning_count=len(warnings),
            empty_percentage=empty_pct,
        )
        is_valid = not errors and not missing_fields

        # --- Step 6: structural collapse ---
        if not all_purpose:
            structural = sum(1 for error in errors if error.type in STRUCTURAL_ERROR_TYPES)
            total_checks = len(schema.required) + len(dataset) * schema.typed_field_count
            if structural > total_checks * self._collapse_ratio:
                errors.append(
                    ValidationError(
                        field="Structure",
                        message=(
                            "Unclear file structure detected - consider trying a different "
                            "industry schema or use All-Purpose format"
                        ),
                        type=ErrorType.FORMAT_ERROR,
                        severity=Severity.ERROR,
                    )
                )

        # --- Step 7: insights ---
        insights = self._insight_generator.generate(
            InsightContext(
                headers=tuple(headers),
                total_rows=len(dataset),
                empty_value_percentage=empty_pct,
                data_quality_score=quality,
            )
        )

        reported_level = fallback_level if fallback_level is not FallbackLevel.INDUSTRY else None
        return ValidationResult(
            is_valid=is_valid,
            errors=tuple(errors),
            warnings=tuple(warnings),
            summary=ValidationSummary(
                total_rows=len(dataset),
                total_fields=len(headers),
                schema_used=schema_name,
                valid_rows=valid_rows,
                error_rows=error_rows,
                warning_count=len(warnings),
                empty_value_percentage=round(empty_pct, 2),
                data_quality_score=quality,
            ),
            ai_suggestions=tuple(suggestions) or None,
            fallback_level=reported_level,
            fallback_message=describe_fallback(reported_level) if reported_level else None,
            insights=insights,
            detected_date_formats=tuple(sorted(date_formats)),
        )

    def _extra_field_warnings(
        self,
        schema: Schema,
        mapping: FieldMapping,
        headers: Sequence[str],
    ) -> list[ValidationError]:
        expected = schema.expected_fields
        warnings: list[ValidationError] = []
        claimed = mapping.mapped_headers
        for header in headers:
            if header in claimed or self._matcher.match(header, expected) is not None:
                continue
            warnings.append(
                ValidationError(
                    field=header,
                    message=f'Unexpected field "{header}" found - it will be ignored during analysis',
                    type=ErrorType.EXTRA_FIELD,
                    severity=Severity.WARNING,
                )
            )
        return warnings

    @staticmethod
    def _suggest_header(field_name: str, headers: Sequence[str]) -> str | None:
        """
        Best-effort hint: the first header containing the field's first word.
        """

        words = [word for word in _WORD_SPLIT.split(field_name.lower()) if word]
        if not words:
            return None
        for header in headers:
            if words[0] in header.lower():
                return header
        return None

