"""
validation/orchestrator.py

Three-layer fallback strategy over RowValidator.

    Layer 1  industry    : the schema the caller selected.
    Layer 2  dynamic     : an alternate schema proposed by a detector.
    Layer 3  all-purpose : a schema synthesized from inferred column types.

Each layer runs only when the previous one left the file structurally
broken. Layer 3 has no required fields and always terminates.

A finance industry whose headers carry any finance keyword is validated
once under the name "Finance" and never escalates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Mapping, Sequence

from validation.detection import BaseSchemaDetector, NullSchemaDetector
from validation.models import (
    ErrorType,
    FallbackLevel,
    Severity,
    ValidationError,
    ValidationResult,
    ValidationSummary,
)
from validation.registry import DEFAULT_REGISTRY, SchemaRegistry, build_all_purpose_schema
from validation.row_validator import RowValidator
from validation.type_inference import TypeInferencer

logger = logging.getLogger(__name__)

# Layer 1 is kept when its structural errors stay within this share of the
# schema's required fields.
MINOR_ISSUE_RATIO = 0.5
# A Layer 2 detection must be strictly more confident than this to be tried.
DYNAMIC_CONFIDENCE_THRESHOLD = 0.6

GENERIC_SCHEMA_NAME = "Generic"
ALL_PURPOSE_SCHEMA_NAME = "All-Purpose (Fallback)"
FINANCE_SCHEMA_NAME = "Finance"
FINANCE_SUGGESTION = "Finance dataset detected - using specialized financial analysis"

# Any one of these header substrings marks an upload for a finance industry
# as finance data, which then stays on layer 1 whatever its errors.
_FINANCE_HEADER_KEYWORDS: tuple[str, ...] = (
    "account", "transaction", "debit", "credit", "balance", "amount",
    "currency", "category", "vendor", "tax", "reconciliation", "approval",
)


@dataclass(frozen=True)
class FallbackPolicy:
    """
    Escalation thresholds. Tunable; the defaults have no recorded derivation.
    """

    minor_issue_ratio: float = MINOR_ISSUE_RATIO
    dynamic_confidence_threshold: float = DYNAMIC_CONFIDENCE_THRESHOLD


def empty_dataset_result() -> ValidationResult:
    return ValidationResult(
        is_valid=False,
        errors=(
            ValidationError(
                field="File",
                message="No data found in CSV file",
                type=ErrorType.FORMAT_ERROR,
                severity=Severity.ERROR,
            ),
        ),
        warnings=(),
        summary=ValidationSummary.empty(),
    )


def _capitalize(name: str) -> str:
    name = name.strip()
    return name[:1].upper() + name[1:]


def is_finance_upload(industry: str, headers: Sequence[str]) -> bool:
    if "finance" not in industry.lower():
        return False
    return any(
        keyword in header.lower() for header in headers for keyword in _FINANCE_HEADER_KEYWORDS
    )


def industry_display_name(industry: str, registry: SchemaRegistry) -> str:
    if registry.is_generic(industry):
        return GENERIC_SCHEMA_NAME
    return _capitalize(industry)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class FallbackOrchestrator:
    """
    Entry point of the engine: picks the layer whose schema fits the file.

    Holds only immutable collaborators, so one instance can serve
    concurrent calls.
    """

    def __init__(
        self,
        *,
        registry: SchemaRegistry | None = None,
        detector: BaseSchemaDetector | None = None,
        policy: FallbackPolicy | None = None,
        row_validator: RowValidator | None = None,
        inferencer: TypeInferencer | None = None,
    ) -> None:
        self._registry = registry or DEFAULT_REGISTRY
        self._detector = detector or NullSchemaDetector()
        self._policy = policy or FallbackPolicy()
        self._row_validator = row_validator or RowValidator()
        self._inferencer = inferencer or TypeInferencer()

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def validate(
        self,
        dataset: Sequence[Mapping[str, str | None]],
        industry: str,
    ) -> ValidationResult:
        if not dataset:
            logger.info("Validation skipped: dataset has no rows")
            return empty_dataset_result()

        headers = list(dataset[0].keys())

        # --- Layer 1: selected industry ---
        schema = self._registry.get(industry)

        if is_finance_upload(industry, headers):
            result = self._row_validator.run(dataset, schema, FINANCE_SCHEMA_NAME)
            logger.info(
                "Validation finished layer=industry schema=%s finance headers detected errors=%d",
                FINANCE_SCHEMA_NAME,
                len(result.errors),
            )
            return replace(result, ai_suggestions=(FINANCE_SUGGESTION,))

        schema_name = industry_display_name(industry, self._registry)
        layer1 = self._row_validator.run(dataset, schema, schema_name)

        if layer1.is_valid or self._registry.is_generic(industry):
            logger.info(
                "Validation finished layer=industry schema=%s valid=%s rows=%d",
                schema_name,
                layer1.is_valid,
                layer1.summary.total_rows,
            )
            return layer1

        structural = layer1.count_structural_errors()
        tolerance = self._policy.minor_issue_ratio * len(schema.required)
        logger.debug(
            "Layer 1 structural errors=%d tolerance=%.1f schema=%s",
            structural,
            tolerance,
            schema_name,
        )
        if structural <= tolerance:
            logger.info(
                "Validation finished layer=industry schema=%s with minor issues errors=%d",
                schema_name,
                len(layer1.errors),
            )
            return layer1

        # --- Layer 2: dynamic detection ---
        logger.info(
            "Escalating past industry schema=%s structural_errors=%d",
            schema_name,
            structural,
        )
        layer2 = self._run_dynamic(dataset, headers, industry, layer1)
        if layer2 is not None:
            return layer2

        # --- Layer 3: all-purpose ---
        inferred = self._inferencer.infer(dataset, headers)
        result = self._row_validator.run(
            dataset,
            build_all_purpose_schema(inferred),
            ALL_PURPOSE_SCHEMA_NAME,
            FallbackLevel.ALL_PURPOSE,
        )
        logger.info(
            "Validation finished layer=all-purpose fields=%d warnings=%d",
            len(inferred),
            len(result.warnings),
        )
        return result

    def _run_dynamic(
        self,
        dataset: Sequence[Mapping[str, str | None]],
        headers: Sequence[str],
        industry: str,
        layer1: ValidationResult,
    ) -> ValidationResult | None:
        detection = self._detector.detect(headers, exclude=industry)
        if detection is None:
            logger.debug("No dynamic schema detected")
            return None

        if detection.name.strip().lower() == industry.strip().lower():
            logger.debug("Dynamic detection repeated the industry schema=%s", detection.name)
            return None

        if detection.confidence <= self._policy.dynamic_confidence_threshold:
            logger.debug(
                "Dynamic detection below threshold name=%s confidence=%.2f",
                detection.name,
                detection.confidence,
            )
            return None

        schema_name = f"{_capitalize(detection.name)} (Auto-detected)"
        result = self._row_validator.run(
            dataset,
            detection.schema,
            schema_name,
            FallbackLevel.DYNAMIC,
        )

        layer1_errors = layer1.count_errors(severity=Severity.ERROR)
        layer2_errors = result.count_errors(severity=Severity.ERROR)
        if result.is_valid or layer2_errors < layer1_errors:
            logger.info(
                "Validation finished layer=dynamic schema=%s confidence=%.2f errors=%d",
                schema_name,
                detection.confidence,
                layer2_errors,
            )
            return result

        logger.info(
            "Discarding dynamic schema=%s errors=%d not below industry errors=%d",
            schema_name,
            layer2_errors,
            layer1_errors,
        )
        return None


_DEFAULT_ORCHESTRATOR = FallbackOrchestrator()


def validate(
    dataset: Sequence[Mapping[str, str | None]],
    industry: str,
) -> ValidationResult:
    """
    Validate ``dataset`` starting from the schema registered as ``industry``.
    """

    return _DEFAULT_ORCHESTRATOR.validate(dataset, industry)
