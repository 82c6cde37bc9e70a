"""
validation package marker.
"""

from validation.detection import (
    BaseSchemaDetector,
    HeaderOverlapDetector,
    NullSchemaDetector,
    SchemaDetection,
)
from validation.field_matcher import FieldMapping, FieldMatcher
from validation.models import (
    ErrorType,
    FallbackLevel,
    FieldType,
    Severity,
    ValidationError,
    ValidationResult,
    ValidationSummary,
)
from validation.orchestrator import FallbackOrchestrator, FallbackPolicy, validate
from validation.registry import DEFAULT_REGISTRY, Schema, SchemaRegistry
from validation.row_validator import RowValidator

__all__ = [
    "BaseSchemaDetector",
    "DEFAULT_REGISTRY",
    "ErrorType",
    "FallbackLevel",
    "FallbackOrchestrator",
    "FallbackPolicy",
    "FieldMapping",
    "FieldMatcher",
    "FieldType",
    "HeaderOverlapDetector",
    "NullSchemaDetector",
    "RowValidator",
    "Schema",
    "SchemaDetection",
    "SchemaRegistry",
    "Severity",
    "ValidationError",
    "ValidationResult",
    "ValidationSummary",
    "validate",
]
