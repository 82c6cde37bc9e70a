"""
app/schemas package marker.
"""

from app.schemas.csv_validation import (
    HealthResponse,
    IndustryListResponse,
    ValidationErrorResponse,
    ValidationResultResponse,
    ValidationSummaryResponse,
)

__all__ = [
    "HealthResponse",
    "IndustryListResponse",
    "ValidationErrorResponse",
    "ValidationResultResponse",
    "ValidationSummaryResponse",
]
