"""
app/services package marker.
"""

from app.services.csv_validation_service import (
    CSVHeaderValidationError,
    CSVRowLimitError,
    CSVValidationService,
    get_csv_validation_service,
)

__all__ = [
    "CSVHeaderValidationError",
    "CSVRowLimitError",
    "CSVValidationService",
    "get_csv_validation_service",
]
