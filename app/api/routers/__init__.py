"""
app/api/routers package marker.
"""

from app.api.routers.csv_validation import router as csv_validation_router

__all__ = [
    "csv_validation_router",
]
