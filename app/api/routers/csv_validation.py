"""
app/api/routers/csv_validation.py

CSV validation HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from app.api.dependencies import get_csv_upload
from app.schemas.csv_validation import IndustryListResponse, ValidationResultResponse
from app.services.csv_validation_service import (
    CSVHeaderValidationError,
    CSVRowLimitError,
    CSVValidationService,
    get_csv_validation_service,
)

router = APIRouter(tags=["validation"])


@router.post("/validate-csv", response_model=ValidationResultResponse)
def validate_csv(
    file: UploadFile = Depends(get_csv_upload),
    industry: str | None = Query(default=None, description="Industry schema to validate against first"),
    validation_service: CSVValidationService = Depends(get_csv_validation_service),
) -> ValidationResultResponse:
    """
    Validate one CSV file and report errors, warnings and quality metrics.
    """

    try:
        result = validation_service.validate_csv(upload_file=file, industry=industry)
    except CSVRowLimitError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(exc),
        ) from exc
    except CSVHeaderValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    return ValidationResultResponse.from_result(result)


@router.get("/industries", response_model=IndustryListResponse)
def list_industries(
    validation_service: CSVValidationService = Depends(get_csv_validation_service),
) -> IndustryListResponse:
    """
    List the industry schemas an upload can start from.
    """

    registry = validation_service.orchestrator.registry
    return IndustryListResponse(
        industries=list(registry.names()),
        generic_industry=registry.generic_name,
        default_industry=validation_service.default_industry,
    )
