import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.schemas.csv_validation import ValidationResultResponse, ValidationSummaryResponse
from validation.orchestrator import validate


def _summary_payload() -> dict:
    return {
        "totalRows": 2,
        "totalFields": 3,
        "schemaUsed": "Generic",
        "validRows": 2,
        "errorRows": 0,
        "warningCount": 0,
        "emptyValuePercentage": 0.0,
        "dataQualityScore": 100.0,
    }


def test_result_response_contract() -> None:
    result = validate([{"Doctor_ID": "D1", "Doctor_Name": "Dr. Rao", "Date": "2024-01-15"}], "doctor_roster")
    response = ValidationResultResponse.from_result(result)

    required = {
        "isValid",
        "errors",
        "warnings",
        "summary",
        "aiSuggestions",
        "fallbackLevel",
        "fallbackMessage",
        "insights",
        "detectedDateFormats",
    }
    dumped = response.model_dump(by_alias=True)
    assert set(dumped.keys()) == required
    assert dumped["fallbackLevel"] == "all-purpose"

    parsed = json.loads(response.model_dump_json(by_alias=True))
    assert parsed["summary"]["schemaUsed"] == "All-Purpose (Fallback)"
    assert isinstance(parsed["summary"]["dataQualityScore"], float)


def test_summary_accepts_camel_case_and_field_names() -> None:
    by_alias = ValidationSummaryResponse(**_summary_payload())
    by_name = ValidationSummaryResponse(
        total_rows=2,
        total_fields=3,
        schema_used="Generic",
        valid_rows=2,
        error_rows=0,
        warning_count=0,
        empty_value_percentage=0.0,
        data_quality_score=100.0,
    )

    assert by_alias == by_name


def test_summary_rejects_out_of_range_score() -> None:
    data = _summary_payload()
    data["dataQualityScore"] = 120.0
    with pytest.raises(PydanticValidationError):
        ValidationSummaryResponse(**data)
