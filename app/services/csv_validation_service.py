"""
app/services/csv_validation_service.py

Service layer for CSV validation uploads.

Parses the uploaded bytes into rows, enforces the upstream row cap, and
hands the rows to the validation engine. The engine itself performs no
I/O; everything file-shaped happens here.
"""

from __future__ import annotations

import csv
import io
import logging
from functools import lru_cache
from typing import BinaryIO

from fastapi import UploadFile

from app.config import get_csv_validation_settings
from validation.models import ValidationResult
from validation.orchestrator import FallbackOrchestrator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVHeaderValidationError(ValueError):
    """
    Raised when CSV shape/header validation fails.
    """


class CSVRowLimitError(CSVHeaderValidationError):
    """
    Raised when an upload holds more data rows than the configured cap.
    """

    def __init__(self, *, max_rows: int) -> None:
        super().__init__(f"CSV exceeds the maximum of {max_rows} data rows.")
        self.max_rows = max_rows


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CSVValidationService:
    """
    Coordinates CSV parsing and engine validation for one upload.
    """

    def __init__(
        self,
        *,
        max_rows: int,
        default_industry: str,
        log_summary: bool,
        orchestrator: FallbackOrchestrator | None = None,
    ) -> None:
        self._max_rows = max(1, max_rows)
        self._default_industry = default_industry
        self._log_summary = log_summary
        self._orchestrator = orchestrator or FallbackOrchestrator()

    @property
    def orchestrator(self) -> FallbackOrchestrator:
        return self._orchestrator

    @property
    def default_industry(self) -> str:
        return self._default_industry

    def validate_csv(
        self,
        *,
        upload_file: UploadFile,
        industry: str | None = None,
    ) -> ValidationResult:
        """
        Parse an uploaded CSV and validate it against ``industry``.

        Falls back to the configured default industry when none is given.
        """

        selected = (industry or "").strip() or self._default_industry
        rows = self.read_rows(upload_file.file)
        result = self._orchestrator.validate(rows, selected)

        if self._log_summary:
            logger.info(
                "CSV validated filename=%r industry=%s schema=%s rows=%d valid=%s "
                "errors=%d warnings=%d score=%.2f fallback=%s",
                upload_file.filename,
                selected,
                result.summary.schema_used,
                result.summary.total_rows,
                result.is_valid,
                len(result.errors),
                len(result.warnings),
                result.summary.data_quality_score,
                result.fallback_level.value if result.fallback_level else None,
            )
        return result

    def read_rows(self, raw_file: BinaryIO) -> list[dict[str, str]]:
        """
        Decode ``raw_file`` as UTF-8 CSV (BOM tolerated) into row mappings.

        Header names are stripped. Short rows are padded with empty strings
        and cells beyond the header are dropped.

        Raises:
            CSVHeaderValidationError: Missing header row, bad encoding or
                malformed CSV.
            CSVRowLimitError: More data rows than the configured cap.
        """

        raw_file.seek(0)
        text_stream: io.TextIOWrapper | None = None
        rows: list[dict[str, str]] = []

        try:
            text_stream = io.TextIOWrapper(raw_file, encoding="utf-8-sig", newline="")
            reader = csv.DictReader(text_stream, restval="")
            headers = [header.strip() for header in (reader.fieldnames or [])]
            if not any(headers):
                logger.warning("CSV rejected: header row is missing")
                raise CSVHeaderValidationError("CSV header row is missing.")
            reader.fieldnames = headers

            for raw_row in reader:
                if len(rows) >= self._max_rows:
                    logger.warning("CSV rejected: more than %d data rows", self._max_rows)
                    raise CSVRowLimitError(max_rows=self._max_rows)
                rows.append({header: raw_row.get(header) or "" for header in headers})

        except UnicodeDecodeError as exc:
            logger.warning("CSV rejected: not UTF-8 encoded")
            raise CSVHeaderValidationError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            logger.warning("CSV rejected: %s", exc)
            raise CSVHeaderValidationError(f"Invalid CSV format: {exc}") from exc
        finally:
            if text_stream is not None:
                try:
                    text_stream.detach()
                except ValueError:
                    pass

        return rows


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_csv_validation_service() -> CSVValidationService:
    """
    Build and cache the validation service with env-driven settings.
    """
    settings = get_csv_validation_settings()
    return CSVValidationService(
        max_rows=settings.max_rows,
        default_industry=settings.default_industry,
        log_summary=settings.log_summary,
    )
