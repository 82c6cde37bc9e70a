"""
app/api/dependencies.py

Shared FastAPI dependencies for upload validation.
"""

from __future__ import annotations

from fastapi import File, HTTPException, UploadFile, status

CSV_EXTENSIONS = (".csv",)
CSV_CONTENT_TYPES = frozenset(
    {
        "text/csv",
        "application/csv",
        "application/vnd.ms-excel",
    }
)


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Accept the upload when either its extension or its MIME type says CSV.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").split(";", 1)[0].strip().lower()

    if not filename.endswith(CSV_EXTENSIONS) and content_type not in CSV_CONTENT_TYPES:
        file.file.close()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only CSV files are allowed (received {file.filename or 'unnamed file'}).",
        )

    return file
