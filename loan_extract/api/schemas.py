"""Pydantic request/response schemas for the FastAPI endpoints."""

from pydantic import BaseModel

from loan_extract.extraction.fields import ValueKind
from loan_extract.extraction.record_assembler import ExtractedRecord


class TextExtractionRequest(BaseModel):
    """Request body carrying text recognized outside the service."""

    text: str
    filename: str = "document.txt"


class RecordFieldResponse(BaseModel):
    """Response schema for a single normalized field."""

    name: str
    display_name: str
    kind: ValueKind
    value: str | float
    found: bool


class ExtractionResponse(BaseModel):
    """Response schema for a document extraction request."""

    success: bool
    document_id: str
    filename: str
    fields: list[RecordFieldResponse]
    missing_fields: list[str]
    raw_text: str
    ocr_confidence: float | None = None
    processing_time_ms: float


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    tesseract_available: bool


def record_fields_response(record: ExtractedRecord) -> list[RecordFieldResponse]:
    """Convert a record to response fields in catalogue order."""
    return [
        RecordFieldResponse(
            name=field.name,
            display_name=field.spec.display_name,
            kind=field.spec.kind,
            value=field.value,
            found=field.found,
        )
        for field in record
    ]
