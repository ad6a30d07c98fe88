"""FastAPI application for the loan application extractor.

Provides REST endpoints for extracting a record from an uploaded form
image or from recognized text, downloading the record as an xlsx
workbook, and health checks.
"""

import shutil
import time
import uuid
from typing import Annotated

from fastapi import FastAPI, File, HTTPException, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from loan_extract import __version__
from loan_extract.export.excel_exporter import (
    XLSX_CONTENT_TYPE,
    ExcelExporter,
    export_filename,
)
from loan_extract.extraction.record_assembler import EmptyInputError
from loan_extract.ocr.document_processor import DocumentProcessor, DocumentResult
from loan_extract.ocr.tesseract_engine import UnsupportedImageError
from loan_extract.utils.config import AppConfig, load_config
from loan_extract.utils.logger import get_logger

from .schemas import (
    ExtractionResponse,
    HealthResponse,
    TextExtractionRequest,
    record_fields_response,
)

logger = get_logger(__name__)

app = FastAPI(
    title="Loan Application Extraction API",
    description="Extract customer and loan terms from scanned application forms",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_components() -> tuple[AppConfig, DocumentProcessor]:
    """Load configuration and build the document processor."""
    config = load_config()
    return config, DocumentProcessor(config)


def _check_image_upload(file: UploadFile) -> None:
    if file.content_type and not (
        file.content_type.startswith("image/")
        or file.content_type == "application/octet-stream"
    ):
        raise HTTPException(status_code=400, detail="Please upload an image file")


async def _process_upload(
    file: UploadFile, processor: DocumentProcessor
) -> DocumentResult:
    _check_image_upload(file)
    content = await file.read()
    try:
        return processor.process_image(content, file.filename or "document")
    except UnsupportedImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except EmptyInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _process_text(
    request: TextExtractionRequest, processor: DocumentProcessor
) -> DocumentResult:
    try:
        return processor.process_text(request.text, request.filename)
    except EmptyInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _extraction_response(
    result: DocumentResult, start_time: float
) -> ExtractionResponse:
    return ExtractionResponse(
        success=True,
        document_id=str(uuid.uuid4()),
        filename=result.source_name,
        fields=record_fields_response(result.record),
        missing_fields=result.record.missing_fields(),
        raw_text=result.raw_text,
        ocr_confidence=result.ocr_confidence,
        processing_time_ms=(time.time() - start_time) * 1000,
    )


def _workbook_response(result: DocumentResult, config: AppConfig) -> Response:
    exporter = ExcelExporter(config.export)
    filename = export_filename(config.export.filename_prefix)
    return Response(
        content=exporter.to_bytes(result.record),
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        tesseract_available=shutil.which("tesseract") is not None,
    )


@app.post("/extract", response_model=ExtractionResponse)
async def extract_document(
    file: Annotated[UploadFile, File(...)],
) -> ExtractionResponse:
    """Recognize an uploaded form image and return its record.

    Args:
        file: Uploaded image of the application form.

    Returns:
        The normalized fields with the recognized text.
    """
    start_time = time.time()
    try:
        _, processor = _get_components()
        result = await _process_upload(file, processor)
        return _extraction_response(result, start_time)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Extraction failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/extract/text", response_model=ExtractionResponse)
async def extract_text(request: TextExtractionRequest) -> ExtractionResponse:
    """Return the record for text that was recognized elsewhere."""
    start_time = time.time()
    _, processor = _get_components()
    result = _process_text(request, processor)
    return _extraction_response(result, start_time)


@app.post("/export")
async def export_document(file: Annotated[UploadFile, File(...)]) -> Response:
    """Recognize an uploaded form image and download its record as xlsx."""
    try:
        config, processor = _get_components()
        result = await _process_upload(file, processor)
        return _workbook_response(result, config)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Excel export failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/export/text")
async def export_text(request: TextExtractionRequest) -> Response:
    """Download the record for recognized text as xlsx."""
    config, processor = _get_components()
    result = _process_text(request, processor)
    return _workbook_response(result, config)
