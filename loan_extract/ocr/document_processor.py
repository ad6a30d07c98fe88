"""Unified document processing pipeline.

Combines Tesseract recognition with record assembly so callers can go
from an uploaded image, or text recognized elsewhere, to one record.
"""

from dataclasses import dataclass

from loan_extract.extraction.record_assembler import ExtractedRecord, RecordAssembler
from loan_extract.utils.config import AppConfig
from loan_extract.utils.logger import get_logger

from .tesseract_engine import ImageSource, TesseractEngine

logger = get_logger(__name__)


@dataclass
class DocumentResult:
    """Recognized text and the record assembled from it."""

    source_name: str
    raw_text: str
    record: ExtractedRecord
    ocr_confidence: float | None = None


class DocumentProcessor:
    """End-to-end processing for a single loan application document.

    Args:
        config: Application configuration object.
        assembler: Record assembler to use. Defaults to the loan
            application catalogue.
    """

    def __init__(
        self, config: AppConfig, assembler: RecordAssembler | None = None
    ) -> None:
        self.config = config
        self.assembler = assembler or RecordAssembler()
        self.ocr_engine = TesseractEngine(
            tesseract_cmd=config.ocr.tesseract_cmd,
            default_lang=config.ocr.default_lang,
            psm=config.ocr.psm,
        )

    def process_image(self, source: ImageSource, source_name: str) -> DocumentResult:
        """Recognize an image and assemble its record.

        Raises:
            UnsupportedImageError: If ``source`` is not an image.
            EmptyInputError: If recognition produced no text.
        """
        logger.info("Processing image %s", source_name)
        ocr_result = self.ocr_engine.extract_text(source)
        result = self.process_text(ocr_result.text, source_name)
        result.ocr_confidence = ocr_result.confidence
        return result

    def process_text(self, raw_text: str, source_name: str) -> DocumentResult:
        """Assemble a record from already recognized text.

        Raises:
            EmptyInputError: If ``raw_text`` is blank.
        """
        record = self.assembler.build(raw_text)
        return DocumentResult(
            source_name=source_name, raw_text=raw_text, record=record
        )
