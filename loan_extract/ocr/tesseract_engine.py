"""Tesseract OCR engine wrapper for scanned application forms.

Loads an uploaded image, runs Tesseract over it and returns the raw text
together with the mean word confidence.
"""

import io
from dataclasses import dataclass
from pathlib import Path

import pytesseract
from PIL import Image, UnidentifiedImageError

from loan_extract.utils.logger import get_logger

logger = get_logger(__name__)

ImageSource = bytes | Path | Image.Image


class UnsupportedImageError(ValueError):
    """Raised when the input cannot be decoded as an image."""


@dataclass
class OCRResult:
    """Recognized text for one image."""

    text: str
    language: str
    confidence: float
    word_count: int


def load_image(source: ImageSource) -> Image.Image:
    """Decode ``source`` into a PIL image.

    Args:
        source: Raw image bytes, a path to an image file, or an image.

    Returns:
        The decoded image.

    Raises:
        UnsupportedImageError: If the content is not a readable image.
    """
    if isinstance(source, Image.Image):
        return source
    try:
        if isinstance(source, Path):
            image = Image.open(source)
        else:
            image = Image.open(io.BytesIO(source))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise UnsupportedImageError("Please upload an image file") from exc
    return image


class TesseractEngine:
    """Wrapper around Tesseract OCR for document text extraction.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
        psm: Tesseract page segmentation mode.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
        psm: int = 3,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang
        self.psm = psm

    def extract_text(self, source: ImageSource, lang: str | None = None) -> OCRResult:
        """Recognize the text in an image.

        Args:
            source: Image bytes, path or PIL image.
            lang: OCR language code. Defaults to the engine default.

        Returns:
            OCRResult with the full text and mean word confidence.
        """
        lang = lang or self.default_lang
        config = f"--psm {self.psm}"
        image = load_image(source)

        text = pytesseract.image_to_string(image, lang=lang, config=config)
        data = pytesseract.image_to_data(
            image,
            lang=lang,
            config=config,
            output_type=pytesseract.Output.DICT,
        )

        confidences = [
            float(conf)
            for conf, word in zip(data["conf"], data["text"])
            if float(conf) > 0 and word.strip()
        ]
        avg_conf = (
            sum(confidences) / len(confidences) / 100.0 if confidences else 0.0
        )

        logger.info(
            "OCR extracted %d words with average confidence %.2f",
            len(confidences),
            avg_conf,
        )
        return OCRResult(
            text=text,
            language=lang,
            confidence=avg_conf,
            word_count=len(confidences),
        )
