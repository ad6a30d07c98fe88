"""Configuration management for the loan application extractor.

Loads and validates YAML configuration with defaults for text
recognition and spreadsheet export.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class OCRConfig(BaseModel):
    """Configuration for the Tesseract recognition step."""

    tesseract_cmd: str | None = None
    default_lang: str = "eng"
    psm: int = 3


class ExportConfig(BaseModel):
    """Configuration for spreadsheet export."""

    output_dir: str = "exports"
    sheet_name: str = "Customer Data"
    filename_prefix: str = "Customer_Data"
    currency_format: str = '"$"#,##0.00'
    percentage_format: str = '0.00"%"'


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
