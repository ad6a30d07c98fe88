"""Shared test fixtures for the loan application extractor test suite."""

import io
from pathlib import Path

import pytest
from PIL import Image

SAMPLE_TEXT = (
    "LOAN APPLICATION\n"
    "Customer Reference Number: CR-1001\n"
    "Customer Name: Jane Doe\n"
    "City State: Austin TX\n"
    "Purchase Value (USD): $1,250,000.00\n"
    "Down Payment: 20%\n"
    "Loan Period: 15 years\n"
    "Annual Interest: 4.5%\n"
    "Purchase Value Reduction: 2.5%\n"
    "Monthly Principal Reduction: 1.25%\n"
    "Total Interest Reduction: 3%\n"
    "Guarantor Name: John Smith\n"
    "Guarantor Reference Number: GR-2002\n"
)


@pytest.fixture
def sample_text() -> str:
    """Recognized text of a fully populated application form."""
    return SAMPLE_TEXT


@pytest.fixture
def sample_image_bytes() -> bytes:
    """Create a minimal PNG image as bytes."""
    buf = io.BytesIO()
    Image.new("RGB", (200, 100), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def mock_tesseract_data() -> dict:
    """Mock pytesseract word-level output."""
    return {
        "text": ["", "Customer", "Name", "", "Jane"],
        "conf": [-1, 95, 85, -1, 90],
    }


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"
