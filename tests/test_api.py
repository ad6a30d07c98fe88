"""Tests for the FastAPI REST endpoints."""

import io
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from loan_extract.api.app import app
from loan_extract.export.excel_exporter import XLSX_CONTENT_TYPE


@pytest.fixture
def client() -> TestClient:
    """Create a FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def mock_tess(mock_tesseract_data: dict, sample_text: str):
    """Patch pytesseract to recognize the sample form."""
    with patch("loan_extract.ocr.tesseract_engine.pytesseract") as mock:
        mock.image_to_string.return_value = sample_text
        mock.image_to_data.return_value = mock_tesseract_data
        yield mock


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert isinstance(data["tesseract_available"], bool)


class TestExtractTextEndpoint:
    """Tests for the /extract/text endpoint."""

    def test_extract_text(self, client: TestClient, sample_text: str) -> None:
        response = client.post("/extract/text", json={"text": sample_text})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["filename"] == "document.txt"
        assert len(data["fields"]) == 12
        assert data["missing_fields"] == []

        fields = {f["name"]: f for f in data["fields"]}
        assert fields["customer_name"]["value"] == "Jane Doe"
        assert fields["purchase_value"]["value"] == 1_250_000.0
        assert fields["purchase_value"]["kind"] == "currency"
        assert fields["loan_years"]["value"] == "15"
        assert fields["down_payment"]["display_name"] == "Down Payment (%)"

    def test_missing_fields_reported(self, client: TestClient) -> None:
        response = client.post(
            "/extract/text", json={"text": "Customer Name: Jane Doe"}
        )
        assert response.status_code == 200
        data = response.json()
        assert "guarantor_name" in data["missing_fields"]
        fields = {f["name"]: f for f in data["fields"]}
        assert fields["guarantor_name"]["found"] is False
        assert fields["annual_interest"]["value"] == 0

    def test_empty_text_rejected(self, client: TestClient) -> None:
        response = client.post("/extract/text", json={"text": "  "})
        assert response.status_code == 422
        assert "No text extracted" in response.json()["detail"]


class TestExtractEndpoint:
    """Tests for the /extract image upload endpoint."""

    def test_extract_image(
        self, client: TestClient, mock_tess: MagicMock, sample_image_bytes: bytes
    ) -> None:
        response = client.post(
            "/extract",
            files={"file": ("form.png", io.BytesIO(sample_image_bytes), "image/png")},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["filename"] == "form.png"
        assert data["ocr_confidence"] == pytest.approx(0.9)
        assert data["processing_time_ms"] >= 0

    def test_rejects_non_image_content_type(self, client: TestClient) -> None:
        response = client.post(
            "/extract",
            files={"file": ("form.txt", io.BytesIO(b"hello"), "text/plain")},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Please upload an image file"

    def test_rejects_undecodable_image(self, client: TestClient) -> None:
        response = client.post(
            "/extract",
            files={"file": ("form.png", io.BytesIO(b"not a png"), "image/png")},
        )
        assert response.status_code == 400

    def test_blank_recognition_rejected(
        self, client: TestClient, mock_tess: MagicMock, sample_image_bytes: bytes
    ) -> None:
        mock_tess.image_to_string.return_value = ""
        response = client.post(
            "/extract",
            files={"file": ("form.png", io.BytesIO(sample_image_bytes), "image/png")},
        )
        assert response.status_code == 422

    def test_ocr_failure_returns_500(
        self, client: TestClient, mock_tess: MagicMock, sample_image_bytes: bytes
    ) -> None:
        mock_tess.image_to_string.side_effect = RuntimeError("tesseract crashed")
        response = client.post(
            "/extract",
            files={"file": ("form.png", io.BytesIO(sample_image_bytes), "image/png")},
        )
        assert response.status_code == 500
        assert "tesseract crashed" in response.json()["detail"]


class TestExportEndpoints:
    """Tests for the xlsx download endpoints."""

    def test_export_text(self, client: TestClient, sample_text: str) -> None:
        response = client.post("/export/text", json={"text": sample_text})
        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX_CONTENT_TYPE
        assert "Customer_Data_" in response.headers["content-disposition"]

        ws = load_workbook(io.BytesIO(response.content)).active
        assert ws.title == "Customer Data"
        assert ws["A2"].value == "CR-1001"
        assert ws["D2"].number_format == '"$"#,##0.00'

    def test_export_text_empty(self, client: TestClient) -> None:
        response = client.post("/export/text", json={"text": ""})
        assert response.status_code == 422

    def test_export_image(
        self, client: TestClient, mock_tess: MagicMock, sample_image_bytes: bytes
    ) -> None:
        response = client.post(
            "/export",
            files={"file": ("form.png", io.BytesIO(sample_image_bytes), "image/png")},
        )
        assert response.status_code == 200
        ws = load_workbook(io.BytesIO(response.content)).active
        assert ws["K2"].value == "John Smith"
