"""Spreadsheet export for extracted loan application records.

Lays a record out as a header row and a single data row in catalogue
order, applies currency and percentage number formats by field kind, and
writes the workbook with openpyxl under a timestamped file name.
"""

import io
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from loan_extract.extraction.fields import ValueKind
from loan_extract.extraction.record_assembler import ExtractedRecord, FieldValue
from loan_extract.utils.config import ExportConfig
from loan_extract.utils.logger import get_logger

logger = get_logger(__name__)

XLSX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)


class ExportPreconditionError(ValueError):
    """Raised when export is requested without a completed record."""


@dataclass(frozen=True)
class ExportTable:
    """Two-row table ready for a spreadsheet writer."""

    header: list[str]
    row: list[FieldValue]
    number_formats: list[str | None]
    column_widths: list[int]

    def columns(self) -> list[tuple[str, FieldValue, str | None]]:
        """Return (display name, value, number format) per column."""
        return list(zip(self.header, self.row, self.number_formats))


def _require_record(record: object) -> ExtractedRecord:
    if not isinstance(record, ExtractedRecord) or not record.fields:
        raise ExportPreconditionError("No extracted record to export")
    return record


def build_table(
    record: ExtractedRecord, config: ExportConfig | None = None
) -> ExportTable:
    """Map a record to header/data rows with per-column format hints.

    Args:
        record: Completed record to export.
        config: Export settings supplying the number format codes.

    Returns:
        The table, one column per record field.

    Raises:
        ExportPreconditionError: If ``record`` is not a completed record.
    """
    record = _require_record(record)
    config = config or ExportConfig()
    formats = {
        ValueKind.CURRENCY: config.currency_format,
        ValueKind.PERCENTAGE: config.percentage_format,
    }
    return ExportTable(
        header=[field.spec.display_name for field in record],
        row=[field.value for field in record],
        number_formats=[formats.get(field.spec.kind) for field in record],
        column_widths=[field.spec.column_width for field in record],
    )


def export_filename(prefix: str, now: datetime | None = None) -> str:
    """Return ``<prefix>_<UTC timestamp>.xlsx`` safe for any filesystem."""
    now = now or datetime.now(UTC)
    timestamp = now.strftime("%Y-%m-%dT%H-%M-%S-%fZ")
    return f"{prefix}_{timestamp}.xlsx"


class ExcelExporter:
    """Writes extracted records to single-sheet xlsx workbooks.

    Args:
        config: Export settings. Defaults are used when omitted.
    """

    def __init__(self, config: ExportConfig | None = None) -> None:
        self.config = config or ExportConfig()

    def to_workbook(self, record: ExtractedRecord) -> Workbook:
        table = build_table(record, self.config)

        wb = Workbook()
        ws = wb.active
        ws.title = self.config.sheet_name
        ws.append(table.header)
        ws.append(table.row)

        for col, (fmt, width) in enumerate(
            zip(table.number_formats, table.column_widths), start=1
        ):
            ws.column_dimensions[get_column_letter(col)].width = width
            if fmt:
                ws.cell(row=2, column=col).number_format = fmt
        return wb

    def to_bytes(self, record: ExtractedRecord) -> bytes:
        """Serialize the record's workbook to xlsx bytes."""
        out = io.BytesIO()
        self.to_workbook(record).save(out)
        return out.getvalue()

    def write(
        self,
        record: ExtractedRecord,
        output_dir: Path | None = None,
        now: datetime | None = None,
    ) -> Path:
        """Write the record to a timestamped xlsx file.

        Args:
            record: Completed record to export.
            output_dir: Target directory. Defaults to the configured one.
            now: Timestamp embedded in the file name.

        Returns:
            Path of the written workbook.
        """
        wb = self.to_workbook(record)
        output_dir = output_dir or Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        path = output_dir / export_filename(self.config.filename_prefix, now)
        wb.save(path)
        logger.info("Workbook written to %s", path)
        return path
