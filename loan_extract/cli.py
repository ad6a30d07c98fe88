"""Command-line interface for extracting and exporting loan applications.

Provides subcommands to print the record for a single document, write it
to an xlsx workbook, and export a whole folder of documents.
"""

import argparse
import json
import sys
from pathlib import Path

from loan_extract.export.excel_exporter import ExcelExporter
from loan_extract.extraction.record_assembler import EmptyInputError
from loan_extract.ocr.document_processor import DocumentProcessor, DocumentResult
from loan_extract.ocr.tesseract_engine import UnsupportedImageError
from loan_extract.utils.config import load_config
from loan_extract.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_IMAGE_EXTENSIONS = ("*.png", "*.jpg", "*.jpeg", "*.tiff", "*.tif", "*.bmp")
_TEXT_EXTENSIONS = ("*.txt",)


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all images and recognized-text files in a directory.

    Args:
        input_dir: Directory to scan for documents.

    Returns:
        Sorted list of document file paths.
    """
    files: list[Path] = []
    for ext in _IMAGE_EXTENSIONS + _TEXT_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def _is_text_file(path: Path) -> bool:
    return path.suffix.lower() == ".txt"


def _process_file(
    processor: DocumentProcessor, file_path: Path, as_text: bool = False
) -> DocumentResult:
    """Run one file through recognition (unless it is text) and assembly."""
    if as_text or _is_text_file(file_path):
        raw_text = file_path.read_text(encoding="utf-8")
        return processor.process_text(raw_text, file_path.name)
    return processor.process_image(file_path, file_path.name)


def extract_single(
    file_path: Path, as_text: bool = False, config_path: Path | None = None
) -> dict[str, object]:
    """Process a single document and return the record as a dict.

    Args:
        file_path: Image or text file to process.
        as_text: Treat the file as already recognized text.
        config_path: Optional YAML configuration file.

    Returns:
        Dictionary with filename, fields, missing fields and raw_text.
    """
    processor = DocumentProcessor(load_config(config_path))
    result = _process_file(processor, file_path, as_text)
    return {
        "filename": result.source_name,
        "fields": result.record.as_dict(),
        "missing_fields": result.record.missing_fields(),
        "raw_text": result.raw_text,
    }


def export_single(
    file_path: Path,
    output_dir: Path | None = None,
    as_text: bool = False,
    config_path: Path | None = None,
) -> Path:
    """Process a single document and write its record to an xlsx file.

    Returns:
        Path of the written workbook.
    """
    config = load_config(config_path)
    processor = DocumentProcessor(config)
    exporter = ExcelExporter(config.export)

    result = _process_file(processor, file_path, as_text)
    return exporter.write(result.record, output_dir)


def process_folder(
    input_dir: Path,
    output_dir: Path | None = None,
    verbose: bool = False,
    config_path: Path | None = None,
) -> dict[str, int]:
    """Export every document in a folder to its own workbook.

    Args:
        input_dir: Directory containing images or text files.
        output_dir: Directory receiving the xlsx files. Defaults to the
            configured export directory.
        verbose: Whether to print per-file progress.
        config_path: Optional YAML configuration file.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    config = load_config(config_path)
    processor = DocumentProcessor(config)
    exporter = ExcelExporter(config.export)
    output_dir = output_dir or Path(config.export.output_dir)

    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d documents to process", len(files))

    successful = 0
    failed = 0
    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")
        try:
            result = _process_file(processor, file_path)
            exporter.write(result.record, output_dir)
            successful += 1
        except Exception as exc:
            logger.error("Failed to process %s: %s", file_path.name, exc)
            failed += 1

    summary = {"total": len(files), "successful": successful, "failed": failed}
    _print_summary(summary, output_dir)
    return summary


def _print_summary(summary: dict[str, int], output_dir: Path) -> None:
    print(f"\n{'=' * 50}")
    print("Batch Export Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_dir}")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Loan Application Extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", type=Path, help="YAML configuration file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser(
        "extract", help="Print the record for one document as JSON"
    )
    extract_parser.add_argument("file", type=Path, help="Image or text file")
    extract_parser.add_argument(
        "--text", action="store_true", help="Treat the file as recognized text"
    )
    extract_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    export_parser = subparsers.add_parser(
        "export", help="Write the record for one document to xlsx"
    )
    export_parser.add_argument("file", type=Path, help="Image or text file")
    export_parser.add_argument(
        "--text", action="store_true", help="Treat the file as recognized text"
    )
    export_parser.add_argument(
        "-d", "--output-dir", type=Path, help="Directory for the workbook"
    )

    batch_parser = subparsers.add_parser(
        "batch", help="Export every document in a folder"
    )
    batch_parser.add_argument(
        "input_dir", type=Path, help="Input directory with documents"
    )
    batch_parser.add_argument(
        "-d",
        "--output-dir",
        type=Path,
        help="Directory for the workbooks (default: export.output_dir from config)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    args = parser.parse_args(argv)

    setup_logging()

    try:
        if args.command == "extract":
            _require_file(args.file)
            result = extract_single(args.file, args.text, args.config)
            output_str = json.dumps(result, indent=2)
            if args.output:
                args.output.parent.mkdir(parents=True, exist_ok=True)
                args.output.write_text(output_str)
                print(f"Output written to {args.output}")
            else:
                print(output_str)
        elif args.command == "export":
            _require_file(args.file)
            path = export_single(args.file, args.output_dir, args.text, args.config)
            print(f"Workbook written to {path}")
        elif args.command == "batch":
            if not args.input_dir.is_dir():
                print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
                sys.exit(1)
            process_folder(args.input_dir, args.output_dir, args.verbose, args.config)
        else:
            parser.print_help()
            sys.exit(0)
    except (EmptyInputError, UnsupportedImageError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def _require_file(path: Path) -> None:
    if not path.exists():
        print(f"Error: {path} does not exist", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
