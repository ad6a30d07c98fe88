"""Assemble a typed record from recognized loan application text.

Every field in the catalogue is extracted and normalized in catalogue
order. A missing field never raises; it is recorded with the sentinel
for its kind (``""`` for text, ``0`` for numbers).
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

from loan_extract.utils.logger import get_logger

from .fields import LOAN_APPLICATION_FIELDS, FieldSpec, ValueKind
from .normalizers import leading_integer, parse_currency, parse_percentage
from .rule_extractor import extract_value

logger = get_logger(__name__)

FieldValue = str | float

_NORMALIZERS: dict[ValueKind, Callable[[str], FieldValue]] = {
    ValueKind.TEXT: str,
    ValueKind.CURRENCY: parse_currency,
    ValueKind.PERCENTAGE: parse_percentage,
    ValueKind.INTEGER_TEXT: leading_integer,
}


class EmptyInputError(ValueError):
    """Raised when there is no recognized text to extract from."""


@dataclass(frozen=True)
class RecordField:
    """A single normalized field and whether its label was found."""

    spec: FieldSpec
    raw: str
    value: FieldValue

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def found(self) -> bool:
        return bool(self.raw)


@dataclass(frozen=True)
class ExtractedRecord:
    """Ordered, immutable set of normalized fields for one document."""

    fields: tuple[RecordField, ...]

    def __getitem__(self, name: str) -> FieldValue:
        for field in self.fields:
            if field.name == name:
                return field.value
        raise KeyError(name)

    def __iter__(self) -> Iterator[RecordField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def as_dict(self) -> dict[str, FieldValue]:
        """Return field values keyed by field name, in catalogue order."""
        return {field.name: field.value for field in self.fields}

    def missing_fields(self) -> list[str]:
        """Return the names of fields whose label was not found."""
        return [field.name for field in self.fields if not field.found]


class RecordAssembler:
    """Builds an :class:`ExtractedRecord` from raw document text.

    Args:
        catalog: Ordered field specifications to extract. Defaults to the
            loan application catalogue.
    """

    def __init__(
        self, catalog: Sequence[FieldSpec] = LOAN_APPLICATION_FIELDS
    ) -> None:
        self.catalog = tuple(catalog)

    def build(self, raw_text: str | None) -> ExtractedRecord:
        """Extract and normalize every catalogued field.

        Args:
            raw_text: Full recognized text of one document.

        Returns:
            Record with exactly one entry per catalogued field.

        Raises:
            EmptyInputError: If ``raw_text`` is missing or blank.
        """
        if not raw_text or not raw_text.strip():
            raise EmptyInputError("No text extracted from the document")

        fields = tuple(self._build_field(raw_text, spec) for spec in self.catalog)
        record = ExtractedRecord(fields=fields)

        missing = record.missing_fields()
        logger.info(
            "Assembled record with %d of %d fields",
            len(fields) - len(missing),
            len(fields),
        )
        if missing:
            logger.debug("Missing fields: %s", ", ".join(missing))
        return record

    def _build_field(self, raw_text: str, spec: FieldSpec) -> RecordField:
        raw = extract_value(raw_text, spec.label, spec.terminator)
        return RecordField(spec=spec, raw=raw, value=_NORMALIZERS[spec.kind](raw))


def build_record(raw_text: str | None) -> ExtractedRecord:
    """Build a record using the loan application catalogue."""
    return RecordAssembler().build(raw_text)
