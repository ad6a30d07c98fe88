"""Label-anchored field extraction using regex patterns.

A value is located by searching for the label that precedes it in the
recognized text, skipping separator characters (whitespace, colon,
hyphen), and capturing everything up to the first terminator match.
"""

import re
from dataclasses import dataclass

from loan_extract.utils.logger import get_logger

from .fields import DEFAULT_TERMINATOR

logger = get_logger(__name__)

_SEPARATORS = r"[\s:-]*"


@dataclass(frozen=True)
class ExtractedField:
    """A value captured after a label."""

    label: str
    value: str
    start_pos: int
    end_pos: int


def _label_pattern(label: str, terminator: str) -> re.Pattern[str]:
    return re.compile(
        f"{label}{_SEPARATORS}((?:(?!(?:{terminator})).)+)", re.DOTALL
    )


def find_value(
    text: str, label: str, terminator: str = DEFAULT_TERMINATOR
) -> ExtractedField | None:
    """Find the value that follows ``label`` in ``text``.

    Only the first occurrence of the label is considered. The label is
    inserted into the pattern as-is; callers escape it when it contains
    regex metacharacters.

    Args:
        text: Recognized document text.
        label: Regex-ready label anchoring the value.
        terminator: Regex matching the text that ends the value.

    Returns:
        The captured field, or ``None`` if the label is missing or the
        captured value is blank.
    """
    match = _label_pattern(label, terminator).search(text)
    if not match:
        return None

    value = match.group(1).strip()
    if not value:
        return None
    return ExtractedField(
        label=label,
        value=value,
        start_pos=match.start(1),
        end_pos=match.end(1),
    )


def extract_value(
    text: str, label: str, terminator: str = DEFAULT_TERMINATOR
) -> str:
    """Return the trimmed value following ``label``, or ``""`` if absent."""
    field = find_value(text, label, terminator)
    if field is None:
        logger.debug("Label not found: %s", label)
        return ""
    return field.value
