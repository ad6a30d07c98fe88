"""Numeric normalization for captured field values.

Currency amounts may be written with digits ("$1,250.50") or spelled out
in English words ("Three Hundred Dollars and Cents"). Percentages are
read from their first numeric token. Text with nothing numeric in it
normalizes to ``0``.
"""

import re

from loan_extract.utils.logger import get_logger

logger = get_logger(__name__)

_DIGIT_RUN = re.compile(r"\d[\d,.]*")
_LEADING_FLOAT = re.compile(r"\d+(?:\.\d*)?")
_PERCENT_RUN = re.compile(r"\d+\.?\d*")
_INTEGER_RUN = re.compile(r"\d+")
_WORD_SPLIT = re.compile(r"[\s-]+")
_CENTS_PHRASE = "dollars and cents"

NUMBER_WORDS: dict[str, int] = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "hundred": 100,
    "thousand": 1_000,
    "million": 1_000_000,
    "billion": 1_000_000_000,
}

# Words at or above this value close the current group.
_SCALE_THRESHOLD = 100


def parse_currency(value_text: str | None) -> float:
    """Convert a currency string to an amount.

    A digit run anywhere in the text takes precedence over number words.
    Without digits, the text is read as English number words: each scale
    word multiplies the running group, adds it to the total and starts a
    new group. Stacked scale words are not composed, so
    ``"two hundred thousand"`` yields ``200``.

    Args:
        value_text: Captured currency text.

    Returns:
        The amount, or ``0`` when nothing numeric is present.
    """
    if not value_text:
        return 0.0

    digits = _DIGIT_RUN.search(value_text)
    if digits:
        # "1.2.3" reads as 1.2
        cleaned = digits.group(0).replace(",", "")
        return float(_LEADING_FLOAT.match(cleaned).group(0))

    words = _WORD_SPLIT.split(value_text.lower().replace(_CENTS_PHRASE, ""))
    total = 0
    current = 0
    for word in words:
        value = NUMBER_WORDS.get(word)
        if value is None:
            continue
        if value >= _SCALE_THRESHOLD:
            current *= value
            total += current
            current = 0
        else:
            current += value

    amount = total + current
    if amount == 0:
        logger.debug("No currency amount in %r", value_text)
    return float(amount)


def parse_percentage(value_text: str | None) -> float:
    """Return the first number in ``value_text``, or ``0`` if none."""
    if not value_text:
        return 0.0
    match = _PERCENT_RUN.search(value_text)
    if not match:
        logger.debug("No percentage in %r", value_text)
        return 0.0
    return float(match.group(0))


def leading_integer(value_text: str | None) -> str:
    """Return the first run of digits as a string, or ``""``."""
    if not value_text:
        return ""
    match = _INTEGER_RUN.search(value_text)
    return match.group(0) if match else ""
