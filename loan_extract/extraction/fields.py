"""Field catalogue for loan application documents.

Each entry names the label that anchors a value in the recognized text,
the characters that end the value, and how the captured string is
normalized before export.
"""

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_TERMINATOR = r"[,\n]"


class ValueKind(StrEnum):
    """How a captured field value is normalized."""

    TEXT = "text"
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    INTEGER_TEXT = "integer_text"


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one extractable field.

    ``label`` is used verbatim inside a regular expression, so any
    pattern metacharacters in it must already be escaped.
    ``terminator`` is a regex matching whatever ends the value.
    """

    name: str
    label: str
    display_name: str
    kind: ValueKind = ValueKind.TEXT
    terminator: str = DEFAULT_TERMINATOR
    column_width: int = 20


LOAN_APPLICATION_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        "ref_number",
        "Customer Reference Number",
        "Customer Reference Number",
        column_width=25,
    ),
    FieldSpec("customer_name", "Customer Name", "Customer Name", column_width=25),
    FieldSpec("city_state", "City State", "City State"),
    # Thousands separators are followed by a digit; any other comma ends the value.
    FieldSpec(
        "purchase_value",
        r"Purchase Value \(USD\)",
        "Purchase Value (USD)",
        ValueKind.CURRENCY,
        terminator=r",(?!\d)|\n",
        column_width=25,
    ),
    FieldSpec(
        "down_payment",
        "Down Payment",
        "Down Payment (%)",
        ValueKind.PERCENTAGE,
        column_width=15,
    ),
    FieldSpec(
        "loan_years",
        "Loan Period",
        "Loan Period (Years)",
        ValueKind.INTEGER_TEXT,
        column_width=15,
    ),
    FieldSpec(
        "annual_interest",
        "Annual Interest",
        "Annual Interest (%)",
        ValueKind.PERCENTAGE,
        column_width=15,
    ),
    FieldSpec(
        "purchase_value_reduction",
        "Purchase Value Reduction",
        "Purchase Value Reduction (%)",
        ValueKind.PERCENTAGE,
    ),
    FieldSpec(
        "monthly_principal_reduction",
        "Monthly Principal Reduction",
        "Monthly Principal Reduction (%)",
        ValueKind.PERCENTAGE,
    ),
    FieldSpec(
        "total_interest_reduction",
        "Total Interest Reduction",
        "Total Interest Reduction (%)",
        ValueKind.PERCENTAGE,
    ),
    FieldSpec("guarantor_name", "Guarantor Name", "Guarantor Name"),
    FieldSpec(
        "guarantor_ref",
        "Guarantor Reference Number",
        "Guarantor Reference Number",
        column_width=25,
    ),
)
