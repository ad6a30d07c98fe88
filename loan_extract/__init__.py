"""Loan Application Field Extraction.

Turns recognized text from scanned loan application forms into a single
typed record and exports it as a formatted spreadsheet row.
"""

__version__ = "1.0.0"
