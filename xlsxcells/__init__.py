"""Spreadsheet cells, columns, dates and data validations, with a compact binary record format."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "dates",
    "col",
    "styles",
    "cell",
    "data_validation",
    "records",
    "cellrecords",
]