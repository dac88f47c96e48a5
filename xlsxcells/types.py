"""Cell types and the number formats that Excel has built in."""

from __future__ import annotations

import math
from enum import IntEnum


class CellType(IntEnum):
    """The data type of a cell, after the ST_CellType values of the format."""

    STRING = 0
    # A formula whose result is a string; formulas giving numbers or
    # booleans are stored as those types.
    STRING_FORMULA = 1
    NUMERIC = 2
    BOOL = 3
    # Inline strings are written back as shared strings, as Excel does.
    INLINE = 4
    ERROR = 5
    # An ISO 8601 date; Excel itself stores dates as formatted numbers.
    DATE = 6


GENERAL_FORMAT = "general"
INT_FORMAT = "0"
STRING_FORMAT = "@"
DEFAULT_DATE_FORMAT = "mm-dd-yy"
DEFAULT_DATE_TIME_FORMAT = "m/d/yy h:mm"


def parse_float(text: str) -> float:
    """Parse a number strictly: no surrounding space, no underscores, no
    non-ASCII digits, and an error when the value is out of range."""
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        raise ValueError(f'parsing "{text}": invalid syntax')
    body = text[1:] if text[0] in "+-" else text
    lowered = body.lower()
    if lowered == "nan":
        if body is not text:
            raise ValueError(f'parsing "{text}": invalid syntax')
        return math.nan
    if lowered in ("inf", "infinity"):
        return float(text)
    try:
        if lowered.startswith("0x"):
            if "p" not in lowered:
                raise ValueError
            value = float.fromhex(text)
        else:
            if lowered.startswith(("in", "na")):
                raise ValueError
            value = float(text)
    except (ValueError, OverflowError):
        raise ValueError(f'parsing "{text}": invalid syntax') from None
    if math.isinf(value):
        raise ValueError(f'parsing "{text}": value out of range')
    return value


def fallback_to(
    cell_type: CellType | None, cell_data: str, fallback: CellType
) -> CellType:
    """Keep a numeric type only when the data really parses as a number;
    otherwise return the fallback."""
    if cell_type is not None and cell_type == CellType.NUMERIC:
        try:
            parse_float(cell_data)
        except ValueError:
            return fallback
        return cell_type
    return fallback