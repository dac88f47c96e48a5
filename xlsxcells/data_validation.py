"""Data validation rules that restrict what may be entered in cells."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .col import EXCEL_2006_MAX_ROW_INDEX

# 255 characters plus the two quotes around the list.
_FORMULA_MAX_LEN = 257
_FORMULA_LEN_ERROR = "data validation must be 0-255 characters"

_EXTERNAL_SHEET_BANG = "!"
_CELL_RANGE = ":"


class DataValidationType(IntEnum):
    """The kind of value a validation accepts."""

    NONE = 1
    CUSTOM = 2
    DATE = 3
    DECIMAL = 4
    LIST = 5
    TEXT_LENGTH = 6
    TIME = 7
    WHOLE = 8


class DataValidationErrorStyle(IntEnum):
    """How Excel reacts to a value that fails validation."""

    STOP = 1
    WARNING = 2
    INFORMATION = 3


class DataValidationOperator(IntEnum):
    """How a value is compared with the validation's formulas."""

    BETWEEN = 1
    EQUAL = 2
    GREATER_THAN = 3
    GREATER_THAN_OR_EQUAL = 4
    LESS_THAN = 5
    LESS_THAN_OR_EQUAL = 6
    NOT_BETWEEN = 7
    NOT_EQUAL = 8


_TYPE_NAMES = {
    DataValidationType.NONE: "none",
    DataValidationType.CUSTOM: "custom",
    DataValidationType.DATE: "date",
    DataValidationType.DECIMAL: "decimal",
    DataValidationType.LIST: "list",
    DataValidationType.TEXT_LENGTH: "textLength",
    DataValidationType.TIME: "time",
    DataValidationType.WHOLE: "whole",
}

_OPERATOR_NAMES = {
    DataValidationOperator.BETWEEN: "between",
    DataValidationOperator.EQUAL: "equal",
    DataValidationOperator.GREATER_THAN: "greaterThan",
    DataValidationOperator.GREATER_THAN_OR_EQUAL: "greaterThanOrEqual",
    DataValidationOperator.LESS_THAN: "lessThan",
    DataValidationOperator.LESS_THAN_OR_EQUAL: "lessThanOrEqual",
    DataValidationOperator.NOT_BETWEEN: "notBetween",
    DataValidationOperator.NOT_EQUAL: "notEqual",
}

_ERROR_STYLE_NAMES = {
    DataValidationErrorStyle.STOP: "stop",
    DataValidationErrorStyle.WARNING: "warning",
    DataValidationErrorStyle.INFORMATION: "information",
}


def _col_letters(index: int) -> str:
    """Zero-based column index to its letters: 0 -> A, 26 -> AA."""
    n = index + 1
    letters = ""
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def _row_text(index: int) -> str:
    return str(index + 1)


def _cell_id(x: int, y: int, fix_x: bool, fix_y: bool) -> str:
    col = ("$" if fix_x else "") + _col_letters(x)
    row = ("$" if fix_y else "") + _row_text(y)
    return col + row


@dataclass
class DataValidation:
    """A validation rule over a range of cells."""

    allow_blank: bool = False
    show_input_message: bool = False
    show_error_message: bool = False
    error_style: Optional[str] = None
    error_title: Optional[str] = None
    operator: str = ""
    error: Optional[str] = None
    prompt_title: Optional[str] = None
    prompt: Optional[str] = None
    type: str = ""
    sqref: str = ""
    formula1: str = ""
    formula2: str = ""

    def set_error(
        self,
        style: DataValidationErrorStyle,
        title: Optional[str],
        msg: Optional[str],
    ) -> None:
        """Show an error message when validation fails."""
        self.show_error_message = True
        self.error = msg
        self.error_title = title
        self.error_style = _ERROR_STYLE_NAMES.get(style, "stop")

    def set_input(self, title: Optional[str], msg: Optional[str]) -> None:
        """Show a prompt when the cell is selected."""
        self.show_input_message = True
        self.prompt_title = title
        self.prompt = msg

    def set_drop_list(self, keys: list[str]) -> None:
        """Restrict values to a fixed list; ValueError if it is too long."""
        formula = '"' + ",".join(keys) + '"'
        if len(formula.encode("utf-8")) > _FORMULA_MAX_LEN:
            raise ValueError(_FORMULA_LEN_ERROR)
        self.formula1 = formula
        self.type = _TYPE_NAMES[DataValidationType.LIST]

    def set_in_file_list(
        self, sheet: str, x1: int, y1: int, x2: int, y2: int
    ) -> None:
        """Restrict values to those in a range of a sheet; a negative y2
        reaches the last row."""
        start = _cell_id(x1, y1, True, True)
        if y2 < 0:
            y2 = EXCEL_2006_MAX_ROW_INDEX
        end = _cell_id(x2, y2, True, True)
        escaped = sheet.replace("'", "''")
        self.formula1 = "'" + escaped + "'" + _EXTERNAL_SHEET_BANG + start + _CELL_RANGE + end
        self.type = _TYPE_NAMES[DataValidationType.LIST]

    def set_range(
        self,
        f1: int,
        f2: int,
        validation_type: DataValidationType,
        operator: DataValidationOperator,
    ) -> None:
        """Compare values with f1 and f2; range operators get them in order."""
        formula1, formula2 = str(f1), str(f2)
        if operator in (
            DataValidationOperator.BETWEEN,
            DataValidationOperator.NOT_BETWEEN,
        ) and f1 > f2:
            formula1, formula2 = formula2, formula1
        self.formula1 = formula1
        self.formula2 = formula2
        self.type = _TYPE_NAMES.get(validation_type, "")
        self.operator = _OPERATOR_NAMES.get(operator, "")


def new_data_validation(
    start_row: int, start_col: int, end_row: int, end_col: int, allow_blank: bool
) -> DataValidation:
    """A validation covering the given zero-based cell range."""
    start_x = _col_letters(start_col)
    start_y = _row_text(start_row)
    end_x = _col_letters(end_col)
    end_y = _row_text(end_row)
    sqref = start_x + start_y
    if start_x != end_x or start_y != end_y:
        sqref += ":" + end_x + end_y
    return DataValidation(allow_blank=allow_blank, sqref=sqref)