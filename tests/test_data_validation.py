import pytest

from xlsxcells.data_validation import (
    DataValidationErrorStyle,
    DataValidationOperator,
    DataValidationType,
    new_data_validation,
)


def test_single_cell_sqref_and_drop_list():
    dv = new_data_validation(0, 0, 0, 0, True)
    assert dv.sqref == "A1"
    assert dv.allow_blank is True
    dv.set_drop_list(["a1", "a2", "a3"])
    assert dv.formula1 == '"a1,a2,a3"'
    assert dv.type == "list"


def test_range_sqref():
    dv = new_data_validation(3, 3, 3, 7, True)
    assert dv.sqref == "D4:H4"
    dv = new_data_validation(12, 2, 12, 10, False)
    assert dv.sqref == "C13:K13"


def test_set_input_enables_prompt():
    dv = new_data_validation(2, 0, 2, 0, True)
    dv.set_input("col c", "cell msg")
    assert dv.show_input_message is True
    assert dv.prompt_title == "col c"
    assert dv.prompt == "cell msg"


def test_set_range_between_swaps():
    dv = new_data_validation(1, 5, 1, 5, True)
    dv.set_range(15, 4, DataValidationType.TEXT_LENGTH, DataValidationOperator.BETWEEN)
    assert (dv.formula1, dv.formula2) == ("4", "15")
    assert dv.type == "textLength"
    assert dv.operator == "between"


def test_set_range_not_between_swaps():
    dv = new_data_validation(1, 5, 1, 5, True)
    dv.set_range(10, 1, DataValidationType.WHOLE, DataValidationOperator.NOT_BETWEEN)
    assert (dv.formula1, dv.formula2) == ("1", "10")
    assert dv.operator == "notBetween"
    assert dv.type == "whole"


@pytest.mark.parametrize(
    "operator, name",
    [
        (DataValidationOperator.EQUAL, "equal"),
        (DataValidationOperator.GREATER_THAN_OR_EQUAL, "greaterThanOrEqual"),
        (DataValidationOperator.GREATER_THAN, "greaterThan"),
        (DataValidationOperator.LESS_THAN, "lessThan"),
        (DataValidationOperator.LESS_THAN_OR_EQUAL, "lessThanOrEqual"),
        (DataValidationOperator.NOT_EQUAL, "notEqual"),
    ],
)
def test_set_range_other_operators_keep_order(operator, name):
    dv = new_data_validation(1, 6, 1, 6, True)
    dv.set_range(10, 1, DataValidationType.TEXT_LENGTH, operator)
    assert (dv.formula1, dv.formula2) == ("10", "1")
    assert dv.operator == name


def test_error_and_input_flags():
    dv = new_data_validation(0, 0, 0, 0, True)
    assert dv.show_error_message is False
    assert dv.show_input_message is False
    dv.set_error(DataValidationErrorStyle.STOP, "you got an error", "you got an error")
    assert dv.show_error_message is True
    assert dv.show_input_message is False
    assert dv.error_style == "stop"
    dv.set_input("hello", "hello")
    assert dv.show_input_message is True


def test_error_style_warning():
    dv = new_data_validation(0, 0, 0, 0, True)
    dv.set_error(DataValidationErrorStyle.WARNING, None, "msg")
    assert dv.error_style == "warning"
    assert dv.error_title is None


def test_in_file_list_formula():
    dv = new_data_validation(0, 0, 0, 0, True)
    dv.set_in_file_list("Sheet ' 2", 2, 1, 3, 10)
    assert dv.formula1 == "'Sheet '' 2'!$C$2:$D$11"
    assert dv.type == "list"


def test_in_file_list_to_end_of_column():
    dv = new_data_validation(0, 0, 0, 0, True)
    dv.set_in_file_list("S", 0, 0, 0, -1)
    assert dv.formula1 == "'S'!$A$1:$A$1048576"


def test_drop_list_too_long():
    dv = new_data_validation(0, 0, 0, 0, True)
    with pytest.raises(ValueError, match="0-255"):
        dv.set_drop_list(["x" * 300])
    assert dv.formula1 == ""