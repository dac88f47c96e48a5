import io

import pytest

from xlsxcells.data_validation import DataValidation
from xlsxcells.records import (
    RecordFormatError,
    read_alignment,
    read_bool,
    read_border,
    read_data_validation,
    read_end_of_record,
    read_fill,
    read_float,
    read_font,
    read_group_separator,
    read_int,
    read_string,
    read_string_pointer,
    read_style,
    read_unit_separator,
    write_alignment,
    write_bool,
    write_border,
    write_data_validation,
    write_end_of_record,
    write_fill,
    write_float,
    write_font,
    write_group_separator,
    write_int,
    write_string,
    write_string_pointer,
    write_style,
    write_unit_separator,
)
from xlsxcells.styles import Alignment, Border, Fill, Font, Style

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _reader(buf):
    return io.BytesIO(buf.getvalue())


def _border():
    return Border(
        left="left",
        left_color="leftColor",
        right="right",
        right_color="rightColor",
        top="top",
        top_color="topColor",
        bottom="bottom",
        bottom_color="bottomColor",
    )


def _fill():
    return Fill(pattern_type="PatternType", bg_color="BgColor", fg_color="FgColor")


def _font():
    return Font(
        size=1, name="Font", family=2, charset=3, color="Red",
        bold=True, italic=True, underline=True,
    )


def _alignment():
    return Alignment(
        horizontal="left", indent=1, shrink_to_fit=True,
        text_rotation=90, vertical="top", wrap_text=True,
    )


def _data_validation():
    return DataValidation(
        allow_blank=True,
        show_input_message=True,
        show_error_message=True,
        type="type",
        sqref="sqref",
        formula1="formula1",
        formula2="formula1",
        operator="operator",
        error_style="errorstyle",
        error_title="errortitle",
        error="error",
        prompt_title="prompttitle",
        prompt="prompt",
    )


def test_bool_round_trip():
    buf = io.BytesIO()
    write_bool(buf, True)
    write_bool(buf, False)
    assert buf.getvalue() == b"\x01\x1f\x00\x1f"
    reader = _reader(buf)
    assert read_bool(reader) is True
    assert read_bool(reader) is False
    with pytest.raises(RecordFormatError):
        read_bool(reader)


def test_unit_separator():
    buf = io.BytesIO()
    write_unit_separator(buf)
    assert buf.getvalue() == b"\x1f"
    reader = _reader(buf)
    read_unit_separator(reader)
    with pytest.raises(RecordFormatError):
        read_unit_separator(reader)


def test_wrong_separator_rejected():
    with pytest.raises(RecordFormatError, match="unit separator"):
        read_unit_separator(io.BytesIO(b"\x1e"))
    with pytest.raises(RecordFormatError, match="group separator"):
        read_group_separator(io.BytesIO(b"\x1f"))


def test_group_separator():
    buf = io.BytesIO()
    write_group_separator(buf)
    assert buf.getvalue() == b"\x1d"
    reader = _reader(buf)
    read_group_separator(reader)
    with pytest.raises(RecordFormatError):
        read_group_separator(reader)


def test_string_round_trip():
    buf = io.BytesIO()
    values = ["simple", "multi\nline!", "", "Scheiß encoding"]
    for value in values:
        write_string(buf, value)
    reader = _reader(buf)
    assert [read_string(reader) for _ in values] == values
    with pytest.raises(RecordFormatError):
        read_string(reader)


def test_int_round_trip():
    buf = io.BytesIO()
    for value in (INT64_MIN, 0, INT64_MAX):
        write_int(buf, value)
    reader = _reader(buf)
    assert read_int(reader) == INT64_MIN
    assert read_int(reader) == 0
    assert read_int(reader) == INT64_MAX
    with pytest.raises(RecordFormatError):
        read_int(reader)


@pytest.mark.parametrize(
    "value, encoded",
    [(0, b"\x00\x1f"), (-1, b"\x01\x1f"), (1, b"\x02\x1f"), (64, b"\x80\x01\x1f")],
)
def test_int_zigzag_encoding(value, encoded):
    buf = io.BytesIO()
    write_int(buf, value)
    assert buf.getvalue() == encoded


def test_int_out_of_range():
    with pytest.raises(ValueError):
        write_int(io.BytesIO(), INT64_MAX + 1)


def test_float_round_trip():
    buf = io.BytesIO()
    for value in (0.0, 40.4, -0.3, 12.5):
        write_float(buf, value)
    reader = _reader(buf)
    assert [read_float(reader) for _ in range(4)] == [0.0, 40.4, -0.3, 12.5]
    with pytest.raises(RecordFormatError):
        read_float(reader)


def test_string_pointer_round_trip():
    buf = io.BytesIO()
    write_string_pointer(buf, None)
    write_string_pointer(buf, "foo")
    write_string_pointer(buf, "bar")
    reader = _reader(buf)
    assert read_string_pointer(reader) is None
    assert read_string_pointer(reader) == "foo"
    assert read_string_pointer(reader) == "bar"
    with pytest.raises(RecordFormatError):
        read_string_pointer(reader)


def test_end_of_record():
    buf = io.BytesIO()
    write_end_of_record(buf)
    assert buf.getvalue() == b"\x1e"
    reader = _reader(buf)
    read_end_of_record(reader)
    with pytest.raises(RecordFormatError):
        read_end_of_record(reader)


def test_border_round_trip():
    buf = io.BytesIO()
    write_border(buf, _border())
    reader = _reader(buf)
    assert read_border(reader) == _border()
    with pytest.raises(RecordFormatError):
        read_border(reader)


def test_fill_round_trip():
    buf = io.BytesIO()
    write_fill(buf, _fill())
    reader = _reader(buf)
    assert read_fill(reader) == _fill()
    with pytest.raises(RecordFormatError):
        read_fill(reader)


def test_font_round_trip():
    buf = io.BytesIO()
    write_font(buf, _font())
    reader = _reader(buf)
    assert read_font(reader) == _font()
    with pytest.raises(RecordFormatError):
        read_font(reader)


def test_alignment_round_trip():
    buf = io.BytesIO()
    write_alignment(buf, _alignment())
    reader = _reader(buf)
    assert read_alignment(reader) == _alignment()
    with pytest.raises(RecordFormatError):
        read_alignment(reader)


def test_style_round_trip():
    style = Style(
        border=_border(),
        fill=_fill(),
        font=_font(),
        alignment=_alignment(),
        apply_border=True,
        apply_fill=True,
        apply_font=True,
        apply_alignment=True,
    )
    buf = io.BytesIO()
    write_style(buf, style)
    reader = _reader(buf)
    assert read_style(reader) == style
    with pytest.raises(RecordFormatError):
        read_style(reader)


def test_data_validation_round_trip():
    buf = io.BytesIO()
    write_data_validation(buf, _data_validation())
    reader = _reader(buf)
    assert read_data_validation(reader) == _data_validation()
    with pytest.raises(RecordFormatError):
        read_data_validation(reader)


def test_data_validation_with_missing_strings():
    dv = DataValidation(sqref="A1", type="list", formula1='"a,b"')
    buf = io.BytesIO()
    write_data_validation(buf, dv)
    result = read_data_validation(_reader(buf))
    assert result == dv
    assert result.prompt is None
    assert result.error_style is None


def test_truncated_style_raises():
    buf = io.BytesIO()
    write_style(buf, Style())
    truncated = io.BytesIO(buf.getvalue()[:-3])
    with pytest.raises(RecordFormatError):
        read_style(truncated)