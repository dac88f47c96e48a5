"""A compact byte record format for storing cell data and styles."""

from __future__ import annotations

import struct
from typing import BinaryIO, Optional

from .data_validation import DataValidation
from .styles import Alignment, Border, Fill, Font, Style

TRUE = 0x01
FALSE = 0x00
US = 0x1F  # unit separator
RS = 0x1E  # record separator
GS = 0x1D  # group separator

_MASK64 = (1 << 64) - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_MAX_VARINT_LEN = 10


class RecordFormatError(ValueError):
    """Raised when stored record data is truncated or malformed."""


def _read_byte(reader: BinaryIO) -> int:
    data = reader.read(1)
    if not data:
        raise RecordFormatError("unexpected end of record data")
    return data[0]


def _write_byte(buf: BinaryIO, value: int) -> None:
    buf.write(bytes((value,)))


def _encode_uvarint(value: int) -> bytes:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _read_uvarint(reader: BinaryIO) -> int:
    value = 0
    shift = 0
    for i in range(_MAX_VARINT_LEN):
        b = _read_byte(reader)
        if b < 0x80:
            if i == _MAX_VARINT_LEN - 1 and b > 1:
                break
            return value | (b << shift)
        value |= (b & 0x7F) << shift
        shift += 7
    raise RecordFormatError("varint overflows a 64-bit integer")


def write_unit_separator(buf: BinaryIO) -> None:
    _write_byte(buf, US)


def read_unit_separator(reader: BinaryIO) -> None:
    if _read_byte(reader) != US:
        raise RecordFormatError("Invalid format in cellstore, no unit separator found")


def write_group_separator(buf: BinaryIO) -> None:
    _write_byte(buf, GS)


def read_group_separator(reader: BinaryIO) -> None:
    if _read_byte(reader) != GS:
        raise RecordFormatError("Invalid format in cellstore, no group separator found")


def write_end_of_record(buf: BinaryIO) -> None:
    _write_byte(buf, RS)


def read_end_of_record(reader: BinaryIO) -> None:
    if _read_byte(reader) != RS:
        raise RecordFormatError("Expected end of record, but not found")


def write_bool(buf: BinaryIO, value: bool) -> None:
    _write_byte(buf, TRUE if value else FALSE)
    write_unit_separator(buf)


def read_bool(reader: BinaryIO) -> bool:
    b = _read_byte(reader)
    read_unit_separator(reader)
    return b == TRUE


def write_string(buf: BinaryIO, s: str) -> None:
    buf.write(s.encode("utf-8"))
    write_unit_separator(buf)


def read_string(reader: BinaryIO) -> str:
    data = bytearray()
    while True:
        b = _read_byte(reader)
        if b == US:
            break
        data.append(b)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RecordFormatError("string is not valid UTF-8") from exc


def write_int(buf: BinaryIO, i: int) -> None:
    """Write a signed 64-bit integer as a zig-zag varint."""
    if not _INT64_MIN <= i <= _INT64_MAX:
        raise ValueError(f"{i} does not fit in 64 bits")
    zigzag = (i << 1) & _MASK64
    if i < 0:
        zigzag = ~zigzag & _MASK64
    buf.write(_encode_uvarint(zigzag))
    write_unit_separator(buf)


def read_int(reader: BinaryIO) -> int:
    zigzag = _read_uvarint(reader)
    value = zigzag >> 1
    if zigzag & 1:
        value = ~value
    read_unit_separator(reader)
    return value


def write_float(buf: BinaryIO, f: float) -> None:
    """Write a float as the varint of its IEEE 754 bits."""
    (bits,) = struct.unpack("<Q", struct.pack("<d", f))
    buf.write(_encode_uvarint(bits))
    write_unit_separator(buf)


def read_float(reader: BinaryIO) -> float:
    bits = _read_uvarint(reader)
    read_unit_separator(reader)
    (value,) = struct.unpack("<d", struct.pack("<Q", bits))
    return value


def write_string_pointer(buf: BinaryIO, s: Optional[str]) -> None:
    write_bool(buf, s is None)
    if s is not None:
        buf.write(s.encode("utf-8"))
    write_unit_separator(buf)


def read_string_pointer(reader: BinaryIO) -> Optional[str]:
    if read_bool(reader):
        read_unit_separator(reader)
        return None
    return read_string(reader)


def write_border(buf: BinaryIO, border: Border) -> None:
    for value in (
        border.left,
        border.left_color,
        border.right,
        border.right_color,
        border.top,
        border.top_color,
        border.bottom,
        border.bottom_color,
    ):
        write_string(buf, value)


def read_border(reader: BinaryIO) -> Border:
    return Border(*(read_string(reader) for _ in range(8)))


def write_fill(buf: BinaryIO, fill: Fill) -> None:
    write_string(buf, fill.pattern_type)
    write_string(buf, fill.bg_color)
    write_string(buf, fill.fg_color)


def read_fill(reader: BinaryIO) -> Fill:
    return Fill(
        pattern_type=read_string(reader),
        bg_color=read_string(reader),
        fg_color=read_string(reader),
    )


def write_font(buf: BinaryIO, font: Font) -> None:
    write_float(buf, font.size)
    write_string(buf, font.name)
    write_int(buf, font.family)
    write_int(buf, font.charset)
    write_string(buf, font.color)
    write_bool(buf, font.bold)
    write_bool(buf, font.italic)
    write_bool(buf, font.underline)


def read_font(reader: BinaryIO) -> Font:
    return Font(
        size=read_float(reader),
        name=read_string(reader),
        family=read_int(reader),
        charset=read_int(reader),
        color=read_string(reader),
        bold=read_bool(reader),
        italic=read_bool(reader),
        underline=read_bool(reader),
    )


def write_alignment(buf: BinaryIO, alignment: Alignment) -> None:
    write_string(buf, alignment.horizontal)
    write_int(buf, alignment.indent)
    write_bool(buf, alignment.shrink_to_fit)
    write_int(buf, alignment.text_rotation)
    write_string(buf, alignment.vertical)
    write_bool(buf, alignment.wrap_text)


def read_alignment(reader: BinaryIO) -> Alignment:
    return Alignment(
        horizontal=read_string(reader),
        indent=read_int(reader),
        shrink_to_fit=read_bool(reader),
        text_rotation=read_int(reader),
        vertical=read_string(reader),
        wrap_text=read_bool(reader),
    )


def write_style(buf: BinaryIO, style: Style) -> None:
    write_border(buf, style.border)
    write_fill(buf, style.fill)
    write_font(buf, style.font)
    write_alignment(buf, style.alignment)
    write_bool(buf, style.apply_border)
    write_bool(buf, style.apply_fill)
    write_bool(buf, style.apply_font)
    write_bool(buf, style.apply_alignment)
    write_end_of_record(buf)


def read_style(reader: BinaryIO) -> Style:
    style = Style(
        border=read_border(reader),
        fill=read_fill(reader),
        font=read_font(reader),
        alignment=read_alignment(reader),
        apply_border=read_bool(reader),
        apply_fill=read_bool(reader),
        apply_font=read_bool(reader),
        apply_alignment=read_bool(reader),
    )
    read_end_of_record(reader)
    return style


def write_data_validation(buf: BinaryIO, dv: DataValidation) -> None:
    write_bool(buf, dv.allow_blank)
    write_bool(buf, dv.show_input_message)
    write_bool(buf, dv.show_error_message)
    write_string_pointer(buf, dv.error_style)
    write_string_pointer(buf, dv.error_title)
    write_string(buf, dv.operator)
    write_string_pointer(buf, dv.error)
    write_string_pointer(buf, dv.prompt_title)
    write_string_pointer(buf, dv.prompt)
    write_string(buf, dv.type)
    write_string(buf, dv.sqref)
    write_string(buf, dv.formula1)
    write_string(buf, dv.formula2)
    write_end_of_record(buf)


def read_data_validation(reader: BinaryIO) -> DataValidation:
    dv = DataValidation(
        allow_blank=read_bool(reader),
        show_input_message=read_bool(reader),
        show_error_message=read_bool(reader),
        error_style=read_string_pointer(reader),
        error_title=read_string_pointer(reader),
        operator=read_string(reader),
        error=read_string_pointer(reader),
        prompt_title=read_string_pointer(reader),
        prompt=read_string_pointer(reader),
        type=read_string(reader),
        sqref=read_string(reader),
        formula1=read_string(reader),
        formula2=read_string(reader),
    )
    read_end_of_record(reader)
    return dv