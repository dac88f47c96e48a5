"""Byte records for rich text, cells and rows kept in a cell store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Optional

from .cell import Cell, Hyperlink
from .records import (
    RecordFormatError,
    read_bool,
    read_data_validation,
    read_end_of_record,
    read_float,
    read_int,
    read_string,
    read_style,
    write_bool,
    write_data_validation,
    write_end_of_record,
    write_float,
    write_group_separator,
    write_int,
    write_string,
    write_style,
)
from .styles import RichTextColor, RichTextFont, RichTextRun
from .types import CellType


def _quote(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return '"' + escaped + '"'


class RowNotFoundError(LookupError):
    """Raised when a row key has no stored row."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(key, reason)
        self.key = key
        self.reason = reason

    def __str__(self) -> str:
        return f"Row {_quote(self.key)} not found. {self.reason}"


@dataclass
class RowRecord:
    """The stored attributes of a row, without its cells."""

    hidden: bool = False
    height: float = 0.0
    outline_level: int = 0
    is_custom: bool = False
    num: int = 0
    max_col: int = -1

    @property
    def cell_count(self) -> int:
        """The number of cells the row spans."""
        return self.max_col + 1


def write_rich_text_color(buf: BinaryIO, color: RichTextColor) -> None:
    has_theme = color.theme is not None
    has_indexed = color.indexed is not None
    write_string(buf, color.rgb)
    write_bool(buf, has_theme)
    write_float(buf, color.tint)
    write_bool(buf, has_indexed)
    write_end_of_record(buf)
    if color.theme is not None:
        write_int(buf, color.theme)
        write_end_of_record(buf)
    if color.indexed is not None:
        write_int(buf, color.indexed)
        write_end_of_record(buf)


def read_rich_text_color(reader: BinaryIO) -> RichTextColor:
    rgb = read_string(reader)
    has_theme = read_bool(reader)
    tint = read_float(reader)
    has_indexed = read_bool(reader)
    read_end_of_record(reader)
    color = RichTextColor(rgb=rgb, tint=tint)
    if has_theme:
        color.theme = read_int(reader)
        read_end_of_record(reader)
    if has_indexed:
        color.indexed = read_int(reader)
        read_end_of_record(reader)
    return color


def write_rich_text_font(buf: BinaryIO, font: RichTextFont) -> None:
    write_string(buf, font.name)
    write_float(buf, font.size)
    write_int(buf, int(font.family))
    write_int(buf, int(font.charset))
    write_bool(buf, font.color is not None)
    write_bool(buf, font.bold)
    write_bool(buf, font.italic)
    write_bool(buf, font.strike)
    write_string(buf, str(font.vert_align))
    write_string(buf, str(font.underline))
    write_end_of_record(buf)
    if font.color is not None:
        write_rich_text_color(buf, font.color)


def read_rich_text_font(reader: BinaryIO) -> RichTextFont:
    font = RichTextFont(
        name=read_string(reader),
        size=read_float(reader),
        family=read_int(reader),
        charset=read_int(reader),
    )
    has_color = read_bool(reader)
    font.bold = read_bool(reader)
    font.italic = read_bool(reader)
    font.strike = read_bool(reader)
    font.vert_align = read_string(reader)
    font.underline = read_string(reader)
    read_end_of_record(reader)
    if has_color:
        font.color = read_rich_text_color(reader)
    return font


def write_rich_text_run(buf: BinaryIO, run: RichTextRun) -> None:
    write_bool(buf, run.font is not None)
    write_string(buf, run.text)
    write_end_of_record(buf)
    if run.font is not None:
        write_rich_text_font(buf, run.font)


def read_rich_text_run(reader: BinaryIO) -> RichTextRun:
    has_font = read_bool(reader)
    run = RichTextRun(text=read_string(reader))
    read_end_of_record(reader)
    if has_font:
        run.font = read_rich_text_font(reader)
    return run


def write_rich_text(buf: BinaryIO, runs: Optional[list[RichTextRun]]) -> None:
    runs = runs or []
    write_int(buf, len(runs))
    for run in runs:
        write_rich_text_run(buf, run)


def read_rich_text(reader: BinaryIO) -> list[RichTextRun]:
    length = read_int(reader)
    return [read_rich_text_run(reader) for _ in range(max(length, 0))]


def write_cell(buf: BinaryIO, cell: Optional[Cell]) -> None:
    """Write a cell record; None is written as an empty-cell marker."""
    if cell is None:
        write_bool(buf, True)
        write_end_of_record(buf)
        return
    write_bool(buf, False)
    write_string(buf, cell.value)
    write_string(buf, cell.formula)
    write_bool(buf, cell.style is not None)
    write_string(buf, cell.num_fmt)
    write_bool(buf, cell.date1904)
    write_bool(buf, cell.hidden)
    write_int(buf, cell.hmerge)
    write_int(buf, cell.vmerge)
    write_int(buf, int(cell.cell_type))
    write_bool(buf, cell.data_validation is not None)
    write_string(buf, cell.hyperlink.display_string)
    write_string(buf, cell.hyperlink.link)
    write_string(buf, cell.hyperlink.tooltip)
    write_int(buf, cell.num)
    write_rich_text(buf, cell.rich_text)
    write_end_of_record(buf)
    if cell.style is not None:
        write_style(buf, cell.style)
    if cell.data_validation is not None:
        write_data_validation(buf, cell.data_validation)


def read_cell(reader: BinaryIO) -> Optional[Cell]:
    """Read a cell record; the empty-cell marker gives None."""
    if read_bool(reader):
        read_end_of_record(reader)
        return None
    value = read_string(reader)
    formula = read_string(reader)
    has_style = read_bool(reader)
    num_fmt = read_string(reader)
    date1904 = read_bool(reader)
    hidden = read_bool(reader)
    hmerge = read_int(reader)
    vmerge = read_int(reader)
    raw_type = read_int(reader)
    try:
        cell_type = CellType(raw_type)
    except ValueError:
        raise RecordFormatError(f"unknown cell type {raw_type}") from None
    has_data_validation = read_bool(reader)
    hyperlink = Hyperlink(
        display_string=read_string(reader),
        link=read_string(reader),
        tooltip=read_string(reader),
    )
    num = read_int(reader)
    rich_text = read_rich_text(reader)
    read_end_of_record(reader)
    cell = Cell(
        value=value,
        rich_text=rich_text,
        formula=formula,
        num_fmt=num_fmt,
        date1904=date1904,
        hidden=hidden,
        hmerge=hmerge,
        vmerge=vmerge,
        cell_type=cell_type,
        hyperlink=hyperlink,
        num=num,
    )
    if has_style:
        cell.style = read_style(reader)
    if has_data_validation:
        cell.data_validation = read_data_validation(reader)
    return cell


def write_row(buf: BinaryIO, row: RowRecord) -> None:
    """Write a row record followed by a group separator."""
    write_bool(buf, row.hidden)
    write_float(buf, row.height)
    write_int(buf, int(row.outline_level))
    write_bool(buf, row.is_custom)
    write_int(buf, row.num)
    write_int(buf, row.max_col)
    write_end_of_record(buf)
    write_group_separator(buf)


def read_row(reader: BinaryIO) -> RowRecord:
    """Read a row record up to its end-of-record marker."""
    hidden = read_bool(reader)
    height = read_float(reader)
    outline_level = read_int(reader) & 0xFF
    is_custom = read_bool(reader)
    num = read_int(reader)
    max_col = read_int(reader)
    read_end_of_record(reader)
    return RowRecord(
        hidden=hidden,
        height=height,
        outline_level=outline_level,
        is_custom=is_custom,
        num=num,
        max_col=max_col,
    )