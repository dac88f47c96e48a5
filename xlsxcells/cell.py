"""The cell: a single value in a row, with its format, style and links."""

from __future__ import annotations

import base64
import binascii
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from typing import Any, Optional

from .dates import time_from_excel_time, time_to_excel_time
from .styles import RichTextRun, Style
from .types import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATE_TIME_FORMAT,
    GENERAL_FORMAT,
    CellType,
    parse_float,
)

RELATIONSHIP_TYPE_HYPERLINK = "hyperlink"
RELATIONSHIP_TARGET_MODE_EXTERNAL = "External"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_TRUE_WORDS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_WORDS = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass
class Hyperlink:
    """A link held by a cell: external links in ``link``, in-workbook
    references in ``location``."""

    display_string: str = ""
    link: str = ""
    tooltip: str = ""
    location: str = ""


@dataclass
class DateTimeOptions:
    """How a datetime is stored: in which zone, and with which format."""

    location: tzinfo = timezone.utc
    excel_time_format: str = DEFAULT_DATE_FORMAT


DEFAULT_DATE_OPTIONS = DateTimeOptions(timezone.utc, DEFAULT_DATE_FORMAT)
DEFAULT_DATE_TIME_OPTIONS = DateTimeOptions(timezone.utc, DEFAULT_DATE_TIME_FORMAT)


def _format_float(n: float) -> str:
    """Shortest decimal text for n, never in scientific notation."""
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "+Inf" if n > 0 else "-Inf"
    return format(Decimal(repr(float(n))).normalize(), "f")


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _unb64(token: str) -> str:
    try:
        return base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError(f"invalid encoded field {token!r}") from exc


def _parse_bool(token: str) -> bool:
    if token in _TRUE_WORDS:
        return True
    if token in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean {token!r}")


@dataclass(eq=False)
class Cell:
    """A single cell of a row."""

    row: Any = None
    value: str = ""
    rich_text: list[RichTextRun] = field(default_factory=list)
    formula: str = ""
    style: Optional[Style] = None
    num_fmt: str = ""
    parsed_num_fmt: Any = None
    date1904: bool = False
    hidden: bool = False
    hmerge: int = 0
    vmerge: int = 0
    cell_type: CellType = CellType.STRING
    data_validation: Any = None
    hyperlink: Hyperlink = field(default_factory=Hyperlink)
    num: int = 0
    orig_value: str = ""
    orig_num_fmt: str = ""
    orig_rich_text: list[RichTextRun] = field(default_factory=list)
    _modified: bool = field(default=False, init=False, repr=False)

    def _updatable(self) -> None:
        store_row = getattr(self.row, "cell_store_row", None)
        if store_row is not None:
            store_row.cell_updatable(self)

    def is_modified(self) -> bool:
        """True if the cell changed since it was last persisted."""
        return (
            self._modified
            or self.value != self.orig_value
            or self.num_fmt != self.orig_num_fmt
            or list(self.rich_text or []) != list(self.orig_rich_text or [])
        )

    def merge(self, hcells: int, vcells: int) -> None:
        """Merge with cells to the right and/or below."""
        self._updatable()
        self.hmerge = hcells
        self.vmerge = vcells
        self._modified = True

    def set_string(self, s: str) -> None:
        self._updatable()
        self.value = s
        self.rich_text = []
        self.formula = ""
        self.cell_type = CellType.STRING
        self._modified = True

    def set_rich_text(self, runs: list[RichTextRun]) -> None:
        self._updatable()
        self.value = ""
        self.rich_text = list(runs)
        self.formula = ""
        self.cell_type = CellType.STRING
        self._modified = True

    def set_float(self, n: float) -> None:
        self._updatable()
        self.set_value(float(n))

    def get_time(self, date1904: bool) -> datetime:
        """The value read as an Excel serial date; ValueError if not numeric."""
        return time_from_excel_time(self.as_float(), date1904)

    def set_float_with_format(self, n: float, fmt: str) -> None:
        self._updatable()
        self.set_value(n)
        self.num_fmt = fmt
        self.formula = ""

    def set_format(self, fmt: str) -> None:
        self._updatable()
        self.num_fmt = fmt
        self._modified = True

    def set_date(self, t: datetime) -> None:
        self._updatable()
        self.set_date_with_options(t, DEFAULT_DATE_OPTIONS)

    def set_date_time(self, t: datetime) -> None:
        self._updatable()
        self.set_date_with_options(t, DEFAULT_DATE_TIME_OPTIONS)

    def set_date_with_options(self, t: datetime, options: DateTimeOptions) -> None:
        """Store t as its wall-clock time in options.location, to the second."""
        self._updatable()
        if t.tzinfo is None:
            t = t.replace(tzinfo=timezone.utc)
        local = t.astimezone(options.location)
        wall = local.replace(tzinfo=timezone.utc, microsecond=0)
        self.set_date_time_with_format(
            time_to_excel_time(wall, self.date1904), options.excel_time_format
        )
        self._modified = True

    def set_date_time_with_format(self, n: float, fmt: str) -> None:
        self._updatable()
        self.value = _format_float(n)
        self.num_fmt = fmt
        self.formula = ""
        self.cell_type = CellType.NUMERIC
        self._modified = True

    def as_float(self) -> float:
        """The value as a number; ValueError if it is not one."""
        return parse_float(self.value)

    def set_int64(self, n: int) -> None:
        self._updatable()
        self.set_value(int(n))

    def as_int64(self) -> int:
        """The value as a 64-bit decimal integer; ValueError otherwise."""
        if not _INT_PATTERN.fullmatch(self.value):
            raise ValueError(f'parsing "{self.value}": invalid syntax')
        number = int(self.value)
        if not _INT64_MIN <= number <= _INT64_MAX:
            raise ValueError(f'parsing "{self.value}": value out of range')
        return number

    def set_int(self, n: int) -> None:
        self._updatable()
        self.set_value(int(n))

    def as_int(self) -> int:
        """The value read as a number and truncated toward zero."""
        number = parse_float(self.value)
        try:
            return int(number)
        except (ValueError, OverflowError) as exc:
            raise ValueError(f'parsing "{self.value}": not an integer') from exc

    def set_hyperlink(self, hyperlink: str, display_text: str, tooltip: str) -> None:
        """Make the cell a link; http(s) targets are external, anything
        else is a location inside the workbook."""
        self._updatable()
        lowered = hyperlink.lower()
        if lowered.startswith("http:") or lowered.startswith("https://"):
            self.hyperlink = Hyperlink(link=hyperlink)
        else:
            self.hyperlink = Hyperlink(link=hyperlink, location=hyperlink)
        self.set_string(hyperlink)
        sheet = getattr(self.row, "sheet", None)
        if sheet is not None:
            sheet.add_relation(
                RELATIONSHIP_TYPE_HYPERLINK, hyperlink, RELATIONSHIP_TARGET_MODE_EXTERNAL
            )
        if display_text:
            self.hyperlink.display_string = display_text
            self.set_string(display_text)
        if tooltip:
            self.hyperlink.tooltip = tooltip

    def set_value(self, value: Any) -> None:
        """Store any value, choosing the cell type from its Python type."""
        self._updatable()
        if isinstance(value, datetime):
            self.set_date_time(value)
        elif isinstance(value, bool):
            self.set_string("true" if value else "false")
        elif isinstance(value, int):
            self.set_numeric(str(value))
        elif isinstance(value, float):
            self.set_numeric(_format_float(value))
        elif isinstance(value, str):
            self.set_string(value)
        elif isinstance(value, (bytes, bytearray)):
            self.set_string(bytes(value).decode("utf-8"))
        elif value is None:
            self.set_string("")
        else:
            self.set_string(str(value))

    def set_numeric(self, s: str) -> None:
        self._updatable()
        self.value = s
        self.num_fmt = GENERAL_FORMAT
        self.formula = ""
        self.cell_type = CellType.NUMERIC
        self._modified = True

    def set_bool(self, b: bool) -> None:
        self._updatable()
        self.value = "1" if b else "0"
        self.cell_type = CellType.BOOL
        self._modified = True

    def as_bool(self) -> bool:
        """Bool cells are true on "1", numeric cells on non-zero, others
        when not empty."""
        if self.cell_type == CellType.BOOL:
            return self.value == "1"
        if self.cell_type == CellType.NUMERIC:
            return self.value != "0"
        return self.value != ""

    def set_formula(self, formula: str) -> None:
        self._updatable()
        self.formula = formula
        self.cell_type = CellType.NUMERIC
        self._modified = True

    def set_string_formula(self, formula: str) -> None:
        self._updatable()
        self.formula = formula
        self.cell_type = CellType.STRING_FORMULA
        self._modified = True

    def get_style(self) -> Style:
        """The cell's style, created on first use."""
        if self.style is None:
            self.style = Style()
        return self.style

    def set_style(self, style: Style) -> None:
        self._updatable()
        self.style = style
        self._modified = True

    def set_data_validation(self, dv: Any) -> None:
        self._updatable()
        self.data_validation = dv
        self._modified = True

    def get_coordinates(self) -> tuple[int, int]:
        """Zero-based (column, row) of the cell."""
        if self.row is None:
            raise ValueError("cell is not attached to a row")
        return self.num, self.row.num

    def to_bytes(self) -> bytes:
        """A one-line text record of the cell's scalar fields."""
        fields = [
            _b64("V" + self.value),
            _b64("F" + self.formula),
            _b64("N" + self.num_fmt),
            "true" if self.date1904 else "false",
            "true" if self.hidden else "false",
            str(self.hmerge),
            str(self.vmerge),
            str(int(self.cell_type)),
            _b64("HDS" + self.hyperlink.display_string),
            _b64("HL" + self.hyperlink.link),
            _b64("HTT" + self.hyperlink.tooltip),
            str(self.num),
        ]
        return (" ".join(fields) + "\n").encode("ascii")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Cell":
        """Rebuild a cell from a record made by to_bytes."""
        tokens = data.decode("ascii").split()
        if len(tokens) != 12:
            raise ValueError(f"expected 12 fields, found {len(tokens)}")
        (value, formula, num_fmt, date1904, hidden, hmerge, vmerge,
         cell_type, hds, hl, htt, num) = tokens
        try:
            cell = cls(
                value=_unb64(value).removeprefix("V"),
                formula=_unb64(formula).removeprefix("F"),
                num_fmt=_unb64(num_fmt).removeprefix("N"),
                date1904=_parse_bool(date1904),
                hidden=_parse_bool(hidden),
                hmerge=int(hmerge),
                vmerge=int(vmerge),
                cell_type=CellType(int(cell_type)),
                num=int(num),
            )
        except ValueError as exc:
            raise ValueError(f"invalid cell record: {exc}") from exc
        cell.hyperlink = Hyperlink(
            display_string=_unb64(hds).removeprefix("HDS"),
            link=_unb64(hl).removeprefix("HL"),
            tooltip=_unb64(htt).removeprefix("HTT"),
        )
        return cell