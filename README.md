# xlsxcells

An in-memory model of the cells, columns, dates and data validations found in
XLSX workbooks. It also has a compact binary record format for storing them.
It needs nothing beyond the standard library.

## What is in it

- `xlsxcells.types`: the `CellType` enum, the strict number parser
  `parse_float`, and `fallback_to(cell_type, cell_data, fallback)`.
  `fallback_to` keeps `CellType.NUMERIC` only when the data really parses as
  a number.
- `xlsxcells.dates`: conversion between `datetime` values and spreadsheet
  serial day numbers, in 1900 or 1904 mode (`time_to_excel_time`,
  `time_from_excel_time`). It also has helpers for Julian dates
  (`julian_date_to_gregorian_time`, `fraction_of_a_day`) and
  `time_to_utc_time`. Serial numbers below 62 are read as Julian dates, as the
  spreadsheet does. A naive `datetime` is taken to be UTC.
- `xlsxcells.col`: `Col` column definitions (`set_width`, `set_type`,
  `set_outline_level`, `copy_to_range`), plus `new_col_for_range` and
  `ColStore`. When a `Col` is added, the store trims or splits any `Col`
  whose range it overlaps, so the ranges held never overlap. The store
  supports `len()` and iteration in column order, and provides
  `find_col_by_index`, `get_or_make_cols_for_range` and `for_each`.
- `xlsxcells.styles`: plain dataclasses `Border`, `Fill`, `Font`,
  `Alignment`, `Style`, `RichTextColor`, `RichTextFont` and `RichTextRun`.
- `xlsxcells.cell`: `Cell`, `Hyperlink` and `DateTimeOptions`.
  - Typed setters: `set_string`, `set_rich_text`, `set_int`, `set_int64`,
    `set_float`, `set_float_with_format`, `set_numeric`, `set_bool`,
    `set_date`, `set_date_time`, `set_date_with_options`, `set_formula`,
    `set_string_formula` and `set_value`. `set_value` picks the cell type from
    the Python type of the value.
  - Readers: `as_int`, `as_int64`, `as_float`, `as_bool` and `get_time`. They
    raise `ValueError` when the stored text does not fit.
  - `is_modified()` reports whether the value, number format or rich text has
    changed since the cell was made, or whether any setter has been called.
  - `to_bytes()` and `Cell.from_bytes()` write and read a one-line text record
    of the cell's scalar fields.
- `xlsxcells.data_validation`: `new_data_validation` builds a
  `DataValidation` for a zero-based cell range. The rule is then set with one
  of these:
  - `set_drop_list`: a fixed list. It raises `ValueError` past 255 characters.
  - `set_in_file_list`: a reference to a range on a sheet.
  - `set_range`: a comparison using `DataValidationType` and
    `DataValidationOperator`.

  `set_input` and `set_error` add a prompt and an error message.
- `xlsxcells.records`: the separator-delimited byte format. It covers
  booleans, strings, zig-zag varint integers, floats, optional strings,
  borders, fills, fonts, alignments, styles and data validations, through
  `write_*` and `read_*` pairs over binary streams. Malformed or truncated data
  raises `RecordFormatError`.
- `xlsxcells.cellrecords`: records for rich text, whole cells
  (`write_cell` / `read_cell`; `None` is stored as an empty-cell marker) and
  rows (`RowRecord`, `write_row` / `read_row`). It also defines
  `RowNotFoundError`, a lookup error for missing row keys.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Setting a value and a format on a cell:

```python
from xlsxcells.cell import Cell

cell = Cell()
cell.set_float_with_format(37947.75, "yyyy-mm-dd")
cell.value          # "37947.75"
cell.num_fmt        # "yyyy-mm-dd"
cell.as_float()     # 37947.75
cell.is_modified()  # True
```

Converting dates:

```python
from datetime import datetime, timezone
from xlsxcells.dates import time_to_excel_time, time_from_excel_time

time_to_excel_time(datetime(2018, 6, 18, tzinfo=timezone.utc), False)  # 43269.0
time_from_excel_time(41275.0, False)  # datetime(2013, 1, 1, tzinfo=timezone.utc)
```

Adding column definitions:

```python
from xlsxcells.col import ColStore, new_col_for_range

store = ColStore()
store.add(new_col_for_range(1, 8))
store.add(new_col_for_range(4, 5))
[(c.min, c.max) for c in store]  # [(1, 3), (4, 5), (6, 8)]
len(store)                        # 3
```

Building a data validation:

```python
from xlsxcells.data_validation import new_data_validation

dv = new_data_validation(0, 0, 0, 0, True)
dv.set_drop_list(["a1", "a2", "a3"])
dv.formula1  # '"a1,a2,a3"'
dv.type      # "list"
```

Writing and reading a cell record:

```python
import io
from xlsxcells.cell import Cell
from xlsxcells.cellrecords import write_cell, read_cell

cell = Cell()
cell.set_string("hello")
buf = io.BytesIO()
write_cell(buf, cell)
buf.seek(0)
read_cell(buf).value  # "hello"
```

## What it does not do

- It does not open, read or save `.xlsx` files. There are no workbook, sheet
  or row objects. A `Cell`'s `row` is whatever object you attach: it needs a
  `num` attribute for `get_coordinates`. If it has a `sheet` with an
  `add_relation` method, `set_hyperlink` registers the link there.
- It does not render values through number formats. Cells keep their raw text
  and their format string, but there is no formatted-value output.
- It does not provide a cell store that keeps rows on disk. The record
  functions write to and read from any binary stream you supply. Storing and
  finding the records is left to the caller.
- There is no command-line tool.