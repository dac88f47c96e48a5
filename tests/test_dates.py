from datetime import datetime, timedelta, timezone

import pytest

from xlsxcells.dates import (
    fraction_of_a_day,
    julian_date_to_gregorian_time,
    time_from_excel_time,
    time_to_excel_time,
    time_to_utc_time,
)

UTC = timezone.utc


def _utc(*args):
    return datetime(*args, tzinfo=UTC)


def _round_to_second(dt):
    return (dt + timedelta(microseconds=500_000)).replace(microsecond=0)


def test_fraction_of_a_day():
    assert fraction_of_a_day(0) == (0, 0, 0, 0)
    assert fraction_of_a_day(1.0 / 24.0) == (1, 0, 0, 0)


@pytest.mark.parametrize(
    "part2, expected",
    [
        (51544.0, _utc(2000, 1, 1, 0, 0, 0)),
        (51544.5, _utc(2000, 1, 1, 12, 0, 0)),
        (51544.245, _utc(2000, 1, 1, 5, 52, 48)),
        (51544.2456, _utc(2000, 1, 1, 5, 53, 39, 840000)),
        (51544.24560789123, _utc(2000, 1, 1, 5, 53, 40, 521802)),
        (51544.1, _utc(2000, 1, 1, 2, 24, 0)),
        (51544.75, _utc(2000, 1, 1, 18, 0, 0)),
    ],
)
def test_julian_date_to_gregorian_time(part2, expected):
    assert julian_date_to_gregorian_time(2400000.5, part2) == expected


@pytest.mark.parametrize(
    "excel_time, expected",
    [
        (0, _utc(1899, 12, 30)),
        (60, _utc(1900, 2, 28)),
        (61, _utc(1900, 3, 1)),
        (41275.0, _utc(2013, 1, 1)),
        (401769, _utc(3000, 1, 1)),
    ],
)
def test_time_from_excel_time(excel_time, expected):
    assert time_from_excel_time(excel_time, False) == expected


@pytest.mark.parametrize(
    "excel_time, expected",
    [
        (0.114583333333333, _utc(1899, 12, 30, 2, 45, 0)),
        (60.1145833333333, _utc(1900, 2, 28, 2, 45, 0)),
        (61.3986111111111, _utc(1900, 3, 1, 9, 34, 0)),
        (37947.75, _utc(2003, 11, 22, 18, 0, 0)),
        (41275.1145833333, _utc(2013, 1, 1, 2, 45, 0)),
    ],
)
def test_time_from_excel_time_with_fractional_part(excel_time, expected):
    assert _round_to_second(time_from_excel_time(excel_time, False)) == expected


def test_time_from_excel_time_with_1904_offset():
    assert time_from_excel_time(39813.0, True) == _utc(2013, 1, 1)


@pytest.mark.parametrize(
    "t, date1904, expected",
    [
        (_utc(1899, 12, 30), False, 0.0),
        (_utc(1899, 12, 30), True, -1462.0),
        (_utc(1970, 1, 1), False, 25569.0),
        (_utc(2018, 6, 18), False, 43269.0),
        (_utc(3000, 1, 1), False, 401769.0),
    ],
)
def test_time_to_excel_time(t, date1904, expected):
    assert time_to_excel_time(t, date1904) == expected


def test_small_time_round_trips():
    small_date = _utc(1899, 12, 30, 0, 0, 0, 1)
    small_excel_time = time_to_excel_time(small_date, False)
    assert small_excel_time != 0.0
    assert time_from_excel_time(small_excel_time, False) == small_date


def test_naive_datetime_is_taken_as_utc():
    assert time_to_excel_time(datetime(2018, 6, 18), False) == 43269.0


def test_time_to_excel_time_respects_offset():
    t = datetime(2018, 6, 18, 5, 0, tzinfo=timezone(timedelta(hours=5)))
    assert time_to_excel_time(t, False) == 43269.0


def test_time_to_utc_time_keeps_wall_clock():
    t = datetime(2016, 1, 1, 10, 30, tzinfo=timezone(timedelta(hours=5)))
    assert time_to_utc_time(t) == _utc(2016, 1, 1, 10, 30)