"""Conversion between datetimes and Excel's serial day numbers."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

MJD_0 = 2400000.5
MJD_JD2000 = 51544.5

SECONDS_IN_A_DAY = 86400.0
NANOS_IN_A_DAY = 86400e9

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# Excel counts from 1 Jan 1900 as day 1 and pretends 29 Feb 1900 existed,
# so counting from 30 Dec 1899 gives the right differences.
EXCEL_1900_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)
EXCEL_1904_EPOCH = datetime(1904, 1, 1, tzinfo=timezone.utc)

DAYS_BETWEEN_1970_AND_1900 = float((UNIX_EPOCH - EXCEL_1900_EPOCH).days)
DAYS_BETWEEN_1970_AND_1904 = float((UNIX_EPOCH - EXCEL_1904_EPOCH).days)

_OFFSET_1900 = 15018.0
_OFFSET_1904 = 16480.0

_C1US = 1000
_C1S = 10**9
_C1DAY = 24 * 60 * 60 * 1e9


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    """Integer division truncating toward zero, with the matching remainder."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


def time_to_utc_time(t: datetime) -> datetime:
    """Keep the wall-clock fields of t but mark them as UTC."""
    return t.replace(tzinfo=timezone.utc)


def _shift_julian_to_noon(days: float, fraction: float) -> tuple[float, float]:
    if -0.5 < fraction < 0.5:
        fraction += 0.5
    elif fraction >= 0.5:
        days += 1
        fraction -= 0.5
    elif fraction <= -0.5:
        days -= 1
        fraction += 1.5
    return days, fraction


def fraction_of_a_day(fraction: float) -> tuple[int, int, int, int]:
    """Split a fraction of a day into hours, minutes, seconds and
    nanoseconds, rounded to the microsecond."""
    frac = int(_C1DAY * fraction + _C1US / 2)
    _, rem = _trunc_divmod(frac, _C1S)
    nanoseconds = _trunc_divmod(rem, _C1US)[0] * _C1US
    frac = _trunc_divmod(frac, _C1S)[0]
    seconds = _trunc_divmod(frac, 60)[1]
    frac = _trunc_divmod(frac, 60)[0]
    minutes = _trunc_divmod(frac, 60)[1]
    hours = _trunc_divmod(frac, 60)[0]
    return hours, minutes, seconds, nanoseconds


def _fliegel_van_flandern(jd: int) -> tuple[int, int, int]:
    """Day, month and year of a Julian day number (CACM 11(10), 1968)."""
    l = jd + 68569
    n = (4 * l) // 146097
    l = l - (146097 * n + 3) // 4
    i = (4000 * (l + 1)) // 1461001
    l = l - (1461 * i) // 4 + 31
    j = (80 * l) // 2447
    d = l - (2447 * j) // 80
    l = j // 11
    m = j + 2 - 12 * l
    y = 100 * (n - 49) + i + l
    return d, m, y


def julian_date_to_gregorian_time(part1: float, part2: float) -> datetime:
    """Turn a Julian date given in two parts into a UTC datetime."""
    part1_frac, part1_int = math.modf(part1)
    part2_frac, part2_int = math.modf(part2)
    days, fraction = _shift_julian_to_noon(part1_int + part2_int, part1_frac + part2_frac)
    day, month, year = _fliegel_van_flandern(int(days))
    hours, minutes, seconds, nanoseconds = fraction_of_a_day(fraction)
    return datetime(year, month, day, tzinfo=timezone.utc) + timedelta(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=nanoseconds // 1000,
    )


def time_from_excel_time(excel_time: float, date1904: bool) -> datetime:
    """Convert an Excel serial day number into a UTC datetime."""
    whole_days = int(excel_time)
    # Excel uses Julian dates before 1 March 1900 and Gregorian after.
    if whole_days <= 61:
        offset = _OFFSET_1904 if date1904 else _OFFSET_1900
        return julian_date_to_gregorian_time(MJD_0, excel_time + offset)
    float_part = excel_time - whole_days
    epoch = EXCEL_1904_EPOCH if date1904 else EXCEL_1900_EPOCH
    nanos = int(NANOS_IN_A_DAY * float_part)
    return epoch + timedelta(days=whole_days) + timedelta(microseconds=nanos // 1000)


def time_to_excel_time(t: datetime, date1904: bool) -> float:
    """Convert a datetime into Excel's serial day number; a naive
    datetime is taken to be UTC."""
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    delta = t - UNIX_EPOCH
    unix_seconds = delta.days * 86400 + delta.seconds
    nanos = delta.microseconds * 1000
    days_since_unix_epoch = unix_seconds / SECONDS_IN_A_DAY
    nanos_part = nanos / NANOS_IN_A_DAY
    offset = DAYS_BETWEEN_1970_AND_1904 if date1904 else DAYS_BETWEEN_1970_AND_1900
    return days_since_unix_epoch + offset + nanos_part