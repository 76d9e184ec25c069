"""Real-time clock decoding and conversion to seconds since the epoch."""

from __future__ import annotations

from dataclasses import dataclass

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
YEAR = 365 * DAY

# Start of each month in seconds, assuming a leap year.
_MONTH_START = tuple(
    DAY * days
    for days in (
        0,
        31,
        31 + 29,
        31 + 29 + 31,
        31 + 29 + 31 + 30,
        31 + 29 + 31 + 30 + 31,
        31 + 29 + 31 + 30 + 31 + 30,
        31 + 29 + 31 + 30 + 31 + 30 + 31,
        31 + 29 + 31 + 30 + 31 + 30 + 31 + 31,
        31 + 29 + 31 + 30 + 31 + 30 + 31 + 31 + 30,
        31 + 29 + 31 + 30 + 31 + 30 + 31 + 31 + 30 + 31,
        31 + 29 + 31 + 30 + 31 + 30 + 31 + 31 + 30 + 31 + 30,
    )
)

_CENTURY_2000 = 0x20
_TIMEZONE_HOURS = 8


@dataclass
class BrokenDownTime:
    """Calendar time; ``mon`` counts from 0 and ``year`` from 1900."""

    sec: int = 0
    min: int = 0
    hour: int = 0
    mday: int = 1
    mon: int = 0
    year: int = 70


def bcd_to_bin(value: int) -> int:
    """Decode a two-digit BCD byte."""
    return (value & 0x0F) + (value >> 4) * 10


def tm_from_cmos(sec, minute, hour, mday, mon, year, century) -> BrokenDownTime:
    """Build a time from raw BCD clock registers.

    The month is made zero-based, eight hours are added for the local zone,
    and a century register of 0x20 moves the year into the 2000s.
    """
    tm = BrokenDownTime(
        sec=bcd_to_bin(sec),
        min=bcd_to_bin(minute),
        hour=bcd_to_bin(hour) + _TIMEZONE_HOURS,
        mday=bcd_to_bin(mday),
        mon=bcd_to_bin(mon) - 1,
        year=bcd_to_bin(year),
    )
    if century == _CENTURY_2000:
        tm.year += 100
    return tm


def _cdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    return a - b * _cdiv(a, b)


def mktime(tm: BrokenDownTime) -> int:
    """Return seconds since 1970-01-01 for ``tm``, valid through 2099."""
    year = tm.year - 70
    res = YEAR * year + DAY * _cdiv(year + 1, 4)
    res += _MONTH_START[tm.mon]
    if tm.mon > 1 and _cmod(year + 2, 4):
        res -= DAY
    res += DAY * (tm.mday - 1)
    res += HOUR * tm.hour
    res += MINUTE * tm.min
    res += tm.sec
    return res