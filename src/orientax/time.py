"""Leap seconds and calendar arithmetic.

The leap-second table maps TAI instants to the cumulative TAI-UTC offset
that applies from that instant onward.  Instants are expressed as
``(day_number, seconds_of_day)`` pairs where ``day_number`` is an integer
noon-based Julian day number and ``0 <= seconds_of_day < 86400``.  All
values are kept in Python ``int``/``float`` so that leap-second arithmetic
is exact; only the frame transformations assemble ``jax.numpy`` arrays.

A process-wide default table seeded with the IERS record from 1972-01-01
through 2017-01-01 is returned by :func:`default_leap_second_table`.  It is
append-only: :class:`~orientax.eop.EarthOrientationParameters` may insert
newly observed leap seconds, but entries are never removed.
"""

from __future__ import annotations

import bisect
import math
from typing import Iterator, NamedTuple

from .constants import (
    HOURS_PER_DAY,
    JD_MJD_OFFSET,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MILLISECOND,
    SECONDS_PER_MINUTE,
)

# Days in each month of a common year
_DAYS_IN_MONTH: tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_DAYS_IN_LEAP_FEBRUARY = 29

_HALF_DAY_SECONDS = 43200.0


class LeapSecond(NamedTuple):
    """A leap second, tagged by the TAI instant at which it takes effect.

    Attributes:
        day_number: Integer Julian day number (TAI).
        seconds_of_day: Seconds into the Julian day (TAI).
        offset: Cumulative TAI-UTC in seconds from this instant onward.
    """

    day_number: int
    seconds_of_day: float
    offset: float


# Leap second table: (TAI day number, TAI seconds of day, TAI-UTC in seconds)
# Each entry is 00:00:00 UTC of the listed date expressed in TAI.
# Source: IERS Bulletin C / USNO leap second table (1972-01-01 through 2017-01-01).
_LEAP_SECOND_TABLE: tuple[tuple[int, float, float], ...] = (
    (2441317, 43210.0, 10.0),  # 1972-01-01
    (2441499, 43211.0, 11.0),  # 1972-07-01
    (2441683, 43212.0, 12.0),  # 1973-01-01
    (2442048, 43213.0, 13.0),  # 1974-01-01
    (2442413, 43214.0, 14.0),  # 1975-01-01
    (2442778, 43215.0, 15.0),  # 1976-01-01
    (2443144, 43216.0, 16.0),  # 1977-01-01
    (2443509, 43217.0, 17.0),  # 1978-01-01
    (2443874, 43218.0, 18.0),  # 1979-01-01
    (2444239, 43219.0, 19.0),  # 1980-01-01
    (2444786, 43220.0, 20.0),  # 1981-07-01
    (2445151, 43221.0, 21.0),  # 1982-07-01
    (2445516, 43222.0, 22.0),  # 1983-07-01
    (2446247, 43223.0, 23.0),  # 1985-07-01
    (2447161, 43224.0, 24.0),  # 1988-01-01
    (2447892, 43225.0, 25.0),  # 1990-01-01
    (2448257, 43226.0, 26.0),  # 1991-01-01
    (2448804, 43227.0, 27.0),  # 1992-07-01
    (2449169, 43228.0, 28.0),  # 1993-07-01
    (2449534, 43229.0, 29.0),  # 1994-07-01
    (2450083, 43230.0, 30.0),  # 1996-01-01
    (2450630, 43231.0, 31.0),  # 1997-07-01
    (2451179, 43232.0, 32.0),  # 1999-01-01
    (2453736, 43233.0, 33.0),  # 2006-01-01
    (2454832, 43234.0, 34.0),  # 2009-01-01
    (2456109, 43235.0, 35.0),  # 2012-07-01
    (2457204, 43236.0, 36.0),  # 2015-07-01
    (2457754, 43237.0, 37.0),  # 2017-01-01
)


# ---------------------------------------------------------------------------
# Component arithmetic
# ---------------------------------------------------------------------------


def normalize_components(day_number: int, seconds_of_day: float) -> tuple[int, float]:
    """Carry whole days out of ``seconds_of_day``.

    Args:
        day_number: Integer Julian day number.
        seconds_of_day: Seconds, may be negative or exceed one day.

    Returns:
        ``(day_number, seconds_of_day)`` with ``0 <= seconds_of_day < 86400``.
    """
    extra_days = int(seconds_of_day / SECONDS_PER_DAY)
    day_number = int(day_number) + extra_days
    seconds_of_day = seconds_of_day - SECONDS_PER_DAY * extra_days

    if seconds_of_day < 0:
        day_number -= 1
        seconds_of_day += SECONDS_PER_DAY

    return day_number, seconds_of_day


def seconds_between(
    day_a: int, seconds_a: float, day_b: int, seconds_b: float
) -> float:
    """Return ``a - b`` in seconds for two ``(day, seconds)`` instants."""
    return (day_a - day_b) * SECONDS_PER_DAY + (seconds_a - seconds_b)


# ---------------------------------------------------------------------------
# Leap second table
# ---------------------------------------------------------------------------


class LeapSecondTable:
    """Ordered, append-only table of leap seconds.

    Entries are kept in ascending order of their TAI instant.  Inserting an
    entry whose instant is already present is a no-op, so the table can be
    shared between providers that discover the same leap second.

    Args:
        entries: Initial leap seconds, in any order. Default: empty.

    Examples:
        ```python
        from orientax.time import LeapSecond, LeapSecondTable
        table = LeapSecondTable([LeapSecond(2456109, 43235.0, 35.0)])
        table.lookup_offset(2456200, 0.0)  # 35.0
        ```
    """

    __slots__ = ("_entries", "_keys")

    def __init__(self, entries=None) -> None:
        self._entries: list[LeapSecond] = []
        self._keys: list[tuple[int, float]] = []
        for entry in entries or ():
            self.insert(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LeapSecond]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> LeapSecond:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"LeapSecondTable({len(self)} entries)"

    def copy(self) -> LeapSecondTable:
        """Return an independent table holding the same entries."""
        return LeapSecondTable(self._entries)

    def search(self, day_number: int, seconds_of_day: float) -> int:
        """Binary search for an instant.

        Args:
            day_number: Integer Julian day number (TAI).
            seconds_of_day: Seconds of day (TAI).

        Returns:
            int: Index of the matching entry, or the bitwise complement of
            the insertion point when no entry matches.
        """
        key = (day_number, seconds_of_day)
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            return index
        return ~index

    def insert(self, leap_second: LeapSecond) -> bool:
        """Insert a leap second, keeping the table sorted.

        Args:
            leap_second: Entry to add.

        Returns:
            bool: ``True`` if the entry was added, ``False`` if an entry for
            the same instant already existed.
        """
        day_number, seconds_of_day = normalize_components(
            leap_second.day_number, leap_second.seconds_of_day
        )
        index = self.search(day_number, seconds_of_day)
        if index >= 0:
            return False

        index = ~index
        self._keys.insert(index, (day_number, seconds_of_day))
        self._entries.insert(
            index, LeapSecond(day_number, seconds_of_day, float(leap_second.offset))
        )
        return True

    def lookup_offset(self, day_number: int, seconds_of_day: float) -> float:
        """Return TAI-UTC in effect at a TAI instant.

        The offset of the latest entry at or before the instant is used.
        Instants earlier than the first entry get the first entry's offset.

        Args:
            day_number: Integer Julian day number (TAI).
            seconds_of_day: Seconds of day (TAI).

        Returns:
            float: TAI-UTC in seconds (0.0 for an empty table).
        """
        if not self._entries:
            return 0.0

        index = self.search(day_number, seconds_of_day)
        if index < 0:
            index = max(~index - 1, 0)
        return self._entries[index].offset

    compute_tai_minus_utc = lookup_offset

    def utc_to_tai(self, day_number: int, seconds_of_day: float) -> tuple[int, float]:
        """Convert UTC components to TAI components.

        Args:
            day_number: Integer Julian day number (UTC).
            seconds_of_day: Seconds of day (UTC).

        Returns:
            tuple[int, float]: Normalized TAI ``(day_number, seconds_of_day)``.
        """
        if not self._entries:
            return normalize_components(day_number, seconds_of_day)

        index = self.search(day_number, seconds_of_day)
        if index < 0:
            index = ~index
        if index >= len(self._entries):
            index = len(self._entries) - 1

        offset = self._entries[index].offset
        if index > 0:
            # The entry instant is TAI; step back if UTC + offset falls before it
            entry = self._entries[index]
            difference = seconds_between(
                entry.day_number, entry.seconds_of_day, day_number, seconds_of_day
            )
            if difference > offset:
                offset = self._entries[index - 1].offset

        return normalize_components(day_number, seconds_of_day + offset)

    def tai_to_utc(
        self, day_number: int, seconds_of_day: float
    ) -> tuple[int, float] | None:
        """Convert TAI components to UTC components.

        Args:
            day_number: Integer Julian day number (TAI).
            seconds_of_day: Seconds of day (TAI).

        Returns:
            Normalized UTC ``(day_number, seconds_of_day)``, or ``None`` when
            the instant falls inside an inserted leap second and therefore has
            no ordinary UTC representation.
        """
        if not self._entries:
            return normalize_components(day_number, seconds_of_day)

        index = self.search(day_number, seconds_of_day)
        if index < 0:
            index = ~index

        if index == 0:
            offset = self._entries[0].offset
        elif index >= len(self._entries):
            offset = self._entries[-1].offset
        else:
            entry = self._entries[index]
            difference = seconds_between(
                entry.day_number, entry.seconds_of_day, day_number, seconds_of_day
            )
            if difference == 0:
                offset = entry.offset
            elif difference <= 1.0:
                return None
            else:
                offset = self._entries[index - 1].offset

        return normalize_components(day_number, seconds_of_day - offset)


_DEFAULT_TABLE = LeapSecondTable(LeapSecond(*row) for row in _LEAP_SECOND_TABLE)


def default_leap_second_table() -> LeapSecondTable:
    """Return the process-wide leap-second table.

    The same instance is returned on every call, so leap seconds registered
    by an EOP provider are visible to every :class:`~orientax.epoch.Epoch`
    created afterwards.

    Returns:
        LeapSecondTable: Shared table seeded with the 1972-2017 record.
    """
    return _DEFAULT_TABLE


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


def is_leap_year(year: int) -> bool:
    """Return ``True`` if *year* is a leap year in the proleptic Gregorian calendar."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in *month* (1-12) of *year*."""
    if month == 2 and is_leap_year(year):
        return _DAYS_IN_LEAP_FEBRUARY
    return _DAYS_IN_MONTH[month - 1]


def caldate_to_jd_components(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
    millisecond: float = 0.0,
) -> tuple[int, float]:
    """Convert a Gregorian calendar date to noon-based Julian day components.

    Integer arithmetic truncates toward zero, so the result is valid for the
    proleptic Gregorian calendar back to year 0.

    Args:
        year (int): Year.
        month (int): Month, 1-12.
        day (int): Day of month.
        hour (int): Hour. Default: ``0``
        minute (int): Minute. Default: ``0``
        second (float): Second. Default: ``0.0``
        millisecond (float): Millisecond. Default: ``0.0``

    Returns:
        tuple[int, float]: ``(day_number, seconds_of_day)``. Seconds are not
        normalized.

    References:

        1. P. K. Seidelmann, *Explanatory Supplement to the Astronomical Almanac*, 1992, p. 604.
    """
    a = int((month - 14) / 12)
    b = year + 4800 + a
    day_number = (
        int((1461 * b) / 4)
        + int((367 * (month - 2 - 12 * a)) / 12)
        - int((3 * int((b + 100) / 100)) / 4)
        + day
        - 32075
    )

    # Julian days begin at noon
    hour = hour - 12
    if hour < 0:
        hour += HOURS_PER_DAY

    seconds_of_day = second + (
        hour * SECONDS_PER_HOUR
        + minute * SECONDS_PER_MINUTE
        + millisecond * SECONDS_PER_MILLISECOND
    )

    if seconds_of_day >= _HALF_DAY_SECONDS:
        day_number -= 1

    return day_number, seconds_of_day


def jd_components_to_caldate(
    day_number: int, seconds_of_day: float
) -> tuple[int, int, int, int, int, int, float]:
    """Convert noon-based Julian day components to a Gregorian calendar date.

    Args:
        day_number (int): Integer Julian day number.
        seconds_of_day (float): Seconds of day, ``0 <= seconds_of_day < 86400``.

    Returns:
        tuple: ``(year, month, day, hour, minute, second, millisecond)`` with
        integer second and fractional millisecond.

    References:

        1. P. K. Seidelmann, *Explanatory Supplement to the Astronomical Almanac*, 1992, p. 604.
    """
    if seconds_of_day >= _HALF_DAY_SECONDS:
        day_number += 1

    L = day_number + 68569
    N = int((4 * L) / 146097)
    L = L - int((146097 * N + 3) / 4)
    I = int((4000 * (L + 1)) / 1461001)
    L = L - int((1461 * I) / 4) + 31
    J = int((80 * L) / 2447)
    day = L - int((2447 * J) / 80)
    L = int(J / 11)
    month = J + 2 - 12 * L
    year = 100 * (N - 49) + I + L

    hour = int(seconds_of_day / SECONDS_PER_HOUR)
    remaining = seconds_of_day - hour * SECONDS_PER_HOUR
    minute = int(remaining / SECONDS_PER_MINUTE)
    remaining = remaining - minute * SECONDS_PER_MINUTE
    second = int(remaining)
    millisecond = (remaining - second) / SECONDS_PER_MILLISECOND

    hour += 12
    if hour > 23:
        hour -= HOURS_PER_DAY

    return year, month, day, hour, minute, second, millisecond


def caldate_to_mjd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Convert a calendar date to Modified Julian Date.

    Args:
        year (int): Year of the calendar date.
        month (int): Month of the calendar date.
        day (int): Day of the calendar date.
        hour (int): Hour of the calendar date. Default: ``0``
        minute (int): Minute of the calendar date. Default: ``0``
        second (float): Second of the calendar date. Default: ``0.0``

    Returns:
        float: Modified Julian Date.
    """
    return caldate_to_jd(year, month, day, hour, minute, second) - JD_MJD_OFFSET


def caldate_to_jd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Convert a calendar date to Julian Date.

    Args:
        year (int): Year of the calendar date.
        month (int): Month of the calendar date.
        day (int): Day of the calendar date.
        hour (int): Hour of the calendar date. Default: ``0``
        minute (int): Minute of the calendar date. Default: ``0``
        second (float): Second of the calendar date. Default: ``0.0``

    Returns:
        float: Julian Date.
    """
    day_number, seconds_of_day = caldate_to_jd_components(
        year, month, day, hour, minute, second
    )
    return day_number + seconds_of_day / SECONDS_PER_DAY


def jd_to_mjd(jd: float) -> float:
    """Convert Julian Date to Modified Julian Date."""
    return jd - JD_MJD_OFFSET


def mjd_to_jd(mjd: float) -> float:
    """Convert Modified Julian Date to Julian Date."""
    return mjd + JD_MJD_OFFSET


def split_julian_date(jd: float) -> tuple[int, float]:
    """Split a Julian Date into whole day number and seconds of day.

    The whole part is truncated toward zero and the remainder expressed in
    seconds, then normalized.

    Args:
        jd (float): Julian Date.

    Returns:
        tuple[int, float]: ``(day_number, seconds_of_day)``.

    Raises:
        ValueError: If *jd* is not finite.
    """
    if not math.isfinite(jd):
        raise ValueError(f"Julian date must be finite, got {jd}")
    whole = math.trunc(jd)
    return normalize_components(whole, (jd - whole) * SECONDS_PER_DAY)
