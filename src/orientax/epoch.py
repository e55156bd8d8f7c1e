"""The epoch module provides the ``Epoch`` class for representing instants in time.

An Epoch stores an absolute instant as an integer noon-based Julian day
number and a floating-point number of seconds into that day, always in the
TAI time standard.  Splitting the instant this way keeps sub-microsecond
precision over many centuries, which a single float Julian Date cannot.

UTC is accepted on input and produced on output (calendar dates, ISO 8601
strings, ``datetime`` objects) by converting through a
:class:`~orientax.time.LeapSecondTable`.  Instants that fall inside an
inserted leap second are reported with ``second == 60``.

Epoch instances are immutable values: every arithmetic operation returns a
new instance.
"""

from __future__ import annotations

import enum
import math
import re
from datetime import datetime, timezone
from typing import NamedTuple

import numpy as np

from .constants import (
    HOURS_PER_DAY,
    JD_MJD_OFFSET,
    MINUTES_PER_HOUR,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MILLISECOND,
    SECONDS_PER_MINUTE,
)
from .time import (
    LeapSecondTable,
    caldate_to_jd_components,
    days_in_month,
    default_leap_second_table,
    is_leap_year,
    jd_components_to_caldate,
    normalize_components,
)

_ISO8601_ERROR = "Invalid ISO 8601 date."

# Date patterns
# YYYY
_MATCH_CALENDAR_YEAR = re.compile(r"^(\d{4})$")
# YYYY-MM (YYYYMM is invalid)
_MATCH_CALENDAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")
# YYYY-DDD or YYYYDDD
_MATCH_ORDINAL_DATE = re.compile(r"^(\d{4})-?(\d{3})$")
# YYYY-Www or YYYYWww or YYYY-Www-D or YYYYWwwD
_MATCH_WEEK_DATE = re.compile(r"^(\d{4})-?W(\d{2})-?(\d{1})?$")
# YYYY-MM-DD or YYYYMMDD
_MATCH_CALENDAR_DATE = re.compile(r"^(\d{4})-?(\d{2})-?(\d{2})$")

# Time patterns, each followed by an optional UTC designator or offset
_UTC_OFFSET = r"([Z+\-])?(\d{2})?:?(\d{2})?$"
# HH or HH.xxxxx
_MATCH_HOURS = re.compile(r"^(\d{2})(\.\d+)?" + _UTC_OFFSET)
# HH:MM or HHMM.xxxxx
_MATCH_HOURS_MINUTES = re.compile(r"^(\d{2}):?(\d{2})(\.\d+)?" + _UTC_OFFSET)
# HH:MM:SS or HHMMSS.xxxxx
_MATCH_HOURS_MINUTES_SECONDS = re.compile(
    r"^(\d{2}):?(\d{2}):?(\d{2})(\.\d+)?" + _UTC_OFFSET
)


class TimeStandard(enum.Enum):
    """Time standard of the components passed to :class:`Epoch`.

    Attributes:
        UTC: Coordinated Universal Time, the civil scale with leap seconds.
        TAI: International Atomic Time, continuous with no leap seconds.
    """

    UTC = "UTC"
    TAI = "TAI"


class GregorianDate(NamedTuple):
    """A UTC calendar date and time of day.

    Attributes:
        year: Year.
        month: Month, 1-12.
        day: Day of month.
        hour: Hour, 0-23.
        minute: Minute, 0-59.
        second: Whole second, 0-60 (60 only during a leap second).
        millisecond: Fractional part of the second, in milliseconds.
        is_leap_second: ``True`` if the instant lies inside a leap second.
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: float = 0.0
    is_leap_second: bool = False


def _resolve_table(leap_seconds: LeapSecondTable | None) -> LeapSecondTable:
    return default_leap_second_table() if leap_seconds is None else leap_seconds


def _format_js_number(value: float) -> str:
    """Shortest positional decimal representation, without a trailing ``.0``."""
    return np.format_float_positional(value, trim="-")


class Epoch:
    """Represents a single instant in time.

    The internal representation is two private components: ``_day_number``
    (``int``, noon-based Julian day number in TAI) and ``_seconds_of_day``
    (``float``, ``0 <= seconds < 86400``).

    Constructors:
        Epoch(2456109.0, 0.0)                       # UTC Julian day
        Epoch(2451545, 32.184, TimeStandard.TAI)
        Epoch.from_caldate(2018, 1, 1, 12, 0, 0)
        Epoch.from_iso8601("2018-01-01T12:00:00Z")
        Epoch.from_datetime(datetime(2018, 1, 1, tzinfo=timezone.utc))

    Args:
        day_number (float): Julian day number. A fractional part is moved
            into the seconds. Default: ``0.0``
        seconds_of_day (float): Seconds into the Julian day; any value is
            accepted and normalized. Default: ``0.0``
        time_standard (TimeStandard): Standard of the given components.
            Default: ``TimeStandard.UTC``
        leap_seconds (LeapSecondTable): Table used for UTC conversion.
            Default: :func:`~orientax.time.default_leap_second_table`.

    Raises:
        ValueError: If the components are not finite.
        TypeError: If *time_standard* is not a :class:`TimeStandard`.
    """

    __slots__ = ("_day_number", "_seconds_of_day")

    def __init__(
        self,
        day_number: float = 0.0,
        seconds_of_day: float = 0.0,
        time_standard: TimeStandard = TimeStandard.UTC,
        *,
        leap_seconds: LeapSecondTable | None = None,
    ) -> None:
        if not isinstance(time_standard, TimeStandard):
            raise TypeError(
                f"time_standard must be a TimeStandard, got {type(time_standard)}"
            )
        if not (math.isfinite(day_number) and math.isfinite(seconds_of_day)):
            raise ValueError(
                f"Epoch components must be finite, got ({day_number}, {seconds_of_day})"
            )

        whole_days = math.trunc(day_number)
        seconds_of_day = seconds_of_day + (day_number - whole_days) * SECONDS_PER_DAY
        day, seconds = normalize_components(whole_days, seconds_of_day)

        if time_standard is TimeStandard.UTC:
            day, seconds = _resolve_table(leap_seconds).utc_to_tai(day, seconds)

        self._day_number = day
        self._seconds_of_day = seconds

    @classmethod
    def _from_components(cls, day_number: int, seconds_of_day: float) -> Epoch:
        """Create an Epoch from TAI components without leap-second conversion.

        Args:
            day_number (int): Julian day number (TAI).
            seconds_of_day (float): Seconds of day (TAI), any value.

        Returns:
            Epoch: New Epoch instance.
        """
        obj = object.__new__(cls)
        obj._day_number, obj._seconds_of_day = normalize_components(
            day_number, seconds_of_day
        )
        return obj

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_caldate(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
        millisecond: float = 0.0,
        *,
        leap_seconds: LeapSecondTable | None = None,
    ) -> Epoch:
        """Create an Epoch from a UTC calendar date.

        A ``second`` of 60 denotes the inserted leap second at the end of
        the UTC day.

        Args:
            year (int): Year.
            month (int): Month, 1-12.
            day (int): Day of month.
            hour (int): Hour. Default: ``0``
            minute (int): Minute. Default: ``0``
            second (float): Second. Default: ``0.0``
            millisecond (float): Millisecond. Default: ``0.0``
            leap_seconds (LeapSecondTable): Table used for UTC conversion.

        Returns:
            Epoch: The instant in TAI.
        """
        is_leap_second = second >= 60
        if is_leap_second:
            second -= 1

        day_number, seconds_of_day = caldate_to_jd_components(
            year, month, day, hour, minute, second, millisecond
        )
        day_number, seconds_of_day = normalize_components(day_number, seconds_of_day)
        day_number, seconds_of_day = _resolve_table(leap_seconds).utc_to_tai(
            day_number, seconds_of_day
        )

        if is_leap_second:
            seconds_of_day += 1
        return cls._from_components(day_number, seconds_of_day)

    @classmethod
    def from_gregorian_date(
        cls, date: GregorianDate, *, leap_seconds: LeapSecondTable | None = None
    ) -> Epoch:
        """Create an Epoch from a :class:`GregorianDate` (UTC)."""
        return cls.from_caldate(
            date.year,
            date.month,
            date.day,
            date.hour,
            date.minute,
            date.second,
            date.millisecond,
            leap_seconds=leap_seconds,
        )

    @classmethod
    def from_datetime(
        cls, value: datetime, *, leap_seconds: LeapSecondTable | None = None
    ) -> Epoch:
        """Create an Epoch from a :class:`datetime.datetime`.

        Timezone-aware values are converted to UTC first; naive values are
        taken to already be UTC.

        Args:
            value (datetime): The date and time.
            leap_seconds (LeapSecondTable): Table used for UTC conversion.

        Returns:
            Epoch: The instant in TAI.
        """
        if not isinstance(value, datetime):
            raise TypeError(f"Expected a datetime, got {type(value)}")
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)

        return cls.from_caldate(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond / 1000.0,
            leap_seconds=leap_seconds,
        )

    @classmethod
    def now(cls, *, leap_seconds: LeapSecondTable | None = None) -> Epoch:
        """Create an Epoch for the current system time."""
        return cls.from_datetime(datetime.now(timezone.utc), leap_seconds=leap_seconds)

    @classmethod
    def from_iso8601(
        cls, string: str, *, leap_seconds: LeapSecondTable | None = None
    ) -> Epoch:
        """Parse an ISO 8601 date string.

        Supports calendar (``YYYY-MM-DD``, ``YYYYMMDD``, ``YYYY-MM``,
        ``YYYY``), ordinal (``YYYY-DDD``) and week (``YYYY-Www-D``) dates,
        optionally followed by ``T`` and a time of ``HH``, ``HH:MM`` or
        ``HH:MM:SS`` where the last component may carry a decimal fraction
        (``.`` or ``,``).  The time may end in ``Z`` or a ``+HH:MM`` /
        ``-HH:MM`` offset; a time with no designator is taken as UTC.
        ``24:00:00`` denotes the end of the day and a second of ``60`` a
        leap second.

        Args:
            string (str): ISO 8601 date.
            leap_seconds (LeapSecondTable): Table used for UTC conversion.

        Returns:
            Epoch: The instant in TAI.

        Raises:
            ValueError: If the string is not a valid ISO 8601 date.

        Examples:
            ```python
            from orientax import Epoch
            epc = Epoch.from_iso8601("2012-06-30T23:59:60Z")
            epc.to_iso8601()  # "2012-06-30T23:59:60Z"
            ```
        """
        if not isinstance(string, str):
            raise ValueError(_ISO8601_ERROR)

        year, month, day, hour, minute, second, millisecond = _parse_iso8601(string)

        # The leap second is added back after converting to TAI
        is_leap_second = second == 60
        if is_leap_second:
            second -= 1

        year, month, day, hour, minute = _normalize_calendar(
            year, month, day, hour, minute
        )

        day_number, seconds_of_day = caldate_to_jd_components(
            year, month, day, hour, minute, second, millisecond
        )
        day_number, seconds_of_day = normalize_components(day_number, seconds_of_day)
        day_number, seconds_of_day = _resolve_table(leap_seconds).utc_to_tai(
            day_number, seconds_of_day
        )

        if is_leap_second:
            seconds_of_day += 1
        return cls._from_components(day_number, seconds_of_day)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def day_number(self) -> int:
        """Integer Julian day number (TAI)."""
        return self._day_number

    @property
    def seconds_of_day(self) -> float:
        """Seconds into the Julian day (TAI), ``0 <= seconds < 86400``."""
        return self._seconds_of_day

    def total_days(self) -> float:
        """Return the instant as a single TAI Julian Date (lossy)."""
        return self._day_number + self._seconds_of_day / SECONDS_PER_DAY

    def jd(self) -> float:
        """Return the TAI Julian Date. Alias of :meth:`total_days`."""
        return self.total_days()

    def mjd(self) -> float:
        """Return the TAI Modified Julian Date."""
        return self.total_days() - JD_MJD_OFFSET

    def compute_tai_minus_utc(self, leap_seconds: LeapSecondTable | None = None) -> float:
        """Return TAI-UTC in seconds at this instant.

        Args:
            leap_seconds (LeapSecondTable): Table to consult.

        Returns:
            float: Cumulative leap-second offset.
        """
        return _resolve_table(leap_seconds).lookup_offset(
            self._day_number, self._seconds_of_day
        )

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add_seconds(self, seconds: float) -> Epoch:
        """Return a new Epoch *seconds* later (negative values move earlier)."""
        return Epoch._from_components(self._day_number, self._seconds_of_day + seconds)

    def add_minutes(self, minutes: float) -> Epoch:
        """Return a new Epoch *minutes* later."""
        return self.add_seconds(minutes * SECONDS_PER_MINUTE)

    def add_hours(self, hours: float) -> Epoch:
        """Return a new Epoch *hours* later."""
        return self.add_seconds(hours * SECONDS_PER_HOUR)

    def add_days(self, days: float) -> Epoch:
        """Return a new Epoch *days* later. Whole days are added exactly."""
        whole_days = math.trunc(days)
        return Epoch._from_components(
            self._day_number + whole_days,
            self._seconds_of_day + (days - whole_days) * SECONDS_PER_DAY,
        )

    def seconds_difference(self, other: Epoch) -> float:
        """Return ``self - other`` in seconds."""
        return (
            self._day_number - other._day_number
        ) * SECONDS_PER_DAY + (self._seconds_of_day - other._seconds_of_day)

    def days_difference(self, other: Epoch) -> float:
        """Return ``self - other`` in days."""
        return (self._day_number - other._day_number) + (
            self._seconds_of_day - other._seconds_of_day
        ) / SECONDS_PER_DAY

    def __add__(self, seconds: float) -> Epoch:
        if isinstance(seconds, Epoch):
            return NotImplemented
        return self.add_seconds(seconds)

    def __sub__(self, other: Epoch | float) -> Epoch | float:
        """Subtract an Epoch (returns seconds) or a number of seconds (returns Epoch)."""
        if isinstance(other, Epoch):
            return self.seconds_difference(other)
        return self.add_seconds(-other)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    @staticmethod
    def compare(left: Epoch, right: Epoch) -> float:
        """Compare two instants.

        Returns:
            float: Negative if *left* is earlier, positive if later, zero if
            equal. The day difference is returned when the days differ,
            otherwise the seconds difference.
        """
        day_difference = left._day_number - right._day_number
        if day_difference != 0:
            return day_difference
        return left._seconds_of_day - right._seconds_of_day

    def equals(self, other: Epoch | None) -> bool:
        """Return ``True`` if *other* is exactly the same instant."""
        return (
            isinstance(other, Epoch)
            and self._day_number == other._day_number
            and self._seconds_of_day == other._seconds_of_day
        )

    def equals_epsilon(self, other: Epoch | None, epsilon: float = 0.0) -> bool:
        """Return ``True`` if *other* is within *epsilon* seconds of this instant."""
        return isinstance(other, Epoch) and abs(self.seconds_difference(other)) <= epsilon

    def __eq__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return not self.equals(other)

    def __lt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return Epoch.compare(self, other) < 0

    def __le__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return Epoch.compare(self, other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return Epoch.compare(self, other) > 0

    def __ge__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return Epoch.compare(self, other) >= 0

    def __hash__(self):
        return hash((self._day_number, self._seconds_of_day))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_gregorian_date(
        self, leap_seconds: LeapSecondTable | None = None
    ) -> GregorianDate:
        """Convert to a UTC calendar date.

        Inside a leap second the previous second is converted and the
        result reports ``second == 60`` with ``is_leap_second`` set.

        Args:
            leap_seconds (LeapSecondTable): Table used for UTC conversion.

        Returns:
            GregorianDate: The UTC date and time.
        """
        table = _resolve_table(leap_seconds)

        is_leap_second = False
        utc = table.tai_to_utc(self._day_number, self._seconds_of_day)
        if utc is None:
            utc = table.tai_to_utc(
                *normalize_components(self._day_number, self._seconds_of_day - 1)
            )
            is_leap_second = True

        year, month, day, hour, minute, second, millisecond = jd_components_to_caldate(
            *utc
        )
        if is_leap_second:
            second += 1

        return GregorianDate(
            year, month, day, hour, minute, second, millisecond, is_leap_second
        )

    def to_caldate(
        self, leap_seconds: LeapSecondTable | None = None
    ) -> tuple[int, int, int, int, int, float]:
        """Return the UTC calendar date as ``(year, month, day, hour, minute, second)``.

        The second includes its fractional part.
        """
        date = self.to_gregorian_date(leap_seconds)
        return (
            date.year,
            date.month,
            date.day,
            date.hour,
            date.minute,
            date.second + date.millisecond * SECONDS_PER_MILLISECOND,
        )

    def to_datetime(self, leap_seconds: LeapSecondTable | None = None) -> datetime:
        """Convert to a timezone-aware UTC :class:`datetime.datetime`.

        ``datetime`` cannot represent leap seconds, so second 60 is reported
        as 59.
        """
        date = self.to_gregorian_date(leap_seconds)
        microsecond = min(int(round(date.millisecond * 1000.0)), 999999)
        return datetime(
            date.year,
            date.month,
            date.day,
            date.hour,
            date.minute,
            min(date.second, 59),
            microsecond,
            tzinfo=timezone.utc,
        )

    def to_iso8601(
        self, precision: int | None = None, leap_seconds: LeapSecondTable | None = None
    ) -> str:
        """Format as an ISO 8601 UTC string.

        Args:
            precision (int): Number of fractional-second digits. ``None``
                writes the fraction only when it is non-zero, using as many
                digits as needed; ``0`` never writes a fraction. The
                fraction is rounded to *precision* digits but never carried
                into the seconds, so 59.9999 s at precision 2 is written
                ``59.99``.
            leap_seconds (LeapSecondTable): Table used for UTC conversion.

        Returns:
            str: e.g. ``"2012-06-30T23:59:60Z"``.

        Raises:
            ValueError: If *precision* is negative.
        """
        if precision is not None and precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")

        date = self.to_gregorian_date(leap_seconds)
        year, month, day, hour = date.year, date.month, date.day, date.hour
        minute, second, millisecond = date.minute, date.second, date.millisecond

        # 10000-01-01T00:00:00 is written as the equivalent 9999-12-31T24:00:00
        if (
            year == 10000
            and month == 1
            and day == 1
            and hour == 0
            and minute == 0
            and second == 0
            and millisecond == 0
        ):
            year, month, day, hour = 9999, 12, 31, 24

        prefix = f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}"

        if precision is None and millisecond != 0:
            fraction = _format_js_number(millisecond * 0.01).replace(".", "")
            return f"{prefix}.{fraction}Z"

        if not precision:
            return f"{prefix}Z"

        digits = f"{millisecond * SECONDS_PER_MILLISECOND:.{precision}f}"
        if digits[0] != "0":
            # Rounding carried into the seconds field
            digits = "0." + "9" * precision
        return f"{prefix}.{digits[2:]}Z"

    def __str__(self):
        return self.to_iso8601()

    def __repr__(self):
        return (
            f"Epoch({self._day_number}, {self._seconds_of_day!r}, TimeStandard.TAI)"
        )


# ---------------------------------------------------------------------------
# ISO 8601 helpers
# ---------------------------------------------------------------------------


def _iso_weekday(year: int, month: int, day: int) -> int:
    """ISO day of week, Monday = 1 through Sunday = 7."""
    day_number, _ = caldate_to_jd_components(year, month, day, 12)
    return day_number % 7 + 1


def _split_ordinal_date(year: int, day_of_year: int) -> tuple[int, int, int]:
    """Convert a (possibly out-of-range) day of year to a calendar date."""
    day_number, _ = caldate_to_jd_components(year, 1, 1, 12)
    year, month, day, *_ = jd_components_to_caldate(day_number + day_of_year - 1, 0.0)
    return year, month, day


def _parse_iso8601_date(date: str) -> tuple[int, int, int]:
    match = _MATCH_CALENDAR_DATE.match(date)
    if match is not None:
        dash_count = date.count("-")
        if dash_count > 0 and dash_count != 2:
            raise ValueError(_ISO8601_ERROR)
        return int(match[1]), int(match[2]), int(match[3])

    match = _MATCH_CALENDAR_MONTH.match(date)
    if match is not None:
        return int(match[1]), int(match[2]), 1

    match = _MATCH_CALENDAR_YEAR.match(date)
    if match is not None:
        return int(match[1]), 1, 1

    match = _MATCH_ORDINAL_DATE.match(date)
    if match is not None:
        year = int(match[1])
        day_of_year = int(match[2])
        if day_of_year < 1 or day_of_year > (366 if is_leap_year(year) else 365):
            raise ValueError(_ISO8601_ERROR)
        return _split_ordinal_date(year, day_of_year)

    match = _MATCH_WEEK_DATE.match(date)
    if match is not None:
        dash_count = date.count("-")
        if dash_count > 0 and (
            (match[3] is None and dash_count != 1)
            or (match[3] is not None and dash_count != 2)
        ):
            raise ValueError(_ISO8601_ERROR)

        year = int(match[1])
        week_number = int(match[2])
        day_of_week = int(match[3] or 1)
        day_of_year = week_number * 7 + day_of_week - _iso_weekday(year, 1, 4) - 3
        return _split_ordinal_date(year, day_of_year)

    raise ValueError(_ISO8601_ERROR)


def _parse_iso8601_time(time: str) -> tuple[int, float, float, float, tuple]:
    millisecond = 0.0
    second = 0.0

    match = _MATCH_HOURS_MINUTES_SECONDS.match(time)
    if match is not None:
        colon_count = time.count(":")
        if colon_count > 0 and colon_count not in (2, 3):
            raise ValueError(_ISO8601_ERROR)
        hour = int(match[1])
        minute = float(match[2])
        second = float(match[3])
        millisecond = float(match[4] or 0) * 1000.0
        offset = match.groups()[4:7]
    else:
        match = _MATCH_HOURS_MINUTES.match(time)
        if match is not None:
            if time.count(":") > 2:
                raise ValueError(_ISO8601_ERROR)
            hour = int(match[1])
            minute = float(match[2])
            second = float(match[3] or 0) * 60.0
            offset = match.groups()[3:6]
        else:
            match = _MATCH_HOURS.match(time)
            if match is None:
                raise ValueError(_ISO8601_ERROR)
            hour = int(match[1])
            minute = float(match[2] or 0) * 60.0
            offset = match.groups()[2:5]

    if (
        minute >= 60
        or second >= 61
        or hour > 24
        or (hour == 24 and (minute > 0 or second > 0 or millisecond > 0))
    ):
        raise ValueError(_ISO8601_ERROR)

    return hour, minute, second, millisecond, offset


def _parse_iso8601(string: str) -> tuple[int, int, int, int, float, float, float]:
    """Split an ISO 8601 string into UTC components, before normalization."""
    tokens = string.replace(",", ".", 1).split("T")
    if not tokens[0] or len(tokens) > 2:
        raise ValueError(_ISO8601_ERROR)

    year, month, day = _parse_iso8601_date(tokens[0])

    if month < 1 or month > 12 or day < 1 or day > days_in_month(year, month):
        raise ValueError(_ISO8601_ERROR)

    hour, minute, second, millisecond = 0, 0.0, 0.0, 0.0
    if len(tokens) == 2:
        hour, minute, second, millisecond, offset = _parse_iso8601_time(tokens[1])
        designator, offset_hours, offset_minutes = offset

        if designator in ("+", "-"):
            if offset_hours is None:
                raise ValueError(_ISO8601_ERROR)
            sign = -1 if designator == "+" else 1
            hour += sign * int(offset_hours)
            minute += sign * int(offset_minutes or 0)
        elif offset_hours is not None:
            raise ValueError(_ISO8601_ERROR)

    return year, month, day, hour, minute, second, millisecond


def _normalize_calendar(
    year: int, month: int, day: int, hour: int, minute: float
) -> tuple[int, int, int, int, float]:
    """Carry out-of-range minutes, hours and days into the larger fields."""
    while minute >= MINUTES_PER_HOUR:
        minute -= MINUTES_PER_HOUR
        hour += 1

    while hour >= HOURS_PER_DAY:
        hour -= HOURS_PER_DAY
        day += 1

    while day > days_in_month(year, month):
        day -= days_in_month(year, month)
        month += 1
        if month > 12:
            month -= 12
            year += 1

    # A negative UTC offset at the start of the day can leave minutes negative
    while minute < 0:
        minute += MINUTES_PER_HOUR
        hour -= 1

    while hour < 0:
        hour += HOURS_PER_DAY
        day -= 1

    while day < 1:
        month -= 1
        if month < 1:
            month += 12
            year -= 1
        day += days_in_month(year, month)

    return year, month, day, hour, minute
