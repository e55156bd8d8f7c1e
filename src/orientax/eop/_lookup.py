"""EOP bracket search and interpolation.

Sample epochs are held as sorted ``(day_number, seconds_of_day)`` TAI keys
so that they compare exactly, without going through a lossy float Julian
Date.  Values are linearly interpolated between the bracketing rows; the
UT1-UTC column receives special handling across leap seconds.
"""

from __future__ import annotations

import bisect

import numpy as np

from orientax.eop._types import (
    TAI_MINUS_UTC,
    UT1_MINUS_UTC,
    X_OFFSET,
    X_WANDER,
    Y_OFFSET,
    Y_WANDER,
    ZERO_SAMPLE,
    EOPSample,
)
from orientax.time import seconds_between

DateKey = tuple[int, float]


def search_dates(dates: list[DateKey], key: DateKey) -> int:
    """Binary search for *key* among sorted sample epochs.

    When several samples share an epoch the last of them is returned, so
    that data describing the instant just after a leap second wins.

    Args:
        dates: Sorted sample epochs.
        key: Epoch to find.

    Returns:
        int: Index of the matching sample, or the bitwise complement of the
        insertion point when no sample matches.
    """
    index = bisect.bisect_right(dates, key)
    if index > 0 and dates[index - 1] == key:
        return index - 1
    return ~bisect.bisect_left(dates, key)


def _row_to_sample(row: np.ndarray) -> EOPSample:
    return EOPSample(
        x_pole_wander=float(row[X_WANDER]),
        y_pole_wander=float(row[Y_WANDER]),
        x_pole_offset=float(row[X_OFFSET]),
        y_pole_offset=float(row[Y_OFFSET]),
        ut1_minus_utc=float(row[UT1_MINUS_UTC]),
    )


def interpolate(
    dates: list[DateKey],
    values: np.ndarray,
    key: DateKey,
    before: int,
    after: int,
) -> EOPSample:
    """Interpolate the EOP table between rows *before* and *after*.

    Args:
        dates: Sorted sample epochs.
        values: Sample table, shape ``(N, 6)``.
        key: Query epoch.
        before: Index of the row at or before *key*.
        after: Index of the row at or after *key*.

    Returns:
        EOPSample: Interpolated values; all zero when *after* lies past the
        end of the data.
    """
    if after > len(dates) - 1:
        return ZERO_SAMPLE

    before_date = dates[before]
    after_date = dates[after]
    if before_date == after_date or key == before_date:
        return _row_to_sample(values[before])
    if key == after_date:
        return _row_to_sample(values[after])

    factor = seconds_between(*key, *before_date) / seconds_between(
        *after_date, *before_date
    )

    before_row = values[before].copy()
    after_row = values[after].copy()

    # A jump of more than half a second in UT1-UTC together with a change in
    # TAI-UTC means a leap second lies between the rows. Remove it from the
    # later value; a query exactly at the later epoch was answered above with
    # that row unchanged.
    offset_difference = after_row[UT1_MINUS_UTC] - before_row[UT1_MINUS_UTC]
    if abs(offset_difference) > 0.5:
        tai_minus_utc_step = after_row[TAI_MINUS_UTC] - before_row[TAI_MINUS_UTC]
        if tai_minus_utc_step != 0:
            after_row[UT1_MINUS_UTC] -= tai_minus_utc_step

    return _row_to_sample(before_row + factor * (after_row - before_row))
