"""Parsers for Earth Orientation Parameter data.

Two formats are supported:

- The JSON EOP record: ``columnNames`` plus a flat row-major ``samples``
  array (:func:`parse_eop_record`).
- The IERS standard format (``finals.all.iau2000.txt``), also known as
  Bulletin A/B format (:func:`parse_standard_file`), which is converted to
  a JSON record by :func:`standard_file_to_record`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np

from orientax.constants import AS2RAD, JD_MJD_OFFSET
from orientax.eop._types import (
    MJD_COLUMN,
    REQUIRED_COLUMNS,
    VALUE_COLUMNS,
)
from orientax.time import LeapSecondTable, split_julian_date

_ERROR_PREFIX = "Error in loaded EOP data: "

# Column ranges for IERS standard format (0-indexed Python slices)
_MJD_RANGE = slice(6, 15)
_PM_X_RANGE = slice(17, 27)
_PM_Y_RANGE = slice(36, 46)
_UT1_UTC_RANGE = slice(58, 68)
_DX_RANGE = slice(96, 106)
_DY_RANGE = slice(115, 125)
_STANDARD_LINE_LENGTH = 187


# ---------------------------------------------------------------------------
# JSON record
# ---------------------------------------------------------------------------


def parse_eop_record(record: Mapping[str, Any]) -> tuple[np.ndarray, np.ndarray]:
    """Validate a JSON EOP record and split it into dates and values.

    Args:
        record: Mapping with ``columnNames`` (list of str) and ``samples``
            (flat list of numbers, row-major, stride = number of columns).

    Returns:
        Tuple ``(mjd, values)``: ``mjd`` is a float64 array of shape
        ``(N,)`` holding each row's UTC Modified Julian Date; ``values`` is
        a float64 array of shape ``(N, 6)`` ordered as
        :data:`~orientax.eop._types.VALUE_COLUMNS`.

    Raises:
        ValueError: If ``columnNames`` or ``samples`` is missing, a required
            column is absent, or the sample count is not a multiple of the
            column count.
    """
    if not isinstance(record, Mapping):
        raise ValueError(_ERROR_PREFIX + "The record must be a JSON object.")

    column_names = record.get("columnNames")
    if column_names is None:
        raise ValueError(_ERROR_PREFIX + "The columnNames property is required.")

    samples = record.get("samples")
    if samples is None:
        raise ValueError(_ERROR_PREFIX + "The samples property is required.")

    column_names = list(column_names)
    missing = [name for name in REQUIRED_COLUMNS if name not in column_names]
    if missing:
        raise ValueError(
            _ERROR_PREFIX
            + "The columnNames property must include "
            + ", ".join(REQUIRED_COLUMNS[:-1])
            + f", and {REQUIRED_COLUMNS[-1]} columns"
        )

    column_count = len(column_names)
    samples = list(samples)
    if len(samples) % column_count != 0:
        raise ValueError(
            _ERROR_PREFIX
            + f"The samples length ({len(samples)}) must be a multiple of the "
            + f"column count ({column_count})."
        )

    # Only the required columns are converted; others (e.g. dateIso8601) may
    # hold strings.
    def column(name: str) -> np.ndarray:
        return np.asarray(
            samples[column_names.index(name) :: column_count], dtype=np.float64
        )

    mjd = column(MJD_COLUMN)
    values = np.stack([column(name) for name in VALUE_COLUMNS], axis=1)
    return mjd, values


# ---------------------------------------------------------------------------
# IERS standard format
# ---------------------------------------------------------------------------


def parse_standard_line(
    line: str,
) -> tuple[float, float, float, float, float, float] | None:
    """Parse a single line from an IERS standard format EOP file.

    Lines shorter than 187 characters are padded with spaces.  Lines longer
    than 187 characters, or lines where MJD, PM_X, PM_Y or UT1-UTC cannot be
    parsed, are skipped (returns None).

    Args:
        line: A single line from the IERS standard format file.

    Returns:
        Tuple of (mjd, pm_x [rad], pm_y [rad], ut1_utc [s],
        dX [rad] or NaN, dY [rad] or NaN), or None if the line cannot be
        parsed.
    """
    if len(line) > _STANDARD_LINE_LENGTH:
        return None

    line = line.ljust(_STANDARD_LINE_LENGTH)

    try:
        mjd = float(line[_MJD_RANGE].strip())
        pm_x = float(line[_PM_X_RANGE].strip()) * AS2RAD
        pm_y = float(line[_PM_Y_RANGE].strip()) * AS2RAD
        ut1_utc = float(line[_UT1_UTC_RANGE].strip())
    except ValueError:
        return None

    # Celestial pole offsets are absent in the prediction region
    try:
        dX = float(line[_DX_RANGE].strip()) * 1.0e-3 * AS2RAD  # mas -> rad
    except ValueError:
        dX = math.nan

    try:
        dY = float(line[_DY_RANGE].strip()) * 1.0e-3 * AS2RAD  # mas -> rad
    except ValueError:
        dY = math.nan

    return mjd, pm_x, pm_y, ut1_utc, dX, dY


def parse_standard_file(filepath: str | Path) -> list[tuple[float, ...]]:
    """Parse an entire IERS standard format EOP file.

    Lines that cannot be parsed (e.g. empty prediction lines at the end of
    the file) are silently skipped.

    Args:
        filepath: Path to the IERS standard format file.

    Returns:
        List of rows as returned by :func:`parse_standard_line`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If no valid lines were parsed.
    """
    rows = []
    with open(filepath, encoding="utf-8") as f:
        for line in f:
            parsed = parse_standard_line(line.rstrip("\n"))
            if parsed is not None:
                rows.append(parsed)

    if not rows:
        raise ValueError(f"No valid EOP data found in {filepath}")

    return rows


def standard_file_to_record(
    filepath: str | Path, leap_seconds: LeapSecondTable
) -> dict[str, Any]:
    """Convert an IERS standard format file to a JSON EOP record.

    The file carries no TAI-UTC column, so it is filled from
    *leap_seconds*.  Missing celestial pole offsets are written as zero.

    Args:
        filepath: Path to the IERS standard format file.
        leap_seconds: Table used to compute TAI-UTC for each row.

    Returns:
        dict: Record accepted by :func:`parse_eop_record`.
    """
    samples: list[float] = []
    for mjd, pm_x, pm_y, ut1_utc, dX, dY in parse_standard_file(filepath):
        tai_day, tai_seconds = leap_seconds.utc_to_tai(
            *split_julian_date(mjd + JD_MJD_OFFSET)
        )
        tai_minus_utc = leap_seconds.lookup_offset(tai_day, tai_seconds)
        samples.extend(
            (
                mjd,
                pm_x,
                pm_y,
                ut1_utc,
                0.0 if math.isnan(dX) else dX,
                0.0 if math.isnan(dY) else dY,
                tai_minus_utc,
            )
        )

    return {"columnNames": list(REQUIRED_COLUMNS), "samples": samples}
