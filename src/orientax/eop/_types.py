"""Type definitions for Earth Orientation Parameters (EOP).

Provides the core data types for EOP storage and lookup:

- :class:`EOPSample`: One interpolated set of Earth orientation values.
- :class:`EOPConfig`: Construction options for
  :class:`~orientax.eop.EarthOrientationParameters`.

The column names of the JSON EOP record are also defined here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

MJD_COLUMN: str = "modifiedJulianDateUtc"
X_POLE_WANDER_COLUMN: str = "xPoleWanderRadians"
Y_POLE_WANDER_COLUMN: str = "yPoleWanderRadians"
UT1_MINUS_UTC_COLUMN: str = "ut1MinusUtcSeconds"
X_POLE_OFFSET_COLUMN: str = "xCelestialPoleOffsetRadians"
Y_POLE_OFFSET_COLUMN: str = "yCelestialPoleOffsetRadians"
TAI_MINUS_UTC_COLUMN: str = "taiMinusUtcSeconds"

REQUIRED_COLUMNS: tuple[str, ...] = (
    MJD_COLUMN,
    X_POLE_WANDER_COLUMN,
    Y_POLE_WANDER_COLUMN,
    UT1_MINUS_UTC_COLUMN,
    X_POLE_OFFSET_COLUMN,
    Y_POLE_OFFSET_COLUMN,
    TAI_MINUS_UTC_COLUMN,
)
"""Columns every EOP record must provide."""

# Column order of the internal sample table (the date column is held separately)
VALUE_COLUMNS: tuple[str, ...] = (
    X_POLE_WANDER_COLUMN,
    Y_POLE_WANDER_COLUMN,
    UT1_MINUS_UTC_COLUMN,
    X_POLE_OFFSET_COLUMN,
    Y_POLE_OFFSET_COLUMN,
    TAI_MINUS_UTC_COLUMN,
)

X_WANDER, Y_WANDER, UT1_MINUS_UTC, X_OFFSET, Y_OFFSET, TAI_MINUS_UTC = range(6)


class EOPSample(NamedTuple):
    """Earth orientation values at one instant.

    Attributes:
        x_pole_wander: Polar motion x-component [rad].
        y_pole_wander: Polar motion y-component [rad].
        x_pole_offset: Celestial pole offset dX [rad].
        y_pole_offset: Celestial pole offset dY [rad].
        ut1_minus_utc: UT1-UTC [s].
    """

    x_pole_wander: float = 0.0
    y_pole_wander: float = 0.0
    x_pole_offset: float = 0.0
    y_pole_offset: float = 0.0
    ut1_minus_utc: float = 0.0


ZERO_SAMPLE = EOPSample()
"""All-zero sample, used outside the data range and by the NONE provider."""


@dataclass(frozen=True)
class EOPConfig:
    """Options for :class:`~orientax.eop.EarthOrientationParameters`.

    Attributes:
        add_new_leap_seconds: When ``True``, a change in the
            ``taiMinusUtcSeconds`` column between adjacent samples registers
            a leap second in the shared leap-second table. Default: ``True``.
        timeout: HTTP timeout in seconds for remote loads. Default: 120.
    """

    add_new_leap_seconds: bool = True
    timeout: float = 120.0

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
