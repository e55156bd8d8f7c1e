"""True Equator Mean Equinox (TEME) to pseudo-fixed rotation.

TEME is the output frame of SGP4.  Rotating it about z by the Greenwich
hour angle of the mean equinox gives a pseudo Earth-fixed frame that omits
polar motion.  It is the fallback Earth-fixed frame used while ICRF data
is unavailable.

References:
    1. D. Vallado et al., *Revisiting Spacetrack Report #3*, AIAA 2006-6753.
"""

from __future__ import annotations

from jax import Array

from orientax.attitude_representations import Rz
from orientax.constants import (
    DAYS_PER_JULIAN_CENTURY,
    J2000_JULIAN_DAY,
    OMEGA_EARTH,
    OMEGA_EARTH_RATE,
    SECONDS_PER_DAY,
    TWO_PI,
)
from orientax.epoch import Epoch
from orientax.time import LeapSecondTable
from orientax.utils import zero_to_two_pi

_NOON = SECONDS_PER_DAY / 2

# IAU 1982 GMST polynomial coefficients [s]
_GMST0 = 24110.54841
_GMST1 = 8640184.812866
_GMST2 = 0.093104
_GMST3 = -6.2e-6


def greenwich_mean_sidereal_angle(
    epc: Epoch, leap_seconds: LeapSecondTable | None = None
) -> float:
    """Greenwich hour angle of the mean equinox at *epc*.

    UTC stands in for UT1.

    Args:
        epc: Evaluation instant.
        leap_seconds: Leap-second table. Default: the process-wide table.

    Returns:
        float: Angle [rad], not reduced to ``[0, 2pi)``.
    """
    utc = epc.add_seconds(-epc.compute_tai_minus_utc(leap_seconds))
    utc_day = utc.day_number
    utc_seconds = utc.seconds_of_day

    # Centuries since J2000 to the preceding 0h UT1
    diff_days = utc_day - J2000_JULIAN_DAY
    if utc_seconds >= _NOON:
        t = (diff_days + 0.5) / DAYS_PER_JULIAN_CENTURY
    else:
        t = (diff_days - 0.5) / DAYS_PER_JULIAN_CENTURY

    gmst0 = _GMST0 + t * (_GMST1 + t * (_GMST2 + t * _GMST3))
    angle = zero_to_two_pi(gmst0 * TWO_PI / SECONDS_PER_DAY)
    ratio = OMEGA_EARTH + OMEGA_EARTH_RATE * (utc_day - (J2000_JULIAN_DAY + 0.5))
    seconds_since_midnight = (utc_seconds + _NOON) % SECONDS_PER_DAY
    return angle + ratio * seconds_since_midnight


def rotation_teme_to_pseudo_fixed(
    epc: Epoch, leap_seconds: LeapSecondTable | None = None
) -> Array:
    """Rotation matrix from TEME to the pseudo-fixed frame at *epc*.

    Args:
        epc: Evaluation instant.
        leap_seconds: Leap-second table. Default: the process-wide table.

    Returns:
        jax.Array: 3x3 rotation about z.
    """
    return Rz(greenwich_mean_sidereal_angle(epc, leap_seconds))
