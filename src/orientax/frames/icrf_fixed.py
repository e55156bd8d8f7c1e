"""ICRF ↔ Earth-fixed (ITRF) rotation, IAU 2006 / CIO-based.

The fixed-to-ICRF matrix is the product

.. math::

    Q(t) \\, R_3(-\\theta) \\, W(t)

where :math:`Q` is the celestial-to-intermediate (precession-nutation)
matrix built from the CIP coordinates X, Y and the CIO locator s,
:math:`\\theta` is the Earth Rotation Angle and :math:`W` is polar motion
including the TIO locator s'.

X, Y and s come from :class:`~orientax.xys.Iau2006XysData` evaluated in TT
and are corrected by the celestial pole offsets dX, dY of the EOP sample.
UT1 is obtained from UTC plus the EOP UT1-UTC value.

References:
    1. IERS Conventions (2010), IERS Technical Note 36, Ch. 5.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 5.2.
"""

from __future__ import annotations

import logging
import math

import jax.numpy as jnp
from jax import Array

from orientax.attitude_representations import Rx, Ry, Rz
from orientax.config import get_dtype
from orientax.constants import (
    AS2RAD,
    DAYS_PER_JULIAN_CENTURY,
    ERA_J2000,
    ERA_RATE_EXCESS,
    J2000_JULIAN_DAY,
    SECONDS_PER_DAY,
    TIO_LOCATOR_RATE,
    TT_TAI,
    TWO_PI,
)
from orientax.epoch import Epoch
from orientax.time import LeapSecondTable, normalize_components
from orientax.xys import Iau2006XysData

logger = logging.getLogger(__name__)


def precession_nutation_matrix(x: float, y: float, s: float) -> Array:
    """Celestial-to-intermediate matrix mapping CIRS to GCRS.

    Args:
        x: CIP X coordinate [rad].
        y: CIP Y coordinate [rad].
        s: CIO locator [rad].

    Returns:
        jax.Array: 3x3 rotation matrix ``Q``; its transpose maps GCRS to CIRS.
    """
    a = 1.0 / (1.0 + math.sqrt(1.0 - x * x - y * y))
    axy = a * x * y
    q = jnp.array(
        [
            [1.0 - a * x * x, -axy, x],
            [-axy, 1.0 - a * y * y, y],
            [-x, -y, 1.0 - a * (x * x + y * y)],
        ],
        dtype=get_dtype(),
    )
    return q @ Rz(s)


def earth_rotation_angle(day_ut1: int, seconds_ut1: float) -> float:
    """Earth Rotation Angle (IERS 2010, Eq. 5.15).

    Args:
        day_ut1: Julian day number (UT1).
        seconds_ut1: Seconds into the Julian day (UT1).

    Returns:
        float: ERA in ``[0, 2pi)`` [rad].
    """
    fraction = seconds_ut1 / SECONDS_PER_DAY
    days = day_ut1 - J2000_JULIAN_DAY + fraction
    return ((ERA_J2000 + fraction + ERA_RATE_EXCESS * days) % 1.0) * TWO_PI


def tio_locator(day_tt: int, seconds_tt: float) -> float:
    """TIO locator s' (IERS 2010, Eq. 5.13).

    Args:
        day_tt: Julian day number (TT).
        seconds_tt: Seconds into the Julian day (TT).

    Returns:
        float: s' [rad].
    """
    t = (day_tt - J2000_JULIAN_DAY + seconds_tt / SECONDS_PER_DAY) / DAYS_PER_JULIAN_CENTURY
    return TIO_LOCATOR_RATE * t * AS2RAD


def polar_motion_matrix(xp: float, yp: float, sp: float) -> Array:
    """Polar motion matrix mapping ITRS to TIRS.

    Args:
        xp: Pole x-coordinate [rad].
        yp: Pole y-coordinate [rad].
        sp: TIO locator s' [rad].

    Returns:
        jax.Array: 3x3 rotation matrix ``W``.
    """
    return Rz(-sp) @ Ry(xp) @ Rx(yp)


def _ut1_components(
    epc: Epoch, ut1_minus_utc: float, leap_seconds: LeapSecondTable | None
) -> tuple[int, float]:
    tai_minus_utc = epc.compute_tai_minus_utc(leap_seconds)
    return normalize_components(
        epc.day_number, epc.seconds_of_day - tai_minus_utc + ut1_minus_utc
    )


def rotation_fixed_to_icrf(
    epc: Epoch,
    eop,
    xys: Iau2006XysData,
    leap_seconds: LeapSecondTable | None = None,
) -> Array | None:
    """Rotation matrix from the Earth-fixed frame to ICRF at *epc*.

    Args:
        epc: Evaluation instant.
        eop: Provider with ``compute(epc)`` returning an
            :class:`~orientax.eop.EOPSample` or ``None``.
        xys: IAU 2006 XYS provider.
        leap_seconds: Leap-second table. Default: the process-wide table.

    Returns:
        jax.Array or None: 3x3 rotation matrix, or ``None`` while the EOP or
        XYS data covering *epc* has not been loaded.

    Examples:
        ```python
        from orientax import Epoch
        from orientax.frames import rotation_fixed_to_icrf
        m = rotation_fixed_to_icrf(epc, eop, xys)
        if m is not None:
            r_icrf = m @ r_fixed
        ```
    """
    eop_sample = eop.compute(epc)
    if eop_sample is None:
        logger.debug("EOP data not available at %s", epc)
        return None

    day_tt, seconds_tt = normalize_components(
        epc.day_number, epc.seconds_of_day + TT_TAI
    )
    xys_sample = xys.compute_xys_radians(day_tt, seconds_tt)
    if xys_sample is None:
        logger.debug("XYS data not available at %s", epc)
        return None

    x = xys_sample.x + eop_sample.x_pole_offset
    y = xys_sample.y + eop_sample.y_pole_offset
    q = precession_nutation_matrix(x, y, xys_sample.s)

    era = earth_rotation_angle(
        *_ut1_components(epc, eop_sample.ut1_minus_utc, leap_seconds)
    )
    w = polar_motion_matrix(
        eop_sample.x_pole_wander,
        eop_sample.y_pole_wander,
        tio_locator(day_tt, seconds_tt),
    )
    return q @ Rz(-era) @ w


def rotation_icrf_to_fixed(
    epc: Epoch,
    eop,
    xys: Iau2006XysData,
    leap_seconds: LeapSecondTable | None = None,
) -> Array | None:
    """Rotation matrix from ICRF to the Earth-fixed frame at *epc*.

    Transpose of :func:`rotation_fixed_to_icrf`; ``None`` under the same
    conditions.
    """
    m = rotation_fixed_to_icrf(epc, eop, xys, leap_seconds)
    if m is None:
        return None
    return m.T
