"""Moon-fixed (principal-axis-like) frame orientation.

Uses the IAU/IAG WGCCRE 2009 low-precision lunar orientation model
expressed as heading, pitch and roll of the Moon-fixed axes relative to
ICRF.  Angles are evaluated in TT days since J2000.

References:
    1. B. A. Archinal et al., *Report of the IAU Working Group on
       Cartographic Coordinates and Rotational Elements: 2009*.
"""

from __future__ import annotations

import math

from jax import Array

from orientax.attitude_representations import (
    HeadingPitchRoll,
    rotation_from_heading_pitch_roll,
)
from orientax.constants import J2000_JULIAN_DAY, TT_TAI
from orientax.epoch import Epoch


def moon_heading_pitch_roll(epc: Epoch) -> HeadingPitchRoll:
    """Orientation of the Moon-fixed axes relative to ICRF at *epc*.

    Args:
        epc: Evaluation instant.

    Returns:
        HeadingPitchRoll: Angles [rad].
    """
    d = epc.add_seconds(TT_TAI).total_days() - J2000_JULIAN_DAY

    e1 = math.radians(12.112 - 0.052992 * d)
    e2 = math.radians(24.224 - 0.105984 * d)
    e3 = math.radians(227.645 + 13.012 * d)
    e4 = math.radians(261.105 + 13.340716 * d)
    e5 = math.radians(358.0 + 0.9856 * d)

    pitch = (
        180.0
        - 3.878 * math.sin(e1)
        - 0.12 * math.sin(e2)
        + 0.07 * math.sin(e3)
        - 0.017 * math.sin(e4)
    )
    roll = (
        -23.47
        + 1.543 * math.cos(e1)
        + 0.24 * math.cos(e2)
        - 0.028 * math.cos(e3)
        + 0.007 * math.cos(e4)
    )
    heading = (
        154.375
        + 13.17635831 * d
        + 3.558 * math.sin(e1)
        + 0.121 * math.sin(e2)
        - 0.064 * math.sin(e3)
        + 0.016 * math.sin(e4)
        + 0.025 * math.sin(e5)
    )
    return HeadingPitchRoll.from_degrees(heading, pitch, roll)


def rotation_moon_fixed_to_icrf(epc: Epoch) -> Array:
    """Rotation matrix from the Moon-fixed frame to ICRF at *epc*."""
    return rotation_from_heading_pitch_roll(moon_heading_pitch_roll(epc))


def rotation_icrf_to_moon_fixed(epc: Epoch) -> Array:
    """Rotation matrix from ICRF to the Moon-fixed frame at *epc*."""
    return rotation_moon_fixed_to_icrf(epc).T
