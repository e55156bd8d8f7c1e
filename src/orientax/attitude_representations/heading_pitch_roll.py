"""Heading, pitch and roll.

Heading is a rotation about the negative z-axis, pitch about the negative
y-axis and roll about the positive x-axis, applied roll first.  The
resulting matrix rotates vectors from the body frame into the reference
(local) frame.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import jax.numpy as jnp
from jax.typing import ArrayLike

from orientax.attitude_representations.rotation_matrices import Rx, Ry, Rz


class HeadingPitchRoll(NamedTuple):
    """Heading, pitch and roll angles in radians."""

    heading: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0

    @classmethod
    def from_degrees(cls, heading: float, pitch: float, roll: float) -> HeadingPitchRoll:
        """Create from angles given in degrees."""
        return cls(math.radians(heading), math.radians(pitch), math.radians(roll))


def rotation_from_heading_pitch_roll(hpr: HeadingPitchRoll) -> jnp.ndarray:
    """Build the body-to-reference rotation matrix.

    Args:
        hpr: Heading, pitch and roll [rad].

    Returns:
        jnp.ndarray: 3x3 rotation matrix.

    Examples:
        ```python
        from orientax.attitude_representations import HeadingPitchRoll, rotation_from_heading_pitch_roll
        m = rotation_from_heading_pitch_roll(HeadingPitchRoll(0.1, 0.2, 0.3))
        ```
    """
    return Rz(hpr.heading) @ Ry(hpr.pitch) @ Rx(-hpr.roll)


def heading_pitch_roll_from_rotation(matrix: ArrayLike) -> HeadingPitchRoll:
    """Recover heading, pitch and roll from a rotation matrix.

    Inverse of :func:`rotation_from_heading_pitch_roll` for pitch in
    ``[-pi/2, pi/2]``.

    Args:
        matrix: 3x3 rotation matrix.

    Returns:
        HeadingPitchRoll: Angles in radians.
    """
    m = jnp.asarray(matrix)
    m00, m10, m20 = float(m[0, 0]), float(m[1, 0]), float(m[2, 0])
    m21, m22 = float(m[2, 1]), float(m[2, 2])

    pitch = math.asin(min(max(m20, -1.0), 1.0))
    roll = math.atan2(m21, m22)
    heading = -math.atan2(m10, m00)
    return HeadingPitchRoll(heading, pitch, roll)
