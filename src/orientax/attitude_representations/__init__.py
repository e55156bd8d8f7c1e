"""Attitude representations for 3D rotations.

Provides the elementary rotation functions :func:`Rx`, :func:`Ry`,
:func:`Rz`, the :class:`HeadingPitchRoll` angle set with its matrix
conversions, and scalar-first quaternion conversions.
"""

from .rotation_matrices import (
    Rx,
    Ry,
    Rz,
)

from .heading_pitch_roll import (
    HeadingPitchRoll,
    heading_pitch_roll_from_rotation,
    rotation_from_heading_pitch_roll,
)

from .quaternion import (
    quaternion_from_rotation,
    rotation_from_quaternion,
)

__all__ = [
    # Elementary rotations
    "Rx",
    "Ry",
    "Rz",
    # Heading, pitch, roll
    "HeadingPitchRoll",
    "heading_pitch_roll_from_rotation",
    "rotation_from_heading_pitch_roll",
    # Quaternions
    "quaternion_from_rotation",
    "rotation_from_quaternion",
]
