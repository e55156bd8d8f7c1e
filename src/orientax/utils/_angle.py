"""Angle helpers.

``to_radians`` implements the ``use_degrees`` convention of the public API
in JAX-traceable form via ``jnp.where``.
``zero_to_two_pi`` reduces plain Python floats for the angle models in
:mod:`orientax.frames`.
"""

import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orientax.constants import TWO_PI


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Return *angle* in radians, converting from degrees when ``use_degrees`` is set.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, *angle* is in degrees.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def zero_to_two_pi(angle: float) -> float:
    """Reduce *angle* to ``[0, 2pi)``.

    Args:
        angle (float): Angle in radians, any magnitude.

    Returns:
        float: Equivalent angle in ``[0, 2pi)``.
    """
    reduced = math.fmod(angle, TWO_PI)
    if reduced < 0.0:
        reduced += TWO_PI
    return reduced
