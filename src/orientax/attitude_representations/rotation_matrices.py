"""Elementary rotation matrices.

Each function returns the passive (coordinate-frame) rotation about one
axis: a vector expressed in the original frame is multiplied by the matrix
to express it in the rotated frame.  The matrices follow the module-wide
dtype from :func:`orientax.config.get_dtype`.
"""

import jax.numpy as jnp

from orientax.config import get_dtype
from orientax.utils import to_radians


def Rx(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the x-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = jnp.asarray(to_radians(angle, use_degrees), dtype=get_dtype())

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[ one, zero, zero],
                      [zero,   +c,   +s],
                      [zero,   -s,   +c]])


def Ry(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the y-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = jnp.asarray(to_radians(angle, use_degrees), dtype=get_dtype())

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[  +c, zero,   -s],
                      [zero,  one, zero],
                      [  +s, zero,   +c]])


def Rz(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = jnp.asarray(to_radians(angle, use_degrees), dtype=get_dtype())

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[  +c,   +s, zero],
                      [  -s,   +c, zero],
                      [zero, zero,  one]])
