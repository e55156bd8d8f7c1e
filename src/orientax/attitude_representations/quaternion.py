"""Quaternion conversions for frame rotations.

Quaternions are raw JAX arrays of shape ``(4,)`` in scalar-first order
``[w, x, y, z]``.  The rotation matrices here map vectors from a local
frame into the fixed frame, so a quaternion ``q`` and matrix ``R`` describe
the same rotation when ``R @ v`` equals ``q * v * conj(q)``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from orientax.config import get_dtype


def quaternion_from_rotation(matrix: ArrayLike) -> jax.Array:
    """Convert a 3x3 rotation matrix to a unit quaternion.

    Uses Shepperd's method with ``jax.lax.switch`` on ``argmax`` of the
    four candidate traces.

    Args:
        matrix: Rotation matrix of shape ``(3, 3)``.

    Returns:
        jnp.ndarray: Quaternion of shape ``(4,)`` in scalar-first order
        ``[w, x, y, z]``.

    Examples:
        ```python
        import jax.numpy as jnp
        from orientax.attitude_representations import quaternion_from_rotation
        q = quaternion_from_rotation(jnp.eye(3))  # [1, 0, 0, 0]
        ```
    """
    R = jnp.asarray(matrix, dtype=get_dtype())

    qvec = jnp.array([
        1.0 + R[0, 0] + R[1, 1] + R[2, 2],
        1.0 + R[0, 0] - R[1, 1] - R[2, 2],
        1.0 - R[0, 0] + R[1, 1] - R[2, 2],
        1.0 - R[0, 0] - R[1, 1] + R[2, 2],
    ])

    ind_max = jnp.argmax(qvec)
    q_max = qvec[ind_max]

    def _case0(_):
        sq = jnp.sqrt(q_max)
        return 0.5 * jnp.array([
            sq,
            (R[2, 1] - R[1, 2]) / sq,
            (R[0, 2] - R[2, 0]) / sq,
            (R[1, 0] - R[0, 1]) / sq,
        ])

    def _case1(_):
        sq = jnp.sqrt(q_max)
        return 0.5 * jnp.array([
            (R[2, 1] - R[1, 2]) / sq,
            sq,
            (R[0, 1] + R[1, 0]) / sq,
            (R[0, 2] + R[2, 0]) / sq,
        ])

    def _case2(_):
        sq = jnp.sqrt(q_max)
        return 0.5 * jnp.array([
            (R[0, 2] - R[2, 0]) / sq,
            (R[0, 1] + R[1, 0]) / sq,
            sq,
            (R[1, 2] + R[2, 1]) / sq,
        ])

    def _case3(_):
        sq = jnp.sqrt(q_max)
        return 0.5 * jnp.array([
            (R[1, 0] - R[0, 1]) / sq,
            (R[0, 2] + R[2, 0]) / sq,
            (R[1, 2] + R[2, 1]) / sq,
            sq,
        ])

    return jax.lax.switch(ind_max, [_case0, _case1, _case2, _case3], None)


def rotation_from_quaternion(q: ArrayLike) -> jax.Array:
    """Convert a quaternion ``[w, x, y, z]`` to a 3x3 rotation matrix.

    The quaternion is normalized first.

    Args:
        q: Quaternion of shape ``(4,)`` in scalar-first order.

    Returns:
        jnp.ndarray: Rotation matrix of shape ``(3, 3)``.
    """
    q = jnp.asarray(q, dtype=get_dtype())
    q = q / jnp.linalg.norm(q)
    w, x, y, z = q[0], q[1], q[2], q[3]

    return jnp.array([
        [1.0 - 2.0*(y*y + z*z), 2.0*(x*y - w*z),       2.0*(x*z + w*y)],
        [2.0*(x*y + w*z),       1.0 - 2.0*(x*x + z*z), 2.0*(y*z - w*x)],
        [2.0*(x*z - w*y),       2.0*(y*z + w*x),       1.0 - 2.0*(x*x + y*y)],
    ])
