"""Local topocentric frames and heading-pitch-roll placement.

A local frame at an Earth-fixed origin is described by two of its axes,
each one of east, north, up, west, south or down; the third follows from
the right-hand rule.  The resulting 4x4 rigid transform has the three axes
(expressed in the fixed frame) as its first three columns and the origin
as its fourth, so it maps local coordinates into the fixed frame.

"Up" is the ellipsoid's geodetic surface normal at the origin.  At the
ellipsoid centre and on the polar axis, where east is undefined, fixed
degenerate axes are used instead.
"""

from __future__ import annotations

import enum
import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orientax.attitude_representations import (
    HeadingPitchRoll,
    heading_pitch_roll_from_rotation,
    quaternion_from_rotation,
    rotation_from_heading_pitch_roll,
)
from orientax.config import get_dtype
from orientax.coordinates import Ellipsoid

_EPSILON14 = 1.0e-14


class LocalAxis(enum.Enum):
    """Direction of a local frame axis."""

    EAST = "east"
    NORTH = "north"
    UP = "up"
    WEST = "west"
    SOUTH = "south"
    DOWN = "down"


_OPPOSITE = {
    LocalAxis.EAST: LocalAxis.WEST,
    LocalAxis.WEST: LocalAxis.EAST,
    LocalAxis.NORTH: LocalAxis.SOUTH,
    LocalAxis.SOUTH: LocalAxis.NORTH,
    LocalAxis.UP: LocalAxis.DOWN,
    LocalAxis.DOWN: LocalAxis.UP,
}

# Fixed-frame directions used where the surface frame is undefined
_DEGENERATE_AXES = {
    LocalAxis.NORTH: (-1.0, 0.0, 0.0),
    LocalAxis.EAST: (0.0, 1.0, 0.0),
    LocalAxis.UP: (0.0, 0.0, 1.0),
    LocalAxis.SOUTH: (1.0, 0.0, 0.0),
    LocalAxis.WEST: (0.0, -1.0, 0.0),
    LocalAxis.DOWN: (0.0, 0.0, -1.0),
}

_AXIS_ERROR = "firstAxis and secondAxis must be east, north, up, west, south or down."


def _unit(axis: LocalAxis) -> tuple[float, float, float]:
    return _DEGENERATE_AXES[axis]


def _cross(a, b) -> tuple[float, float, float]:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _third_axis(first: LocalAxis, second: LocalAxis) -> LocalAxis:
    # The degenerate axes form a right-handed set, so their cross product
    # names the third axis of any valid pair.
    product = _cross(_unit(first), _unit(second))
    for axis, unit in _DEGENERATE_AXES.items():
        if unit == product:
            return axis
    raise ValueError(_AXIS_ERROR)


def _coerce_axis(axis: LocalAxis | str) -> LocalAxis:
    if isinstance(axis, LocalAxis):
        return axis
    try:
        return LocalAxis(str(axis).lower())
    except ValueError:
        raise ValueError(_AXIS_ERROR) from None


class LocalFrameToFixedFrame:
    """Builds the local-to-fixed transform for one ordered pair of axes.

    Instances are obtained from :func:`local_frame_to_fixed_frame_generator`
    and called with an origin.

    Args:
        first_axis: Direction of the local x-axis.
        second_axis: Direction of the local y-axis.
    """

    __slots__ = ("first_axis", "second_axis", "third_axis")

    def __init__(self, first_axis: LocalAxis, second_axis: LocalAxis) -> None:
        if first_axis is second_axis or _OPPOSITE[first_axis] is second_axis:
            raise ValueError(_AXIS_ERROR)
        self.first_axis = first_axis
        self.second_axis = second_axis
        self.third_axis = _third_axis(first_axis, second_axis)

    def __repr__(self) -> str:
        return (
            f"LocalFrameToFixedFrame({self.first_axis.value}, "
            f"{self.second_axis.value}, {self.third_axis.value})"
        )

    def axes(self, origin: ArrayLike, ellipsoid: Ellipsoid | None = None) -> dict:
        """Return the six local directions at *origin* in the fixed frame.

        Args:
            origin: Fixed-frame position ``[x, y, z]`` in *m*.
            ellipsoid: Reference ellipsoid. Default: :data:`Ellipsoid.WGS84`.

        Returns:
            dict: ``LocalAxis -> jax.Array`` unit vectors.

        Raises:
            ValueError: If *origin* contains NaN.
        """
        x, y, z = (float(v) for v in jnp.asarray(origin).reshape(3))
        if math.isnan(x) or math.isnan(y) or math.isnan(z):
            raise ValueError("origin must not contain NaN")

        dtype = get_dtype()
        if abs(x) < _EPSILON14 and abs(y) < _EPSILON14 and abs(z) < _EPSILON14:
            return {
                axis: jnp.array(unit, dtype=dtype)
                for axis, unit in _DEGENERATE_AXES.items()
            }

        if abs(x) < _EPSILON14 and abs(y) < _EPSILON14:
            sign = math.copysign(1.0, z) if z != 0.0 else 0.0
            result = {}
            for axis, unit in _DEGENERATE_AXES.items():
                scale = 1.0 if axis in (LocalAxis.EAST, LocalAxis.WEST) else sign
                result[axis] = jnp.array(unit, dtype=dtype) * scale
            return result

        ellipsoid = ellipsoid or Ellipsoid.WGS84
        up = ellipsoid.geodetic_surface_normal(jnp.array([x, y, z], dtype=dtype))
        east = jnp.array([-y, x, 0.0], dtype=dtype)
        east = east / jnp.linalg.norm(east)
        north = jnp.cross(up, east)
        return {
            LocalAxis.UP: up,
            LocalAxis.EAST: east,
            LocalAxis.NORTH: north,
            LocalAxis.DOWN: -up,
            LocalAxis.WEST: -east,
            LocalAxis.SOUTH: -north,
        }

    def __call__(self, origin: ArrayLike, ellipsoid: Ellipsoid | None = None) -> Array:
        """Compute the 4x4 local-to-fixed transform at *origin*.

        Args:
            origin: Fixed-frame position ``[x, y, z]`` in *m*.
            ellipsoid: Reference ellipsoid. Default: :data:`Ellipsoid.WGS84`.

        Returns:
            jax.Array: 4x4 transform with columns first axis, second axis,
            third axis and origin.

        Raises:
            ValueError: If *origin* contains NaN.
        """
        axes = self.axes(origin, ellipsoid)
        dtype = get_dtype()
        rotation = jnp.stack(
            [axes[self.first_axis], axes[self.second_axis], axes[self.third_axis]],
            axis=1,
        )
        origin = jnp.asarray(origin, dtype=dtype).reshape(3, 1)
        top = jnp.concatenate([rotation, origin], axis=1)
        bottom = jnp.array([[0.0, 0.0, 0.0, 1.0]], dtype=dtype)
        return jnp.concatenate([top, bottom], axis=0)


_GENERATOR_CACHE: dict[tuple[LocalAxis, LocalAxis], LocalFrameToFixedFrame] = {
    (first, second): LocalFrameToFixedFrame(first, second)
    for first in LocalAxis
    for second in LocalAxis
    if second is not first and second is not _OPPOSITE[first]
}


def local_frame_to_fixed_frame_generator(
    first_axis: LocalAxis | str, second_axis: LocalAxis | str
) -> LocalFrameToFixedFrame:
    """Return the transform builder for an ordered pair of local axes.

    All 24 valid builders are created at import, so repeated calls with
    the same pair return the same object.

    Args:
        first_axis: Direction of the local x-axis (enum member or name).
        second_axis: Direction of the local y-axis (enum member or name).

    Returns:
        LocalFrameToFixedFrame: Callable ``(origin, ellipsoid=None) -> 4x4``.

    Raises:
        ValueError: If an axis name is unknown or the axes are parallel.

    Examples:
        ```python
        from orientax.frames import local_frame_to_fixed_frame_generator
        enu = local_frame_to_fixed_frame_generator("east", "north")
        m = enu([6378137.0, 0.0, 0.0])
        ```
    """
    key = (_coerce_axis(first_axis), _coerce_axis(second_axis))
    try:
        return _GENERATOR_CACHE[key]
    except KeyError:
        raise ValueError(_AXIS_ERROR) from None


east_north_up_to_fixed_frame = local_frame_to_fixed_frame_generator(
    LocalAxis.EAST, LocalAxis.NORTH
)
north_east_down_to_fixed_frame = local_frame_to_fixed_frame_generator(
    LocalAxis.NORTH, LocalAxis.EAST
)
north_up_east_to_fixed_frame = local_frame_to_fixed_frame_generator(
    LocalAxis.NORTH, LocalAxis.UP
)
north_west_up_to_fixed_frame = local_frame_to_fixed_frame_generator(
    LocalAxis.NORTH, LocalAxis.WEST
)


# ---------------------------------------------------------------------------
# Heading, pitch, roll
# ---------------------------------------------------------------------------


def _rotation_to_4x4(rotation: Array) -> Array:
    dtype = get_dtype()
    m = jnp.eye(4, dtype=dtype)
    return m.at[:3, :3].set(rotation)


def _inverse_rigid(transform: Array) -> Array:
    rotation_t = transform[:3, :3].T
    translation = -rotation_t @ transform[:3, 3]
    m = jnp.eye(4, dtype=transform.dtype)
    m = m.at[:3, :3].set(rotation_t)
    return m.at[:3, 3].set(translation)


def heading_pitch_roll_to_fixed_frame(
    origin: ArrayLike,
    hpr: HeadingPitchRoll,
    ellipsoid: Ellipsoid | None = None,
    fixed_frame_transform: LocalFrameToFixedFrame | None = None,
) -> Array:
    """Place a body with the given attitude at *origin*.

    Heading and pitch are relative to the local frame produced by
    *fixed_frame_transform* (east-north-up by default).

    Args:
        origin: Fixed-frame position ``[x, y, z]`` in *m*.
        hpr: Heading, pitch and roll [rad].
        ellipsoid: Reference ellipsoid. Default: :data:`Ellipsoid.WGS84`.
        fixed_frame_transform: Local frame builder. Default:
            :data:`east_north_up_to_fixed_frame`.

    Returns:
        jax.Array: 4x4 body-to-fixed transform.
    """
    fixed_frame_transform = fixed_frame_transform or east_north_up_to_fixed_frame
    local = fixed_frame_transform(origin, ellipsoid)
    return local @ _rotation_to_4x4(rotation_from_heading_pitch_roll(hpr))


def fixed_frame_to_heading_pitch_roll(
    transform: ArrayLike,
    ellipsoid: Ellipsoid | None = None,
    fixed_frame_transform: LocalFrameToFixedFrame | None = None,
) -> HeadingPitchRoll:
    """Recover heading, pitch and roll from a body-to-fixed transform.

    Inverse of :func:`heading_pitch_roll_to_fixed_frame`.  Scale in the
    rotation columns is removed first.

    Args:
        transform: 4x4 body-to-fixed transform.
        ellipsoid: Reference ellipsoid. Default: :data:`Ellipsoid.WGS84`.
        fixed_frame_transform: Local frame builder. Default:
            :data:`east_north_up_to_fixed_frame`.

    Returns:
        HeadingPitchRoll: Angles [rad]; all zero when the translation is
        zero.
    """
    transform = jnp.asarray(transform, dtype=get_dtype())
    center = transform[:3, 3]
    if bool(jnp.all(center == 0.0)):
        return HeadingPitchRoll(0.0, 0.0, 0.0)

    fixed_frame_transform = fixed_frame_transform or east_north_up_to_fixed_frame
    to_local = _inverse_rigid(fixed_frame_transform(center, ellipsoid))

    rotation = transform[:3, :3]
    rotation = rotation / jnp.linalg.norm(rotation, axis=0)
    body = _rotation_to_4x4(rotation)
    return heading_pitch_roll_from_rotation((to_local @ body)[:3, :3])


def heading_pitch_roll_quaternion(
    origin: ArrayLike,
    hpr: HeadingPitchRoll,
    ellipsoid: Ellipsoid | None = None,
    fixed_frame_transform: LocalFrameToFixedFrame | None = None,
) -> Array:
    """Quaternion form of :func:`heading_pitch_roll_to_fixed_frame`.

    Args:
        origin: Fixed-frame position ``[x, y, z]`` in *m*.
        hpr: Heading, pitch and roll [rad].
        ellipsoid: Reference ellipsoid. Default: :data:`Ellipsoid.WGS84`.
        fixed_frame_transform: Local frame builder. Default:
            :data:`east_north_up_to_fixed_frame`.

    Returns:
        jax.Array: Body-to-fixed rotation as ``[w, x, y, z]``.
    """
    transform = heading_pitch_roll_to_fixed_frame(
        origin, hpr, ellipsoid, fixed_frame_transform
    )
    return quaternion_from_rotation(transform[:3, :3])


# ---------------------------------------------------------------------------
# Velocity-aligned frame
# ---------------------------------------------------------------------------


def rotation_matrix_from_position_velocity(
    position: ArrayLike,
    velocity: ArrayLike,
    ellipsoid: Ellipsoid | None = None,
) -> Array:
    """Rotation whose first axis points along *velocity*.

    Columns are the unit velocity, a "right" axis perpendicular to the
    velocity and the surface normal at *position*, and an "up" axis
    completing the right-handed set.  When the velocity is parallel to the
    surface normal the fixed-frame x axis seeds the "right" axis.

    Args:
        position: Fixed-frame position ``[x, y, z]`` in *m*.
        velocity: Fixed-frame velocity ``[vx, vy, vz]`` in *m/s*.
        ellipsoid: Reference ellipsoid. Default: :data:`Ellipsoid.WGS84`.

    Returns:
        jax.Array: 3x3 velocity-frame-to-fixed rotation.

    Raises:
        ValueError: If *velocity* is zero.
    """
    ellipsoid = ellipsoid or Ellipsoid.WGS84
    velocity = jnp.asarray(velocity, dtype=get_dtype())
    speed = jnp.linalg.norm(velocity)
    if float(speed) == 0.0:
        raise ValueError("velocity must be non-zero")
    forward = velocity / speed

    normal = ellipsoid.geodetic_surface_normal(position)
    right = jnp.cross(forward, normal)
    if bool(jnp.all(jnp.abs(right) < 1.0e-6)):
        right = jnp.array([1.0, 0.0, 0.0], dtype=forward.dtype)

    up = jnp.cross(right, forward)
    up = up / jnp.linalg.norm(up)
    right = jnp.cross(up, forward)
    right = right / jnp.linalg.norm(right)

    return jnp.stack([forward, right, up], axis=1)
