"""Triaxial reference ellipsoids.

An :class:`Ellipsoid` is described by its three semi-axes ``(a, b, c)``
along the Earth-fixed x, y and z axes.  The local frames in
:mod:`orientax.frames.local_frames` use its geodetic surface normal as the
"up" direction.

References:
    1. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
"""

from __future__ import annotations

from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orientax.config import get_dtype
from orientax.constants import WGS84_a, WGS84_b


@dataclass(frozen=True)
class Ellipsoid:
    """Ellipsoid with semi-axes ``radii = (a, b, c)`` in metres.

    Args:
        radii: Semi-axis lengths along x, y and z [m].

    Raises:
        ValueError: If a radius is not strictly positive.
    """

    radii: tuple[float, float, float]

    def __post_init__(self) -> None:
        radii = tuple(float(r) for r in self.radii)
        if len(radii) != 3 or any(r <= 0.0 for r in radii):
            raise ValueError(f"radii must be three positive lengths, got {self.radii}")
        object.__setattr__(self, "radii", radii)

    @property
    def radii_squared(self) -> tuple[float, float, float]:
        """Squared semi-axes."""
        a, b, c = self.radii
        return (a * a, b * b, c * c)

    @property
    def one_over_radii_squared(self) -> tuple[float, float, float]:
        """Reciprocal squared semi-axes."""
        return tuple(1.0 / r for r in self.radii_squared)

    def geodetic_surface_normal(self, position: ArrayLike) -> Array:
        """Unit normal of the surface through *position*.

        Args:
            position: Cartesian position ``[x, y, z]`` in *m*, not at the centre.

        Returns:
            jax.Array: Unit vector ``normalize(position / radii**2)``.
        """
        position = jnp.asarray(position, dtype=get_dtype())
        normal = position * jnp.asarray(self.one_over_radii_squared, dtype=get_dtype())
        return normal / jnp.linalg.norm(normal)

    def geodetic_surface_normal_cartographic(
        self, longitude: float, latitude: float
    ) -> Array:
        """Unit surface normal at a geodetic longitude and latitude [rad]."""
        cos_lat = jnp.cos(latitude)
        return jnp.array(
            [cos_lat * jnp.cos(longitude), cos_lat * jnp.sin(longitude), jnp.sin(latitude)],
            dtype=get_dtype(),
        )

    def cartographic_to_cartesian(
        self,
        longitude: float,
        latitude: float,
        height: float = 0.0,
        use_degrees: bool = False,
    ) -> Array:
        """Convert geodetic coordinates to a Cartesian position.

        Args:
            longitude: Geodetic longitude [rad] (or [deg] if ``use_degrees``).
            latitude: Geodetic latitude [rad] (or [deg] if ``use_degrees``).
            height: Height above the ellipsoid [m].
            use_degrees: If ``True``, interpret angles as degrees.

        Returns:
            jax.Array: Position ``[x, y, z]`` in *m*.

        Examples:
            ```python
            from orientax.coordinates import Ellipsoid
            Ellipsoid.WGS84.cartographic_to_cartesian(0.0, 0.0)  # [6378137, 0, 0]
            ```
        """
        if use_degrees:
            longitude = jnp.deg2rad(longitude)
            latitude = jnp.deg2rad(latitude)

        n = self.geodetic_surface_normal_cartographic(longitude, latitude)
        k = n * jnp.asarray(self.radii_squared, dtype=get_dtype())
        gamma = jnp.sqrt(jnp.dot(n, k))
        return k / gamma + n * height


Ellipsoid.WGS84 = Ellipsoid((WGS84_a, WGS84_a, WGS84_b))
Ellipsoid.UNIT_SPHERE = Ellipsoid((1.0, 1.0, 1.0))
