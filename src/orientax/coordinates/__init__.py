"""Coordinate models.

- **Ellipsoid**: reference ellipsoid with geodetic surface normals and
  cartographic ↔ Cartesian conversion
"""

from .ellipsoid import Ellipsoid

__all__ = [
    "Ellipsoid",
]
