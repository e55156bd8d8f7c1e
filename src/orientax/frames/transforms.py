"""Reference-frame engine bundling the orientation data providers.

:class:`Transforms` holds one EOP provider, one XYS provider and one
leap-second table and exposes the frame rotations as methods.  The ICRF
methods return ``None`` while the data they need is still loading; start
loading with :meth:`Transforms.preload_icrf_fixed` and poll.

The frame used as "central body fixed" is a strategy: by default the
Earth-fixed frame with the TEME pseudo-fixed frame as fallback
(:func:`earth_fixed_strategy`); :func:`moon_fixed_strategy` switches the
engine to the Moon.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from jax import Array

from orientax.constants import TT_TAI
from orientax.eop import EarthOrientationParameters
from orientax.epoch import Epoch
from orientax.frames.icrf_fixed import rotation_fixed_to_icrf, rotation_icrf_to_fixed
from orientax.frames.moon import rotation_icrf_to_moon_fixed, rotation_moon_fixed_to_icrf
from orientax.frames.teme import rotation_teme_to_pseudo_fixed
from orientax.time import LeapSecondTable, default_leap_second_table, normalize_components
from orientax.xys import Iau2006XysData

logger = logging.getLogger(__name__)

CentralBodyStrategy = Callable[["Transforms", Epoch], Array]


def _check_epoch(epc: object, name: str = "date") -> None:
    if not isinstance(epc, Epoch):
        raise TypeError(f"{name} must be an Epoch, got {type(epc).__name__}")


def earth_fixed_strategy(transforms: Transforms, epc: Epoch) -> Array:
    """ICRF to Earth-fixed, falling back to TEME → pseudo-fixed.

    Args:
        transforms: Engine whose providers are used.
        epc: Evaluation instant.

    Returns:
        jax.Array: 3x3 rotation matrix.
    """
    m = transforms.compute_icrf_to_fixed_matrix(epc)
    if m is None:
        logger.debug("ICRF data unavailable at %s, using pseudo-fixed frame", epc)
        m = transforms.compute_teme_to_pseudo_fixed_matrix(epc)
    return m


def moon_fixed_strategy(transforms: Transforms, epc: Epoch) -> Array:
    """ICRF to Moon-fixed."""
    return transforms.compute_icrf_to_moon_fixed_matrix(epc)


class Transforms:
    """Frame rotations evaluated against a fixed set of data providers.

    Args:
        earth_orientation_parameters: EOP provider. Default:
            :data:`EarthOrientationParameters.NONE`.
        iau2006_xys_data: XYS provider. Default: a new
            :class:`~orientax.xys.Iau2006XysData`.
        leap_seconds: Leap-second table. Default: the process-wide table.
        central_body_fixed: Strategy used by
            :meth:`compute_icrf_to_central_body_fixed_matrix`. Default:
            :func:`earth_fixed_strategy`.

    Examples:
        ```python
        import asyncio
        from orientax import Epoch
        from orientax.frames import Transforms

        async def main():
            transforms = Transforms()
            start = Epoch.from_iso8601("2020-01-01T00:00:00Z")
            await transforms.preload_icrf_fixed(start, start.add_days(1))
            return transforms.compute_icrf_to_fixed_matrix(start)

        m = asyncio.run(main())
        ```
    """

    def __init__(
        self,
        earth_orientation_parameters=EarthOrientationParameters.NONE,
        iau2006_xys_data: Iau2006XysData | None = None,
        leap_seconds: LeapSecondTable | None = None,
        central_body_fixed: CentralBodyStrategy | None = None,
    ) -> None:
        self.earth_orientation_parameters = earth_orientation_parameters
        self.iau2006_xys_data = iau2006_xys_data or Iau2006XysData()
        self.leap_seconds = (
            default_leap_second_table() if leap_seconds is None else leap_seconds
        )
        self.central_body_fixed = central_body_fixed or earth_fixed_strategy

    def __repr__(self) -> str:
        return (
            f"Transforms(eop={self.earth_orientation_parameters!r}, "
            f"central_body_fixed={getattr(self.central_body_fixed, '__name__', self.central_body_fixed)})"
        )

    # ------------------------------------------------------------------
    # Earth
    # ------------------------------------------------------------------

    def compute_fixed_to_icrf_matrix(self, epc: Epoch) -> Array | None:
        """Earth-fixed → ICRF rotation, or ``None`` while data is loading.

        Raises:
            TypeError: If *epc* is not an :class:`~orientax.epoch.Epoch`.
        """
        _check_epoch(epc)
        return rotation_fixed_to_icrf(
            epc, self.earth_orientation_parameters, self.iau2006_xys_data, self.leap_seconds
        )

    def compute_icrf_to_fixed_matrix(self, epc: Epoch) -> Array | None:
        """ICRF → Earth-fixed rotation, or ``None`` while data is loading.

        Raises:
            TypeError: If *epc* is not an :class:`~orientax.epoch.Epoch`.
        """
        _check_epoch(epc)
        return rotation_icrf_to_fixed(
            epc, self.earth_orientation_parameters, self.iau2006_xys_data, self.leap_seconds
        )

    def compute_teme_to_pseudo_fixed_matrix(self, epc: Epoch) -> Array:
        """TEME → pseudo-fixed rotation.

        Raises:
            TypeError: If *epc* is not an :class:`~orientax.epoch.Epoch`.
        """
        _check_epoch(epc)
        return rotation_teme_to_pseudo_fixed(epc, self.leap_seconds)

    def compute_icrf_to_central_body_fixed_matrix(self, epc: Epoch) -> Array:
        """ICRF → central-body-fixed rotation using the configured strategy.

        Raises:
            TypeError: If *epc* is not an :class:`~orientax.epoch.Epoch`.
        """
        _check_epoch(epc)
        return self.central_body_fixed(self, epc)

    # ------------------------------------------------------------------
    # Moon
    # ------------------------------------------------------------------

    def compute_moon_fixed_to_icrf_matrix(self, epc: Epoch) -> Array:
        """Moon-fixed → ICRF rotation.

        Raises:
            TypeError: If *epc* is not an :class:`~orientax.epoch.Epoch`.
        """
        _check_epoch(epc)
        return rotation_moon_fixed_to_icrf(epc)

    def compute_icrf_to_moon_fixed_matrix(self, epc: Epoch) -> Array:
        """ICRF → Moon-fixed rotation.

        Raises:
            TypeError: If *epc* is not an :class:`~orientax.epoch.Epoch`.
        """
        _check_epoch(epc)
        return rotation_icrf_to_moon_fixed(epc)

    # ------------------------------------------------------------------
    # Data loading
    # ------------------------------------------------------------------

    def preload_icrf_fixed(self, start: Epoch, stop: Epoch) -> asyncio.Future:
        """Request the XYS data needed for ICRF rotations in ``[start, stop]``.

        Must be called while an asyncio event loop is running.

        Args:
            start: Start of the interval.
            stop: End of the interval.

        Returns:
            asyncio.Future: Completes when the data is available.

        Raises:
            TypeError: If *start* or *stop* is not an Epoch.
        """
        _check_epoch(start, "start")
        _check_epoch(stop, "stop")
        start_tt = normalize_components(start.day_number, start.seconds_of_day + TT_TAI)
        stop_tt = normalize_components(stop.day_number, stop.seconds_of_day + TT_TAI)
        logger.debug("Preloading ICRF data from %s to %s", start, stop)
        return self.iau2006_xys_data.preload(*start_tt, *stop_tt)
