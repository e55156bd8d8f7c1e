"""Type definitions for the IAU 2006 XYS precession-nutation series.

- :class:`XYSSample`: CIP coordinates X, Y and the CIO locator s.
- :class:`XYSConfig`: Layout of the tabulated series and where to fetch it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class XYSSample(NamedTuple):
    """Celestial Intermediate Pole coordinates and CIO locator.

    Attributes:
        x: CIP X coordinate [rad].
        y: CIP Y coordinate [rad].
        s: CIO locator s [rad].
    """

    x: float
    y: float
    s: float


@dataclass(frozen=True)
class XYSConfig:
    """Options for :class:`~orientax.xys.Iau2006XysData`.

    The series is tabulated on a fixed grid starting at
    ``sample_zero_julian_ephemeris_date`` (TT) with ``step_size_days``
    between samples, and split into resources of ``samples_per_xys_file``
    samples each.

    Attributes:
        xys_file_url_template: URL or path template with ``{0}`` for the
            chunk index. ``None`` uses
            :func:`~orientax.config.get_xys_url_template`.
        interpolation_order: Order of the Lagrange polynomial. Default: 9.
        sample_zero_julian_ephemeris_date: Julian Date (TT) of sample 0.
            Default: 2442396.5.
        step_size_days: Spacing of the samples in days. Default: 1.0.
        samples_per_xys_file: Samples per chunk resource. Default: 1000.
        total_samples: Number of samples in the whole series. Default: 27426.
        timeout: HTTP timeout in seconds for chunk requests. Default: 120.
    """

    xys_file_url_template: str | None = None
    interpolation_order: int = 9
    sample_zero_julian_ephemeris_date: float = 2442396.5
    step_size_days: float = 1.0
    samples_per_xys_file: int = 1000
    total_samples: int = 27426
    timeout: float = 120.0

    def __post_init__(self) -> None:
        if self.interpolation_order < 0:
            raise ValueError(
                f"interpolation_order must be non-negative, got {self.interpolation_order}"
            )
        if self.step_size_days <= 0:
            raise ValueError(f"step_size_days must be positive, got {self.step_size_days}")
        if self.samples_per_xys_file <= 0:
            raise ValueError(
                f"samples_per_xys_file must be positive, got {self.samples_per_xys_file}"
            )
        if self.total_samples <= self.interpolation_order:
            raise ValueError(
                "total_samples must exceed interpolation_order, got "
                f"{self.total_samples} <= {self.interpolation_order}"
            )
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
