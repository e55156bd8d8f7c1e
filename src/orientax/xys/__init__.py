"""IAU 2006 precession-nutation (XYS) series.

Provides chunked, lazily fetched CIP X/Y and CIO locator s values evaluated
by Lagrange interpolation.

Typical usage::

    from orientax.xys import Iau2006XysData, XYSConfig
    xys = Iau2006XysData(XYSConfig(xys_file_url_template="https://host/IAU2006_XYS_{0}.json"))
    sample = xys.compute_xys_radians(day_tt, second_tt)  # None until loaded
"""

from orientax.xys._interpolation import lagrange_coefficients, lagrange_denominators
from orientax.xys._providers import Iau2006XysData
from orientax.xys._types import XYSConfig, XYSSample

__all__ = [
    "Iau2006XysData",
    "XYSConfig",
    "XYSSample",
    "lagrange_coefficients",
    "lagrange_denominators",
]
