"""Earth Orientation Parameters (EOP).

Provides a time-tagged EOP sample table with linear interpolation, an
asynchronous JSON loader that registers newly observed leap seconds, and an
IERS ``finals.all.iau2000.txt`` reader.

Typical usage::

    import asyncio
    from orientax.eop import EarthOrientationParameters
    eop = asyncio.run(EarthOrientationParameters.from_url("Assets/EOP.json"))
    sample = eop.compute(epc)  # None until data is available
"""

from orientax.eop._parsers import parse_eop_record, parse_standard_line
from orientax.eop._providers import (
    EarthOrientationParameters,
    NoEarthOrientationParameters,
    load_eop_from_standard_file,
    static_eop,
    zero_eop,
)
from orientax.eop._types import REQUIRED_COLUMNS, EOPConfig, EOPSample

__all__ = [
    "EOPConfig",
    "EOPSample",
    "EarthOrientationParameters",
    "NoEarthOrientationParameters",
    "REQUIRED_COLUMNS",
    "load_eop_from_standard_file",
    "parse_eop_record",
    "parse_standard_line",
    "static_eop",
    "zero_eop",
]
