"""
orientax is a time and reference-frame orientation library implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    JD_MJD_OFFSET,
    MJD2000,
    J2000_JULIAN_DAY,
    TT_TAI,
    OMEGA_EARTH,
    WGS84_a,
    WGS84_f,
    WGS84_b,
)

from .attitude_representations import (
    Rx,
    Ry,
    Rz,
    HeadingPitchRoll,
    heading_pitch_roll_from_rotation,
    rotation_from_heading_pitch_roll,
    quaternion_from_rotation,
    rotation_from_quaternion,
)

from .config import (
    set_dtype,
    get_dtype,
    get_matrix_tolerance,
    get_xys_url_template,
)
from .time import LeapSecond, LeapSecondTable, default_leap_second_table
from .epoch import Epoch, GregorianDate, TimeStandard

from .coordinates import Ellipsoid

from .eop import (
    EOPConfig,
    EOPSample,
    EarthOrientationParameters,
    static_eop,
    zero_eop,
)

from .xys import (
    Iau2006XysData,
    XYSConfig,
    XYSSample,
)

from .frames import (
    LocalAxis,
    Transforms,
    east_north_up_to_fixed_frame,
    fixed_frame_to_heading_pitch_roll,
    heading_pitch_roll_quaternion,
    heading_pitch_roll_to_fixed_frame,
    local_frame_to_fixed_frame_generator,
    north_east_down_to_fixed_frame,
    north_up_east_to_fixed_frame,
    north_west_up_to_fixed_frame,
    rotation_fixed_to_icrf,
    rotation_icrf_to_fixed,
    rotation_icrf_to_moon_fixed,
    rotation_moon_fixed_to_icrf,
    rotation_matrix_from_position_velocity,
    rotation_teme_to_pseudo_fixed,
)
