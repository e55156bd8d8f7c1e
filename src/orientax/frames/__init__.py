"""Reference frame rotations.

- **ICRF ↔ Earth-fixed**: IAU 2006 CIO-based rotation driven by EOP and
  XYS data
- **TEME → pseudo-fixed**: GMST rotation, always available
- **Moon-fixed ↔ ICRF**: analytic lunar orientation model
- **Local frames**: east/north/up style frames at an Earth-fixed origin and
  heading-pitch-roll placement
- **Transforms**: engine bundling the data providers
"""

from .icrf_fixed import (
    earth_rotation_angle,
    polar_motion_matrix,
    precession_nutation_matrix,
    rotation_fixed_to_icrf,
    rotation_icrf_to_fixed,
    tio_locator,
)
from .teme import (
    greenwich_mean_sidereal_angle,
    rotation_teme_to_pseudo_fixed,
)
from .moon import (
    moon_heading_pitch_roll,
    rotation_icrf_to_moon_fixed,
    rotation_moon_fixed_to_icrf,
)
from .local_frames import (
    LocalAxis,
    LocalFrameToFixedFrame,
    east_north_up_to_fixed_frame,
    fixed_frame_to_heading_pitch_roll,
    heading_pitch_roll_quaternion,
    heading_pitch_roll_to_fixed_frame,
    local_frame_to_fixed_frame_generator,
    north_east_down_to_fixed_frame,
    north_up_east_to_fixed_frame,
    north_west_up_to_fixed_frame,
    rotation_matrix_from_position_velocity,
)
from .transforms import (
    Transforms,
    earth_fixed_strategy,
    moon_fixed_strategy,
)

__all__ = [
    # ICRF / Earth-fixed
    "earth_rotation_angle",
    "polar_motion_matrix",
    "precession_nutation_matrix",
    "rotation_fixed_to_icrf",
    "rotation_icrf_to_fixed",
    "tio_locator",
    # TEME
    "greenwich_mean_sidereal_angle",
    "rotation_teme_to_pseudo_fixed",
    # Moon
    "moon_heading_pitch_roll",
    "rotation_icrf_to_moon_fixed",
    "rotation_moon_fixed_to_icrf",
    # Local frames
    "LocalAxis",
    "LocalFrameToFixedFrame",
    "east_north_up_to_fixed_frame",
    "fixed_frame_to_heading_pitch_roll",
    "heading_pitch_roll_quaternion",
    "heading_pitch_roll_to_fixed_frame",
    "local_frame_to_fixed_frame_generator",
    "north_east_down_to_fixed_frame",
    "north_up_east_to_fixed_frame",
    "north_west_up_to_fixed_frame",
    "rotation_matrix_from_position_velocity",
    # Engine
    "Transforms",
    "earth_fixed_strategy",
    "moon_fixed_strategy",
]
