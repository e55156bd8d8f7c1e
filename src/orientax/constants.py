"""
The `constants` module defines the mathematical, time and physical constants used by orientax.
"""

import math

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * math.pi / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (math.pi * 2.0)

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * math.pi / 360.0 / 3600.0

"""
Constant to convert radians to arcseconds. Equal to (360*3600)/(2pi). Units: *as/rad*
"""
RAD2AS = 360.0 * 3600.0 / math.pi / 2.0

"""
Full turn. Units: *rad*
"""
TWO_PI = 2.0 * math.pi

# Time Constants

"""
Seconds in one day. Units: *s*
"""
SECONDS_PER_DAY = 86400

"""
Seconds in one minute. Units: *s*
"""
SECONDS_PER_MINUTE = 60

"""
Seconds in one hour. Units: *s*
"""
SECONDS_PER_HOUR = 3600

"""
Minutes in one hour. Units: *min*
"""
MINUTES_PER_HOUR = 60

"""
Hours in one day. Units: *h*
"""
HOURS_PER_DAY = 24

"""
Seconds in one millisecond. Units: *s*
"""
SECONDS_PER_MILLISECOND = 0.001

"""
Days in one Julian century. Units: *days*
"""
DAYS_PER_JULIAN_CENTURY = 36525.0

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
MJD2000 = 51544.5

"""
Julian day number of the J2000.0 epoch. Units: *days*
"""
J2000_JULIAN_DAY = 2451545

"""
TT - TAI offset (constant by definition). Units: *s*
"""
TT_TAI = 32.184

# Earth Rotation Constants

"""
Earth rotation angle at J2000.0 (IERS Conventions 2010, eq. 5.15). Units: *revolutions*
"""
ERA_J2000 = 0.779057273264

"""
Excess rotation of the Earth per UT1 day relative to one revolution. Units: *revolutions/day*
"""
ERA_RATE_EXCESS = 0.00273781191135448

"""
Mean sidereal rotation rate of the Earth at J2000.0. Units: *rad/s*

References:

1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, 2010
"""
OMEGA_EARTH = 7.2921158553e-5

"""
Secular drift of the sidereal rotation rate. Units: *rad/s/day*
"""
OMEGA_EARTH_RATE = 1.1772758384668e-19

"""
Rate of the TIO locator s'. Units: *arcseconds/century*

References:

1. G. Petit and B. Luzum, *IERS Technical Note 36*, 2010, eq. 5.13
"""
TIO_LOCATOR_RATE = -47.0e-6

# Physical Constants

"""
Earth's semi-major axis as defined by the WGS84 geodetic system. Units: *m*

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0

"""
Earth's ellipsoidal flattening.  WGS84 Value.

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563

"""
Earth's semi-minor axis as defined by the WGS84 geodetic system. Units: *m*
"""
WGS84_b = WGS84_a * (1.0 - WGS84_f)
