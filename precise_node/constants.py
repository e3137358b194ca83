"""
Planning parameters and constants for the node calculations.
"""

import numpy as np

# Body name the encounter search never reports (the system primary)
PRIMARY_BODY_NAME = "Sun"

# Refinement passes used when converting a true anomaly to a UT
NODE_UT_ITERATIONS = 2

# Z-up inertial frame: X is the reference direction, Z the equatorial pole
ZUP_X = np.array([1.0, 0.0, 0.0])
ZUP_Y = np.array([0.0, 1.0, 0.0])
ZUP_Z = np.array([0.0, 0.0, 1.0])

# Merged burns are reported with Y/Z swapped for Z-up hosts that store
# vectors as (x, z, y). The bundled orbit model uses one frame throughout.
MERGE_SWAP_YZ = False

# Norms below this are treated as degenerate (coplanar orbits, zero h)
DEGENERATE_EPS = 1e-12

# Time units (fixed 365-day calendar, no leap years)
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.0
SECONDS_PER_YEAR = SECONDS_PER_DAY * DAYS_PER_YEAR

# Distance formatting thresholds (m)
KILOMETER_THRESHOLD_M = 1.0e6
WHOLE_METER_THRESHOLD_M = 1.0e5

# Kerbol system catalogue (SI units, angles in degrees)
KERBOL_MU = 1.1723328e18  # m³/s²
KERBOL_RADIUS_M = 261600000.0

KERBIN_MU = 3.5316e12
KERBIN_RADIUS_M = 600000.0
KERBIN_SMA_M = 13599840256.0
KERBIN_MEAN_ANOMALY_DEG = np.degrees(3.14)

MUN_MU = 6.5138398e10
MUN_RADIUS_M = 200000.0
MUN_SMA_M = 12000000.0
MUN_MEAN_ANOMALY_DEG = np.degrees(1.7)

MINMUS_MU = 1.7658e9
MINMUS_RADIUS_M = 60000.0
MINMUS_SMA_M = 47000000.0
MINMUS_INCLINATION_DEG = 6.0
MINMUS_LAN_DEG = 78.0
MINMUS_ARG_PE_DEG = 38.0
MINMUS_MEAN_ANOMALY_DEG = np.degrees(0.9)

DUNA_MU = 3.0136321e11
DUNA_RADIUS_M = 320000.0
DUNA_SMA_M = 20726155264.0
DUNA_ECCENTRICITY = 0.051
DUNA_INCLINATION_DEG = 0.06
DUNA_LAN_DEG = 135.5
DUNA_MEAN_ANOMALY_DEG = np.degrees(3.14)

# Default parking orbit altitude for the planner script (m)
PARKING_ALTITUDE_M = 100000.0
