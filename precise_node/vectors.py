"""
Vector and angle helpers shared by the geometry and maneuver modules.
"""

import math
import warnings

import numpy as np
from scipy.spatial.transform import Rotation

from .constants import DEGENERATE_EPS


def angle360(degrees):
    """
    Reduce an angle to its representative in [0, 360).

    Args:
        degrees: Any finite angle in degrees

    Returns:
        float: Equivalent angle in [0, 360)
    """
    d = math.fmod(degrees, 360.0)
    if d < 0:
        d += 360.0
    # -1e-20 + 360 rounds up to 360
    if d >= 360.0:
        return 0.0
    return d


def wrap_pi(radians):
    """Reduce an angle in radians to [-pi, pi)."""
    return (radians + np.pi) % (2.0 * np.pi) - np.pi


def normalize(vector, eps=DEGENERATE_EPS):
    """
    Return the unit vector along `vector`.

    Near-zero input has no direction; a NaN vector is returned and a
    RuntimeWarning is emitted.
    """
    v = np.asarray(vector, dtype=float)
    n = np.linalg.norm(v)
    if n < eps:
        warnings.warn("Cannot normalize a near-zero vector; result is undefined.",
                      RuntimeWarning, stacklevel=2)
        return np.full(v.shape, np.nan)
    return v / n


def rotate_about_axis(vector, axis, degrees):
    """
    Rotate `vector` by `degrees` about `axis` (right-handed).

    Args:
        vector: Vector to rotate, shape (3,)
        axis: Rotation axis, any non-zero length
        degrees: Rotation angle in degrees

    Returns:
        np.ndarray: Rotated vector, shape (3,)
    """
    axis = np.asarray(axis, dtype=float)
    rotvec = axis / np.linalg.norm(axis) * np.radians(degrees)
    return Rotation.from_rotvec(rotvec).apply(np.asarray(vector, dtype=float))


def swap_yz(vector):
    """Return (x, z, y) for a Z-up host that stores vectors as (x, y, z)."""
    v = np.asarray(vector, dtype=float)
    return np.array([v[0], v[2], v[1]])


def planar_bearing(vector):
    """Bearing of the vector's XY projection, in degrees from +X."""
    return math.degrees(math.atan2(vector[1], vector[0]))
