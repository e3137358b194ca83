"""
Node crossings, ejection angle and patch validity for an orbit patch.

All functions are pure: they read orbit state and return a number, a
vector, a flag or an orbit. Node UTs are never range-checked here; pass
them through `is_ut_inside_patch` before use.
"""

import math
import warnings
from enum import Enum

import numpy as np

from .constants import NODE_UT_ITERATIONS, PRIMARY_BODY_NAME, ZUP_X, ZUP_Z
from .orbit import PatchTransition
from .vectors import angle360, normalize, planar_bearing, rotate_about_axis


class Node(Enum):
    ASCENDING = "AN"
    DESCENDING = "DN"


def equatorial_node_vector(orbit, node):
    """
    Direction of the equatorial AN or DN.

    The AN comes from the orbit model; the DN is the reference axis rotated
    by LAN + 180 degrees about the equatorial pole.
    """
    if node is Node.ASCENDING:
        return np.asarray(orbit.an_vector(), dtype=float)
    return rotate_about_axis(ZUP_X, ZUP_Z, angle360(orbit.lan + 180.0))


def target_node_vector(orbit, target, node):
    """
    Direction of the AN or DN of `orbit` relative to the plane of `target`.

    The node line is the intersection of both planes. AN is
    target.h x normal, DN the reverse product.
    """
    normal = orbit.orbit_normal()
    # unit h so the degeneracy tolerance is relative to the plane angle
    h = normalize(target.h)
    if node is Node.ASCENDING:
        return normalize(np.cross(h, normal))
    return normalize(np.cross(normal, h))


def _ut_of_direction(orbit, direction, iterations, after):
    if not np.all(np.isfinite(direction)):
        return math.nan
    return orbit.ut_for_true_anomaly(orbit.true_anomaly_of_vector(direction), iterations, after=after)


def equatorial_node_ut(orbit, node, iterations=NODE_UT_ITERATIONS, after=None):
    """
    UT of the next equatorial node crossing on this patch.

    Args:
        orbit: Orbit patch
        node: Node.ASCENDING or Node.DESCENDING
        iterations: Refinement passes for the anomaly-to-time conversion
        after: Earliest UT to report, None for the patch epoch

    Returns:
        float: Universal time, not validated against the patch
    """
    return _ut_of_direction(orbit, equatorial_node_vector(orbit, node), iterations, after)


def target_node_ut(orbit, target, node, iterations=NODE_UT_ITERATIONS, after=None):
    """
    UT of the next node crossing relative to the target's orbital plane.

    Coplanar orbits have no node line and give NaN.
    """
    return _ut_of_direction(orbit, target_node_vector(orbit, target, node), iterations, after)


def equatorial_an_ut(orbit):
    return equatorial_node_ut(orbit, Node.ASCENDING)


def equatorial_dn_ut(orbit):
    return equatorial_node_ut(orbit, Node.DESCENDING)


def target_an_ut(orbit, target):
    return target_node_ut(orbit, target, Node.ASCENDING)


def target_dn_ut(orbit, target):
    return target_node_ut(orbit, target, Node.DESCENDING)


def ejection_angle(orbit, node_ut):
    """
    Ejection angle of the craft at `node_ut`.

    Measured between the reference body's own orbital velocity and the
    craft's position relative to the body, both taken as bearings in the
    XY plane.

    Args:
        orbit: Craft orbit patch
        node_ut: Universal time of the burn

    Returns:
        float: Degrees. Positive results are the angle from prograde,
            negative results are the angle from retrograde (180 - angle).
            NaN when the reference body does not orbit anything.
    """
    body = orbit.reference_body
    if getattr(body, "orbit", None) is None:
        warnings.warn(f"{body.name} has no parent orbit; ejection angle is undefined.",
                      RuntimeWarning, stacklevel=2)
        return math.nan

    prograde = body.orbit.velocity_at_ut(node_ut)
    position = orbit.position_at_ut(node_ut)
    eangle = angle360(planar_bearing(prograde) - planar_bearing(position))

    if eangle > 180:
        eangle = 180 - eangle

    return eangle


def _index_of(sequence, item):
    for i, candidate in enumerate(sequence):
        if candidate is item:
            return i
    return -1


def find_next_encounter(node, flight_plan, primary_body=PRIMARY_BODY_NAME):
    """
    First patch after `node` that orbits a different, non-primary body.

    Args:
        node: Maneuver node whose patch starts the search
        flight_plan: Ordered orbit patches of the planned trajectory
        primary_body: Name of the system primary, never reported

    Returns:
        Orbit patch, or None if the plan has no such encounter
    """
    start = _index_of(flight_plan, node.patch)
    if start < 0:
        return None

    current = node.patch.reference_body.name
    for patch in flight_plan[start:]:
        name = patch.reference_body.name
        if name != current and name != primary_body:
            return patch
    return None


def is_closed(orbit):
    """True when the patch never ends (no further transition)."""
    return orbit.patch_end_transition is PatchTransition.FINAL


def has_apoapsis(orbit):
    return is_closed(orbit)


def is_ut_inside_patch(orbit, ut, now):
    """
    True when `ut` is not in the past and falls before the patch ends.

    Args:
        orbit: Orbit patch
        ut: Universal time to check
        now: Current universal time

    Returns:
        bool
    """
    return (ut >= now) and (is_closed(orbit) or ut <= orbit.end_ut)


def node_ut(orbit, target, node, after=None):
    """
    Next AN or DN crossing relative to `target`, or the equator when
    `target` is None.

    Args:
        orbit: Orbit patch
        target: Target orbit, or None for the equatorial plane
        node: Node.ASCENDING or Node.DESCENDING
        after: Earliest UT to report, None for the patch epoch

    Returns:
        float: Universal time, not validated against the patch
    """
    if target is not None:
        return target_node_ut(orbit, target, node, after=after)
    return equatorial_node_ut(orbit, node, after=after)


def has_ascending_node(orbit, target, now):
    """AN (relative to `target`, or equatorial when None) lies inside the patch."""
    return is_ut_inside_patch(orbit, node_ut(orbit, target, Node.ASCENDING, after=now), now)


def has_descending_node(orbit, target, now):
    """DN (relative to `target`, or equatorial when None) lies inside the patch."""
    return is_ut_inside_patch(orbit, node_ut(orbit, target, Node.DESCENDING, after=now), now)
