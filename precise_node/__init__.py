"""
Precise Node: maneuver-planning geometry for Keplerian orbit patches

This package derives the quantities used to place and combine maneuver
nodes: ascending/descending node crossing times (equatorial or relative to
a target orbit), ejection angles, patch validity checks, the burn that
merges two consecutive nodes, and human-readable time and distance strings.
"""

from .vectors import angle360, normalize, rotate_about_axis, swap_yz, planar_bearing
from .orbit import KeplerOrbit, PatchTransition, solve_kepler
from .bodies import CelestialBody, make_kerbol_system, circular_orbit
from .geometry import (
    Node,
    equatorial_node_vector,
    target_node_vector,
    equatorial_node_ut,
    target_node_ut,
    equatorial_an_ut,
    equatorial_dn_ut,
    target_an_ut,
    target_dn_ut,
    ejection_angle,
    find_next_encounter,
    is_closed,
    has_apoapsis,
    is_ut_inside_patch,
    node_ut,
    has_ascending_node,
    has_descending_node
)
from .maneuver import (
    ManeuverNode,
    find_previous_orbit,
    merge_delta,
    apply_merge
)
from .formatting import (
    format_distance,
    format_absolute_time,
    format_duration,
    format_number,
    format_angle
)
from .planning import summarize_nodes
from .visualization import (
    sample_orbit,
    add_body_sphere,
    set_axes_equal_around,
    beautify_3d_axes,
    plot_orbit,
    plot_node_markers,
    create_node_figure
)
from . import constants

__all__ = [
    # Vector and angle helpers
    'angle360',
    'normalize',
    'rotate_about_axis',
    'swap_yz',
    'planar_bearing',

    # Orbit model
    'KeplerOrbit',
    'PatchTransition',
    'solve_kepler',
    'CelestialBody',
    'make_kerbol_system',
    'circular_orbit',

    # Node geometry
    'Node',
    'equatorial_node_vector',
    'target_node_vector',
    'equatorial_node_ut',
    'target_node_ut',
    'equatorial_an_ut',
    'equatorial_dn_ut',
    'target_an_ut',
    'target_dn_ut',
    'ejection_angle',
    'find_next_encounter',
    'is_closed',
    'has_apoapsis',
    'is_ut_inside_patch',
    'node_ut',
    'has_ascending_node',
    'has_descending_node',

    # Maneuver merging
    'ManeuverNode',
    'find_previous_orbit',
    'merge_delta',
    'apply_merge',

    # Formatting
    'format_distance',
    'format_absolute_time',
    'format_duration',
    'format_number',
    'format_angle',

    # Reports
    'summarize_nodes',

    # Visualization functions
    'sample_orbit',
    'add_body_sphere',
    'set_axes_equal_around',
    'beautify_3d_axes',
    'plot_orbit',
    'plot_node_markers',
    'create_node_figure',

    # Constants module
    'constants',
]

__version__ = "1.0.0"
