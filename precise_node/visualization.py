"""
Visualization of orbit patches and their node crossings.
"""

import numpy as np
import matplotlib.pyplot as plt

from .formatting import format_distance, format_duration
from .geometry import Node, is_ut_inside_patch, node_ut

NODE_COLORS = {Node.ASCENDING: '#2ECC71', Node.DESCENDING: '#E74C3C'}


def sample_orbit(orbit, n=360):
    """
    Sample one revolution of an orbit starting at its epoch.

    Returns:
        np.ndarray: (n, 3) positions relative to the reference body
    """
    uts = orbit.epoch + np.linspace(0.0, orbit.period, n)
    return np.array([orbit.position_at_ut(ut) for ut in uts])


def add_body_sphere(ax, radius, center=(0.0, 0.0, 0.0), color='gray', alpha=0.25, resolution=24):
    """
    Add a wireframe sphere for the reference body.

    Args:
        ax: 3D matplotlib axes
        radius: Sphere radius (m)
        center: Sphere center coordinates
        color: Sphere color
        alpha: Transparency (0-1)
        resolution: Number of grid points per angle
    """
    cx, cy, cz = center
    u = np.linspace(0, 2*np.pi, resolution)
    v = np.linspace(0, np.pi, resolution)
    uu, vv = np.meshgrid(u, v)

    x = cx + radius * np.cos(uu) * np.sin(vv)
    y = cy + radius * np.sin(uu) * np.sin(vv)
    z = cz + radius * np.cos(vv)

    ax.plot_wireframe(x, y, z, rstride=2, cstride=2, color=color, alpha=alpha)


def set_axes_equal_around(ax, center=(0, 0, 0), radius=1.0, pad=0.05):
    """Set an equal aspect cube of half-width `radius` around `center`."""
    cx, cy, cz = center
    half = radius * (1 + pad)
    ax.set_xlim(cx - half, cx + half)
    ax.set_ylim(cy - half, cy + half)
    ax.set_zlim(cz - half, cz + half)
    ax.set_box_aspect((1, 1, 1))


def beautify_3d_axes(ax, show_ticks=True, show_grid=True):
    ax.grid(show_grid)
    if show_ticks:
        ax.tick_params(axis='both', which='major', labelsize=8, pad=2)
    else:
        ax.set_xticks([]); ax.set_yticks([]); ax.set_zticks([])
    for axis in (ax.xaxis, ax.yaxis, ax.zaxis):
        axis.pane.set_facecolor((1, 1, 1, 1))
        axis.pane.set_edgecolor("0.85")


def plot_orbit(ax, orbit, color='#3498DB', label=None, lw=1.8, n=360):
    """Draw one revolution of `orbit` and return the sampled points."""
    pts = sample_orbit(orbit, n)
    ax.plot(pts[:, 0], pts[:, 1], pts[:, 2], '-', color=color, lw=lw, label=label)
    return pts


def plot_node_markers(ax, orbit, now, target=None):
    """
    Mark the AN and DN of `orbit` that fall inside the patch.

    Returns:
        dict: Node -> UT for the markers drawn
    """
    drawn = {}
    for node in (Node.ASCENDING, Node.DESCENDING):
        ut = node_ut(orbit, target, node, after=now)
        if not is_ut_inside_patch(orbit, ut, now):
            continue
        p = orbit.position_at_ut(ut)
        ax.scatter(p[0], p[1], p[2], color=NODE_COLORS[node], s=80, zorder=10,
                   label=f'{node.value} in {format_duration(ut - now)}')
        drawn[node] = ut
    return drawn


def create_node_figure(orbit, now, target=None):
    """
    Create a 3D figure of the craft orbit, the optional target orbit and
    the node crossings.

    Args:
        orbit: Craft orbit patch
        now: Current universal time
        target: Target orbit sharing the reference body, or None

    Returns:
        matplotlib Figure object
    """
    fig = plt.figure(figsize=(8, 8), constrained_layout=True)
    ax = fig.add_subplot(111, projection='3d')

    body = orbit.reference_body
    add_body_sphere(ax, radius=body.radius, color='blue', alpha=0.3)

    pts = plot_orbit(ax, orbit, color='#3498DB', label='Craft')
    extent = np.linalg.norm(pts, axis=1).max()
    if target is not None:
        tpts = plot_orbit(ax, target, color='#F39C12', label='Target', lw=1.2)
        extent = max(extent, np.linalg.norm(tpts, axis=1).max())

    plot_node_markers(ax, orbit, now, target)

    p = orbit.position_at_ut(now)
    ax.scatter(p[0], p[1], p[2], color='black', s=40, label='Craft now', zorder=10)
    ax.legend(fontsize=8)

    set_axes_equal_around(ax, radius=extent, pad=0.05)
    beautify_3d_axes(ax)

    ref = 'target plane' if target is not None else 'equator'
    altitude = np.linalg.norm(p) - body.radius
    ax.set_title(f'{body.name}: nodes relative to {ref}\n'
                 f'Altitude: {format_distance(altitude)}', fontsize=10, pad=10)
    return fig
