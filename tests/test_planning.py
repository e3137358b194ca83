import math

import matplotlib.pyplot as plt
import numpy as np
import pytest

from precise_node import (
    Node,
    PatchTransition,
    circular_orbit,
    create_node_figure,
    plot_node_markers,
    sample_orbit,
    summarize_nodes,
)


def test_summary_for_equatorial_nodes(kerbin):
    orbit = circular_orbit(kerbin, 100000.0, inclination=10.0, lan=45.0, epoch=500.0, phase=30.0)
    info = summarize_nodes(orbit, now=500.0)

    assert info["reference"] == "equatorial"
    assert info["has_an"] and info["has_dn"]
    assert 0.0 <= info["time_to_an"] < orbit.period
    assert 0.0 <= info["time_to_dn"] < orbit.period
    assert abs(info["an_ut"] - info["dn_ut"]) == pytest.approx(orbit.period / 2.0, rel=1e-6)
    assert math.isfinite(info["ejection_angle_an"])
    assert info["an_time_str"].startswith("Year 1 Day 1 ")


def test_summary_marks_nodes_outside_patch(kerbin):
    orbit = circular_orbit(kerbin, 100000.0, inclination=10.0, phase=36.0,
                           patch_end_transition=PatchTransition.ESCAPE, end_ut=100.0)
    info = summarize_nodes(orbit, now=0.0)
    assert not info["has_an"] and not info["has_dn"]
    assert info["an_eta_str"] == "N/A"


def test_summary_against_target(bodies, kerbin):
    orbit = circular_orbit(kerbin, 100000.0)
    info = summarize_nodes(orbit, now=0.0, target=bodies["Minmus"].orbit)
    assert info["reference"] == "target"
    assert info["has_an"] and info["has_dn"]


def test_summary_verbose_prints_report(kerbin, capsys):
    orbit = circular_orbit(kerbin, 100000.0, inclination=5.0, phase=30.0)
    summarize_nodes(orbit, now=0.0, verbose=True)
    out = capsys.readouterr().out
    assert "Kerbin" in out
    assert "AN:" in out and "DN:" in out
    assert "ejection" in out


def test_sample_orbit_shape(kerbin):
    orbit = circular_orbit(kerbin, 100000.0, inclination=20.0)
    pts = sample_orbit(orbit, n=90)
    assert pts.shape == (90, 3)
    np.testing.assert_allclose(np.linalg.norm(pts, axis=1), kerbin.radius + 100000.0, rtol=1e-9)


def test_node_figure(bodies, kerbin):
    orbit = circular_orbit(kerbin, 100000.0, inclination=8.0, lan=20.0, phase=30.0)
    fig = create_node_figure(orbit, now=0.0, target=bodies["Mun"].orbit)
    try:
        assert len(fig.axes) == 1
        drawn = plot_node_markers(fig.axes[0], orbit, now=0.0)
        assert set(drawn) == {Node.ASCENDING, Node.DESCENDING}
    finally:
        plt.close(fig)


def test_summary_long_after_epoch(kerbin):
    orbit = circular_orbit(kerbin, 100000.0, inclination=10.0, lan=45.0, epoch=0.0, phase=30.0)
    now = 3.0 * orbit.period
    info = summarize_nodes(orbit, now=now)

    assert info["has_an"] and info["has_dn"]
    assert 0.0 <= info["time_to_an"] < orbit.period
    assert 0.0 <= info["time_to_dn"] < orbit.period
    assert info["an_eta_str"] != "N/A"


def test_node_markers_long_after_epoch(kerbin):
    orbit = circular_orbit(kerbin, 100000.0, inclination=8.0, lan=20.0, epoch=0.0, phase=30.0)
    now = 4.0 * orbit.period
    fig = plt.figure()
    try:
        ax = fig.add_subplot(111, projection='3d')
        drawn = plot_node_markers(ax, orbit, now=now)
        assert set(drawn) == {Node.ASCENDING, Node.DESCENDING}
        assert all(now <= ut < now + orbit.period for ut in drawn.values())
    finally:
        plt.close(fig)
