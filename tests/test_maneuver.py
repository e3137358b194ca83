import numpy as np
import pytest

from precise_node import (
    KeplerOrbit,
    ManeuverNode,
    apply_merge,
    circular_orbit,
    find_previous_orbit,
    merge_delta,
)

from .stubs import StubOrbit


@pytest.fixture
def stub_plan():
    vessel = StubOrbit(velocity=(1.0, 2.0, 3.0))
    first = ManeuverNode(100.0, StubOrbit(velocity=(10.0, 10.0, 10.0)), burn=(0.5, 0.0, 0.0))
    second = ManeuverNode(200.0, StubOrbit(velocity=(4.0, 6.0, 8.0)), burn=(0.0, 0.5, 0.0))
    return vessel, first, second


def test_single_node_is_noop(stub_plan):
    vessel, first, _ = stub_plan
    assert merge_delta([first], first, vessel) is None


def test_first_node_is_noop(stub_plan):
    vessel, first, second = stub_plan
    assert merge_delta([first, second], first, vessel) is None


def test_node_not_in_sequence_is_noop(stub_plan):
    vessel, first, second = stub_plan
    other = ManeuverNode(300.0, StubOrbit())
    assert merge_delta([first, second], other, vessel) is None


def test_merge_delta_uses_predecessor_time(stub_plan):
    vessel, first, second = stub_plan
    delta = merge_delta([first, second], second, vessel)

    np.testing.assert_allclose(delta, [3.0, 4.0, 5.0])
    assert vessel.queried == [first.ut]
    assert second.patch.queried == [first.ut]


def test_merge_delta_axis_swap(stub_plan):
    vessel, first, second = stub_plan
    delta = merge_delta([first, second], second, vessel, swap_yz=True)
    np.testing.assert_allclose(delta, [3.0, 5.0, 4.0])


def test_merge_delta_uses_orbit_before_merge_target():
    vessel = StubOrbit(velocity=(100.0, 100.0, 100.0))
    first = ManeuverNode(100.0, StubOrbit(velocity=(1.0, 1.0, 1.0)))
    second = ManeuverNode(200.0, StubOrbit(velocity=(50.0, 50.0, 50.0)))
    third = ManeuverNode(300.0, StubOrbit(velocity=(2.0, 3.0, 4.0)))

    delta = merge_delta([first, second, third], third, vessel)
    np.testing.assert_allclose(delta, [1.0, 2.0, 3.0])
    assert first.patch.queried == [second.ut]
    assert vessel.queried == []


def test_find_previous_orbit(stub_plan):
    vessel, first, second = stub_plan
    assert find_previous_orbit([first, second], first, vessel) is vessel
    assert find_previous_orbit([first, second], second, vessel) is first.patch


def test_merged_burn_on_real_orbits(kerbin):
    parking = circular_orbit(kerbin, 100000.0)
    t1 = 0.25 * parking.period
    t2 = t1 + 0.5 * parking.period

    r1, v1 = parking.position_at_ut(t1), parking.velocity_at_ut(t1)
    after_first = KeplerOrbit.from_state_vectors(r1, v1 * 1.02, t1, kerbin)
    r2, v2 = after_first.position_at_ut(t2), after_first.velocity_at_ut(t2)
    after_second = KeplerOrbit.from_state_vectors(r2, v2 * 1.01, t2, kerbin)

    first = ManeuverNode(t1, after_first, v1 * 0.02)
    second = ManeuverNode(t2, after_second, v2 * 0.01)

    delta = merge_delta([first, second], second, parking)
    expected = after_second.velocity_at_ut(t1) - parking.velocity_at_ut(t1)
    np.testing.assert_allclose(delta, expected, rtol=1e-12)


def test_apply_merge_removes_node_without_mutating(stub_plan):
    vessel, first, second = stub_plan
    plan = [first, second]

    merged = apply_merge(plan, second, vessel)

    assert len(merged) == 1
    assert merged[0].ut == first.ut
    assert merged[0].patch is second.patch
    np.testing.assert_allclose(merged[0].burn, [3.0, 4.0, 5.0])
    assert plan == [first, second]
    np.testing.assert_allclose(first.burn, [0.5, 0.0, 0.0])


def test_apply_merge_noop_returns_same_nodes(stub_plan):
    vessel, first, second = stub_plan
    assert apply_merge([first, second], first, vessel) == (first, second)


def test_maneuver_node_defaults_and_validation():
    node = ManeuverNode(10.0, StubOrbit())
    np.testing.assert_array_equal(node.burn, np.zeros(3))
    with pytest.raises(ValueError):
        ManeuverNode(10.0, StubOrbit(), burn=(1.0, 2.0))
