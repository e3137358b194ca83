"""
Maneuver nodes and merging a node into its predecessor.
"""

from dataclasses import dataclass, replace

import numpy as np

from .constants import MERGE_SWAP_YZ
from .vectors import swap_yz as _swap_yz


@dataclass(frozen=True, eq=False)
class ManeuverNode:
    """
    A planned burn.

    Args:
        ut: Universal time of execution
        patch: Orbit flown after this node executes
        burn: Burn vector (m/s), shape (3,)
    """
    ut: float
    patch: object
    burn: np.ndarray = None

    def __post_init__(self):
        burn = np.zeros(3) if self.burn is None else np.array(self.burn, dtype=float)
        if burn.shape != (3,):
            raise ValueError(f"burn must have shape (3,), got {burn.shape}")
        object.__setattr__(self, "burn", burn)


def _index_of(sequence, node):
    for i, candidate in enumerate(sequence):
        if candidate is node:
            return i
    return -1


def find_previous_orbit(sequence, node, vessel_orbit):
    """
    Orbit flown before `node`: the previous node's patch, or the vessel's
    current orbit when `node` is first (or not in the sequence).
    """
    idx = _index_of(sequence, node)
    if idx > 0:
        return sequence[idx - 1].patch
    return vessel_orbit


def velocity_difference(initial, final, swap_yz=MERGE_SWAP_YZ):
    """Return -(initial - final), optionally as (x, z, y)."""
    delta = -(np.asarray(initial, dtype=float) - np.asarray(final, dtype=float))
    if swap_yz:
        return _swap_yz(delta)
    return delta


def merge_delta(sequence, node, vessel_orbit, swap_yz=MERGE_SWAP_YZ):
    """
    Burn that replaces `node` and its predecessor with a single burn.

    Both velocities are taken at the predecessor's UT: the orbit flown
    before the predecessor, and `node`'s own patch. Nothing is mutated.

    Args:
        sequence: Ordered maneuver nodes
        node: Node to merge down into sequence[idx - 1]
        vessel_orbit: Orbit the vessel is on before the first node
        swap_yz: Report the delta as (x, z, y) for Z-up hosts

    Returns:
        np.ndarray: Merged burn vector, or None when there is nothing to merge
    """
    idx = _index_of(sequence, node)
    if idx <= 0 or len(sequence) < 2:
        return None

    merge_into = sequence[idx - 1]
    before = find_previous_orbit(sequence, merge_into, vessel_orbit)
    return velocity_difference(
        before.velocity_at_ut(merge_into.ut),
        node.patch.velocity_at_ut(merge_into.ut),
        swap_yz=swap_yz,
    )


def apply_merge(sequence, node, vessel_orbit, swap_yz=MERGE_SWAP_YZ):
    """
    Caller-side merge: new node tuple with `node` folded into its predecessor.

    The predecessor keeps its UT, takes the merged burn and flies `node`'s
    patch afterwards; `node` is dropped. For a no-op merge the sequence is
    returned unchanged.

    Returns:
        tuple: Updated maneuver nodes
    """
    nodes = tuple(sequence)
    delta = merge_delta(nodes, node, vessel_orbit, swap_yz=swap_yz)
    if delta is None:
        return nodes

    idx = _index_of(nodes, node)
    merged = replace(nodes[idx - 1], burn=delta, patch=node.patch)
    return nodes[:idx - 1] + (merged,) + nodes[idx + 1:]
