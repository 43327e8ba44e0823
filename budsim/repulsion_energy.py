"""Morse repulsion energy between membrane nodes two mesh steps apart."""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

NEIGHBOR_SLOTS = 12

# Slots of a neighbour's list whose energy is carried over from the previous
# first-ring neighbour when both hit, instead of being replaced.
_ACCUMULATING_SLOTS = frozenset({2, 3})


def _as_positions(positions) -> np.ndarray:
    pos = np.asarray(positions, dtype=float)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("positions must have shape (n, 3)")
    return pos


def _slots(neighbors: Sequence[Sequence[int]], node: int) -> List[int]:
    entries = [int(n) for n in list(neighbors[node])[:NEIGHBOR_SLOTS]]
    return entries + [-1] * (NEIGHBOR_SLOTS - len(entries))


def node_repulsion_energy(
    node_id: int,
    neighbors: Sequence[Sequence[int]],
    positions,
    abs_rmin: float,
    epsilon_rep1: float,
    epsilon_rep2: float,
) -> float:
    """Repulsion energy of ``node_id`` with the neighbours of its neighbours.

    Second-ring nodes that are the node itself or one of its direct
    neighbours are skipped; the rest closer than ``abs_rmin`` contribute
    ``epsilon_rep1 * (1 - exp(-epsilon_rep2 * (R - abs_rmin)))**2``. A node
    reached through several first-ring neighbours is counted each time.
    """
    pos = _as_positions(positions)
    count = pos.shape[0]
    if not 0 <= node_id < count:
        raise IndexError(f"node {node_id} is out of range")
    if len(neighbors) != count:
        raise ValueError("neighbors must hold one list per node")

    own = _slots(neighbors, node_id)
    excluded = set(own)
    excluded.add(node_id)
    origin = pos[node_id]

    slot_energy = [0.0] * NEIGHBOR_SLOTS
    total = 0.0
    for neighbor in own:
        if neighbor < 0:
            continue
        for slot, other in enumerate(_slots(neighbors, neighbor)):
            if other < 0 or other in excluded:
                slot_energy[slot] = 0.0
                continue
            distance = float(np.linalg.norm(pos[other] - origin))
            if distance >= abs_rmin:
                slot_energy[slot] = 0.0
                continue
            term = 1.0 - math.exp(-epsilon_rep2 * (distance - abs_rmin))
            value = epsilon_rep1 * term * term
            if slot in _ACCUMULATING_SLOTS:
                slot_energy[slot] += value
            else:
                slot_energy[slot] = value
        total += sum(slot_energy)
    return total


def total_repulsion_energy(
    neighbors: Sequence[Sequence[int]],
    positions,
    abs_rmin: float,
    epsilon_rep1: float,
    epsilon_rep2: float,
) -> float:
    """Sum of :func:`node_repulsion_energy` over every node."""
    pos = _as_positions(positions)
    return sum(
        node_repulsion_energy(node, neighbors, pos, abs_rmin, epsilon_rep1, epsilon_rep2)
        for node in range(pos.shape[0])
    )