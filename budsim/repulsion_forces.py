"""Morse repulsion between membrane nodes that are not direct neighbours."""

from __future__ import annotations

from typing import Sequence

import numpy as np

NEIGHBOR_SLOTS = 9


def _as_positions(positions) -> np.ndarray:
    pos = np.asarray(positions, dtype=float)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("positions must have shape (n, 3)")
    return pos


def universal_repulsion_force(
    node_id: int,
    neighbors: Sequence[Sequence[int]],
    positions,
    rmin: float,
    abs_rmin: float,
    epsilon_rep1: float,
    epsilon_rep2: float,
) -> np.ndarray:
    """Repulsive force on ``node_id`` from every other node closer than ``abs_rmin``.

    The node's own direct neighbours (the first nine entries of its neighbour
    list) are excluded.
    """
    pos = _as_positions(positions)
    count = pos.shape[0]
    if not 0 <= node_id < count:
        raise IndexError(f"node {node_id} is out of range")
    excluded = {n for n in list(neighbors[node_id])[:NEIGHBOR_SLOTS] if n >= 0}
    excluded.add(node_id)
    others = np.array([m for m in range(count) if m not in excluded], dtype=int)
    if others.size == 0:
        return np.zeros(3)
    separation = pos[others] - pos[node_id]
    distance = np.linalg.norm(separation, axis=1)
    close = distance < abs_rmin
    if not close.any():
        return np.zeros(3)
    sep = separation[close]
    r = distance[close]
    if (r == 0.0).any():
        raise ValueError(f"node {node_id} coincides with another node")
    decay = np.exp(-epsilon_rep2 * (r - rmin))
    magnitude = 2.0 * epsilon_rep1 * (1.0 - decay) * (-decay) * (epsilon_rep2 / r)
    return (-magnitude[:, None] * sep).sum(axis=0)


def apply_universal_repulsion(
    forces,
    neighbors: Sequence[Sequence[int]],
    positions,
    rmin: float,
    abs_rmin: float,
    epsilon_rep1: float,
    epsilon_rep2: float,
) -> np.ndarray:
    """Return ``forces`` with the repulsion on every node added."""
    pos = _as_positions(positions)
    current = np.asarray(forces, dtype=float)
    if current.shape != pos.shape:
        raise ValueError("forces must have the same shape as positions")
    if len(neighbors) != pos.shape[0]:
        raise ValueError("neighbors must hold one list per node")
    result = current.copy()
    for node_id in range(pos.shape[0]):
        result[node_id] += universal_repulsion_force(
            node_id, neighbors, pos, rmin, abs_rmin, epsilon_rep1, epsilon_rep2
        )
    return result