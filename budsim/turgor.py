"""Turgor pressure: outward normal forces on membrane triangles."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

UNUSED_INDEX = 2**31 - 1


def turgor_forces(
    positions, triangles: Sequence[Tuple[int, int, int]], spring_constant: float
) -> np.ndarray:
    """Per-node pressure forces.

    Each triangle ``(i, j, k)`` pushes each of its nodes along its unit normal
    ``(rk - rj) x (ri - rj)`` with magnitude ``spring_constant * area / 3``.
    Triangles with an unused slot or no area contribute nothing.
    """
    pos = np.asarray(positions, dtype=float)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("positions must have shape (n, 3)")
    forces = np.zeros_like(pos)
    for i, j, k in triangles:
        if UNUSED_INDEX in (i, j, k):
            continue
        normal = np.cross(pos[k] - pos[j], pos[i] - pos[j])
        magnitude = float(np.linalg.norm(normal))
        if magnitude == 0.0:
            continue
        area = magnitude / 2.0
        force = (area * spring_constant / 3.0) * (normal / magnitude)
        for node in (i, j, k):
            forces[node] += force
    return forces