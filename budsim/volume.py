"""Enclosed volume of a closed triangulated membrane."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from budsim.vectors import add, cross, dot, norm, scale, subtract

UNUSED_INDEX = 2**31 - 1


def triangle_volume(
    r1: Sequence[float], r2: Sequence[float], r3: Sequence[float]
) -> float:
    """Signed volume term of one triangle.

    This is ``(r1 . n) * |n . (r1 x r2 + r2 x r3 + r3 x r1)|`` with ``n`` the
    unit normal of the triangle. Summed over a closed, outward-oriented
    surface it gives six times the enclosed volume.
    """
    normal = cross(subtract(r2, r1), subtract(r3, r1))
    length = norm(normal)
    if length == 0.0:
        raise ValueError("degenerate triangle has no normal")
    unit = scale(1.0 / length, normal)
    r1_dot_n = dot(r1, unit)
    circulation = add(cross(r1, r2), cross(r2, r3), cross(r3, r1))
    return r1_dot_n * abs(dot(unit, circulation))


def compute_volume(positions, triangles: Sequence[Tuple[int, int, int]]) -> float:
    """Sum of :func:`triangle_volume` over all triangles.

    Triangles holding the unused-slot marker contribute nothing.
    """
    pos = np.asarray(positions, dtype=float)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("positions must have shape (n, 3)")
    total = 0.0
    for a, b, c in triangles:
        if UNUSED_INDEX in (a, b, c):
            continue
        total += triangle_volume(pos[a], pos[b], pos[c])
    return total