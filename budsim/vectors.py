"""Small vector helpers and force-accumulation utilities for membrane meshes.

Three-component vectors are plain tuples of floats. Per-node force arrays are
``numpy`` arrays of shape ``(n, 3)``.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]


def _vec(v: Sequence[float]) -> Vec3:
    if len(v) != 3:
        raise ValueError(f"expected a 3-component vector, got {len(v)} components")
    return (float(v[0]), float(v[1]), float(v[2]))


def cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Cross product ``a x b``."""
    ax, ay, az = _vec(a)
    bx, by, bz = _vec(b)
    return (ay * bz - az * by, -(ax * bz - az * bx), ax * by - ay * bx)


def multiply(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Component-wise product."""
    return tuple(x * y for x, y in zip(_vec(a), _vec(b)))  # type: ignore[return-value]


def scale(c: float, v: Sequence[float]) -> Vec3:
    """Multiply every component of ``v`` by ``c``."""
    return tuple(c * x for x in _vec(v))  # type: ignore[return-value]


def divide(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Component-wise quotient; raises ZeroDivisionError on a zero component of ``b``."""
    return tuple(x / y for x, y in zip(_vec(a), _vec(b)))  # type: ignore[return-value]


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product."""
    return sum(x * y for x, y in zip(_vec(a), _vec(b)))


def add(*args: Sequence[float]) -> Vec3:
    """Component-wise sum of one or more vectors."""
    if not args:
        raise ValueError("add() needs at least one vector")
    vectors = [_vec(v) for v in args]
    return tuple(sum(components) for components in zip(*vectors))  # type: ignore[return-value]


def add_scalar(v: Sequence[float], d: float) -> Vec3:
    """Add ``d`` to every component of ``v``."""
    return tuple(x + d for x in _vec(v))  # type: ignore[return-value]


def subtract(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Component-wise difference ``a - b``."""
    return tuple(x - y for x, y in zip(_vec(a), _vec(b)))  # type: ignore[return-value]


def norm(v: Sequence[float]) -> float:
    """Euclidean length of ``v``."""
    return math.sqrt(inner_product(v))


def inner_product(v: Sequence[float]) -> float:
    """Dot product of ``v`` with itself."""
    return dot(v, v)


def difference_sum_magnitude(a: Sequence[float], b: Sequence[float]) -> float:
    """Absolute value of the summed component differences ``|sum(a - b)|``."""
    return abs(sum(subtract(a, b)))


def torsion_angle(
    left: Sequence[float], center: Sequence[float], right: Sequence[float]
) -> float:
    """Angle in radians at ``center`` between the arms towards ``left`` and ``right``."""
    lc = subtract(left, center)
    rc = subtract(right, center)
    len_lc = norm(lc)
    len_rc = norm(rc)
    if len_lc == 0.0 or len_rc == 0.0:
        raise ValueError("torsion angle is undefined for a zero-length arm")
    cos_theta = dot(lc, rc) / (len_lc * len_rc)
    cos_theta = min(1.0, max(-1.0, cos_theta))
    return math.acos(cos_theta)


def strain_or_zero(is_strain_node: bool, value: float) -> float:
    """Return ``value`` for strain nodes and ``0.0`` otherwise."""
    return value if is_strain_node else 0.0


def _prepare_scatter(
    forces: np.ndarray, ids: Iterable[int], contributions: Iterable[Sequence[float]]
) -> Tuple[np.ndarray, np.ndarray]:
    if forces.ndim != 2 or forces.shape[1] != 3:
        raise ValueError("forces must have shape (n, 3)")
    id_array = np.asarray(list(ids) if not isinstance(ids, np.ndarray) else ids, dtype=int)
    contrib = np.asarray(
        contributions if isinstance(contributions, np.ndarray) else list(contributions),
        dtype=float,
    )
    if id_array.size == 0:
        contrib = contrib.reshape(0, 3)
    if contrib.shape != (id_array.shape[0], 3):
        raise ValueError("contributions must have shape (len(ids), 3)")
    return id_array, contrib


def scatter_add_forces(
    forces: np.ndarray, ids: Iterable[int], contributions: Iterable[Sequence[float]]
) -> None:
    """Add each contribution to ``forces[id]`` in place, skipping rows holding NaN."""
    id_array, contrib = _prepare_scatter(forces, ids, contributions)
    keep = ~np.isnan(contrib).any(axis=1)
    np.add.at(forces, id_array[keep], contrib[keep])


def scatter_add_forces_bounded(
    forces: np.ndarray,
    ids: Iterable[int],
    contributions: Iterable[Sequence[float]],
    max_node_count: int,
) -> None:
    """Add each contribution to ``forces[id]`` in place for ids below ``max_node_count``."""
    id_array, contrib = _prepare_scatter(forces, ids, contributions)
    keep = id_array < max_node_count
    np.add.at(forces, id_array[keep], contrib[keep])


def normal_sample(n: int, mean: float, stddev: float) -> float:
    """A normally distributed value determined entirely by the seed ``n``."""
    rng = np.random.default_rng(n)
    return float(rng.normal(mean, stddev))


def uniform_sample(n: int, low: float, high: float) -> float:
    """A uniformly distributed value in ``[low, high)`` determined by the seed ``n``."""
    rng = np.random.default_rng(n)
    return float(rng.uniform(low, high))