"""Edge springs: stiffness weakening schemes, spring forces and line tension."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple

import numpy as np

UNUSED_INDEX = 2**31 - 1


class ScaleType(IntEnum):
    """How the stiffness of an edge is derived from its weakening data."""

    GAUSSIAN = 0
    POWER = 1
    LINEAR = 2
    UPPER_HEMISPHERE = 3
    HILL = 4


@dataclass
class LinearSpringSettings:
    """Parameters of the edge spring network."""

    spring_constant: float
    spring_constant_weak: float
    length_zero: float
    scale_type: ScaleType
    nonuniform_wall_weakening: bool = False
    max_spring_scaler: float = 1.0
    scaling_pow: float = 1.0
    gausssigma: float = 1.0
    hilleqnconst: float = 1.0
    hilleqnpow: float = 1.0

    def __post_init__(self) -> None:
        self.scale_type = ScaleType(self.scale_type)


def _hemisphere_constant(k: float, weak: float, in_upperhem: int) -> float:
    if in_upperhem == 1:
        return weak
    if in_upperhem == 0:
        return (weak + k) / 2.0
    return k


def edge_spring_constant(settings: LinearSpringSettings, scaling: float, in_upperhem: int) -> float:
    """Stiffness of one edge given its scaling value and hemisphere flag."""
    k = settings.spring_constant
    weak = settings.spring_constant_weak
    kind = ScaleType(settings.scale_type)
    if kind is ScaleType.GAUSSIAN:
        sigma = settings.gausssigma
        value = k * (1.0 - (1.0 / math.sqrt(2 * 3.14159 * sigma)) * math.exp(-(scaling * scaling) / sigma))
        return k if value < weak else value
    if kind is ScaleType.POWER:
        p = math.pow(scaling, settings.scaling_pow)
        return weak * p + weak * (1 - p)
    if kind is ScaleType.LINEAR:
        return k - (k - weak) * scaling
    if kind is ScaleType.UPPER_HEMISPHERE:
        return _hemisphere_constant(k, weak, in_upperhem)
    if settings.nonuniform_wall_weakening:
        spectrum = settings.max_spring_scaler * k - weak
        try:
            ratio = settings.hilleqnconst / scaling
        except ZeroDivisionError:
            ratio = math.inf
        hill = 1.0 / (1.0 + math.pow(ratio, settings.hilleqnpow))
        return max(weak, weak + hill * spectrum)
    return _hemisphere_constant(k, weak, in_upperhem)


def _valid(node: int) -> bool:
    return 0 <= node != UNUSED_INDEX


def _as_positions(positions) -> np.ndarray:
    pos = np.asarray(positions, dtype=float)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("positions must have shape (n, 3)")
    return pos


def _add_pair_force(forces: np.ndarray, left: int, right: int, delta: np.ndarray,
                    length: float, magnitude: float) -> None:
    if length == 0.0:
        return
    f = magnitude * delta / length
    forces[left] += f
    forces[right] -= f


def compute_linear_springs(
    positions,
    edges: Sequence[Tuple[int, int]],
    settings: LinearSpringSettings,
    scaling_per_edge: Sequence[float],
    edges_in_upperhem: Sequence[int],
) -> Tuple[np.ndarray, float]:
    """Per-node spring forces and the total spring energy of all edges."""
    pos = _as_positions(positions)
    forces = np.zeros_like(pos)
    energy = 0.0
    length_zero = settings.length_zero
    for (left, right), scaling, flag in zip(edges, scaling_per_edge, edges_in_upperhem):
        if not (_valid(left) and _valid(right)):
            continue
        k = edge_spring_constant(settings, scaling, flag)
        delta = pos[left] - pos[right]
        length = float(np.linalg.norm(delta))
        if length == length_zero:
            continue
        magnitude = -k * (length - length_zero)
        _add_pair_force(forces, left, right, delta, length, magnitude)
        energy += (k / 2.0) * (length - length_zero) ** 2
    return forces, energy


def linear_spring_energy(
    positions,
    edges: Sequence[Tuple[int, int]],
    rest_lengths: Sequence[float],
    spring_constant: float,
) -> float:
    """Total energy of stretched edges; compressed edges contribute nothing."""
    pos = _as_positions(positions)
    total = 0.0
    for (left, right), rest in zip(edges, rest_lengths):
        length = float(np.linalg.norm(pos[left] - pos[right]))
        if length >= rest:
            total += (spring_constant / 2.0) * (length - rest) ** 2
    return total


def compute_line_tension(
    positions,
    edges: Sequence[Tuple[int, int]],
    boundaries_in_upperhem: Sequence[int],
    spring_constant: float,
    length_scale: float,
    length_zero: float,
) -> Tuple[np.ndarray, float]:
    """Forces and energy of the line-tension springs on boundary edges."""
    pos = _as_positions(positions)
    forces = np.zeros_like(pos)
    energy = 0.0
    rest = length_scale * length_zero
    for (left, right), flag in zip(edges, boundaries_in_upperhem):
        if not (_valid(left) and _valid(right)) or flag != 1:
            continue
        delta = pos[left] - pos[right]
        length = float(np.linalg.norm(delta))
        if length == length_zero:
            continue
        if rest == 0.0:
            raise ZeroDivisionError("line tension rest length must be non-zero")
        magnitude = -(spring_constant / (rest * rest)) * (length - rest)
        _add_pair_force(forces, left, right, delta, length, magnitude)
        energy += (spring_constant / (2.0 * rest * rest)) * (length - rest) ** 2
    return forces, energy