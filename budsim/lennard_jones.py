"""Interactions between membrane nodes and free Lennard-Jones particles.

The membrane/particle coupling uses a Morse potential
``D * (1 - exp(-a * (R - Rmin)))**2``. Attraction applies only to nodes in
the upper hemisphere and within the cutoff. Repulsion applies to every node
closer than ``Rmin``.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


def _as_positions(positions) -> np.ndarray:
    pos = np.asarray(positions, dtype=float)
    if pos.ndim == 1 and pos.size == 0:
        pos = pos.reshape(0, 3)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("positions must have shape (n, 3)")
    return pos


def _as_point(point) -> np.ndarray:
    p = np.asarray(point, dtype=float)
    if p.shape != (3,):
        raise ValueError("particle position must have 3 components")
    return p


def _morse(separation: np.ndarray, distance: np.ndarray, rmin: float,
           depth: float, width: float) -> Tuple[np.ndarray, np.ndarray]:
    """Morse forces on the nodes and the matching energies.

    ``separation`` is ``particle - node`` for each row; ``distance`` its length.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        decay = np.exp(-width * (distance - rmin))
        magnitude = 2.0 * depth * (1.0 - decay) * (-decay) * (width / distance)
        forces = -magnitude[:, None] * separation
    energy = depth * (1.0 - decay) * (1.0 - decay)
    return forces, energy


def lj_energy(positions, particle: Sequence[float], rmin: float,
              rcutoff: float, epsilon: float) -> float:
    """Total 12-6 Lennard-Jones energy of the nodes within ``rcutoff`` of the particle."""
    pos = _as_positions(positions)
    p = _as_point(particle)
    distance = np.linalg.norm(p - pos, axis=1)
    inside = distance < rcutoff
    if not inside.any():
        return 0.0
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = rmin / distance[inside]
        energies = epsilon * (ratio ** 12 - 2.0 * ratio ** 6)
    return float(energies.sum())


def lj_membrane_forces(
    positions,
    particle: Sequence[float],
    nodes_in_upperhem: Sequence[int],
    rmin: float,
    rcutoff: float,
    epsilon_att1: float,
    epsilon_att2: float,
    epsilon_rep1: float,
    epsilon_rep2: float,
) -> Tuple[np.ndarray, np.ndarray, float]:
    """Forces between the membrane nodes and one particle.

    Returns the per-node forces, the total reaction force on the particle and
    the total interaction energy.
    """
    pos = _as_positions(positions)
    p = _as_point(particle)
    upper = np.asarray(nodes_in_upperhem, dtype=int)
    if upper.shape != (pos.shape[0],):
        raise ValueError("nodes_in_upperhem must hold one flag per node")

    separation = p - pos
    distance = np.linalg.norm(separation, axis=1)

    attract = (distance < rcutoff) & (upper == 1) & (distance >= rmin)
    repel = distance < rmin

    forces = np.zeros_like(pos)
    energies = np.zeros(pos.shape[0])

    if attract.any():
        f, e = _morse(separation[attract], distance[attract], rmin,
                      epsilon_att1, epsilon_att2)
        forces[attract] = f
        energies[attract] = e
    if repel.any():
        f, e = _morse(separation[repel], distance[repel], rmin,
                      epsilon_rep1, epsilon_rep2)
        forces[repel] = f
        energies[repel] = e

    particle_force = -forces.sum(axis=0)
    return forces, particle_force, float(energies.sum())


def lj_particle_interactions(
    particle: Sequence[float],
    others,
    rmin: float,
    rcutoff: float,
    epsilon_rep1: float,
    epsilon_rep2: float,
) -> Tuple[np.ndarray, float]:
    """Morse force on ``particle`` from the other particles, and their energy.

    Particles at zero distance (the particle itself) and beyond ``rcutoff``
    are ignored.
    """
    p = _as_point(particle)
    pos = _as_positions(others)
    separation = p - pos
    distance = np.linalg.norm(separation, axis=1)
    active = (distance < rcutoff) & (distance != 0.0)
    if not active.any():
        return np.zeros(3), 0.0
    f, e = _morse(separation[active], distance[active], rmin,
                  epsilon_rep1, epsilon_rep2)
    return -f.sum(axis=0), float(e.sum())