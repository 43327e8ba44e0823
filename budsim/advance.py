"""Explicit time stepping of membrane node positions."""

from __future__ import annotations

import numpy as np


def _prepare(positions, forces, fixed):
    pos = np.asarray(positions, dtype=float)
    frc = np.asarray(forces, dtype=float)
    fix = np.asarray(fixed, dtype=bool)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("positions must have shape (n, 3)")
    if frc.shape != pos.shape:
        raise ValueError("forces must have the same shape as positions")
    if fix.shape != (pos.shape[0],):
        raise ValueError("fixed must hold one flag per node")
    return pos, frc, fix


def advance_positions(positions, forces, fixed, dt: float, mass: float) -> np.ndarray:
    """Return positions after one overdamped step.

    Free nodes move by ``dt * force``. Fixed nodes may still slide in the
    x-y plane by ``dt / mass * force`` but keep their z coordinate.
    """
    pos, frc, fix = _prepare(positions, forces, fixed)
    if fix.any() and mass == 0:
        raise ZeroDivisionError("node mass must be non-zero")
    new = pos + dt * frc
    if fix.any():
        new[fix, :2] = pos[fix, :2] + (dt / mass) * frc[fix, :2]
        new[fix, 2] = pos[fix, 2]
    return new


def recenter_positions(positions, forces, fixed, dt: float, mass: float) -> np.ndarray:
    """Return positions after a step of ``dt / mass * force``; fixed nodes stay put."""
    pos, frc, fix = _prepare(positions, forces, fixed)
    if (~fix).any() and mass == 0:
        raise ZeroDivisionError("node mass must be non-zero")
    new = pos.copy()
    free = ~fix
    if free.any():
        new[free] = pos[free] + (dt / mass) * frc[free]
    return new