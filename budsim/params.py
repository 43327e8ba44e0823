"""Parameter sets and mesh state of a budding membrane simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]


@dataclass
class CapsidParams:
    """Capsid shell nodes and the springs binding them to the membrane."""

    node_locations: List[Vec3] = field(default_factory=list)
    factor: int = 10
    spring_constant: float = 10.0
    length_zero: float = 0.97
    length_cutoff: float = 1.63
    max_node_count: int = 0
    viscosity: float = 1.0
    force: Vec3 = (0.0, 0.0, 0.0)
    num_connections: int = 0


@dataclass
class DomainParams:
    """Bounding box of the domain and the bucket grid laid over it."""

    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0
    min_z: float = 0.0
    max_z: float = 0.0
    origin_min_x: float = 0.0
    origin_max_x: float = 0.0
    origin_min_y: float = 0.0
    origin_max_y: float = 0.0
    origin_min_z: float = 0.0
    origin_max_z: float = 0.0
    grid_spacing: float = 1.5
    x_bucket_count: int = 0
    y_bucket_count: int = 0
    z_bucket_count: int = 0
    total_bucket_count: int = 0


@dataclass
class LJParams:
    """Lennard-Jones particle positions and interaction constants."""

    position: Vec3 = (0.0, 0.0, 0.0)
    all_positions: List[Vec3] = field(default_factory=list)
    rmin_m: float = 0.97
    rcutoff_m: float = 0.97
    rmin_lj: float = 0.0
    rcutoff_lj: float = 0.0
    epsilon_m: float = 1.0
    epsilon_m_att1: float = 0.0
    epsilon_m_att2: float = 0.0
    epsilon_m_rep1: float = 0.0
    epsilon_m_rep2: float = 0.0
    epsilon_lj: float = 0.0
    epsilon_lj_rep1: float = 0.0
    epsilon_lj_rep2: float = 0.0
    spring_constant: float = 0.0
    energy_m: float = 0.0
    energy_lj: float = 0.0
    force: Vec3 = (0.0, 0.0, 0.0)


@dataclass
class AreaTriangleParams:
    """Constants of the triangle area springs."""

    factor: int = 3
    initial_area: float = 0.0048013
    spring_constant: float = 0.0
    spring_constant_weak: float = 0.0
    energy: float = 0.0


@dataclass
class BendingTriangleParams:
    """Constants of the bending springs across edges."""

    num_bending_springs: int = 0
    factor: int = 4
    spring_constant: float = 0.0
    spring_constant_weak: float = 0.0
    spring_constant_raft: float = 0.0
    spring_constant_coat: float = 0.0
    initial_angle: float = 0.0
    initial_angle_raft: float = 0.0
    initial_angle_coat: float = 0.0
    initial_angle_bud: float = 0.0
    energy: float = 0.0


@dataclass
class LinearSpringParams:
    """Constants of the edge springs and the Morse repulsion between nodes."""

    factor: int = 2
    spring_constant: float = 0.0
    spring_constant_weak: float = 0.0
    spring_constant_att1: float = 0.0
    spring_constant_att2: float = 0.0
    spring_constant_rep1: float = 0.0
    spring_constant_rep2: float = 0.0
    energy: float = 0.0
    memrepulsion_energy: float = 0.0
    scalar_edge_length: float = 0.0
    edge_initial_length: List[float] = field(default_factory=list)


@dataclass
class GeneralParams:
    """Global settings and region flags of a simulation run."""

    nonuniform_wall_weakening_bend: bool = False
    nonuniform_wall_weakening_linear: bool = False
    nonuniform_wall_weakening_area: bool = False
    nonuniform_wall_weakening: bool = False
    max_spring_scaler_linear: float = 1.0
    max_spring_scaler_area: float = 1.0
    max_spring_scaler_bend: float = 1.0
    ratio_for_hill_function_stiffness: float = 0.0
    edge_undergoing_growth: List[int] = field(default_factory=list)
    triangle_undergoing_growth: List[int] = field(default_factory=list)
    chemdiff_time_step_size: float = 0.0
    current_total_sim_step: int = 0
    chemdiff_max_step: float = 0.0
    current_bud_area: float = 0.0
    kt: float = 0.0
    kt_growth: float = 0.0
    tau: float = 0.0
    solve_time: int = 100
    rmin: float = 1.0
    rmin_growth: float = 0.0
    abs_rmin: float = 0.0
    iteration: int = 0
    max_node_count: int = 0
    max_node_count_lj: int = 0
    length_scale: float = 0.0
    dt: float = 0.0
    node_mass: float = 1.0
    growth_energy_scaling: float = 0.0
    edge_to_ljparticle: List[int] = field(default_factory=list)
    nodes_in_tip: List[int] = field(default_factory=list)
    nodes_in_upperhem: List[int] = field(default_factory=list)
    edges_in_upperhem: List[int] = field(default_factory=list)
    edges_in_upperhem_list: List[int] = field(default_factory=list)
    edges_in_tip: List[int] = field(default_factory=list)
    triangles_in_tip: List[int] = field(default_factory=list)
    triangles_in_upperhem: List[int] = field(default_factory=list)
    boundaries_in_upperhem: List[int] = field(default_factory=list)
    angle_per_edge: List[float] = field(default_factory=list)
    center: Vec3 = (0.0, 0.0, 0.0)
    current_total_volume: float = 0.0
    true_current_total_volume: float = 0.0
    eq_total_volume: float = 0.0
    volume_spring_constant: float = 0.0
    volume_energy: float = 0.0
    eq_total_boundary_length: float = 0.0
    line_tension_energy: float = 0.0
    line_tension_constant: float = 0.0
    safeguard_threshold: float = 0.0
    true_num_edges: int = 0
    insertion_energy_cost: float = 0.0
    strain_threshold: float = 0.0
    strain_threshold2: float = 0.0
    scale_type: int = 0
    scaling_pow: float = 0.0
    gausssigma: float = 0.0
    hilleqnconst: float = 0.0
    hilleqnpow: float = 0.0
    no_weakening: List[int] = field(default_factory=list)
    septin_ring_z: float = 0.0
    boundary_z: float = 0.0


def _int_table(rows, width: int, name: str) -> np.ndarray:
    table = np.asarray(rows, dtype=int)
    if table.size == 0:
        return table.reshape(0, width)
    if table.ndim != 2 or table.shape[1] != width:
        raise ValueError(f"{name} must have shape (n, {width})")
    return table


@dataclass
class Mesh:
    """Node coordinates, forces and connectivity of a triangulated membrane."""

    positions: np.ndarray
    edges: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=int))
    triangles: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=int))
    triangle_edges: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=int))
    edge_triangles: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=int))
    forces: np.ndarray = None  # type: ignore[assignment]
    fixed: np.ndarray = None  # type: ignore[assignment]
    neighbors: List[List[int]] = field(default_factory=list)
    scaling_per_edge: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        pos = np.asarray(self.positions, dtype=float)
        if pos.size == 0:
            pos = pos.reshape(0, 3)
        if pos.ndim != 2 or pos.shape[1] != 3:
            raise ValueError("positions must have shape (n, 3)")
        self.positions = pos
        if self.forces is None:
            self.forces = np.zeros_like(pos)
        else:
            self.forces = np.asarray(self.forces, dtype=float)
            if self.forces.shape != pos.shape:
                raise ValueError("forces must have the same shape as positions")
        if self.fixed is None:
            self.fixed = np.zeros(pos.shape[0], dtype=bool)
        else:
            self.fixed = np.asarray(self.fixed, dtype=bool)
            if self.fixed.shape != (pos.shape[0],):
                raise ValueError("fixed must hold one flag per node")
        self.edges = _int_table(self.edges, 2, "edges")
        self.triangles = _int_table(self.triangles, 3, "triangles")
        self.triangle_edges = _int_table(self.triangle_edges, 3, "triangle_edges")
        self.edge_triangles = _int_table(self.edge_triangles, 2, "edge_triangles")

    def node_count(self) -> int:
        """Number of nodes in the mesh."""
        return int(self.positions.shape[0])

    def zero_forces(self) -> None:
        """Reset every node force to zero."""
        self.forces.fill(0.0)