import math

import numpy as np
import pytest

from budsim.lennard_jones import (
    lj_energy,
    lj_membrane_forces,
    lj_particle_interactions,
)


def test_lj_energy_at_minimum_is_minus_epsilon():
    energy = lj_energy([[1.0, 0.0, 0.0]], (0.0, 0.0, 0.0), 1.0, 2.0, 3.0)
    assert energy == pytest.approx(-3.0)


def test_lj_energy_beyond_cutoff_is_zero():
    energy = lj_energy([[5.0, 0.0, 0.0], [0.0, 4.0, 0.0]], (0.0, 0.0, 0.0), 1.0, 2.0, 3.0)
    assert energy == 0.0


def test_lj_energy_sums_over_nodes():
    single = lj_energy([[1.0, 0.0, 0.0]], (0.0, 0.0, 0.0), 1.0, 2.0, 3.0)
    double = lj_energy([[1.0, 0.0, 0.0], [0.0, -1.0, 0.0]], (0.0, 0.0, 0.0), 1.0, 2.0, 3.0)
    assert double == pytest.approx(2 * single)


def test_lj_energy_rejects_bad_particle():
    with pytest.raises(ValueError):
        lj_energy([[1.0, 0.0, 0.0]], (0.0, 0.0), 1.0, 2.0, 3.0)


def test_membrane_repulsion_pushes_node_away():
    positions = [[0.5, 0.0, 0.0]]
    forces, particle_force, energy = lj_membrane_forces(
        positions, (0.0, 0.0, 0.0), [0], 1.0, 2.0, 1.0, 1.0, 1.0, 1.0
    )
    assert forces[0, 0] > 0.0
    assert forces[0, 1] == 0.0
    assert particle_force[0] < 0.0
    assert energy > 0.0


def test_membrane_attraction_only_for_upper_hemisphere():
    positions = [[1.5, 0.0, 0.0], [0.0, 1.5, 0.0]]
    forces, _, energy = lj_membrane_forces(
        positions, (0.0, 0.0, 0.0), [1, 0], 1.0, 2.0, 1.0, 1.0, 1.0, 1.0
    )
    assert forces[0, 0] < 0.0
    assert np.all(forces[1] == 0.0)
    assert energy > 0.0


def test_membrane_no_force_at_rest_distance():
    forces, particle_force, energy = lj_membrane_forces(
        [[0.0, 0.0, 1.0]], (0.0, 0.0, 0.0), [1], 1.0, 2.0, 1.0, 1.0, 1.0, 1.0
    )
    assert np.allclose(forces, 0.0)
    assert np.allclose(particle_force, 0.0)
    assert energy == pytest.approx(0.0)


def test_membrane_reaction_balances_node_forces():
    rng = np.random.default_rng(7)
    positions = rng.uniform(-1.5, 1.5, size=(20, 3))
    upper = rng.integers(0, 2, size=20)
    forces, particle_force, _ = lj_membrane_forces(
        positions, (0.1, 0.2, 0.3), upper, 1.0, 2.0, 0.5, 1.5, 2.0, 3.0
    )
    assert np.allclose(forces.sum(axis=0) + particle_force, 0.0)


def test_membrane_energy_matches_morse_form():
    depth, width = 2.0, 3.0
    _, _, energy = lj_membrane_forces(
        [[0.5, 0.0, 0.0]], (0.0, 0.0, 0.0), [0], 1.0, 2.0, 1.0, 1.0, depth, width
    )
    decay = math.exp(-width * (0.5 - 1.0))
    assert energy == pytest.approx(depth * (1 - decay) ** 2)


def test_membrane_repulsion_applies_beyond_cutoff_check():
    # Repulsion is governed by rmin alone, even with a tiny cutoff.
    forces, _, _ = lj_membrane_forces(
        [[0.5, 0.0, 0.0]], (0.0, 0.0, 0.0), [1], 1.0, 0.1, 1.0, 1.0, 1.0, 1.0
    )
    assert forces[0, 0] > 0.0


def test_membrane_rejects_mismatched_flags():
    with pytest.raises(ValueError):
        lj_membrane_forces(
            [[0.5, 0.0, 0.0]], (0.0, 0.0, 0.0), [1, 0], 1.0, 2.0, 1.0, 1.0, 1.0, 1.0
        )


def test_particle_interactions_ignore_self_and_far():
    force, energy = lj_particle_interactions(
        (0.0, 0.0, 0.0), [[0.0, 0.0, 0.0], [10.0, 0.0, 0.0]], 1.0, 2.0, 1.0, 1.0
    )
    assert np.allclose(force, 0.0)
    assert energy == 0.0


def test_particle_interactions_close_neighbour_repels():
    force, energy = lj_particle_interactions(
        (0.0, 0.0, 0.0), [[0.5, 0.0, 0.0]], 1.0, 2.0, 1.0, 1.0
    )
    assert force[0] < 0.0
    assert energy > 0.0


def test_particle_interactions_symmetric_neighbours_cancel():
    force, energy = lj_particle_interactions(
        (0.0, 0.0, 0.0), [[0.5, 0.0, 0.0], [-0.5, 0.0, 0.0]], 1.0, 2.0, 1.0, 1.0
    )
    single_force, single_energy = lj_particle_interactions(
        (0.0, 0.0, 0.0), [[0.5, 0.0, 0.0]], 1.0, 2.0, 1.0, 1.0
    )
    assert np.allclose(force, 0.0)
    assert energy == pytest.approx(2 * single_energy)