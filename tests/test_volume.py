import numpy as np
import pytest

from budsim.volume import UNUSED_INDEX, compute_volume, triangle_volume

TETRA_NODES = np.array(
    [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
)
TETRA_FACES = [(0, 2, 1), (0, 1, 3), (0, 3, 2), (1, 2, 3)]


def test_unit_tetrahedron_gives_six_times_volume():
    assert compute_volume(TETRA_NODES, TETRA_FACES) == pytest.approx(1.0)


def test_translation_does_not_change_closed_volume():
    base = compute_volume(TETRA_NODES, TETRA_FACES)
    moved = compute_volume(TETRA_NODES + np.array([3.0, -2.0, 5.0]), TETRA_FACES)
    assert moved == pytest.approx(base)


def test_volume_scales_with_cube_of_size():
    base = compute_volume(TETRA_NODES, TETRA_FACES)
    scaled = compute_volume(TETRA_NODES * 2.0, TETRA_FACES)
    assert scaled == pytest.approx(8.0 * base)


def test_reversed_orientation_negates_term():
    r1, r2, r3 = (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)
    assert triangle_volume(r1, r3, r2) == pytest.approx(-triangle_volume(r1, r2, r3))


def test_unused_triangles_are_ignored():
    faces = TETRA_FACES + [(UNUSED_INDEX, 0, 1)]
    assert compute_volume(TETRA_NODES, faces) == pytest.approx(
        compute_volume(TETRA_NODES, TETRA_FACES)
    )


def test_degenerate_triangle_raises():
    with pytest.raises(ValueError):
        triangle_volume((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0))


def test_bad_positions_shape_raises():
    with pytest.raises(ValueError):
        compute_volume([1.0, 2.0, 3.0], TETRA_FACES)