import math

import numpy as np
import pytest

from budsim import vectors as v


A = (1.5, -2.0, 3.0)
B = (0.5, 4.0, -1.0)


def test_cross_is_orthogonal_to_inputs():
    c = v.cross(A, B)
    assert v.dot(c, A) == pytest.approx(0.0, abs=1e-12)
    assert v.dot(c, B) == pytest.approx(0.0, abs=1e-12)


def test_cross_is_antisymmetric():
    assert v.cross(A, B) == pytest.approx(v.scale(-1.0, v.cross(B, A)))


def test_cross_of_unit_axes():
    assert v.cross((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == pytest.approx((0.0, 0.0, 1.0))


def test_multiply_then_divide_round_trip():
    assert v.divide(v.multiply(A, B), B) == pytest.approx(A)


def test_divide_by_zero_component_raises():
    with pytest.raises(ZeroDivisionError):
        v.divide(A, (1.0, 0.0, 1.0))


def test_scale_matches_repeated_add():
    assert v.scale(3.0, A) == pytest.approx(v.add(A, A, A))


def test_add_and_subtract_round_trip():
    assert v.subtract(v.add(A, B), B) == pytest.approx(A)


def test_add_six_vectors():
    vecs = [A, B, A, B, A, B]
    assert v.add(*vecs) == pytest.approx(v.scale(3.0, v.add(A, B)))


def test_add_requires_arguments():
    with pytest.raises(ValueError):
        v.add()


def test_add_scalar_then_negative_round_trip():
    assert v.add_scalar(v.add_scalar(A, 2.5), -2.5) == pytest.approx(A)


def test_wrong_length_vector_rejected():
    with pytest.raises(ValueError):
        v.dot((1.0, 2.0), B)


def test_norm_squared_is_inner_product():
    assert v.norm(A) ** 2 == pytest.approx(v.inner_product(A))
    assert v.inner_product(A) == pytest.approx(v.dot(A, A))


def test_difference_sum_magnitude_symmetric_and_nonnegative():
    d1 = v.difference_sum_magnitude(A, B)
    d2 = v.difference_sum_magnitude(B, A)
    assert d1 == pytest.approx(d2)
    assert d1 >= 0.0
    assert v.difference_sum_magnitude(A, A) == 0.0


def test_torsion_angle_right_angle():
    angle = v.torsion_angle((2.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.0, 3.0, 0.0))
    assert angle == pytest.approx(math.pi / 2)


def test_torsion_angle_straight_line():
    angle = v.torsion_angle((-1.0, 0.0, 0.0), (0.0, 0.0, 0.0), (5.0, 0.0, 0.0))
    assert angle == pytest.approx(math.pi)


def test_torsion_angle_degenerate_arm():
    with pytest.raises(ValueError):
        v.torsion_angle((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0))


def test_strain_or_zero():
    assert v.strain_or_zero(True, 0.75) == 0.75
    assert v.strain_or_zero(False, 0.75) == 0.0


def test_scatter_add_forces_accumulates_duplicates():
    forces = np.zeros((3, 3))
    contribs = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [0.5, 0.5, 0.5]]
    v.scatter_add_forces(forces, [0, 0, 2], contribs)
    np.testing.assert_allclose(forces[0], np.add(contribs[0], contribs[1]))
    np.testing.assert_allclose(forces[1], np.zeros(3))
    np.testing.assert_allclose(forces[2], contribs[2])


def test_scatter_add_forces_skips_nan_rows():
    forces = np.ones((2, 3))
    v.scatter_add_forces(forces, [1], [[float("nan"), 1.0, 1.0]])
    np.testing.assert_allclose(forces, np.ones((2, 3)))


def test_scatter_add_forces_shape_mismatch():
    with pytest.raises(ValueError):
        v.scatter_add_forces(np.zeros((2, 3)), [0, 1], [[1.0, 1.0, 1.0]])


def test_scatter_add_forces_bounded_ignores_high_ids():
    forces = np.zeros((4, 3))
    contribs = [[1.0, 1.0, 1.0], [2.0, 2.0, 2.0]]
    v.scatter_add_forces_bounded(forces, [1, 3], contribs, 2)
    np.testing.assert_allclose(forces[1], contribs[0])
    np.testing.assert_allclose(forces[3], np.zeros(3))


def test_normal_sample_is_deterministic_per_seed():
    assert v.normal_sample(7, 0.0, 1.0) == v.normal_sample(7, 0.0, 1.0)
    assert v.normal_sample(7, 0.0, 1.0) != v.normal_sample(8, 0.0, 1.0)


def test_normal_sample_zero_stddev_is_mean():
    assert v.normal_sample(3, 2.5, 0.0) == 2.5


def test_uniform_sample_within_bounds_and_deterministic():
    for seed in range(20):
        value = v.uniform_sample(seed, -1.0, 2.0)
        assert -1.0 <= value < 2.0
        assert value == v.uniform_sample(seed, -1.0, 2.0)