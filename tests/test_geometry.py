import numpy as np
import pytest

from geometry import PlacementError, compute_heart_scale, is_inside_heart, sample_heart_points


def test_centre_of_surface_is_inside():
    assert is_inside_heart(400, 300, 200, 800, 600)


def test_corner_of_surface_is_outside():
    assert not is_inside_heart(0, 0, 200, 800, 600)


def test_boundary_point_counts_as_inside():
    # (u, v) = (1, 0) lies exactly on the curve
    assert is_inside_heart(600, 300, 200, 800, 600)


def test_curve_points_down_before_flipping():
    # The lobes bulge past v = +1 only, so the heart is upside down on screen
    assert not is_inside_heart(400 + 0.6 * 200, 300 - 1.05 * 200, 200, 800, 600)
    assert is_inside_heart(400 + 0.6 * 200, 300 + 1.05 * 200, 200, 800, 600)


def test_array_inputs_are_tested_element_wise():
    xs = np.array([400.0, 0.0, 600.0])
    ys = np.array([300.0, 0.0, 300.0])
    result = is_inside_heart(xs, ys, 200, 800, 600)
    assert result.tolist() == [True, False, True]


def test_auto_scale_follows_smaller_dimension():
    assert compute_heart_scale(800, 600, {"heart_scale": "auto", "heart_scale_divisor": 3}) == 200
    assert compute_heart_scale(600, 900, {"heart_scale": "auto", "heart_scale_divisor": 4}) == 150


def test_fixed_scale_ignores_surface():
    assert compute_heart_scale(1920, 1080, {"heart_scale": 200}) == 200.0


def test_sampled_points_fill_the_request_inside_the_heart():
    rng = np.random.default_rng(7)
    points = sample_heart_points(rng, 1000, 200, 800, 600, max_attempts=1_000_000)

    assert points.shape == (1000, 2)
    assert np.all(is_inside_heart(points[:, 0], points[:, 1], 200, 800, 600))
    assert np.all((points[:, 0] >= 0) & (points[:, 0] < 800))
    assert np.all((points[:, 1] >= 0) & (points[:, 1] < 600))


def test_sampling_is_repeatable_for_a_seed():
    a = sample_heart_points(np.random.default_rng(3), 50, 100, 400, 400, 100_000)
    b = sample_heart_points(np.random.default_rng(3), 50, 100, 400, 400, 100_000)
    assert np.array_equal(a, b)


def test_unreachable_heart_raises_instead_of_looping():
    rng = np.random.default_rng(0)
    with pytest.raises(PlacementError):
        sample_heart_points(rng, 100, 0.01, 4000, 4000, max_attempts=10_000)


def test_placement_error_is_a_value_error():
    assert issubclass(PlacementError, ValueError)


def test_whole_number_floats_are_accepted():
    rng = np.random.default_rng(11)
    points = sample_heart_points(rng, 20.0, 200, 800, 600, max_attempts=1e5)
    assert points.shape == (20, 2)


def test_float_attempt_bound_still_raises_placement_error():
    rng = np.random.default_rng(0)
    with pytest.raises(PlacementError):
        sample_heart_points(rng, 100, 0.01, 4000, 4000, max_attempts=1e4)
