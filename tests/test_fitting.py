import numpy as np
import pytest

from conftest import SQUARE, sample_circle, sample_polygon
from silueta_shapes.geometry.fitting import (
    ToleranceConfig,
    fit_circle,
    fit_polygon,
    max_allowed_distance,
)
from silueta_shapes.geometry.points import Point


# ----------------------------------------------------------------------
# Tolerance
# ----------------------------------------------------------------------

def test_tolerance_defaults():
    tolerance = ToleranceConfig()
    assert tolerance.min_acceptable_distortion == 0.5
    assert tolerance.relative_distortion_limit == 0.03


@pytest.mark.parametrize("value, expected", [(-1, 0.0), (5, 1.0), (0.2, 0.2)])
def test_relative_limit_is_clamped(value, expected):
    assert ToleranceConfig(relative_distortion_limit=value).relative_distortion_limit == expected


def test_min_distortion_is_clamped():
    assert ToleranceConfig(min_acceptable_distortion=-3).min_acceptable_distortion == 0.0
    assert ToleranceConfig(min_acceptable_distortion=7).min_acceptable_distortion == 7.0


def test_max_allowed_distance_floor_and_relative_part():
    tolerance = ToleranceConfig(min_acceptable_distortion=0.5, relative_distortion_limit=0.1)
    assert max_allowed_distance(tolerance, 2, 2) == 0.5
    assert max_allowed_distance(tolerance, 100, 60) == pytest.approx(8.0)


# ----------------------------------------------------------------------
# Circle
# ----------------------------------------------------------------------

def test_fit_circle_on_sampled_circle():
    fit = fit_circle(sample_circle(), ToleranceConfig())

    assert fit.passed
    assert fit.center == Point(50.0, 50.0)
    assert fit.radius == pytest.approx(50.0)
    assert fit.max_distance == pytest.approx(3.0)
    assert fit.mean_distance < 0.5


def test_fit_circle_rejects_square():
    fit = fit_circle(sample_polygon(SQUARE), ToleranceConfig())
    assert not fit.passed
    assert fit.mean_distance > fit.max_distance


def test_fit_circle_single_point_is_degenerate_pass():
    fit = fit_circle([(7, 9)], ToleranceConfig())

    assert fit.passed
    assert fit.degenerate
    assert fit.radius == 0
    assert fit.mean_distance == 0
    assert fit.max_distance == 0.5


def test_fit_circle_duplicate_points_is_degenerate_pass():
    fit = fit_circle([(3, 3)] * 10, ToleranceConfig(min_acceptable_distortion=0))
    assert fit.passed and fit.degenerate


def test_fit_circle_requires_points():
    with pytest.raises(ValueError):
        fit_circle([], ToleranceConfig())


# ----------------------------------------------------------------------
# Polygon
# ----------------------------------------------------------------------

def test_fit_polygon_exact_square():
    fit = fit_polygon(sample_polygon(SQUARE), [Point(*c) for c in SQUARE], ToleranceConfig())

    assert fit.passed
    assert fit.mean_distance == 0
    assert fit.max_distance == pytest.approx(3.0)


def test_fit_polygon_uses_infinite_lines():
    corners = [(0, 0), (10, 0), (10, 10)]

    # (20, 0) lies past the end of edge (0,0)-(10,0) but on its line
    fit = fit_polygon([(20, 0)], corners, ToleranceConfig())
    assert fit.mean_distance == 0


def test_fit_polygon_nearest_edge_and_boundary_pass():
    corners = [(0, 0), (10, 0), (10, 10)]

    # (3, 1): 1 from y=0, 7 from x=10, ~1.41 from y=x
    fit = fit_polygon([(20, 0), (3, 1)], corners, ToleranceConfig())

    assert fit.mean_distance == pytest.approx(0.5)
    assert fit.max_distance == 0.5
    assert fit.passed


def test_fit_polygon_vertical_edges():
    corners = [(0, 0), (0, 10), (10, 10), (10, 0)]
    fit = fit_polygon([(2, 5), (9, 5)], corners, ToleranceConfig())
    assert fit.mean_distance == pytest.approx(1.5)


def test_fit_polygon_tolerance_sized_by_corners():
    corners = [(0, 0), (0, 200), (200, 200), (200, 0)]
    # edge points only cover a small part of the polygon
    fit = fit_polygon([(0, 5), (0, 6)], corners, ToleranceConfig())
    assert fit.max_distance == pytest.approx(6.0)


def test_fit_polygon_without_corners_never_fits():
    fit = fit_polygon([(1, 1)], [], ToleranceConfig())
    assert fit.mean_distance == float("inf")
    assert not fit.passed


def test_fit_polygon_is_monotonic_in_tolerance():
    rng = np.random.default_rng(7)
    points = sample_polygon(SQUARE) + rng.integers(-4, 5, size=(400, 2))

    outcomes = [
        fit_polygon(points, SQUARE, ToleranceConfig(m, r)).passed
        for m, r in [(0, 0), (0.5, 0.01), (0.5, 0.02), (1, 0.03), (2, 0.05), (5, 0.1)]
    ]

    assert outcomes == sorted(outcomes)
    assert outcomes[-1]


def test_fit_is_scale_invariant():
    tolerance = ToleranceConfig()
    noisy = sample_polygon(SQUARE) + np.tile([[1, 0], [0, 0], [0, 1]], (134, 1))[:400]

    for scale in (1, 3, 10):
        fit = fit_polygon(noisy * scale, np.array(SQUARE) * scale, tolerance)
        assert fit.passed
        assert fit.mean_distance / scale == pytest.approx(fit_polygon(noisy, SQUARE, tolerance).mean_distance)
