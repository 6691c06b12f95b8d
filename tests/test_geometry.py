import logging
import math

import numpy as np
import pytest

from kernel_playground import DegenerateGeometry, KernelKind
from kernel_playground.config import LARGE_SLOPE
from kernel_playground.geometry import (
    Bounds, SeparatingLine, as_arrays, center_distance_ratio, chaikin, class_contour,
    convex_hull, inflate, kernel_matrix, linear_separator, moving_average, partition,
    polynomial_curve, safe_slope, slope_between, strict_linear_separator, zero_crossings,
)


def test_partition_and_bounds(four_points):
    xy, labels = as_arrays(four_points)
    pos, neg = partition(xy, labels)
    assert pos.tolist() == [[9, 9], [10, 9]]
    assert neg.tolist() == [[0, 0], [1, 0]]
    bounds = Bounds.from_points(xy)
    assert (bounds.x_range, bounds.y_range) == (10, 9)
    padded = bounds.padded(0.1)
    assert padded.x_min == pytest.approx(-1.0)
    assert padded.y_max == pytest.approx(9.9)


@pytest.mark.parametrize("kernel,expected", [
    (KernelKind.LINEAR, 5.0),
    (KernelKind.POLYNOMIAL, 26.0 ** 2),
    (KernelKind.RBF, math.exp(-0.1 * 25)),
    (KernelKind.SIGMOID, math.tanh(0.1 * 25 + 1)),
])
def test_kernel_values(kernel, expected):
    value = kernel_matrix(np.array([[0.0, 0.0]]), np.array([3.0, 4.0]), kernel, gamma=0.1, degree=2)
    assert value.shape == (1, 1)
    assert value[0, 0] == pytest.approx(expected)


def test_polynomial_kernel_uses_degree():
    a, b = np.array([[0.0, 0.0]]), np.array([[1.0, 0.0]])
    assert kernel_matrix(a, b, "polynomial", degree=3)[0, 0] == pytest.approx(8.0)


def test_center_distance_ratio():
    xy = np.array([[5.0, 0.0], [0.0, 0.0]])
    ratio = center_distance_ratio(xy, np.array([10.0, 0.0]), np.array([0.0, 0.0]))
    assert ratio.tolist() == pytest.approx([0.0, 1.0])


def test_slope_between_vertical_raises():
    with pytest.raises(DegenerateGeometry):
        slope_between(3.0, 0.0)


def test_safe_slope_falls_back(caplog):
    with caplog.at_level(logging.WARNING, logger="kernel_playground.geometry"):
        assert safe_slope(-2.0, 1e-9) == -LARGE_SLOPE
    assert "vertical" in caplog.text
    assert safe_slope(0.0, 0.0) == LARGE_SLOPE
    assert safe_slope(6.0, 3.0) == 2.0


def test_separating_line_distance():
    line = SeparatingLine(slope=0.0, intercept=2.0)
    assert line.distance(np.array([[0.0, 5.0], [3.0, -1.0]])).tolist() == [3.0, 3.0]
    diagonal = SeparatingLine(slope=1.0, intercept=0.0)
    assert diagonal.distance(np.array([[0.0, 2.0]]))[0] == pytest.approx(math.sqrt(2))


def test_upright_line_samples_along_y():
    bounds = Bounds.from_points(np.array([[0.0, 0.0], [2.0, 5.0]]))
    line = SeparatingLine(slope=-LARGE_SLOPE, intercept=LARGE_SLOPE)
    curve = line.sample(bounds)
    assert len(curve) == 51
    assert all(p.x == pytest.approx(1.0, abs=1e-5) for p in curve)
    assert curve[0].y != curve[-1].y
    assert {round(p.y, 6) for p in (curve[0], curve[-1])} == {-0.5, 5.5}


def test_linear_separator_blend(four_points):
    xy, labels = as_arrays(four_points)
    pos, neg = partition(xy, labels)
    line = linear_separator(pos, neg, Bounds.from_points(xy), C=1.0)
    # anchor is 60% of the way from (0.5, 0) to (9.5, 9)
    assert line.slope == pytest.approx(-1.0)
    assert line.intercept == pytest.approx(5.4 + 5.9)


def test_strict_separator_backs_off_when_infeasible(caplog):
    pos = np.array([[0.0, 0.0], [2.0, 2.0]])
    neg = np.array([[1.0, 1.0], [3.0, 3.0]])
    bounds = Bounds.from_points(np.vstack([pos, neg]))
    with caplog.at_level(logging.WARNING, logger="kernel_playground.geometry"):
        line, margin = strict_linear_separator(pos, neg, bounds, C=1.0)
    start = 3 * 0.03 * 3 + 3 * 0.001
    assert margin == pytest.approx(start * 0.8 ** 10)
    assert "no strictly separating line" in caplog.text
    assert math.isfinite(line.intercept)


def test_moving_average_shrinks_at_edges():
    assert moving_average([1, 2, 3, 4, 5], 1).tolist() == pytest.approx([1.5, 2, 3, 4, 4.5])
    assert moving_average([], 3).size == 0


def test_zero_crossings_picks_nearest_to_target():
    xs = np.array([0.0, 1.0])
    ys = np.array([3.0, 2.0, 1.0, 0.0])
    # column 0 changes sign twice, column 1 never
    field = np.array([[1.0, 1.0], [-1.0, 1.0], [-1.0, 1.0], [1.0, 1.0]])
    cx, cy = zero_crossings(xs, ys, field, target_y=0.2)
    assert cx.tolist() == [0.0]
    assert cy.tolist() == pytest.approx([0.5])


def test_convex_hull_drops_interior_and_collinear_points():
    pts = [(0, 0), (2, 0), (2, 2), (0, 2), (1, 1), (1, 0)]
    hull = convex_hull(pts)
    assert sorted(map(tuple, hull.tolist())) == [(0, 0), (0, 2), (2, 0), (2, 2)]


def test_inflate_scales_from_centroid():
    square = np.array([[-1.0, -1.0], [1.0, -1.0], [1.0, 1.0], [-1.0, 1.0]])
    assert np.allclose(inflate(square, 1.02), square * 1.02)


def test_chaikin_doubles_vertices():
    square = np.array([[0.0, 0.0], [4.0, 0.0], [4.0, 4.0], [0.0, 4.0]])
    smooth = chaikin(square)
    assert smooth.shape == (8, 2)
    assert smooth[0].tolist() == [1.0, 0.0]
    assert smooth[1].tolist() == [3.0, 0.0]


def test_class_contour_needs_three_points():
    assert class_contour(np.array([[0.0, 0.0], [1.0, 1.0]])) == []
    # collinear points have no area
    assert class_contour(np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]])) == []
    assert len(class_contour(np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]))) == 12


@pytest.mark.parametrize("pos,neg", [
    ([[5.0, 0.0], [5.0, 1.0]], [[0.0, 0.0], [0.0, 1.0]]),
    ([[0.0, 0.0], [0.0, 1.0]], [[5.0, 0.0], [5.0, 1.0]]),
])
def test_degree_one_bisector_is_upright_either_way(pos, neg, caplog):
    pos, neg = np.array(pos), np.array(neg)
    bounds = Bounds.from_points(np.vstack([pos, neg]))
    with caplog.at_level(logging.WARNING, logger="kernel_playground.geometry"):
        curve = polynomial_curve(pos, neg, bounds, degree=1)
    assert curve.slope == LARGE_SLOPE
    assert curve.y_at(2.5) == pytest.approx(0.5)
    assert "vertical" in caplog.text
