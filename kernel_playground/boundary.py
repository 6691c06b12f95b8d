"""
Boundary geometry generator: the curve drawn over the scatter plot for each
kernel, plus margin lines (linear) and per-class outlines (rbf).

These are visuals, not fits. A dataset missing one of the labels gets an
empty BoundaryResult.
"""
import logging

import numpy as np

from . import config
from .geometry import (
    Bounds, affinity_score, as_arrays, centroid, class_contour, linear_separator,
    moving_average, offset_margins, partition, polynomial_curve,
    strict_linear_separator, to_points, zero_crossings,
)
from .models import BoundaryResult, KernelKind, Margins

logger = logging.getLogger(__name__)


def generate_boundary(dataset, params, kernel, *, strict_separation=False) -> BoundaryResult:
    """Build the decision curve for ``kernel``.

    ``strict_separation`` only affects the linear kernel: the line is then
    placed so that a margin band keeps both classes strictly apart.
    """
    kernel = KernelKind(kernel)
    xy, labels = as_arrays(dataset)
    pos, neg = partition(xy, labels)
    if len(pos) == 0 or len(neg) == 0:
        logger.debug("boundary skipped: %d positive, %d negative points", len(pos), len(neg))
        return BoundaryResult()

    bounds = Bounds.from_points(xy)
    if kernel is KernelKind.LINEAR:
        result = _linear_boundary(pos, neg, bounds, params, strict_separation)
    elif kernel is KernelKind.POLYNOMIAL:
        result = _polynomial_boundary(pos, neg, bounds, params)
    elif kernel is KernelKind.RBF:
        result = _rbf_boundary(pos, neg, bounds, params)
    else:
        result = _sigmoid_boundary(pos, neg, bounds, params)

    logger.debug("%s boundary: %d curve points", kernel.value, len(result.curve))
    return result


def _linear_boundary(pos, neg, bounds, params, strict):
    if strict:
        line, width = strict_linear_separator(pos, neg, bounds, params.C)
        curve = line.sample(bounds, clip=False)
    else:
        line = linear_separator(pos, neg, bounds, params.C)
        curve = line.sample(bounds)
        # higher C, narrower band
        width = bounds.y_range * config.MARGIN_BASE / (params.C + 0.1)

    upper, lower = offset_margins(curve, line.slope, width)
    return BoundaryResult(curve=curve, margins=Margins(upper=upper, lower=lower), margin_width=width)


def _polynomial_boundary(pos, neg, bounds, params):
    curve = polynomial_curve(pos, neg, bounds, params.polynomial_degree)
    return BoundaryResult(curve=curve.sample(bounds))


def _rbf_boundary(pos, neg, bounds, params, size=config.RBF_GRID_SIZE):
    box = bounds.padded(config.RBF_PAD)
    xs = np.linspace(box.x_min, box.x_max, size)
    ys = np.linspace(box.y_max, box.y_min, size)  # top to bottom
    xx, yy = np.meshgrid(xs, ys)
    field = affinity_score(
        np.c_[xx.ravel(), yy.ravel()], pos, neg, KernelKind.RBF, params.gamma, params.C,
    ).reshape(xx.shape)

    target_y = (centroid(pos)[1] + centroid(neg)[1]) / 2
    cx, cy = zero_crossings(xs, ys, field, target_y)
    cy = moving_average(cy, config.RBF_SMOOTH_WINDOW)

    return BoundaryResult(
        curve=to_points(cx, cy),
        contours={1: class_contour(pos), 0: class_contour(neg)},
    )


def _sigmoid_boundary(pos, neg, bounds, params, n=config.SIGMOID_SAMPLES):
    box = bounds.padded(config.SIGMOID_PAD)
    mid_x, mid_y = (centroid(pos) + centroid(neg)) / 2

    amplitude = bounds.y_range * config.SIGMOID_AMPLITUDE
    steepness = max(1.5, params.gamma * 0.8)
    c_shift = (params.C - 1) * bounds.y_range * config.SIGMOID_C_SHIFT

    xs = np.linspace(box.x_min, box.x_max, n + 1)
    ys = mid_y - amplitude * np.tanh((xs - mid_x) / steepness) + c_shift
    keep = (ys >= box.y_min) & (ys <= box.y_max)
    xs, ys = xs[keep], moving_average(ys[keep], config.SIGMOID_SMOOTH_WINDOW)
    return BoundaryResult(curve=to_points(xs, ys))
