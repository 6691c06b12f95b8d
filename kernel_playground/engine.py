"""
Classification engine: per-point predictions, metrics and the "important
teaching cases" (support vectors) for one dataset / parameter set.

This is a centroid heuristic that looks like an SVM on the four scenario
datasets, not a trained model.
"""
import logging

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix, precision_score, recall_score

from . import config
from .errors import InsufficientClassDiversity
from .geometry import (
    Bounds, affinity_score, as_arrays, center_distance_ratio, centroid,
    centroid_score, linear_separator, partition, polynomial_curve,
)
from .models import (
    ClassificationResult, ConfusionMatrix, GridSample, KernelKind, Margins, Point,
)

logger = logging.getLogger(__name__)


def classify(dataset, params, kernel) -> ClassificationResult:
    """Classify every point of ``dataset`` and pick its support vectors.

    Raises InsufficientClassDiversity when either label is missing.
    """
    kernel = KernelKind(kernel)
    xy, labels = as_arrays(dataset)
    pos, neg = partition(xy, labels)
    if len(pos) == 0 or len(neg) == 0:
        raise InsufficientClassDiversity(len(pos), len(neg))

    pos_c, neg_c = centroid(pos), centroid(neg)
    bounds = Bounds.from_points(xy)

    scores = centroid_score(xy, pos_c, neg_c, kernel, params)
    predictions = (scores >= 0).astype(int)

    tn, fp, fn, tp = confusion_matrix(labels, predictions, labels=[0, 1]).ravel()
    cm = ConfusionMatrix(
        true_positive=int(tp), false_positive=int(fp),
        true_negative=int(tn), false_negative=int(fn),
    )

    grid = score_grid(bounds, pos_c, neg_c, kernel, params)
    support_vectors = select_support_vectors(xy, pos, neg, kernel, params, bounds)
    logger.debug(
        "classify kernel=%s n=%d C=%.2f gamma=%.3f -> %d support vectors",
        kernel.value, len(xy), params.C, params.gamma, len(support_vectors),
    )

    return ClassificationResult(
        support_vector_indices=support_vectors,
        accuracy=float(accuracy_score(labels, predictions)),
        precision=float(precision_score(labels, predictions, zero_division=0)),
        recall=float(recall_score(labels, predictions, zero_division=0)),
        confusion_matrix=cm,
        boundary_grid_samples=grid,
        margins=grid_margins(grid, bounds, params.C),
        predictions=[int(p) for p in predictions],
    )


# ------------------------------------
# Background grid
# ------------------------------------
def score_grid(bounds, pos_c, neg_c, kernel, params, resolution=config.GRID_RESOLUTION):
    """Decision scores on a (resolution+1)^2 grid over the data bounds, x-major."""
    gx = np.linspace(bounds.x_min, bounds.x_max, resolution + 1)
    gy = np.linspace(bounds.y_min, bounds.y_max, resolution + 1)
    xx, yy = np.meshgrid(gx, gy, indexing="ij")
    grid = np.c_[xx.ravel(), yy.ravel()]
    values = centroid_score(grid, pos_c, neg_c, kernel, params)
    return [GridSample(float(x), float(y), float(v)) for (x, y), v in zip(grid, values)]


def grid_margins(grid, bounds, C):
    near = sorted((s for s in grid if abs(s.value) < config.GRID_MARGIN_BAND), key=lambda s: s.x)
    width = 1.0 / (C + 0.5)
    offset = width * bounds.y_range * 0.05
    return Margins(
        upper=[Point(s.x, s.y + offset) for s in near],
        lower=[Point(s.x, s.y - offset) for s in near],
    )


# ------------------------------------
# Support vectors
# ------------------------------------
def select_support_vectors(xy, pos, neg, kernel, params, bounds):
    """Indices of points presented as support vectors, at most 20, never empty."""
    kernel = KernelKind(kernel)
    if kernel is KernelKind.LINEAR:
        line = linear_separator(pos, neg, bounds, params.C)
        chosen = _closest_within_percentile(line.distance(xy), config.LINEAR_SV_PERCENTILE)
    elif kernel is KernelKind.POLYNOMIAL:
        curve = polynomial_curve(pos, neg, bounds, params.polynomial_degree)
        distances = np.abs(xy[:, 1] - curve.y_at(xy[:, 0]))
        chosen = _closest_within_percentile(distances, config.POLY_SV_PERCENTILE)
    else:
        scores = np.abs(affinity_score(xy, pos, neg, kernel, params.gamma, params.C))
        chosen = _lowest_scores(scores)

    if len(chosen) >= config.MIN_SUPPORT_VECTORS:
        return chosen
    logger.debug("%s heuristic found %d support vectors, using generic ratio", kernel.value, len(chosen))
    return _generic_support_vectors(xy, centroid(pos), centroid(neg))


def _closest_within_percentile(distances, percentile):
    limit = min(config.CURVE_MAX_SV, int(len(distances) * config.CURVE_SV_FRACTION))
    threshold = np.percentile(distances, percentile)
    order = np.argsort(distances, kind="stable")
    return [int(i) for i in order if distances[i] <= threshold][:limit]


def _lowest_scores(scores):
    n = len(scores)
    order = np.argsort(scores, kind="stable")
    rank = min(config.AFFINITY_RANK_POSITION, n) - 1
    threshold = max(scores[order[rank]], config.AFFINITY_MIN_THRESHOLD)
    limit = min(config.AFFINITY_MAX_SV, int(n * config.AFFINITY_SV_FRACTION))
    chosen = [int(i) for i in order if scores[i] <= threshold][:limit]
    if len(chosen) < config.AFFINITY_MIN_SELECTED:
        relaxed = min(config.AFFINITY_MAX_SV, int(n * config.AFFINITY_RELAXED_FRACTION))
        chosen = [int(i) for i in order[:relaxed]]
    return chosen


def _generic_support_vectors(xy, pos_c, neg_c):
    ratio = center_distance_ratio(xy, pos_c, neg_c)
    near = np.nonzero(ratio < config.GENERIC_RATIO_THRESHOLD)[0]
    if len(near) >= config.MIN_SUPPORT_VECTORS:
        return [int(i) for i in near[:config.GENERIC_MAX_SV]]

    limit = max(1, min(config.FALLBACK_MAX_SV, int(len(xy) * config.FALLBACK_SV_FRACTION)))
    return [int(i) for i in np.argsort(ratio, kind="stable")[:limit]]
