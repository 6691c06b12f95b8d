"""
Class-separation geometry shared by the classification engine and the
boundary generator.

Everything that both sides need lives here exactly once: centroids, the
bounding box, kernel affinities, the linear separating line, the
polynomial curve and the class-affinity score field. The engine ranks
support vectors against the same objects the generator samples, so the
highlighted points always sit next to the drawn curve.
"""
import logging
import math
from dataclasses import dataclass

import numpy as np

from . import config
from .errors import DegenerateGeometry
from .models import KernelKind, Point

logger = logging.getLogger(__name__)


# ------------------------------------
# Points, classes, bounds
# ------------------------------------
def as_arrays(dataset):
    """Return ``(xy, labels)`` as an (n, 2) float array and an (n,) int array."""
    if len(dataset) == 0:
        return np.empty((0, 2)), np.empty(0, dtype=int)
    xy = np.array([(p.x, p.y) for p in dataset], dtype=float)
    labels = np.array([p.label for p in dataset], dtype=int)
    return xy, labels


def partition(xy, labels):
    """Split into (positive, negative) point arrays."""
    return xy[labels == 1], xy[labels == 0]


def centroid(points):
    return points.mean(axis=0)


def to_points(xs, ys):
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


@dataclass(frozen=True)
class Bounds:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @classmethod
    def from_points(cls, xy):
        return cls(
            float(xy[:, 0].min()), float(xy[:, 0].max()),
            float(xy[:, 1].min()), float(xy[:, 1].max()),
        )

    @property
    def x_range(self):
        return self.x_max - self.x_min

    @property
    def y_range(self):
        return self.y_max - self.y_min

    def padded(self, fraction):
        dx, dy = self.x_range * fraction, self.y_range * fraction
        return Bounds(self.x_min - dx, self.x_max + dx, self.y_min - dy, self.y_max + dy)


# ------------------------------------
# Kernels and scores
# ------------------------------------
def squared_distances(a, b):
    diff = a[:, None, :] - b[None, :, :]
    return (diff ** 2).sum(axis=-1)


def kernel_matrix(a, b, kernel, gamma=config.GAMMA_RANGE.default, degree=2):
    """Pairwise kernel values between the rows of ``a`` and ``b``.

    Linear is plain Euclidean distance and polynomial grows with distance,
    while rbf is a similarity. The sign conventions downstream depend on
    exactly these forms.
    """
    sq = squared_distances(np.atleast_2d(a), np.atleast_2d(b))
    kernel = KernelKind(kernel)
    if kernel is KernelKind.LINEAR:
        return np.sqrt(sq)
    if kernel is KernelKind.POLYNOMIAL:
        return (sq + 1.0) ** degree
    if kernel is KernelKind.RBF:
        return np.exp(-gamma * sq)
    return np.tanh(gamma * sq + 1.0)


def centroid_score(xy, pos_center, neg_center, kernel, params):
    """Decision score against the two class centroids; label 1 where >= 0."""
    k_neg = kernel_matrix(xy, neg_center, kernel, params.gamma, params.polynomial_degree)[:, 0]
    k_pos = kernel_matrix(xy, pos_center, kernel, params.gamma, params.polynomial_degree)[:, 0]
    weight = math.tanh(params.C * 0.5)
    return (k_neg - k_pos) * (1 + weight * 0.5)


def affinity_score(xy, pos, neg, kernel, gamma, C):
    """Mean kernel influence of the positive class (scaled by C) minus the negative class."""
    kernel = KernelKind(kernel)
    factor = config.RBF_C_FACTOR if kernel is KernelKind.RBF else config.SIGMOID_C_FACTOR
    c_adjustment = 1 + (C - 1) * factor
    pos_influence = kernel_matrix(xy, pos, kernel, gamma).mean(axis=1)
    neg_influence = kernel_matrix(xy, neg, kernel, gamma).mean(axis=1)
    return pos_influence * c_adjustment - neg_influence


def center_distance_ratio(xy, pos_center, neg_center):
    """``|d+ - d-| / (d+ + d-)``: 0 on the bisector, 1 on a centroid."""
    d_pos = np.linalg.norm(xy - pos_center, axis=1)
    d_neg = np.linalg.norm(xy - neg_center, axis=1)
    total = d_pos + d_neg
    return np.divide(np.abs(d_pos - d_neg), total, out=np.zeros_like(total), where=total > 0)


# ------------------------------------
# Slopes
# ------------------------------------
def slope_between(rise, run):
    if abs(run) < config.SLOPE_EPSILON:
        raise DegenerateGeometry(f"slope {rise}/{run} is vertical")
    return rise / run


def safe_slope(rise, run):
    """Like slope_between, but a vertical slope becomes a large finite one."""
    try:
        return slope_between(rise, run)
    except DegenerateGeometry as e:
        logger.warning("%s, using slope %g", e, config.LARGE_SLOPE)
        return math.copysign(config.LARGE_SLOPE, rise) if rise else config.LARGE_SLOPE


# ------------------------------------
# Linear separator
# ------------------------------------
@dataclass(frozen=True)
class SeparatingLine:
    slope: float
    intercept: float

    def y_at(self, x):
        return self.slope * x + self.intercept

    def distance(self, xy):
        """Perpendicular distance of each row of ``xy`` to the line."""
        residual = self.slope * xy[:, 0] - xy[:, 1] + self.intercept
        return np.abs(residual) / math.sqrt(self.slope ** 2 + 1)

    def sample(self, bounds, n=config.LINE_SAMPLES, clip=True):
        pad = bounds.y_range * config.LINE_Y_PAD
        if abs(self.slope) >= config.LARGE_SLOPE:
            # effectively vertical: walk along y instead of x
            ys = np.linspace(bounds.y_min - pad, bounds.y_max + pad, n + 1)
            xs = (ys - self.intercept) / self.slope
            order = np.argsort(xs, kind="stable")
            return to_points(xs[order], ys[order])
        xs = np.linspace(bounds.x_min, bounds.x_max, n + 1)
        ys = self.y_at(xs)
        if clip:
            keep = (ys >= bounds.y_min - pad) & (ys <= bounds.y_max + pad)
            xs, ys = xs[keep], ys[keep]
        return to_points(xs, ys)


def centroid_slope(pos, neg):
    pos_c, neg_c = centroid(pos), centroid(neg)
    return safe_slope(-(pos_c[1] - neg_c[1]), pos_c[0] - neg_c[0])


def linear_separator(pos, neg, bounds, C):
    """Line with the centroid slope through a point 60% of the way to the positive centroid.

    Higher C lifts the intercept by ``(C - 1) * yRange * 0.03``.
    """
    pos_c, neg_c = centroid(pos), centroid(neg)
    slope = centroid_slope(pos, neg)
    anchor = neg_c + config.LINE_BLEND_WEIGHT * (pos_c - neg_c)
    intercept = anchor[1] - slope * anchor[0]
    intercept += (C - 1) * bounds.y_range * config.LINE_C_SHIFT
    return SeparatingLine(slope, intercept)


def strict_start_margin(y_range, C):
    """First margin tried by the strict search; smaller C asks for a wider band."""
    c_factor = 1 + (1 / max(0.1, C)) * 2
    return y_range * config.STRICT_BASE_MARGIN * c_factor + y_range * config.STRICT_EPSILON


def strict_linear_separator(pos, neg, bounds, C):
    """Line that keeps every point at least ``margin`` away on its own side.

    The search starts from the widest band (smallest C) and shrinks it by
    20% per attempt while no intercept admits it. The band found there is
    scaled down to ``C``, so the margin never grows with C and stays
    feasible. Returns ``(line, margin)``.
    """
    slope = centroid_slope(pos, neg)
    a, b = -slope, 1.0
    norm = math.hypot(a, b)
    pos_proj = a * pos[:, 0] + b * pos[:, 1]
    neg_proj = a * neg[:, 0] + b * neg[:, 1]

    def feasible_interval(m):
        return (m * norm - pos_proj).max(), (-m * norm - neg_proj).min()

    widest = strict_start_margin(bounds.y_range, config.C_RANGE.min)
    margin = widest
    lower, upper = feasible_interval(margin)
    attempts = 0
    while lower > upper and attempts < config.STRICT_MAX_ATTEMPTS:
        margin *= config.STRICT_BACKOFF
        lower, upper = feasible_interval(margin)
        attempts += 1
    if lower > upper:
        logger.warning("no strictly separating line after %d attempts (margin %.4g)", attempts, margin)

    if widest > 0:
        margin *= strict_start_margin(bounds.y_range, C) / widest
    lower, upper = feasible_interval(margin)
    offset = (lower + upper) / 2
    return SeparatingLine(slope, float(-offset)), float(margin)


def offset_margins(curve, slope, width):
    """Translate every curve point by ``width`` along the line's normal, both ways."""
    angle = math.atan(-1 / slope) if slope else -math.pi / 2
    dx, dy = width * math.cos(angle), width * math.sin(angle)
    upper = [Point(p.x + dx, p.y + dy) for p in curve]
    lower = [Point(p.x - dx, p.y - dy) for p in curve]
    return upper, lower


# ------------------------------------
# Polynomial curve
# ------------------------------------
@dataclass(frozen=True)
class PolynomialCurve:
    degree: int
    mid_x: float
    mid_y: float
    x_range: float
    y_range: float
    slope: float = 0.0
    intercept: float = 0.0

    def y_at(self, x):
        if self.degree == 1:
            return self.slope * x + self.intercept
        offset = (x - self.mid_x) / (self.x_range * 0.5 or 1.0)
        if self.degree == 2:
            amplitude = self.y_range * 0.2
            return self.mid_y + amplitude * np.sin(offset * np.pi) + (x - self.mid_x) * 0.2
        amplitude = self.y_range * 0.25
        return (
            self.mid_y
            + amplitude * np.sin(offset * np.pi * 2)
            + amplitude * 0.3 * np.sin(offset * np.pi * 4)
            + (x - self.mid_x) * 0.3
        )

    def sample(self, bounds, n=config.POLY_SAMPLES):
        if self.degree == 1 and abs(self.slope) >= config.LARGE_SLOPE:
            return SeparatingLine(self.slope, self.intercept).sample(bounds, n)
        box = bounds.padded(config.POLY_PAD)
        xs = np.linspace(box.x_min, box.x_max, n + 1)
        ys = self.y_at(xs)
        keep = (ys >= box.y_min) & (ys <= box.y_max)
        return to_points(xs[keep], ys[keep])


def polynomial_curve(pos, neg, bounds, degree):
    pos_c, neg_c = centroid(pos), centroid(neg)
    mid = (pos_c + neg_c) / 2
    slope = intercept = 0.0
    if degree == 1:
        # perpendicular bisector of the centroid segment
        dx, dy = pos_c - neg_c
        try:
            slope = slope_between(-dx, dy)
        except DegenerateGeometry as e:
            # a horizontal centroid segment always yields the same upright bisector
            logger.warning("%s, using slope %g", e, config.LARGE_SLOPE)
            slope = config.LARGE_SLOPE
        intercept = mid[1] - slope * mid[0]
    return PolynomialCurve(
        degree=int(degree), mid_x=float(mid[0]), mid_y=float(mid[1]),
        x_range=bounds.x_range, y_range=bounds.y_range,
        slope=float(slope), intercept=float(intercept),
    )


# ------------------------------------
# Curve extraction and smoothing
# ------------------------------------
def moving_average(values, half_window):
    """Centered moving average; the window shrinks at the ends."""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return values
    csum = np.concatenate([[0.0], np.cumsum(values)])
    idx = np.arange(values.size)
    lo = np.clip(idx - half_window, 0, values.size)
    hi = np.clip(idx + half_window + 1, 0, values.size)
    return (csum[hi] - csum[lo]) / (hi - lo)


def zero_crossings(xs, ys, field, target_y):
    """One sign change of ``field`` per column, the one nearest ``target_y``.

    ``field`` has shape (len(ys), len(xs)); rows run in the order of ``ys``.
    Columns without a sign change are skipped.
    """
    out_x, out_y = [], []
    for j, x in enumerate(xs):
        column = field[:, j]
        a, b = column[:-1], column[1:]
        idx = np.nonzero(np.signbit(a) != np.signbit(b))[0]
        if idx.size == 0:
            continue
        step = a[idx] - b[idx]
        t = np.divide(a[idx], step, out=np.zeros_like(step), where=step != 0)
        candidates = ys[idx] + t * (ys[idx + 1] - ys[idx])
        out_x.append(x)
        out_y.append(candidates[np.argmin(np.abs(candidates - target_y))])
    return np.array(out_x), np.array(out_y)


def _cross(o, a, b):
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points):
    """Monotone-chain hull, counter-clockwise, without repeating the first vertex."""
    pts = sorted({(float(x), float(y)) for x, y in points})
    if len(pts) < 3:
        return np.array(pts).reshape(-1, 2)

    lower = []
    for p in pts:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)
    upper = []
    for p in reversed(pts):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)
    return np.array(lower[:-1] + upper[:-1])


def inflate(polygon, factor):
    center = polygon.mean(axis=0)
    return center + (polygon - center) * factor


def chaikin(polygon):
    """One corner-cutting pass over a closed polygon; doubles the vertex count."""
    nxt = np.roll(polygon, -1, axis=0)
    q = 0.75 * polygon + 0.25 * nxt
    r = 0.25 * polygon + 0.75 * nxt
    return np.stack([q, r], axis=1).reshape(-1, 2)


def class_contour(points, passes=config.CHAIKIN_PASSES):
    """Smoothed closed outline of a point cloud, or [] for fewer than 3 hull vertices."""
    if len(points) < 3:
        return []
    hull = convex_hull(points)
    if len(hull) < 3:
        return []
    contour = inflate(hull, config.HULL_INFLATE)
    for _ in range(passes):
        contour = chaikin(contour)
    return to_points(contour[:, 0], contour[:, 1])
