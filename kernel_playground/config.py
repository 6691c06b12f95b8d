"""
Parameter ranges and tuning constants shared by the engine, the boundary
generator and the Streamlit sidebar.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterRange:
    min: float
    max: float
    default: float
    step: float

    def contains(self, value) -> bool:
        return self.min <= value <= self.max


# ------------------------------------
# Slider ranges
# ------------------------------------
C_RANGE = ParameterRange(min=0.1, max=10.0, default=1.0, step=0.1)
GAMMA_RANGE = ParameterRange(min=0.01, max=1.0, default=0.1, step=0.01)
DEGREE_RANGE = ParameterRange(min=1, max=3, default=2, step=1)

# ------------------------------------
# Classification engine
# ------------------------------------
GRID_RESOLUTION = 40            # steps per axis, grid is (RES+1) x (RES+1)
GRID_MARGIN_BAND = 0.5          # |score| below this counts as "on the boundary"
GENERIC_RATIO_THRESHOLD = 0.3
GENERIC_MAX_SV = 15
FALLBACK_MAX_SV = 10
FALLBACK_SV_FRACTION = 0.15
MIN_SUPPORT_VECTORS = 3

LINE_BLEND_WEIGHT = 0.6
LINE_C_SHIFT = 0.03
LINEAR_SV_PERCENTILE = 25
POLY_SV_PERCENTILE = 20
CURVE_MAX_SV = 12
CURVE_SV_FRACTION = 0.15

AFFINITY_MAX_SV = 20
AFFINITY_SV_FRACTION = 0.25
AFFINITY_RELAXED_FRACTION = 0.3
AFFINITY_RANK_POSITION = 10     # threshold is the n-th smallest |score|
AFFINITY_MIN_THRESHOLD = 0.3
AFFINITY_MIN_SELECTED = 8
RBF_C_FACTOR = 0.2
SIGMOID_C_FACTOR = 0.15

# ------------------------------------
# Boundary generator
# ------------------------------------
LARGE_SLOPE = 1e6
SLOPE_EPSILON = 1e-6

LINE_SAMPLES = 50
LINE_Y_PAD = 0.1
MARGIN_BASE = 0.08

STRICT_BASE_MARGIN = 0.03
STRICT_EPSILON = 0.001
STRICT_BACKOFF = 0.8
STRICT_MAX_ATTEMPTS = 10

POLY_SAMPLES = 150
POLY_PAD = 0.1

RBF_GRID_SIZE = 80
RBF_PAD = 0.1
RBF_SMOOTH_WINDOW = 1           # half-width, i.e. a 3-sample window
HULL_INFLATE = 1.02
CHAIKIN_PASSES = 2

SIGMOID_SAMPLES = 400
SIGMOID_PAD = 0.2
SIGMOID_AMPLITUDE = 0.35
SIGMOID_C_SHIFT = 0.02
SIGMOID_SMOOTH_WINDOW = 25
