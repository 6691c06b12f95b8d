"""
Value types passed between the engine, the boundary generator and the UI.
"""
from dataclasses import dataclass, field
from enum import Enum

from .config import C_RANGE, DEGREE_RANGE, GAMMA_RANGE
from .errors import InvalidParameters


class KernelKind(str, Enum):
    LINEAR = "linear"
    POLYNOMIAL = "polynomial"
    RBF = "rbf"
    SIGMOID = "sigmoid"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class LabeledPoint:
    x: float
    y: float
    label: int  # 0 = negative class, 1 = positive class

    def __post_init__(self):
        if self.label not in (0, 1):
            raise ValueError(f"label must be 0 or 1, got {self.label!r}")


@dataclass(frozen=True)
class ClassificationParameters:
    C: float = C_RANGE.default
    gamma: float = GAMMA_RANGE.default
    polynomial_degree: int = int(DEGREE_RANGE.default)

    def __post_init__(self):
        if not C_RANGE.contains(self.C):
            raise InvalidParameters(f"C={self.C} outside [{C_RANGE.min}, {C_RANGE.max}]")
        if not GAMMA_RANGE.contains(self.gamma):
            raise InvalidParameters(f"gamma={self.gamma} outside [{GAMMA_RANGE.min}, {GAMMA_RANGE.max}]")
        if self.polynomial_degree not in (1, 2, 3):
            raise InvalidParameters(f"polynomial_degree={self.polynomial_degree} not in {{1, 2, 3}}")


@dataclass(frozen=True)
class ConfusionMatrix:
    true_positive: int
    false_positive: int
    true_negative: int
    false_negative: int

    @property
    def total(self) -> int:
        return self.true_positive + self.false_positive + self.true_negative + self.false_negative


@dataclass(frozen=True)
class GridSample:
    x: float
    y: float
    value: float


@dataclass(frozen=True)
class Margins:
    upper: list
    lower: list


@dataclass(frozen=True)
class ClassificationResult:
    support_vector_indices: list
    accuracy: float
    precision: float
    recall: float
    confusion_matrix: ConfusionMatrix
    boundary_grid_samples: list
    margins: Margins
    predictions: list = field(default_factory=list)


@dataclass(frozen=True)
class BoundaryResult:
    """Curve (and optional margin band / per-class contours) to draw.

    An empty ``curve`` means "nothing to draw", never a failure.
    """
    curve: list = field(default_factory=list)
    margins: Margins = None
    margin_width: float = None
    contours: dict = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.curve and not any(self.contours.values())
