from .boundary import generate_boundary
from .engine import classify
from .errors import DegenerateGeometry, InsufficientClassDiversity, InvalidParameters, PlaygroundError
from .models import (
    BoundaryResult, ClassificationParameters, ClassificationResult, ConfusionMatrix,
    GridSample, KernelKind, LabeledPoint, Margins, Point,
)

__version__ = "0.1.0"
