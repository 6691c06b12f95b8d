"""
The four scenario datasets shown in the playground.

Each scenario is seeded, so a given (scenario, seed) always produces the
same points.
"""
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from .models import KernelKind, LabeledPoint


# ------------------------------------
# Synthetic datasets
# ------------------------------------
def make_loans(n=100, seed=7):
    """Approved loans: higher income and credit. Rejected: lower."""
    rng = np.random.default_rng(seed)
    n_pos = int(round(n * 0.6))
    n_neg = n - n_pos
    approved = np.c_[40000 + rng.uniform(size=n_pos) * 60000, 650 + rng.uniform(size=n_pos) * 200]
    rejected = np.c_[15000 + rng.uniform(size=n_neg) * 35000, 400 + rng.uniform(size=n_neg) * 200]
    X = np.vstack([approved, rejected])
    y = np.r_[np.ones(n_pos, dtype=int), np.zeros(n_neg, dtype=int)]
    return X, y


def make_students(n=100, seed=11):
    rng = np.random.default_rng(seed)
    n_pos = n // 2
    n_neg = n - n_pos
    on_track = np.c_[25 + rng.uniform(size=n_pos) * 15, 75 + rng.uniform(size=n_pos) * 20]
    needs_support = np.c_[5 + rng.uniform(size=n_neg) * 15, 20 + rng.uniform(size=n_neg) * 30]
    X = np.vstack([on_track, needs_support])
    y = np.r_[np.ones(n_pos, dtype=int), np.zeros(n_neg, dtype=int)]
    return X, y


def make_customers(n=100, seed=23):
    """Loyal customers in three clusters, occasional shoppers spread out below."""
    rng = np.random.default_rng(seed)
    centers = [(20, 80), (25, 100), (18, 120)]
    per_center = int(round(n * 0.2))
    loyal = np.vstack([
        np.c_[cx + (rng.uniform(size=per_center) - 0.5) * 10, cy + (rng.uniform(size=per_center) - 0.5) * 30]
        for cx, cy in centers
    ])
    n_neg = n - len(loyal)
    occasional = np.c_[2 + rng.uniform(size=n_neg) * 15, 20 + rng.uniform(size=n_neg) * 60]
    X = np.vstack([loyal, occasional])
    y = np.r_[np.ones(len(loyal), dtype=int), np.zeros(n_neg, dtype=int)]
    return X, y


def make_patients(n=100, seed=31):
    """Label is cholesterol > 220, so the older group is mostly at risk."""
    rng = np.random.default_rng(seed)
    n_old = n // 2
    n_young = n - n_old
    old_age = 50 + rng.uniform(size=n_old) * 35
    old_chol = 200 + (old_age - 50) * 3 + rng.uniform(size=n_old) * 50
    young_age = 25 + rng.uniform(size=n_young) * 35
    young_chol = 150 + young_age * 0.5 + rng.uniform(size=n_young) * 40
    X = np.c_[np.r_[old_age, young_age], np.r_[old_chol, young_chol]]
    y = (X[:, 1] > 220).astype(int)
    return X, y


@dataclass
class DatasetSpec:
    id: str
    name: str
    icon: str
    description: str
    x_label: str
    y_label: str
    x_explanation: str
    y_explanation: str
    positive_label: str
    negative_label: str
    positive_color: str
    negative_color: str
    kernel: KernelKind
    maker: callable
    strict_separation: bool = False
    overview: dict = field(default_factory=dict)


DATASETS = {
    "loan": DatasetSpec(
        id="loan",
        name="Loan Approval Predictor",
        icon="🏦",
        description="Bank deciding which loans to approve",
        x_label="Annual Income ($)",
        y_label="Credit Score",
        x_explanation="Moving right → Higher income",
        y_explanation="Moving up → Better credit score",
        positive_label="Approved",
        negative_label="Rejected",
        positive_color="hsl(140, 50%, 55%)",
        negative_color="hsl(0, 70%, 65%)",
        kernel=KernelKind.LINEAR,
        maker=make_loans,
        strict_separation=True,
        overview={
            "What you see": "100 loan applications. Each dot is one person applying for a loan.",
            "The groups": "Green dots = Approved loans, Red dots = Rejected loans",
            "Measuring": "Income (left to right) and credit score (bottom to top)",
        },
    ),
    "students": DatasetSpec(
        id="students",
        name="Student Performance Zones",
        icon="📚",
        description="Teacher identifying students who need help",
        x_label="Study Hours per Week",
        y_label="Quiz Score (%)",
        x_explanation="Moving right → More study hours",
        y_explanation="Moving up → Higher quiz scores",
        positive_label="On Track",
        negative_label="Needs Support",
        positive_color="hsl(210, 80%, 65%)",
        negative_color="hsl(25, 85%, 65%)",
        kernel=KernelKind.POLYNOMIAL,
        maker=make_students,
        overview={
            "What you see": "100 students. Each dot is one student's weekly study habits and performance.",
            "The groups": "Blue dots = Students on track, Orange dots = Students needing support",
            "Measuring": "Study hours per week and quiz scores",
        },
    ),
    "customers": DatasetSpec(
        id="customers",
        name="Customer Shopping Patterns",
        icon="🛍️",
        description="Store understanding customer loyalty",
        x_label="Purchase Frequency (times/month)",
        y_label="Average Spend ($)",
        x_explanation="Moving right → More frequent purchases",
        y_explanation="Moving up → Higher spending",
        positive_label="Loyal Customer",
        negative_label="Occasional Shopper",
        positive_color="hsl(280, 60%, 70%)",
        negative_color="hsl(220, 10%, 45%)",
        kernel=KernelKind.RBF,
        maker=make_customers,
        overview={
            "What you see": "100 customers. Each dot is a customer's shopping pattern over the past 6 months.",
            "The groups": "Purple dots = Loyal customers, Gray dots = Occasional shoppers",
            "Measuring": "How often they shop and how much they spend",
        },
    ),
    "health": DatasetSpec(
        id="health",
        name="Health Risk Assessment",
        icon="🏥",
        description="Clinic identifying patients at risk",
        x_label="Age (years)",
        y_label="Cholesterol Level (mg/dL)",
        x_explanation="Moving right → Older age",
        y_explanation="Moving up → Higher cholesterol",
        positive_label="At Risk",
        negative_label="Healthy Range",
        positive_color="hsl(0, 70%, 65%)",
        negative_color="hsl(140, 50%, 55%)",
        kernel=KernelKind.SIGMOID,
        maker=make_patients,
        overview={
            "What you see": "100 patients. Each dot is one patient's health indicators.",
            "The groups": "Red dots = At risk patients, Green dots = Healthy range",
            "Measuring": "Age compared with cholesterol level",
        },
    ),
}


def points_from_arrays(X, y):
    return tuple(LabeledPoint(float(a), float(b), int(label)) for (a, b), label in zip(X, y))


def load_dataset(dataset_id, n=100, seed=None):
    """Points of a catalog scenario; ``seed=None`` uses the scenario's own seed."""
    try:
        spec = DATASETS[dataset_id]
    except KeyError:
        raise KeyError(f"unknown dataset {dataset_id!r}, expected one of {sorted(DATASETS)}") from None
    X, y = spec.maker(n) if seed is None else spec.maker(n, seed)
    return points_from_arrays(X, y)


def to_frame(points):
    return pd.DataFrame({
        "x": [p.x for p in points],
        "y": [p.y for p in points],
        "label": [p.label for p in points],
    })
