"""
Plain-language read-out of a ClassificationResult for the metric cards.
"""
import pandas as pd
from sklearn.metrics import f1_score

from .models import KernelKind

KERNEL_EXPLANATIONS = {
    KernelKind.LINEAR: "It learned to draw a straight line separating the groups",
    KernelKind.POLYNOMIAL: "It learned that the boundary curves like a hill",
    KernelKind.RBF: "It learned to draw circles around similar groups",
    KernelKind.SIGMOID: "It learned a smooth S-curve transition",
}


def summarize(spec, result):
    cm = result.confusion_matrix
    return {
        "accuracy": {
            "value": f"{round(result.accuracy * 100)}%",
            "title": "Overall Accuracy",
            "detail": f"Got it right {cm.true_positive + cm.true_negative} out of {cm.total} times",
        },
        "precision": {
            "value": f"{round(result.precision * 100)}%",
            "title": f'When it said "{spec.positive_label}"',
            "detail": f"Was correct {cm.true_positive} out of {cm.true_positive + cm.false_positive} times",
        },
        "recall": {
            "value": f"{round(result.recall * 100)}%",
            "title": f"Found {spec.positive_label} cases",
            "detail": f"Caught {cm.true_positive} out of {cm.true_positive + cm.false_negative} actual ones",
        },
        "explanation": KERNEL_EXPLANATIONS[KernelKind(spec.kernel)],
        "support_vectors": f"{len(result.support_vector_indices)} important teaching cases",
    }


def breakdown_frame(spec, result):
    """Confusion matrix labelled with the scenario's class names."""
    cm = result.confusion_matrix
    pos, neg = spec.positive_label, spec.negative_label
    return pd.DataFrame(
        [[cm.true_positive, cm.false_negative], [cm.false_positive, cm.true_negative]],
        index=[f"True {pos}", f"True {neg}"],
        columns=[f"Pred {pos}", f"Pred {neg}"],
    ).astype(int)


def technical_frame(points, result):
    f1 = f1_score([p.label for p in points], result.predictions, zero_division=0)
    return pd.DataFrame({
        "Value": [result.accuracy, result.precision, result.recall, f1],
    }, index=["Accuracy", "Precision", "Recall", "F1"])


def decisions_frame(points, result):
    """One row per point: features, actual and predicted label, support-vector flag."""
    support = set(result.support_vector_indices)
    return pd.DataFrame({
        "x": [p.x for p in points],
        "y": [p.y for p in points],
        "actual": [p.label for p in points],
        "predicted": result.predictions,
        "support_vector": [i in support for i in range(len(points))],
    })
