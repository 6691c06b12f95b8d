import pytest

from kernel_playground import ClassificationParameters, LabeledPoint


def make_points(pairs, label):
    return [LabeledPoint(x, y, label) for x, y in pairs]


@pytest.fixture
def four_points():
    return (
        LabeledPoint(0, 0, 0), LabeledPoint(1, 0, 0),
        LabeledPoint(9, 9, 1), LabeledPoint(10, 9, 1),
    )


@pytest.fixture
def diagonal_clusters():
    """Two small clusters that a line of slope -1 separates with room to spare."""
    return tuple(
        make_points([(0, 0), (1, 0), (0, 1)], 0) + make_points([(5, 5), (6, 5), (5, 6)], 1)
    )


@pytest.fixture
def params():
    return ClassificationParameters(C=1.0, gamma=0.1)
