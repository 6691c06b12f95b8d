class PlaygroundError(Exception):
    """Base class for errors raised by kernel_playground."""


class InsufficientClassDiversity(PlaygroundError, ValueError):
    """The dataset holds no points of one of the two labels."""

    def __init__(self, n_positive, n_negative):
        self.n_positive = n_positive
        self.n_negative = n_negative
        super().__init__(
            f"need at least one point of each label "
            f"(got {n_positive} positive, {n_negative} negative)"
        )


class DegenerateGeometry(PlaygroundError, ArithmeticError):
    """A slope would divide by (near-)zero."""


class InvalidParameters(PlaygroundError, ValueError):
    """A classification parameter lies outside its slider range."""
