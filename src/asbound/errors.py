"""Exceptions raised while evaluating search utility bounds."""


class BoundError(ValueError):
    """Base class for errors raised by the bound evaluator."""


class InvalidLookahead(BoundError):
    """Lookahead is not a positive integer."""

    def __init__(self, lookahead: object):
        self.lookahead = lookahead
        super().__init__(f"lookahead must be an integer >= 1, got {lookahead!r}")


class InvalidNumPositives(BoundError):
    """Number of hypothetical positives is not a non-negative integer."""

    def __init__(self, num_positives: object):
        self.num_positives = num_positives
        super().__init__(f"num_positives must be an integer >= 0, got {num_positives!r}")


class InvalidProbability(BoundError):
    """The probability bound oracle returned a value outside [0, 1]."""

    def __init__(self, value: object, num_positives: int):
        self.value = value
        self.num_positives = num_positives
        super().__init__(
            f"probability bound must lie in [0, 1], got {value!r} "
            f"(num_positives={num_positives})"
        )


class NonMonotoneOracle(BoundError):
    """The oracle decreased when given more hypothetical positives."""

    def __init__(self, num_positives: int, lower: float, higher: float):
        self.num_positives = num_positives
        self.lower = lower
        self.higher = higher
        super().__init__(
            f"probability bound decreased from {lower!r} at num_positives="
            f"{num_positives} to {higher!r} at num_positives={num_positives + 1}"
        )


class DeadlineExceeded(BoundError):
    """The wall-clock deadline for a bound computation elapsed."""

    def __init__(self, deadline: float):
        self.deadline = deadline
        super().__init__(f"bound computation exceeded its deadline of {deadline:.3f}s")
