"""Upper bounds on the l-step expected utility of active search.

The utility of a point is the expected number of positives found in the next
``lookahead`` observations. Exact computation requires enumerating every
positive/negative outcome sequence. Instead the bound is written recursively
in terms of a probability bound oracle giving the largest posterior
probability any test point can reach after ``num_positives`` more positive
observations:

    bound(l, k) = p(k) * (1 + bound(l - 1, k + 1)) + (1 - p(k)) * bound(l - 1, k)

with ``bound(1, k) = p(k)``. The oracle must be non-decreasing in ``k``.
"""

import math
import time
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np

from asbound.errors import (
    DeadlineExceeded,
    InvalidLookahead,
    InvalidNumPositives,
    InvalidProbability,
    NonMonotoneOracle,
)

METHODS = ("recursive", "memoized", "table")


class ProbabilityBound(Protocol):
    """Upper bound on the maximum posterior probability over the test points.

    Called with the current observations and a number of additional
    hypothetical positive observations; returns a value in [0, 1].
    """

    def __call__(
        self,
        problem: Any,
        train_ind: np.ndarray,
        observed_labels: np.ndarray,
        test_ind: np.ndarray,
        num_positives: int,
    ) -> float: ...


@dataclass
class BoundTrace:
    """Result of a bound evaluation along with its cost."""

    bound: float
    lookahead: int
    num_positives: int
    method: str
    oracle_calls: int
    elapsed: float


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _validate_lookahead(lookahead: Any) -> int:
    if not _is_integer(lookahead) or lookahead < 1:
        raise InvalidLookahead(lookahead)
    return int(lookahead)


def _validate_num_positives(num_positives: Any) -> int:
    if not _is_integer(num_positives) or num_positives < 0:
        raise InvalidNumPositives(num_positives)
    return int(num_positives)


def _validate_probability(value: Any, num_positives: int) -> float:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidProbability(value, num_positives)
    try:
        probability = float(value)
    except (TypeError, ValueError):
        raise InvalidProbability(value, num_positives) from None
    if not math.isfinite(probability) or not 0.0 <= probability <= 1.0:
        raise InvalidProbability(value, num_positives)
    return probability


class _BoundEvaluation:
    """State of a single top-level bound computation.

    Nothing here outlives the call that created it.
    """

    def __init__(
        self,
        problem: Any,
        train_ind: np.ndarray,
        observed_labels: np.ndarray,
        test_ind: np.ndarray,
        probability_bound: ProbabilityBound,
        memoize: bool = False,
        check_monotonicity: bool = False,
        deadline: float | None = None,
    ):
        if deadline is not None and deadline <= 0:
            raise ValueError(f"deadline must be positive, got {deadline!r}")

        self.problem = problem
        self.train_ind = train_ind
        self.observed_labels = observed_labels
        self.test_ind = test_ind
        self.probability_bound = probability_bound
        self.memoize = memoize
        self.check_monotonicity = check_monotonicity
        self.deadline = deadline

        self.oracle_calls = 0
        self._probabilities: dict[int, float] = {}
        self._bounds: dict[tuple[int, int], float] = {}
        self._started = time.perf_counter()

    def _check_deadline(self) -> None:
        if self.deadline is not None and time.perf_counter() - self._started > self.deadline:
            raise DeadlineExceeded(self.deadline)

    def _check_monotone(self, num_positives: int, value: float) -> None:
        lower = self._probabilities.get(num_positives - 1)
        if lower is not None and value < lower:
            raise NonMonotoneOracle(num_positives - 1, lower, value)
        higher = self._probabilities.get(num_positives + 1)
        if higher is not None and higher < value:
            raise NonMonotoneOracle(num_positives, value, higher)

    def probability(self, num_positives: int) -> float:
        """Validated oracle value for ``num_positives`` extra positives."""
        if self.memoize and num_positives in self._probabilities:
            return self._probabilities[num_positives]

        raw = self.probability_bound(
            self.problem,
            self.train_ind,
            self.observed_labels,
            self.test_ind,
            num_positives,
        )
        self.oracle_calls += 1
        value = _validate_probability(raw, num_positives)

        if self.check_monotonicity:
            self._check_monotone(num_positives, value)
        self._probabilities[num_positives] = value
        return value

    def recurse(self, lookahead: int, num_positives: int) -> float:
        self._check_deadline()

        key = (lookahead, num_positives)
        if self.memoize and key in self._bounds:
            return self._bounds[key]

        current_probability_bound = self.probability(num_positives)

        if lookahead == 1:
            # one step left: the best we can do is the current maximum
            bound = current_probability_bound
        else:
            # either the next label is positive (with probability at most the
            # current bound) and we carry one more positive, or it is negative
            bound = (
                current_probability_bound * (1 + self.recurse(lookahead - 1, num_positives + 1))
                + (1 - current_probability_bound) * self.recurse(lookahead - 1, num_positives)
            )

        if self.memoize:
            self._bounds[key] = bound
        return bound

    def table(self, lookahead: int, num_positives: int) -> float:
        # row r holds bound(r, num_positives + j) for j = 0 .. lookahead - r
        row = [self.probability(num_positives + j) for j in range(lookahead)]

        for remaining in range(2, lookahead + 1):
            self._check_deadline()
            next_row = []
            for j in range(lookahead - remaining + 1):
                current_probability_bound = self.probability(num_positives + j)
                next_row.append(
                    current_probability_bound * (1 + row[j + 1])
                    + (1 - current_probability_bound) * row[j]
                )
            row = next_row

        return row[0]


def expected_search_utility_bound(
    problem: Any,
    train_ind: np.ndarray,
    observed_labels: np.ndarray,
    test_ind: np.ndarray,
    probability_bound: ProbabilityBound,
    lookahead: int,
    num_positives: int = 0,
    *,
    memoize: bool = False,
    check_monotonicity: bool = False,
    deadline: float | None = None,
) -> float:
    """Bound the (lookahead)-step expected count utility of the test points.

    Args:
        problem: Dataset the oracle works on; passed through untouched.
        train_ind: Indices of the observed points.
        observed_labels: Labels of the observed points.
        test_ind: Indices of the candidate points.
        probability_bound: Oracle bounding the maximum posterior probability
            after adding a number of positive observations.
        lookahead: Number of steps of lookahead to consider (>= 1).
        num_positives: Number of additional positive observations to
            consider having added.
        memoize: Reuse oracle values and sub-bounds within this call. The
            result is identical; the number of oracle calls drops from
            2**lookahead - 1 to lookahead.
        check_monotonicity: Raise if the oracle is seen to decrease as
            num_positives grows.
        deadline: Optional wall-clock budget in seconds.

    Returns:
        Upper bound on the expected number of positives found, in
        [0, lookahead].

    Raises:
        InvalidLookahead: If lookahead is not an integer >= 1.
        InvalidNumPositives: If num_positives is not an integer >= 0.
        InvalidProbability: If the oracle returns a value outside [0, 1].
        NonMonotoneOracle: If check_monotonicity is set and the oracle
            decreases in num_positives.
        DeadlineExceeded: If the deadline elapses.
    """
    lookahead = _validate_lookahead(lookahead)
    num_positives = _validate_num_positives(num_positives)

    evaluation = _BoundEvaluation(
        problem,
        train_ind,
        observed_labels,
        test_ind,
        probability_bound,
        memoize=memoize,
        check_monotonicity=check_monotonicity,
        deadline=deadline,
    )
    return evaluation.recurse(lookahead, num_positives)


def expected_search_utility_bound_table(
    problem: Any,
    train_ind: np.ndarray,
    observed_labels: np.ndarray,
    test_ind: np.ndarray,
    probability_bound: ProbabilityBound,
    lookahead: int,
    num_positives: int = 0,
    *,
    check_monotonicity: bool = False,
    deadline: float | None = None,
) -> float:
    """Same bound as ``expected_search_utility_bound``, computed bottom-up.

    Fills a table indexed by (remaining lookahead, num_positives) starting
    from lookahead 1, so it never recurses and calls the oracle exactly
    ``lookahead`` times.
    """
    lookahead = _validate_lookahead(lookahead)
    num_positives = _validate_num_positives(num_positives)

    evaluation = _BoundEvaluation(
        problem,
        train_ind,
        observed_labels,
        test_ind,
        probability_bound,
        memoize=True,
        check_monotonicity=check_monotonicity,
        deadline=deadline,
    )
    return evaluation.table(lookahead, num_positives)


def evaluate_with_trace(
    problem: Any,
    train_ind: np.ndarray,
    observed_labels: np.ndarray,
    test_ind: np.ndarray,
    probability_bound: ProbabilityBound,
    lookahead: int,
    num_positives: int = 0,
    *,
    method: str = "recursive",
    check_monotonicity: bool = False,
    deadline: float | None = None,
) -> BoundTrace:
    """Evaluate the bound with the given method and record its cost.

    Args:
        method: One of "recursive", "memoized" or "table".

    Returns:
        BoundTrace with the bound, the number of oracle calls and the
        elapsed wall-clock time.

    Raises:
        ValueError: If the method is unknown.
    """
    if method not in METHODS:
        raise ValueError(f"Unknown method: {method}. Available: {list(METHODS)}")

    lookahead = _validate_lookahead(lookahead)
    num_positives = _validate_num_positives(num_positives)

    evaluation = _BoundEvaluation(
        problem,
        train_ind,
        observed_labels,
        test_ind,
        probability_bound,
        memoize=method != "recursive",
        check_monotonicity=check_monotonicity,
        deadline=deadline,
    )

    start = time.perf_counter()
    if method == "table":
        bound = evaluation.table(lookahead, num_positives)
    else:
        bound = evaluation.recurse(lookahead, num_positives)
    elapsed = time.perf_counter() - start

    return BoundTrace(
        bound=bound,
        lookahead=lookahead,
        num_positives=num_positives,
        method=method,
        oracle_calls=evaluation.oracle_calls,
        elapsed=elapsed,
    )


def naive_oracle_calls(lookahead: int) -> int:
    """Oracle calls made by the plain recursion: one per tree node."""
    return 2 ** _validate_lookahead(lookahead) - 1


def memoized_oracle_calls(lookahead: int) -> int:
    """Oracle calls made when oracle values are reused within a call."""
    return _validate_lookahead(lookahead)
