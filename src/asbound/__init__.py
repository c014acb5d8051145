"""
Active search bounds: upper bounds on l-step expected search utility.

This package bounds the expected number of positives found by the next
``lookahead`` queries of an active search, given an oracle bounding the
posterior probability after hypothetical positive observations.
"""

from asbound.bound import (
    BoundTrace,
    ProbabilityBound,
    evaluate_with_trace,
    expected_search_utility_bound,
    expected_search_utility_bound_table,
)
from asbound.errors import (
    BoundError,
    DeadlineExceeded,
    InvalidLookahead,
    InvalidNumPositives,
    InvalidProbability,
    NonMonotoneOracle,
)

__version__ = "0.1.0"

__all__ = [
    "BoundError",
    "BoundTrace",
    "DeadlineExceeded",
    "InvalidLookahead",
    "InvalidNumPositives",
    "InvalidProbability",
    "NonMonotoneOracle",
    "ProbabilityBound",
    "evaluate_with_trace",
    "expected_search_utility_bound",
    "expected_search_utility_bound_table",
]
