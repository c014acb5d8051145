"""Probability bounds that ignore the geometry of the data."""

from typing import Any, Sequence

import numpy as np


def _positive_class(problem: Any) -> Any:
    return getattr(problem, "positive_class", 1)


class ConstantBound:
    """Returns the same bound for every state.

    Mostly useful for checking the recursion by hand.
    """

    def __init__(self, value: float):
        self.value = value

    def __call__(
        self,
        problem: Any,
        train_ind: np.ndarray,
        observed_labels: np.ndarray,
        test_ind: np.ndarray,
        num_positives: int,
    ) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"ConstantBound(value={self.value!r})"


class TabulatedBound:
    """Looks the bound up by number of added positives.

    The last entry is used for any count past the end of the table.
    """

    def __init__(self, values: Sequence[float]):
        if len(values) == 0:
            raise ValueError("TabulatedBound needs at least one value")
        self.values = list(values)

    def __call__(
        self,
        problem: Any,
        train_ind: np.ndarray,
        observed_labels: np.ndarray,
        test_ind: np.ndarray,
        num_positives: int,
    ) -> float:
        return self.values[min(num_positives, len(self.values) - 1)]

    def __repr__(self) -> str:
        return f"TabulatedBound(values={self.values!r})"


class BetaBernoulliBound:
    """Posterior mean of a shared positive rate under a Beta prior.

    With p positives among m observed labels and k more positives added,
    the posterior mean is (alpha + p + k) / (alpha + beta + m + k). Every
    test point shares the same rate, so this is also the maximum.
    """

    def __init__(self, alpha: float = 1.0, beta: float = 1.0):
        if alpha <= 0 or beta <= 0:
            raise ValueError(f"alpha and beta must be positive, got {alpha}, {beta}")
        self.alpha = alpha
        self.beta = beta

    def __call__(
        self,
        problem: Any,
        train_ind: np.ndarray,
        observed_labels: np.ndarray,
        test_ind: np.ndarray,
        num_positives: int,
    ) -> float:
        if len(test_ind) == 0:
            return 0.0

        labels = np.asarray(observed_labels)
        positives = int(np.sum(labels == _positive_class(problem)))
        observed = labels.shape[0]

        return (self.alpha + positives + num_positives) / (
            self.alpha + self.beta + observed + num_positives
        )

    def __repr__(self) -> str:
        return f"BetaBernoulliBound(alpha={self.alpha!r}, beta={self.beta!r})"
