"""k-nearest-neighbour probability bound.

Each point's posterior is a smoothed vote of its k nearest neighbours:

    (gamma * pi + positive neighbours) / (gamma + observed neighbours)

A hypothetical positive observation can raise this only if it lands among the
point's unobserved neighbours, so after j more positives the posterior of a
test point is at most

    (gamma * pi + positive + min(j, unobserved)) / (gamma + observed + min(j, unobserved))

The bound is the maximum of this over the test points. It never decreases in
j because every term added to the numerator is also added to the
denominator and the ratio never exceeds one.
"""

from typing import Any

import numpy as np
from scipy.spatial import cKDTree


def nearest_neighbors(data: np.ndarray, rows: np.ndarray, k: int) -> np.ndarray:
    """Indices of the k nearest other points for each of ``rows``.

    Args:
        data: (n, d) array of points.
        rows: Indices of the points to find neighbours for.
        k: Number of neighbours (capped at n - 1).

    Returns:
        (len(rows), k) array of indices into data.
    """
    rows = np.asarray(rows, dtype=int)
    n = data.shape[0]
    k = min(k, n - 1)

    if k < 1 or len(rows) == 0:
        return np.empty((len(rows), max(k, 0)), dtype=int)

    tree = cKDTree(data)
    _, idx = tree.query(data[rows], k=k + 1)

    # a point is not its own neighbour; drop it, or the farthest hit if a
    # duplicate displaced it
    is_self = idx == rows[:, None]
    order = np.argsort(is_self, axis=1, kind="stable")
    return np.take_along_axis(idx, order, axis=1)[:, :k]


class KnnProbabilityBound:
    """Maximum achievable k-NN posterior over the test points."""

    def __init__(
        self,
        k: int = 10,
        prior_strength: float = 0.1,
        prior_probability: float = 0.05,
    ):
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")
        if prior_strength <= 0:
            raise ValueError(f"prior_strength must be positive, got {prior_strength}")
        if not 0.0 <= prior_probability <= 1.0:
            raise ValueError(f"prior_probability must be in [0, 1], got {prior_probability}")

        self.k = k
        self.prior_strength = prior_strength
        self.prior_probability = prior_probability
        self._neighbors_cache: tuple[np.ndarray, np.ndarray, np.ndarray] | None = None

    def neighbors(self, problem: Any, test_ind: np.ndarray) -> np.ndarray:
        """Neighbour indices of the test points, reused while the inputs are unchanged."""
        cached = self._neighbors_cache
        if (
            cached is not None
            and cached[0] is problem.data
            and np.array_equal(cached[1], test_ind)
        ):
            return cached[2]

        neighbors = nearest_neighbors(problem.data, test_ind, self.k)
        self._neighbors_cache = (problem.data, test_ind.copy(), neighbors)
        return neighbors

    def posteriors(
        self,
        problem: Any,
        train_ind: np.ndarray,
        observed_labels: np.ndarray,
        test_ind: np.ndarray,
        num_positives: int,
    ) -> np.ndarray:
        """Per-test-point posterior bounds after num_positives more positives."""
        test_ind = np.asarray(test_ind, dtype=int)
        train_ind = np.asarray(train_ind, dtype=int)
        observed_labels = np.asarray(observed_labels)

        if len(test_ind) == 0:
            return np.zeros(0)

        neighbors = self.neighbors(problem, test_ind)

        positive_train = train_ind[observed_labels == problem.positive_class]
        observed = np.isin(neighbors, train_ind).sum(axis=1)
        positive = np.isin(neighbors, positive_train).sum(axis=1)
        unobserved = neighbors.shape[1] - observed

        added = np.minimum(num_positives, unobserved)
        numerator = self.prior_strength * self.prior_probability + positive + added
        denominator = self.prior_strength + observed + added

        return numerator / denominator

    def __call__(
        self,
        problem: Any,
        train_ind: np.ndarray,
        observed_labels: np.ndarray,
        test_ind: np.ndarray,
        num_positives: int,
    ) -> float:
        posteriors = self.posteriors(problem, train_ind, observed_labels, test_ind, num_positives)
        if posteriors.size == 0:
            return 0.0
        return float(np.max(posteriors))

    def __repr__(self) -> str:
        return (
            f"KnnProbabilityBound(k={self.k!r}, prior_strength={self.prior_strength!r}, "
            f"prior_probability={self.prior_probability!r})"
        )
