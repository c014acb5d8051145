"""Active search problems: points, labels and train/test splits."""

import random
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class Problem:
    """A labeled dataset for active search.

    Attributes:
        data: (n, d) array of input points.
        labels: (n,) array of labels. ``positive_class`` is tested against
            any other class.
        positive_class: The label of the class of interest.
    """

    data: np.ndarray
    labels: np.ndarray
    positive_class: int = 1

    def __post_init__(self) -> None:
        data = np.asarray(self.data, dtype=float)
        labels = np.asarray(self.labels)

        if data.ndim != 2:
            raise ValueError(f"data must be 2-dimensional, got shape {data.shape}")
        if labels.ndim != 1 or labels.shape[0] != data.shape[0]:
            raise ValueError(
                f"labels must have shape ({data.shape[0]},), got {labels.shape}"
            )

        object.__setattr__(self, "data", data)
        object.__setattr__(self, "labels", labels)

    @property
    def n(self) -> int:
        return self.data.shape[0]

    @property
    def d(self) -> int:
        return self.data.shape[1]

    def is_positive(self, indices: np.ndarray | None = None) -> np.ndarray:
        """Boolean mask of points belonging to the class of interest."""
        labels = self.labels if indices is None else self.labels[indices]
        return labels == self.positive_class


def load_problem(
    path: str | Path,
    label_column: str = "label",
    positive_class: int = 1,
) -> Problem:
    """Load a problem from a CSV file.

    Every column other than ``label_column`` is used as a feature.

    Args:
        path: Path to the CSV file.
        label_column: Name of the label column.
        positive_class: The label of the class of interest.

    Returns:
        Problem built from the file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the label column is missing or there are no features.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    df = pd.read_csv(path)

    if label_column not in df.columns:
        raise ValueError(f"Label column '{label_column}' not found in {path}")

    features = df.drop(columns=[label_column])
    if features.shape[1] == 0:
        raise ValueError(f"No feature columns found in {path}")

    return Problem(
        data=features.to_numpy(dtype=float),
        labels=df[label_column].to_numpy(),
        positive_class=positive_class,
    )


def split_indices(
    problem: Problem,
    train_fraction: float = 0.1,
    rng: random.Random | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Randomly split point indices into observed and candidate sets.

    At least one point ends up on each side.

    Args:
        problem: The problem to split.
        train_fraction: Fraction of points treated as already observed.
        rng: Random number generator (uses a fresh one if None).

    Returns:
        Tuple of (train_ind, test_ind), each sorted.
    """
    if rng is None:
        rng = random.Random()

    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")
    if problem.n < 2:
        raise ValueError("Need at least two points to split into train and test")

    n_train = min(max(1, round(train_fraction * problem.n)), problem.n - 1)
    train = rng.sample(range(problem.n), n_train)

    train_ind = np.array(sorted(train), dtype=int)
    test_ind = np.setdiff1d(np.arange(problem.n), train_ind)
    return train_ind, test_ind


def observed_labels_for(problem: Problem, train_ind: np.ndarray) -> np.ndarray:
    """Labels of the observed points."""
    return problem.labels[train_ind]
