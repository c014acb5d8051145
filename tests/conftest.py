"""Shared fixtures for the test suite."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
import yaml

from asbound.problem import Problem


class CountingOracle:
    """Wraps an oracle and records every call."""

    def __init__(self, oracle):
        self.oracle = oracle
        self.calls = []

    def __call__(self, problem, train_ind, observed_labels, test_ind, num_positives):
        self.calls.append(num_positives)
        return self.oracle(problem, train_ind, observed_labels, test_ind, num_positives)


@pytest.fixture
def line_problem():
    """Six points on a line: two positives near the origin, the rest far away."""
    data = np.array([[0.0], [1.0], [2.0], [10.0], [11.0], [12.0]])
    labels = np.array([1, 1, 0, 0, 0, 0])
    return Problem(data=data, labels=labels)


@pytest.fixture
def line_state(line_problem):
    """Observed points 0 and 3, candidates everything else."""
    train_ind = np.array([0, 3])
    test_ind = np.array([1, 2, 4, 5])
    return line_problem, train_ind, line_problem.labels[train_ind], test_ind


@pytest.fixture
def points_csv(tmp_path):
    """Small two-cluster CSV with a label column."""
    rng = np.random.default_rng(0)
    positives = rng.normal(loc=2.0, scale=0.5, size=(6, 2))
    negatives = rng.normal(loc=-2.0, scale=0.5, size=(18, 2))

    path = tmp_path / "points.csv"
    lines = ["x1,x2,label"]
    for x1, x2 in positives:
        lines.append(f"{x1:.6f},{x2:.6f},1")
    for x1, x2 in negatives:
        lines.append(f"{x1:.6f},{x2:.6f},0")
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def write_config(tmp_path, points_csv):
    """Write a YAML config pointing at the test data and a temp output dir."""

    def _write(**overrides):
        raw = {
            "data": {"path": str(points_csv), "train_fraction": 0.25},
            "oracle": {"type": "knn", "params": {"k": 4}},
            "bound": {
                "lookahead": 3,
                "lookaheads": [1, 2, 3],
                "methods": ["recursive", "memoized", "table"],
            },
            "output": {"dir": str(tmp_path / "results")},
            "seed": 0,
        }
        for section, values in overrides.items():
            if isinstance(values, dict):
                raw.setdefault(section, {}).update(values)
            else:
                raw[section] = values

        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(raw))
        return path

    return _write


@pytest.fixture
def counting():
    """Factory wrapping an oracle so its calls can be inspected."""
    return CountingOracle
