"""Tests for problem loading and splitting."""

import random

import numpy as np
import pytest

from asbound.problem import Problem, load_problem, observed_labels_for, split_indices


class TestProblem:
    """Tests for the Problem container."""

    def test_shapes(self, line_problem):
        """n and d come from the data."""
        assert line_problem.n == 6
        assert line_problem.d == 1

    def test_is_positive(self, line_problem):
        """Mask of the class of interest."""
        assert line_problem.is_positive().tolist() == [True, True, False, False, False, False]
        assert line_problem.is_positive(np.array([1, 2])).tolist() == [True, False]

    def test_other_positive_class(self):
        """Any label can be the class of interest."""
        problem = Problem(data=[[0.0], [1.0]], labels=[3, 1], positive_class=3)
        assert problem.is_positive().tolist() == [True, False]

    def test_lists_converted(self):
        """Plain lists become float arrays."""
        problem = Problem(data=[[0, 1], [2, 3]], labels=[0, 1])
        assert problem.data.dtype == float
        assert problem.d == 2

    def test_bad_data_shape(self):
        """Data must be a matrix."""
        with pytest.raises(ValueError, match="2-dimensional"):
            Problem(data=[1.0, 2.0], labels=[0, 1])

    def test_label_mismatch(self):
        """One label per point."""
        with pytest.raises(ValueError, match="labels must have shape"):
            Problem(data=[[1.0], [2.0]], labels=[0, 1, 1])


class TestLoadProblem:
    """Tests for reading problems from CSV."""

    def test_load(self, points_csv):
        """Feature columns and labels are separated."""
        problem = load_problem(points_csv)

        assert problem.n == 24
        assert problem.d == 2
        assert int(problem.is_positive().sum()) == 6

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_problem(tmp_path / "nope.csv")

    def test_missing_label_column(self, points_csv):
        """The label column must exist."""
        with pytest.raises(ValueError, match="Label column"):
            load_problem(points_csv, label_column="target")

    def test_no_features(self, tmp_path):
        """A file with only labels has nothing to search over."""
        path = tmp_path / "labels.csv"
        path.write_text("label\n1\n0\n")
        with pytest.raises(ValueError, match="No feature columns"):
            load_problem(path)


class TestSplitIndices:
    """Tests for train/test splitting."""

    def test_partition(self, line_problem):
        """Train and test cover every point exactly once."""
        train_ind, test_ind = split_indices(line_problem, 0.5, random.Random(0))

        assert len(train_ind) == 3
        assert len(np.intersect1d(train_ind, test_ind)) == 0
        assert sorted(np.concatenate([train_ind, test_ind]).tolist()) == list(range(6))

    def test_reproducible(self, line_problem):
        """Same seed produces the same split."""
        first = split_indices(line_problem, 0.3, random.Random(42))
        second = split_indices(line_problem, 0.3, random.Random(42))

        np.testing.assert_array_equal(first[0], second[0])
        np.testing.assert_array_equal(first[1], second[1])

    def test_both_sides_non_empty(self, line_problem):
        """Tiny fractions still observe one point and leave one candidate."""
        train_ind, test_ind = split_indices(line_problem, 0.01, random.Random(1))
        assert len(train_ind) == 1
        assert len(test_ind) == 5

        train_ind, test_ind = split_indices(line_problem, 0.99, random.Random(1))
        assert len(train_ind) == 5
        assert len(test_ind) == 1

    @pytest.mark.parametrize("fraction", [0.0, 1.0, -0.5])
    def test_invalid_fraction(self, line_problem, fraction):
        """The fraction must be strictly between 0 and 1."""
        with pytest.raises(ValueError):
            split_indices(line_problem, fraction)

    def test_observed_labels(self, line_problem):
        """Observed labels line up with the training indices."""
        labels = observed_labels_for(line_problem, np.array([1, 4]))
        assert labels.tolist() == [1, 0]
