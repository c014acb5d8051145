"""Tests for the command-line interface."""

from typer.testing import CliRunner

from asbound.cli import app

runner = CliRunner()


class TestEvaluate:
    """Tests for the evaluate command."""

    def test_evaluate(self, write_config):
        """A bound is printed."""
        result = runner.invoke(app, ["evaluate", "--config", str(write_config())])

        assert result.exit_code == 0, result.output
        assert "Bound:" in result.output
        assert "Oracle calls: 3" in result.output

    def test_overrides(self, write_config):
        """Command-line options override the config."""
        result = runner.invoke(
            app,
            [
                "evaluate",
                "--config",
                str(write_config()),
                "--lookahead",
                "4",
                "--num-positives",
                "1",
                "--method",
                "recursive",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Lookahead: 4  Added positives: 1" in result.output
        assert "Oracle calls: 15" in result.output

    def test_invalid_lookahead(self, write_config):
        """Bound errors exit with status 1."""
        result = runner.invoke(
            app, ["evaluate", "--config", str(write_config()), "--lookahead", "0"]
        )
        assert result.exit_code == 1

    def test_unknown_oracle(self, write_config):
        """Unknown oracles exit with status 1."""
        result = runner.invoke(
            app, ["evaluate", "--config", str(write_config(oracle={"type": "svm"}))]
        )
        assert result.exit_code == 1
        assert "Unknown oracle type" in result.output

    def test_missing_data(self, write_config, tmp_path):
        """A missing data file is reported, not raised."""
        path = write_config(data={"path": str(tmp_path / "absent.csv")})
        result = runner.invoke(app, ["evaluate", "--config", str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Data file not found" in result.output

    def test_bad_train_fraction(self, write_config):
        """Split settings outside (0, 1) exit with status 1."""
        path = write_config(data={"train_fraction": 1.0})
        result = runner.invoke(app, ["evaluate", "--config", str(path)])

        assert result.exit_code == 1
        assert "train_fraction" in result.output

    def test_too_few_points(self, write_config, tmp_path):
        """Data that cannot be split exits with status 1."""
        data = tmp_path / "single.csv"
        data.write_text("x1,x2,label\n0.0,0.0,1\n")
        path = write_config(data={"path": str(data)})
        result = runner.invoke(app, ["evaluate", "--config", str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "at least two points" in result.output


class TestSweep:
    """Tests for the sweep command."""

    def test_sweep_without_plots(self, write_config):
        """The summary lists every lookahead."""
        result = runner.invoke(
            app, ["sweep", "--config", str(write_config()), "--no-plots", "--quiet"]
        )

        assert result.exit_code == 0, result.output
        assert "l= 1" in result.output
        assert "l= 3" in result.output
        assert "Done!" in result.output

    def test_sweep_with_plots(self, write_config, tmp_path):
        """Plots are written to the output directory."""
        result = runner.invoke(app, ["sweep", "--config", str(write_config()), "--quiet"])

        assert result.exit_code == 0, result.output
        assert "bound_curve" in result.output
        assert list((tmp_path / "results").glob("bound_curve_*.png"))

    def test_sweep_failure(self, write_config):
        """A non-monotone oracle aborts the sweep with status 1."""
        path = write_config(oracle={"type": "tabulated", "params": {"values": [0.9, 0.1]}})
        result = runner.invoke(app, ["sweep", "--config", str(path), "--no-plots", "--quiet"])

        assert result.exit_code == 1

    def test_sweep_unknown_oracle(self, write_config):
        """Unknown oracles are reported and exit with status 1."""
        path = write_config(oracle={"type": "svm"})
        result = runner.invoke(app, ["sweep", "--config", str(path), "--no-plots", "--quiet"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Unknown oracle type" in result.output


class TestInfoCommands:
    """Tests for the informational commands."""

    def test_oracles(self):
        """Registered oracles are listed."""
        result = runner.invoke(app, ["oracles"])

        assert result.exit_code == 0
        for name in ("constant", "tabulated", "beta_bernoulli", "knn"):
            assert name in result.output

    def test_cost(self):
        """Oracle calls per method."""
        result = runner.invoke(app, ["cost", "4"])

        assert result.exit_code == 0
        assert "recursive: 15" in result.output
        assert "memoized:  4" in result.output

    def test_cost_invalid(self):
        """Non-positive lookahead is rejected."""
        result = runner.invoke(app, ["cost", "0"])
        assert result.exit_code == 1
