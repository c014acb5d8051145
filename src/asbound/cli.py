"""Command-line interface for search utility bounds."""

import random
from pathlib import Path
from typing import Optional

import typer

from asbound.bound import evaluate_with_trace, memoized_oracle_calls, naive_oracle_calls
from asbound.config import Config, load_config
from asbound.errors import BoundError
from asbound.experiments.lookahead_sweep import run_lookahead_sweep
from asbound.oracles import ORACLES, build_oracle
from asbound.plotting import generate_all_plots
from asbound.problem import load_problem, observed_labels_for, split_indices
from asbound.utils import set_seed, setup_environment

app = typer.Typer(
    name="asbound",
    help="Upper bounds on the expected utility of active search.",
    add_completion=False,
)


def _load_config_or_exit(path: Path) -> Config:
    try:
        return load_config(path)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("evaluate")
def cmd_evaluate(
    config: Path = typer.Option(
        "configs/default.yaml",
        "--config",
        "-c",
        help="Path to configuration YAML file.",
    ),
    lookahead: Optional[int] = typer.Option(
        None,
        "--lookahead",
        "-l",
        help="Steps of lookahead (overrides config).",
    ),
    num_positives: Optional[int] = typer.Option(
        None,
        "--num-positives",
        "-k",
        help="Additional positives assumed already observed (overrides config).",
    ),
    method: str = typer.Option(
        "memoized",
        "--method",
        help="Evaluation method: recursive, memoized or table.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        "-s",
        help="Random seed (overrides config).",
    ),
) -> None:
    """Evaluate the bound once for the configured problem and oracle."""
    setup_environment()

    cfg = _load_config_or_exit(config)

    if seed is not None:
        cfg.seed = seed
    if lookahead is not None:
        cfg.bound.lookahead = lookahead
    if num_positives is not None:
        cfg.bound.num_positives = num_positives

    rng = random.Random(cfg.seed)
    set_seed(cfg.seed)

    try:
        problem = load_problem(
            cfg.data.path,
            label_column=cfg.data.label_column,
            positive_class=cfg.data.positive_class,
        )
        train_ind, test_ind = split_indices(problem, cfg.data.train_fraction, rng)
        oracle = build_oracle(cfg.oracle.type, cfg.oracle.params)
        trace = evaluate_with_trace(
            problem,
            train_ind,
            observed_labels_for(problem, train_ind),
            test_ind,
            oracle,
            cfg.bound.lookahead,
            cfg.bound.num_positives,
            method=method,
            check_monotonicity=cfg.bound.check_monotonicity,
            deadline=cfg.bound.deadline_seconds,
        )
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Oracle: {oracle!r}")
    typer.echo(f"Observed: {len(train_ind)}  Candidates: {len(test_ind)}")
    typer.echo(f"Lookahead: {trace.lookahead}  Added positives: {trace.num_positives}")
    typer.echo(f"Bound: {trace.bound:.6f}")
    typer.echo(f"Oracle calls: {trace.oracle_calls} ({trace.method}, {trace.elapsed:.4f}s)")


@app.command("sweep")
def cmd_sweep(
    config: Path = typer.Option(
        "configs/default.yaml",
        "--config",
        "-c",
        help="Path to configuration YAML file.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        "-s",
        help="Random seed (overrides config).",
    ),
    no_plots: bool = typer.Option(
        False,
        "--no-plots",
        help="Skip generating plots.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Hide progress output.",
    ),
) -> None:
    """Run the lookahead sweep.

    Evaluates the bound for each configured lookahead and method and
    reports how many oracle calls each needed.
    """
    setup_environment()

    typer.echo(f"Loading configuration from {config}")
    cfg = _load_config_or_exit(config)

    if seed is not None:
        cfg.seed = seed
        typer.echo(f"Using seed: {seed}")

    typer.echo(f"Oracle: {cfg.oracle.type}")
    typer.echo(f"Lookaheads: {cfg.bound.lookaheads}")
    typer.echo(f"Methods: {cfg.bound.methods}")
    typer.echo()

    try:
        results = run_lookahead_sweep(cfg, verbose=not quiet)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo()
    typer.echo("Results summary:")
    for lookahead, agg in sorted(results["aggregated"].items()):
        calls = ", ".join(f"{m}={c}" for m, c in agg["oracle_calls"].items())
        typer.echo(
            f"  l={lookahead:2d}: bound={agg['bound']:.4f} "
            f"(per step {agg['per_step_bound']:.4f}) calls: {calls}"
        )

    typer.echo()
    typer.echo("Oracle call growth per step of lookahead:")
    for method, growth in results["growth"].items():
        typer.echo(f"  {method}: x{growth['growth_factor']:.3f}")

    if not no_plots and cfg.output.save_plots and results["aggregated"]:
        typer.echo()
        typer.echo("Generating plots...")

        plot_paths = generate_all_plots(results, cfg.output.dir, results["timestamp"])
        for name, path in plot_paths.items():
            typer.echo(f"  {name}: {path}")

    typer.echo()
    typer.echo("Done!")


@app.command("oracles")
def cmd_oracles() -> None:
    """List the available probability bound oracles."""
    for name, oracle_cls in ORACLES.items():
        doc = (oracle_cls.__doc__ or "").strip().splitlines()
        typer.echo(f"  {name}: {doc[0] if doc else ''}")


@app.command("cost")
def cmd_cost(
    lookahead: int = typer.Argument(..., help="Steps of lookahead."),
) -> None:
    """Show how many oracle calls each evaluation method needs."""
    try:
        naive = naive_oracle_calls(lookahead)
        memoized = memoized_oracle_calls(lookahead)
    except BoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Lookahead {lookahead}:")
    typer.echo(f"  recursive: {naive}")
    typer.echo(f"  memoized:  {memoized}")
    typer.echo(f"  table:     {memoized}")


if __name__ == "__main__":
    app()
