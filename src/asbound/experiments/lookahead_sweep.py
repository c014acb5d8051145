"""Lookahead sweep.

This experiment evaluates the search utility bound over a range of
lookaheads with each evaluation method, recording the bound and what it cost.
"""

import random
from typing import Any

import pandas as pd
from tqdm import tqdm

from asbound.bound import evaluate_with_trace
from asbound.config import Config
from asbound.metrics import aggregate_by_lookahead, estimate_growth_rate
from asbound.oracles import build_oracle
from asbound.problem import load_problem, observed_labels_for, split_indices
from asbound.utils import ensure_dir, get_timestamp, set_seed, stable_hash


def run_lookahead_sweep(
    config: Config,
    verbose: bool = True,
) -> dict[str, Any]:
    """Run the lookahead sweep.

    For each lookahead in config.bound.lookaheads and each method in
    config.bound.methods, evaluate the bound from the same observed state
    and record the bound, the number of oracle calls and the elapsed time.
    The plain recursion is skipped above config.bound.max_recursive_lookahead.

    Args:
        config: Experiment configuration.
        verbose: If True, show progress bars.

    Returns:
        Dictionary with 'results', 'aggregated', 'growth', 'output_paths'
        and 'timestamp'.
    """
    # Set seed for reproducibility
    rng = random.Random(config.seed)
    set_seed(config.seed)

    problem = load_problem(
        config.data.path,
        label_column=config.data.label_column,
        positive_class=config.data.positive_class,
    )
    train_ind, test_ind = split_indices(problem, config.data.train_fraction, rng)
    observed_labels = observed_labels_for(problem, train_ind)

    if verbose:
        print(f"Loaded {problem.n} points in {problem.d} dimensions")
        print(f"Observed {len(train_ind)} points, {len(test_ind)} candidates")

    oracle = build_oracle(config.oracle.type, config.oracle.params)
    if verbose:
        print(f"Using oracle: {oracle!r}")

    config_hash = stable_hash(config.model_dump())[:12]

    jobs = [
        (lookahead, method)
        for lookahead in sorted(set(config.bound.lookaheads))
        for method in config.bound.methods
        if not (method == "recursive" and lookahead > config.bound.max_recursive_lookahead)
    ]

    results: list[dict[str, Any]] = []

    pbar = tqdm(total=len(jobs), disable=not verbose, desc="Lookahead Sweep")

    for lookahead, method in jobs:
        if verbose:
            pbar.set_description(f"l={lookahead} {method}")

        trace = evaluate_with_trace(
            problem,
            train_ind,
            observed_labels,
            test_ind,
            oracle,
            lookahead,
            config.bound.num_positives,
            method=method,
            check_monotonicity=config.bound.check_monotonicity,
            deadline=config.bound.deadline_seconds,
        )

        results.append(
            {
                "lookahead": trace.lookahead,
                "num_positives": trace.num_positives,
                "method": trace.method,
                "bound": trace.bound,
                "oracle_calls": trace.oracle_calls,
                "elapsed": trace.elapsed,
                "oracle": config.oracle.type,
                "config_hash": config_hash,
            }
        )

        pbar.update(1)

    pbar.close()

    aggregated = aggregate_by_lookahead(results)

    growth = {}
    for method in config.bound.methods:
        method_results = [r for r in results if r["method"] == method]
        growth[method] = estimate_growth_rate(
            [r["lookahead"] for r in method_results],
            [r["oracle_calls"] for r in method_results],
        )

    # Save results
    output_dir = ensure_dir(config.output.dir)
    timestamp = get_timestamp()

    output_paths = {}

    if config.output.save_raw:
        raw_path = output_dir / f"lookahead_sweep_{timestamp}.csv"
        df_raw = pd.DataFrame(results)
        df_raw.to_csv(raw_path, index=False)
        output_paths["raw"] = str(raw_path)
        if verbose:
            print(f"Saved raw results to {raw_path}")

    # Save aggregated results, one column per method for the cost fields
    agg_path = output_dir / f"lookahead_sweep_{timestamp}_agg.csv"
    agg_rows = []
    for lookahead, agg in aggregated.items():
        row = {k: v for k, v in agg.items() if not isinstance(v, dict)}
        for method, calls in agg["oracle_calls"].items():
            row[f"oracle_calls_{method}"] = calls
        for method, elapsed in agg["elapsed"].items():
            row[f"elapsed_{method}"] = elapsed
        agg_rows.append(row)
    pd.DataFrame(agg_rows).to_csv(agg_path, index=False)
    output_paths["aggregated"] = str(agg_path)
    if verbose:
        print(f"Saved aggregated results to {agg_path}")

    return {
        "results": results,
        "aggregated": aggregated,
        "growth": growth,
        "output_paths": output_paths,
        "timestamp": timestamp,
    }
