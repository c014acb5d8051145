"""Plotting functions for lookahead sweep results."""

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np


def plot_bound_curve(
    aggregated: dict[int, dict],
    output_path: str | Path,
    title: str = "Search Utility Bound vs Lookahead",
) -> None:
    """Plot the bound against lookahead with the trivial ceiling.

    Args:
        aggregated: Dictionary mapping lookahead to aggregated statistics.
        output_path: Path to save the plot.
        title: Plot title.
    """
    lookaheads = sorted(aggregated.keys())
    bounds = [aggregated[la]["bound"] for la in lookaheads]

    fig, ax = plt.subplots(figsize=(10, 6))

    ax.plot(lookaheads, bounds, "o-", linewidth=2, markersize=8, label="Bound")
    ax.plot(lookaheads, lookaheads, "k--", alpha=0.5, label="Lookahead (trivial bound)")

    ax.set_xlabel("Lookahead (l)", fontsize=12)
    ax.set_ylabel("Expected Positives Found (upper bound)", fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.set_ylim(0, max(lookaheads) * 1.05)
    ax.legend(loc="best")
    ax.grid(True, alpha=0.3)
    ax.set_xticks(lookaheads)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_oracle_calls(
    aggregated: dict[int, dict],
    output_path: str | Path,
    title: str = "Oracle Calls vs Lookahead",
) -> None:
    """Plot oracle calls per method on a log scale.

    Args:
        aggregated: Dictionary mapping lookahead to aggregated statistics.
        output_path: Path to save the plot.
        title: Plot title.
    """
    lookaheads = sorted(aggregated.keys())
    methods = sorted({m for la in lookaheads for m in aggregated[la]["oracle_calls"]})

    fig, ax = plt.subplots(figsize=(10, 6))

    markers = ["o", "s", "^", "d"]
    for i, method in enumerate(methods):
        x = [la for la in lookaheads if method in aggregated[la]["oracle_calls"]]
        y = [aggregated[la]["oracle_calls"][method] for la in x]
        ax.plot(x, y, f"{markers[i % len(markers)]}-", label=method, linewidth=1.5, markersize=6)

    ax.set_xlabel("Lookahead (l)", fontsize=12)
    ax.set_ylabel("Oracle Calls", fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.set_yscale("log")
    ax.legend(loc="best")
    ax.grid(True, alpha=0.3, which="both")
    ax.set_xticks(lookaheads)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_per_step_bound(
    aggregated: dict[int, dict],
    output_path: str | Path,
    title: str = "Per-Step Bound vs Lookahead",
) -> None:
    """Bar chart of bound / lookahead.

    Args:
        aggregated: Dictionary mapping lookahead to aggregated statistics.
        output_path: Path to save the plot.
        title: Plot title.
    """
    lookaheads = sorted(aggregated.keys())
    per_step = np.array([aggregated[la]["per_step_bound"] for la in lookaheads])

    fig, ax = plt.subplots(figsize=(10, 6))

    ax.bar(lookaheads, per_step, width=0.6, alpha=0.7, edgecolor="black")

    ax.set_xlabel("Lookahead (l)", fontsize=12)
    ax.set_ylabel("Bound / Lookahead", fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.set_ylim(0, 1.05)
    ax.grid(True, alpha=0.3, axis="y")
    ax.set_xticks(lookaheads)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()


def generate_all_plots(
    sweep_results: dict[str, Any],
    output_dir: str | Path,
    timestamp: str,
) -> dict[str, str]:
    """Generate all plots from sweep results.

    Args:
        sweep_results: Results from run_lookahead_sweep.
        output_dir: Directory to save plots.
        timestamp: Timestamp for file naming.

    Returns:
        Dictionary mapping plot names to file paths.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    aggregated = sweep_results["aggregated"]
    plot_paths = {}

    bound_path = output_dir / f"bound_curve_{timestamp}.png"
    plot_bound_curve(aggregated, bound_path)
    plot_paths["bound_curve"] = str(bound_path)

    calls_path = output_dir / f"oracle_calls_{timestamp}.png"
    plot_oracle_calls(aggregated, calls_path)
    plot_paths["oracle_calls"] = str(calls_path)

    step_path = output_dir / f"per_step_bound_{timestamp}.png"
    plot_per_step_bound(aggregated, step_path)
    plot_paths["per_step_bound"] = str(step_path)

    return plot_paths
