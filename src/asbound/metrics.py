"""Summaries of bound evaluations across lookaheads."""

import numpy as np
from scipy import stats


def per_step_bound(bound: float, lookahead: int) -> float:
    """Bound on the expected number of positives per remaining step.

    Args:
        bound: Expected count utility bound.
        lookahead: Number of steps the bound covers.

    Returns:
        bound / lookahead, which lies in [0, 1] for a valid bound.
    """
    if lookahead < 1:
        raise ValueError(f"lookahead must be >= 1, got {lookahead}")
    return bound / lookahead


def check_range(bound: float, lookahead: int, tol: float = 1e-12) -> bool:
    """Whether the bound lies in [0, lookahead]."""
    return -tol <= bound <= lookahead + tol


def estimate_growth_rate(
    lookaheads: list[int],
    oracle_calls: list[int],
) -> dict[str, float]:
    """Fit log(oracle calls) against lookahead.

    For the plain recursion the fitted growth factor approaches 2; for the
    memoized forms it falls towards 1.

    Args:
        lookaheads: Lookahead values.
        oracle_calls: Oracle calls made at each lookahead.

    Returns:
        Dictionary with 'growth_factor', 'slope' and 'r_value'.
    """
    if len(lookaheads) < 2 or len(set(lookaheads)) < 2:
        return {"growth_factor": float("nan"), "slope": float("nan"), "r_value": 0.0}

    x = np.asarray(lookaheads, dtype=float)
    y = np.log(np.maximum(np.asarray(oracle_calls, dtype=float), 1.0))

    if np.std(y) == 0:
        return {"growth_factor": 1.0, "slope": 0.0, "r_value": 0.0}

    fit = stats.linregress(x, y)

    return {
        "growth_factor": float(np.exp(fit.slope)),
        "slope": float(fit.slope),
        "r_value": float(fit.rvalue),
    }


def aggregate_by_lookahead(
    records: list[dict],
    lookahead_key: str = "lookahead",
    bound_key: str = "bound",
) -> dict[int, dict]:
    """Aggregate sweep records by lookahead.

    Args:
        records: One dictionary per evaluation, with at least 'lookahead',
            'bound', 'method', 'oracle_calls' and 'elapsed'.
        lookahead_key: Key for the lookahead in records.
        bound_key: Key for the bound in records.

    Returns:
        Dictionary mapping lookahead to the bound (taken from the first
        method), the largest disagreement between methods, and per-method
        oracle calls and elapsed time.
    """
    by_lookahead: dict[int, list[dict]] = {}

    for record in records:
        lookahead = record[lookahead_key]
        if lookahead not in by_lookahead:
            by_lookahead[lookahead] = []
        by_lookahead[lookahead].append(record)

    aggregated = {}
    for lookahead, group in sorted(by_lookahead.items()):
        bounds = [r[bound_key] for r in group]
        aggregated[lookahead] = {
            "lookahead": lookahead,
            "bound": bounds[0],
            "per_step_bound": per_step_bound(bounds[0], lookahead),
            "max_method_difference": float(max(bounds) - min(bounds)),
            "in_range": all(check_range(b, lookahead) for b in bounds),
            "oracle_calls": {r["method"]: r["oracle_calls"] for r in group},
            "elapsed": {r["method"]: r["elapsed"] for r in group},
        }

    return aggregated
