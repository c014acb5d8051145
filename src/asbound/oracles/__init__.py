"""Probability bound oracles for the search utility bound."""

from typing import Any

from asbound.oracles.knn import KnnProbabilityBound
from asbound.oracles.simple import BetaBernoulliBound, ConstantBound, TabulatedBound

__all__ = [
    "BetaBernoulliBound",
    "ConstantBound",
    "KnnProbabilityBound",
    "TabulatedBound",
    "build_oracle",
    "get_oracle",
]


# Registry of available oracles
ORACLES = {
    "constant": ConstantBound,
    "tabulated": TabulatedBound,
    "beta_bernoulli": BetaBernoulliBound,
    "knn": KnnProbabilityBound,
}


def get_oracle(oracle_type: str):
    """Get an oracle class by type name.

    Args:
        oracle_type: Name of the oracle (e.g., "knn", "beta_bernoulli").

    Returns:
        Oracle class.

    Raises:
        ValueError: If oracle type is unknown.
    """
    if oracle_type not in ORACLES:
        raise ValueError(
            f"Unknown oracle type: {oracle_type}. "
            f"Available: {list(ORACLES.keys())}"
        )
    return ORACLES[oracle_type]


def build_oracle(oracle_type: str, params: dict[str, Any] | None = None):
    """Instantiate an oracle from its type name and keyword parameters."""
    oracle_cls = get_oracle(oracle_type)
    try:
        return oracle_cls(**(params or {}))
    except TypeError as e:
        raise ValueError(f"Invalid parameters for oracle '{oracle_type}': {e}") from e
