"""Configuration loading and management."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from asbound.bound import METHODS


class DataConfig(BaseModel):
    """Configuration for the problem data."""

    path: str = "data/toy_points.csv"
    label_column: str = "label"
    positive_class: int = 1
    train_fraction: float = Field(default=0.2, gt=0.0, lt=1.0)


class OracleConfig(BaseModel):
    """Configuration for the probability bound oracle."""

    type: str = "knn"
    params: dict[str, Any] = Field(default_factory=dict)


class BoundConfig(BaseModel):
    """Configuration for bound evaluation."""

    lookahead: int = Field(default=2, ge=1)
    lookaheads: list[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5, 6, 8, 10], min_length=1)
    num_positives: int = Field(default=0, ge=0)
    methods: list[str] = Field(default_factory=lambda: ["recursive", "memoized", "table"], min_length=1)
    check_monotonicity: bool = True
    deadline_seconds: float | None = Field(default=None, gt=0.0)
    # lookaheads above this are skipped for the plain recursion
    max_recursive_lookahead: int = Field(default=14, ge=1)

    @field_validator("lookaheads")
    @classmethod
    def _positive_lookaheads(cls, value: list[int]) -> list[int]:
        if any(lookahead < 1 for lookahead in value):
            raise ValueError(f"lookaheads must all be >= 1, got {value}")
        return value

    @field_validator("methods")
    @classmethod
    def _known_methods(cls, value: list[str]) -> list[str]:
        unknown = [method for method in value if method not in METHODS]
        if unknown:
            raise ValueError(f"Unknown methods {unknown}. Available: {list(METHODS)}")
        return value


class OutputConfig(BaseModel):
    """Configuration for output settings."""

    dir: str = "results"
    save_raw: bool = True
    save_plots: bool = True


class Config(BaseModel):
    """Main configuration model."""

    data: DataConfig = Field(default_factory=DataConfig)
    oracle: OracleConfig = Field(default_factory=OracleConfig)
    bound: BoundConfig = Field(default_factory=BoundConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    seed: int = 42


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:-default}
        pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

        def replace(match: re.Match) -> str:
            var_name = match.group(1)
            default = match.group(2)
            return os.environ.get(var_name, default if default is not None else "")

        return re.sub(pattern, replace, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def load_config(config_path: str | Path) -> Config:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Parsed Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the config file is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    # Expand environment variables
    expanded_config = expand_env_vars(raw_config)

    return Config(**expanded_config)
