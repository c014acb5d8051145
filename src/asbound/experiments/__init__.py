"""Experiments module for running lookahead sweeps."""

from asbound.experiments.lookahead_sweep import run_lookahead_sweep

__all__ = ["run_lookahead_sweep"]
