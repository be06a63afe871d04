"""Utility functions for Tensor SAT."""

from .convert import to_numpy, from_numpy, to_torch, from_torch
from .stats import collect_stats, format_stats

__all__ = ["to_numpy", "from_numpy", "to_torch", "from_torch", "collect_stats", "format_stats"]
