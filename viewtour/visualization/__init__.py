"""
Visualization tools for tour planning.

This module provides:
    - 3D tour plots
    - Per-sample coverage bar charts
"""

from viewtour.visualization.plotting import (
    plot_tour,
    plot_coverage_counts,
    plot_solution,
)

__all__ = [
    "plot_tour",
    "plot_coverage_counts",
    "plot_solution",
]
