"""
Tour construction module.

This module provides:
    - AdjacencyOracle: Directed connectivity queries
    - CoverageTracker: Incremental per-sample coverage accounting
    - TourBuilder: Greedy constrained-insertion tour construction
    - MetricsCalculator: Distance, precision and objective
    - SolutionValidator: Independent solution checks
    - plan_tour: Build, finalize and validate in one call
"""

from viewtour.optimization.adjacency import AdjacencyOracle
from viewtour.optimization.budget import TimeBudget
from viewtour.optimization.builder import CandidateScore, TourBuilder
from viewtour.optimization.coverage import CoverageTracker
from viewtour.optimization.metrics import MetricsCalculator, compute_coverage_counts
from viewtour.optimization.runner import PlanningResult, plan_tour
from viewtour.optimization.solution import InsertionRecord, Solution, TerminationReason
from viewtour.optimization.validation import (
    CheckResult,
    SolutionValidator,
    ValidationReport,
)

__all__ = [
    "AdjacencyOracle",
    "TimeBudget",
    "CandidateScore",
    "TourBuilder",
    "CoverageTracker",
    "MetricsCalculator",
    "compute_coverage_counts",
    "PlanningResult",
    "plan_tour",
    "InsertionRecord",
    "Solution",
    "TerminationReason",
    "CheckResult",
    "SolutionValidator",
    "ValidationReport",
]
