"""
viewtour - Coverage-constrained observation tour planning.

This package builds a closed tour over 3D viewpoints that starts at a
mandatory viewpoint, only uses permitted directed edges, and selects viewing
angles so that every sample point is observed at least three times.

Main modules:
    - viewtour.core: Data model, geometry and error kinds
    - viewtour.optimization: Adjacency, coverage, builder, metrics, validation
    - viewtour.io: JSON instance decoding, solution encoding, synthetic instances
    - viewtour.visualization: Tour and coverage plots
    - viewtour.config: Configuration management
    - viewtour.api: Solution document schemas

Quick start:
    >>> from viewtour import plan_tour
    >>> from viewtour.io import generate_square_instance
    >>>
    >>> instance = generate_square_instance()
    >>> result = plan_tour(instance, time_budget=10.0)
    >>> print(result.solution.tour, result.validation.is_valid)
"""

__version__ = "0.1.0"

# Core exports
from viewtour.core.model import Viewpoint, SamplePoint, CoveringPair, ProblemInstance
from viewtour.core.errors import (
    TourPlanningError,
    ShapeMismatchError,
    MissingMandatoryError,
    AmbiguousMandatoryError,
    TimeBudgetExceededError,
    InstanceFormatError,
    ConfigurationError,
)

# Optimization exports
from viewtour.optimization.adjacency import AdjacencyOracle
from viewtour.optimization.coverage import CoverageTracker
from viewtour.optimization.builder import TourBuilder
from viewtour.optimization.metrics import MetricsCalculator
from viewtour.optimization.validation import SolutionValidator
from viewtour.optimization.solution import Solution
from viewtour.optimization.budget import TimeBudget
from viewtour.optimization.runner import plan_tour, PlanningResult

# Config exports
from viewtour.config.settings import ViewtourConfig

__all__ = [
    # Version
    "__version__",
    # Core
    "Viewpoint",
    "SamplePoint",
    "CoveringPair",
    "ProblemInstance",
    "TourPlanningError",
    "ShapeMismatchError",
    "MissingMandatoryError",
    "AmbiguousMandatoryError",
    "TimeBudgetExceededError",
    "InstanceFormatError",
    "ConfigurationError",
    # Optimization
    "AdjacencyOracle",
    "CoverageTracker",
    "TourBuilder",
    "MetricsCalculator",
    "SolutionValidator",
    "Solution",
    "TimeBudget",
    "plan_tour",
    "PlanningResult",
    # Config
    "ViewtourConfig",
]
