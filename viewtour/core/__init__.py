"""
Core data structures for tour planning.

This module provides:
    - Viewpoint, SamplePoint, CoveringPair and ProblemInstance
    - Euclidean geometry helpers
    - The planning error hierarchy
"""

from viewtour.core.errors import (
    TourPlanningError,
    ShapeMismatchError,
    MissingMandatoryError,
    AmbiguousMandatoryError,
    TimeBudgetExceededError,
    InstanceFormatError,
    UnknownViewpointError,
    ConfigurationError,
)
from viewtour.core.geometry import distance, pairwise_distances
from viewtour.core.model import (
    Viewpoint,
    SamplePoint,
    CoveringPair,
    ProblemInstance,
    covering_pairs,
)

__all__ = [
    "TourPlanningError",
    "ShapeMismatchError",
    "MissingMandatoryError",
    "AmbiguousMandatoryError",
    "TimeBudgetExceededError",
    "InstanceFormatError",
    "UnknownViewpointError",
    "ConfigurationError",
    "distance",
    "pairwise_distances",
    "Viewpoint",
    "SamplePoint",
    "CoveringPair",
    "ProblemInstance",
    "covering_pairs",
]
