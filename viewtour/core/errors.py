"""
Error kinds raised by the tour planning engine.

Every error carries a short machine readable ``kind`` and a human readable
message. Validation findings are not errors; they are reported on the
solution by the validator.
"""

from typing import Optional, Tuple


class TourPlanningError(Exception):
    """Base class for all planning errors."""

    kind: str = "TourPlanningError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class ShapeMismatchError(TourPlanningError, ValueError):
    """Adjacency matrix size disagrees with the viewpoint count."""

    kind = "ShapeMismatch"

    def __init__(self, shape: Tuple[int, ...], num_viewpoints: int):
        super().__init__(
            f"adjacency matrix shape {tuple(shape)} doesn't match "
            f"{num_viewpoints} viewpoints (expected ({num_viewpoints}, {num_viewpoints}))"
        )
        self.shape = tuple(shape)
        self.num_viewpoints = num_viewpoints


class MissingMandatoryError(TourPlanningError):
    """No viewpoint is flagged as mandatory."""

    kind = "MissingMandatory"

    def __init__(self, message: str = "no mandatory viewpoint in instance"):
        super().__init__(message)


class AmbiguousMandatoryError(TourPlanningError):
    """More than one viewpoint is flagged as mandatory."""

    kind = "AmbiguousMandatory"

    def __init__(self, viewpoint_ids):
        ids = list(viewpoint_ids)
        super().__init__(
            f"expected exactly one mandatory viewpoint, found {len(ids)}: {ids}"
        )
        self.viewpoint_ids = ids


class TimeBudgetExceededError(TourPlanningError):
    """
    Raised when the time budget expires and strict budgets are enabled.

    Attributes:
        partial_solution: Best solution constructed before the deadline
    """

    kind = "TimedOut"

    def __init__(self, elapsed: float, budget: float, partial_solution=None):
        super().__init__(
            f"time budget of {budget:.3f}s exceeded after {elapsed:.3f}s"
        )
        self.elapsed = elapsed
        self.budget = budget
        self.partial_solution = partial_solution


class InstanceFormatError(TourPlanningError, ValueError):
    """Problem instance document is malformed."""

    kind = "InstanceFormat"

    def __init__(self, message: str, path: Optional[str] = None):
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path


class UnknownViewpointError(TourPlanningError, KeyError):
    """A viewpoint id is not part of the instance."""

    kind = "UnknownViewpoint"

    def __init__(self, viewpoint_id: str):
        super().__init__(f"unknown viewpoint id {viewpoint_id!r}")
        self.viewpoint_id = viewpoint_id


class ConfigurationError(TourPlanningError, ValueError):
    """Configuration file or setting is invalid."""

    kind = "Configuration"

    def __init__(self, message: str, path: Optional[str] = None):
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path
