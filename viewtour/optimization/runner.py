"""
High-level tour planning entry point.

Builds a tour, computes its metrics and validates it, returning everything
in a single result object. Planning errors are reported on the result with
their kind instead of propagating.
"""

from dataclasses import dataclass, field
from typing import Optional, Union
import logging
import time

from viewtour.config.settings import PlannerConfig
from viewtour.core.errors import TimeBudgetExceededError, TourPlanningError
from viewtour.core.model import ProblemInstance
from viewtour.optimization.adjacency import AdjacencyOracle
from viewtour.optimization.budget import TimeBudget
from viewtour.optimization.builder import TourBuilder
from viewtour.optimization.metrics import MetricsCalculator
from viewtour.optimization.solution import Solution
from viewtour.optimization.validation import SolutionValidator, ValidationReport

logger = logging.getLogger(__name__)


@dataclass
class PlanningResult:
    """
    Result of a planning run.

    Attributes:
        solution: Finalized solution (empty tour if planning failed early)
        validation: Validator report for the solution
        success: Whether construction ran without a planning error
        error_kind: Kind of the planning error, if any
        message: Status message
        runtime_seconds: Wall-clock time for the run
    """
    solution: Solution
    validation: Optional[ValidationReport] = None
    success: bool = True
    error_kind: Optional[str] = None
    message: str = ""
    runtime_seconds: float = 0.0

    @property
    def is_valid(self) -> bool:
        return self.success and self.validation is not None and self.validation.is_valid

    @property
    def time_limited(self) -> bool:
        return self.solution.time_limited

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "solution": self.solution.to_dict(),
            "validation": self.validation.to_dict() if self.validation else None,
            "success": self.success,
            "error_kind": self.error_kind,
            "message": self.message,
            "runtime_seconds": self.runtime_seconds,
        }


def plan_tour(
    instance: ProblemInstance,
    time_budget: Optional[Union[float, TimeBudget]] = None,
    config: Optional[PlannerConfig] = None,
) -> PlanningResult:
    """
    Build, finalize and validate a tour for ``instance``.

    This is the main entry point for tour planning.

    Args:
        instance: Decoded problem instance
        time_budget: Seconds or a TimeBudget; overrides
            ``config.time_budget_seconds`` when given
        config: Planner settings (defaults if None)

    Returns:
        PlanningResult with the solution, metrics and validation report

    Example:
        >>> result = plan_tour(instance, time_budget=30.0)
        >>> result.solution.tour[0]
        'v0'
    """
    if config is None:
        config = PlannerConfig()
    config.validate()

    if time_budget is None:
        time_budget = TimeBudget(config.time_budget_seconds)
    elif not isinstance(time_budget, TimeBudget):
        time_budget = TimeBudget(float(time_budget))

    t0 = time.time()
    adjacency = AdjacencyOracle.from_instance(instance)
    metrics = MetricsCalculator(instance)
    validator = SolutionValidator(instance, adjacency, config.required_coverage)

    logger.info(
        "Planning tour for %s: %d viewpoints, %d samples, budget=%s",
        instance.name, instance.num_viewpoints, instance.num_samples,
        "unlimited" if time_budget.seconds is None else f"{time_budget.seconds:.3f}s",
    )

    try:
        builder = TourBuilder(
            instance,
            adjacency=adjacency,
            required_coverage=config.required_coverage,
            strict_time_budget=config.strict_time_budget,
        )
        solution = builder.build(time_budget)
        success, error_kind = True, None
    except TimeBudgetExceededError as e:
        logger.error("%s", e)
        solution = e.partial_solution if e.partial_solution is not None else Solution()
        success, error_kind = False, e.kind
        message = e.message
    except TourPlanningError as e:
        logger.error("%s", e)
        solution = Solution()
        success, error_kind = False, e.kind
        message = e.message

    metrics.finalize(solution)
    validation = validator.validate(solution)
    runtime = time.time() - t0

    if success:
        if solution.time_limited:
            message = "Time budget exceeded; returning partial tour"
        elif validation.is_valid:
            message = "Tour planned successfully"
        else:
            message = "Tour planned with validation failures: " + "; ".join(validation.reasons)

    for reason in validation.reasons:
        logger.warning("Validation: %s", reason)
    logger.info(
        "Distance=%.4f precision=%.4f objective=%.4f (%.3fs)",
        solution.total_distance, solution.total_precision, solution.objective, runtime,
    )

    return PlanningResult(
        solution=solution,
        validation=validation,
        success=success,
        error_kind=error_kind,
        message=message,
        runtime_seconds=runtime,
    )
