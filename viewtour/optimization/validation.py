"""
Independent validation of finished tour solutions.

The validator re-derives every property from the instance and the solution
alone; it never consults builder or tracker state and never mutates the
solution. Failures are reported as findings, not raised.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from viewtour.core.model import ProblemInstance
from viewtour.optimization.adjacency import AdjacencyOracle
from viewtour.optimization.coverage import DEFAULT_REQUIRED_COVERAGE
from viewtour.optimization.metrics import compute_coverage_counts
from viewtour.optimization.solution import Solution


@dataclass(frozen=True)
class CheckResult:
    """
    Outcome of a single validation check.

    Attributes:
        name: Check name (e.g. "connectivity")
        passed: Whether the check passed
        message: Human readable explanation
        details: Check specific diagnostics
    """
    name: str
    passed: bool
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "passed": self.passed,
            "message": self.message,
            "details": self.details,
        }


@dataclass(frozen=True)
class ValidationReport:
    """All check results for one solution."""
    checks: List[CheckResult]

    @property
    def is_valid(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def reasons(self) -> List[str]:
        """Messages of the failed checks."""
        return [check.message for check in self.checks if not check.passed]

    def check(self, name: str) -> CheckResult:
        for result in self.checks:
            if result.name == name:
                return result
        raise KeyError(name)

    def to_dict(self) -> dict:
        return {
            "valid": self.is_valid,
            "reasons": self.reasons,
            "checks": [check.to_dict() for check in self.checks],
        }


class SolutionValidator:
    """
    Checks mandatory start, connectivity, coverage and distinct visits.

    Args:
        instance: Problem instance
        adjacency: Optional prebuilt oracle
        required_coverage: Coverage count each sample must reach
    """

    def __init__(
        self,
        instance: ProblemInstance,
        adjacency: Optional[AdjacencyOracle] = None,
        required_coverage: int = DEFAULT_REQUIRED_COVERAGE,
    ):
        self.instance = instance
        self.adjacency = adjacency or AdjacencyOracle.from_instance(instance)
        self.required_coverage = required_coverage

    def _is_mandatory(self, viewpoint_id: str) -> bool:
        return (
            self.instance.has_viewpoint(viewpoint_id)
            and self.instance.viewpoint(viewpoint_id).is_mandatory
        )

    def check_mandatory_start(self, solution: Solution) -> CheckResult:
        if not solution.tour:
            return CheckResult("mandatory_start", False, "tour is empty")

        first = solution.tour[0]
        if not self._is_mandatory(first):
            return CheckResult(
                "mandatory_start", False,
                f"tour starts at {first!r}, which is not the mandatory viewpoint",
                {"first": first},
            )
        return CheckResult(
            "mandatory_start", True,
            f"tour starts at mandatory viewpoint {first!r}",
            {"first": first},
        )

    def check_connectivity(self, solution: Solution) -> CheckResult:
        tour = solution.tour
        if not tour:
            return CheckResult("connectivity", False, "tour is empty")

        unknown = [vp_id for vp_id in tour if vp_id not in self.adjacency]
        if unknown:
            return CheckResult(
                "connectivity", False,
                f"tour contains unknown viewpoints: {unknown}",
                {"unknown": unknown},
            )

        if len(tour) == 1:
            if self._is_mandatory(tour[0]):
                return CheckResult(
                    "connectivity", True,
                    "single-node tour at the mandatory viewpoint",
                )
            return CheckResult(
                "connectivity", False,
                f"single-node tour at non-mandatory viewpoint {tour[0]!r}",
            )

        broken = [
            [a, b] for a, b in solution.edges()
            if not self.adjacency.can_connect(a, b)
        ]
        if broken:
            shown = ", ".join(f"{a}->{b}" for a, b in broken[:5])
            more = f" (+{len(broken) - 5} more)" if len(broken) > 5 else ""
            return CheckResult(
                "connectivity", False,
                f"{len(broken)} tour edge(s) not permitted: {shown}{more}",
                {"broken_edges": broken},
            )
        return CheckResult(
            "connectivity", True,
            f"all {len(tour)} tour edges permitted",
        )

    def check_coverage(self, solution: Solution) -> CheckResult:
        counts = compute_coverage_counts(self.instance, solution)
        deficient = {
            sample_id: count for sample_id, count in counts.items()
            if count < self.required_coverage
        }
        details = {"counts": counts, "required": self.required_coverage}

        if deficient:
            shown = ", ".join(f"{s}={c}" for s, c in list(deficient.items())[:5])
            more = f" (+{len(deficient) - 5} more)" if len(deficient) > 5 else ""
            details["deficient"] = sorted(deficient)
            return CheckResult(
                "coverage", False,
                f"{len(deficient)} of {len(counts)} sample point(s) below coverage "
                f"{self.required_coverage}: {shown}{more}",
                details,
            )
        return CheckResult(
            "coverage", True,
            f"all {len(counts)} sample points reach coverage {self.required_coverage}",
            details,
        )

    def check_distinct_visits(self, solution: Solution) -> CheckResult:
        repeated = sorted(vp_id for vp_id, n in Counter(solution.tour).items() if n > 1)
        if repeated:
            return CheckResult(
                "distinct_visits", False,
                f"viewpoints visited more than once: {repeated}",
                {"repeated": repeated},
            )
        return CheckResult("distinct_visits", True, "no viewpoint is visited twice")

    def validate(self, solution: Solution) -> ValidationReport:
        """Run all checks; the solution is not modified."""
        return ValidationReport(checks=[
            self.check_mandatory_start(solution),
            self.check_connectivity(solution),
            self.check_coverage(solution),
            self.check_distinct_visits(solution),
        ])
