"""
Distance and precision metrics for tour solutions.
"""

from typing import Dict, List, Sequence

from viewtour.core.geometry import distance
from viewtour.core.model import ProblemInstance
from viewtour.optimization.solution import Solution


def compute_coverage_counts(instance: ProblemInstance, solution: Solution) -> Dict[str, int]:
    """
    Count selected covering pairs per sample by replaying the angle sets.

    Only viewpoints in the tour contribute, and each distinct
    (viewpoint, angle) pair counts once per sample.

    Args:
        instance: Problem instance
        solution: Solution whose selected angles are replayed

    Returns:
        Dict mapping sample id to its count, in sample order
    """
    in_tour = set(solution.tour)
    counts = {}
    for sample in instance.sample_points:
        matched = {
            (pair.viewpoint_id, pair.angle_id)
            for pair in sample.covering_pairs
            if pair.viewpoint_id in in_tour
            and pair.angle_id in solution.selected_angles.get(pair.viewpoint_id, ())
        }
        counts[sample.id] = len(matched)
    return counts


class MetricsCalculator:
    """
    Computes tour distance, precision and objective.

    Args:
        instance: Problem instance providing positions and precision scores

    Example:
        >>> metrics = MetricsCalculator(instance)
        >>> metrics.finalize(solution)
        >>> solution.objective == solution.total_distance - solution.total_precision
        True
    """

    def __init__(self, instance: ProblemInstance):
        self.instance = instance

    def total_distance(self, tour: Sequence[str]) -> float:
        """Closed tour length including the wrap edge; 0.0 below 2 viewpoints."""
        if len(tour) < 2:
            return 0.0
        total = 0.0
        for i, vp_id in enumerate(tour):
            nxt = tour[(i + 1) % len(tour)]
            total += distance(
                self.instance.viewpoint(vp_id).position,
                self.instance.viewpoint(nxt).position,
            )
        return total

    def total_precision(self, solution: Solution) -> float:
        """Sum of selected angle precisions over the viewpoints in the tour."""
        total = 0.0
        for vp_id in solution.tour:
            viewpoint = self.instance.viewpoint(vp_id)
            for angle_id in sorted(solution.selected_angles.get(vp_id, ())):
                total += viewpoint.angle_precision(angle_id)
        return total

    def finalize(self, solution: Solution) -> Solution:
        """Write distance and precision totals into ``solution``."""
        solution.total_distance = self.total_distance(solution.tour)
        solution.total_precision = self.total_precision(solution)
        return solution

    def coverage_counts(self, solution: Solution) -> Dict[str, int]:
        return compute_coverage_counts(self.instance, solution)

    def summary(self, solution: Solution) -> dict:
        """
        Evaluate a solution and return detailed metrics.

        Unlike finalize(), this doesn't modify the solution.
        """
        counts = self.coverage_counts(solution)
        values: List[int] = list(counts.values())
        total_distance = self.total_distance(solution.tour)
        total_precision = self.total_precision(solution)
        return {
            "num_viewpoints": len(solution.tour),
            "total_distance": total_distance,
            "total_precision": total_precision,
            "objective": total_distance - total_precision,
            "num_selected_angles": sum(len(solution.selected_angles.get(v, ())) for v in solution.tour),
            "min_coverage": min(values) if values else 0,
            "mean_coverage": sum(values) / len(values) if values else 0.0,
        }
