"""
Greedy constructive tour builder.

The builder grows a closed tour from the mandatory viewpoint. Each outer
iteration scores every viewpoint not yet in the tour by the number of
under-covered samples it can still observe and by the cheapest insertion
slot that respects the directed adjacency relation, then commits the best
candidate. Scoring reads a frozen snapshot of the tour and coverage state;
the insertion and coverage update happen afterwards in one commit step.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from viewtour.core.errors import (
    AmbiguousMandatoryError,
    MissingMandatoryError,
    TimeBudgetExceededError,
)
from viewtour.core.geometry import pairwise_distances
from viewtour.core.model import ProblemInstance
from viewtour.optimization.adjacency import AdjacencyOracle
from viewtour.optimization.budget import TimeBudget
from viewtour.optimization.coverage import DEFAULT_REQUIRED_COVERAGE, CoverageTracker
from viewtour.optimization.solution import InsertionRecord, Solution, TerminationReason

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateScore:
    """
    Score of one candidate viewpoint within a single iteration.

    Attributes:
        viewpoint_id: Candidate viewpoint
        order: Enumeration index, used for tie-breaking
        benefit: Under-covered samples the candidate observes
        position: Cheapest feasible insertion position
        distance_delta: Tour length increase at that position
    """
    viewpoint_id: str
    order: int
    benefit: int
    position: int
    distance_delta: float


class TourBuilder:
    """
    Adjacency-respecting greedy insertion heuristic.

    Args:
        instance: Decoded problem instance
        adjacency: Optional prebuilt oracle (built from the instance if None)
        required_coverage: Coverage count each sample must reach
        strict_time_budget: Raise TimeBudgetExceededError on expiry instead
            of returning the partial solution

    Example:
        >>> builder = TourBuilder(instance)
        >>> solution = builder.build(TimeBudget(10.0))
        >>> solution.tour[0] == builder.mandatory_id
        True
    """

    def __init__(
        self,
        instance: ProblemInstance,
        adjacency: Optional[AdjacencyOracle] = None,
        required_coverage: int = DEFAULT_REQUIRED_COVERAGE,
        strict_time_budget: bool = False,
    ):
        self.instance = instance
        self.adjacency = adjacency or AdjacencyOracle.from_instance(instance)
        self.required_coverage = required_coverage
        self.strict_time_budget = strict_time_budget

        self._distances = pairwise_distances(instance.positions())
        self.mandatory_id = self._find_mandatory()

        # Reset on every build()
        self.tracker: Optional[CoverageTracker] = None

    def _find_mandatory(self) -> str:
        mandatory = [vp.id for vp in self.instance.viewpoints if vp.is_mandatory]
        if not mandatory:
            raise MissingMandatoryError()
        if len(mandatory) > 1:
            raise AmbiguousMandatoryError(mandatory)
        return mandatory[0]

    def _distance(self, a: str, b: str) -> float:
        return float(self._distances[self.instance.index_of(a), self.instance.index_of(b)])

    def best_insertion(self, candidate: str, tour: List[str]) -> Optional[Tuple[int, float]]:
        """
        Cheapest feasible insertion slot for ``candidate``.

        Position p in [1, L] splits the edge tour[p-1] -> tour[p mod L].
        Position 0 belongs to the mandatory viewpoint. With a single-node
        tour the only slot closes a 2-node cycle through the mandatory
        viewpoint and no edge is split.

        Returns:
            (position, distance_delta), or None if no slot is feasible
        """
        length = len(tour)
        best = None

        for position in range(1, length + 1):
            pred = tour[position - 1]
            succ = tour[position % length]

            if not self.adjacency.can_connect(pred, candidate):
                continue
            if not self.adjacency.can_connect(candidate, succ):
                continue

            delta = self._distance(pred, candidate) + self._distance(candidate, succ)
            if length > 1:
                delta -= self._distance(pred, succ)

            # Strict comparison keeps the earliest position on ties
            if best is None or delta < best[1]:
                best = (position, delta)

        return best

    def score_candidates(self, tour: List[str], tracker: CoverageTracker) -> List[CandidateScore]:
        """
        Score every viewpoint not in ``tour`` against the current state.

        Candidates without benefit or without a feasible slot are left out.
        Neither the tour nor the tracker is modified.
        """
        in_tour = set(tour)
        scores = []

        for order, vp in enumerate(self.instance.viewpoints):
            if vp.id in in_tour:
                continue

            benefit = tracker.remaining_benefit(vp.id)
            if benefit <= 0:
                continue

            slot = self.best_insertion(vp.id, tour)
            if slot is None:
                continue

            scores.append(CandidateScore(
                viewpoint_id=vp.id,
                order=order,
                benefit=benefit,
                position=slot[0],
                distance_delta=slot[1],
            ))

        return scores

    @staticmethod
    def select_winner(scores: List[CandidateScore]) -> Optional[CandidateScore]:
        """Greatest benefit wins; ties go to the earliest enumeration order."""
        if not scores:
            return None
        return min(scores, key=lambda s: (-s.benefit, s.order))

    def build(self, time_budget: Optional[TimeBudget] = None) -> Solution:
        """
        Construct a tour.

        Args:
            time_budget: Deadline checked once per outer iteration

        Returns:
            Solution with tour, selected angles, termination reason and
            insertion trace. Metrics are not computed here.

        Raises:
            TimeBudgetExceededError: Only when strict_time_budget is set
        """
        if time_budget is None:
            time_budget = TimeBudget.unlimited()

        tracker = CoverageTracker(self.instance.sample_points, self.required_coverage)
        self.tracker = tracker

        solution = Solution(tour=[self.mandatory_id])
        num_viewpoints = self.instance.num_viewpoints

        logger.debug(
            "Building tour from %s over %d viewpoints, %d samples",
            self.mandatory_id, num_viewpoints, self.instance.num_samples,
        )

        while True:
            if tracker.is_fully_covered():
                solution.termination = TerminationReason.COVERAGE_SATISFIED
                break

            if len(solution.tour) >= num_viewpoints:
                solution.termination = TerminationReason.ALL_PLACED
                break

            if time_budget.expired():
                solution.termination = TerminationReason.TIME_BUDGET
                solution.time_limited = True
                logger.warning(
                    "Time budget of %.3fs exceeded after %d insertions; returning partial tour",
                    time_budget.seconds, len(solution.trace),
                )
                if self.strict_time_budget:
                    raise TimeBudgetExceededError(
                        time_budget.elapsed(), time_budget.seconds, partial_solution=solution,
                    )
                break

            # Scoring phase: snapshot only
            winner = self.select_winner(self.score_candidates(solution.tour, tracker))
            if winner is None:
                solution.termination = TerminationReason.NO_FEASIBLE_CANDIDATE
                break

            # Commit phase
            solution.insert(winner.position, winner.viewpoint_id)
            solution.select_angles(winner.viewpoint_id, tracker.apply_selection(winner.viewpoint_id))

            record = InsertionRecord(
                viewpoint_id=winner.viewpoint_id,
                position=winner.position,
                benefit=winner.benefit,
                distance_delta=winner.distance_delta,
                satisfied_samples=tracker.satisfied_count(),
            )
            solution.trace.append(record)

            logger.debug(
                "Inserted %s at %d (benefit=%d, delta=%.4f, satisfied=%d/%d)",
                record.viewpoint_id, record.position, record.benefit,
                record.distance_delta, record.satisfied_samples, self.instance.num_samples,
            )

        logger.info(
            "Tour construction finished: %s, %d viewpoints, %d/%d samples covered",
            solution.termination.value, len(solution.tour),
            tracker.satisfied_count(), self.instance.num_samples,
        )

        return solution
