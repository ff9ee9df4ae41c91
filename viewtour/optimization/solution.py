"""
Tour solution produced by the builder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set


class TerminationReason(str, Enum):
    """Why tour construction stopped."""
    NOT_STARTED = "not_started"
    COVERAGE_SATISFIED = "coverage_satisfied"
    ALL_PLACED = "all_placed"
    NO_FEASIBLE_CANDIDATE = "no_feasible_candidate"
    TIME_BUDGET = "time_budget"


@dataclass(frozen=True)
class InsertionRecord:
    """
    One committed insertion of the greedy builder.

    Attributes:
        viewpoint_id: Inserted viewpoint
        position: Tour index the viewpoint was inserted at
        benefit: Remaining benefit of the viewpoint when it was chosen
        distance_delta: Tour length increase caused by the insertion
        satisfied_samples: Samples at or above the requirement afterwards
    """
    viewpoint_id: str
    position: int
    benefit: int
    distance_delta: float
    satisfied_samples: int

    def to_dict(self) -> dict:
        return {
            "viewpoint_id": self.viewpoint_id,
            "position": self.position,
            "benefit": self.benefit,
            "distance_delta": self.distance_delta,
            "satisfied_samples": self.satisfied_samples,
        }


@dataclass
class Solution:
    """
    Closed tour over viewpoints with selected viewing angles.

    The tour is a cycle: the last element connects back to the first.
    It grows by insertion only; nothing is ever removed.

    Attributes:
        tour: Ordered viewpoint ids, mandatory viewpoint first
        selected_angles: Viewpoint id -> set of selected angle ids
        total_distance: Closed tour length (set by MetricsCalculator)
        total_precision: Sum of selected angle precisions
        termination: Why construction stopped
        time_limited: True if the time budget cut construction short
        trace: Insertions in the order they were committed
    """
    tour: List[str] = field(default_factory=list)
    selected_angles: Dict[str, Set[str]] = field(default_factory=dict)
    total_distance: float = 0.0
    total_precision: float = 0.0
    termination: TerminationReason = TerminationReason.NOT_STARTED
    time_limited: bool = False
    trace: List[InsertionRecord] = field(default_factory=list)

    @property
    def objective(self) -> float:
        """Total distance minus total precision (lower is better)."""
        return self.total_distance - self.total_precision

    def __len__(self) -> int:
        return len(self.tour)

    def __contains__(self, viewpoint_id: str) -> bool:
        return viewpoint_id in self.tour

    def insert(self, position: int, viewpoint_id: str) -> None:
        """Insert a viewpoint into the tour at ``position``."""
        if viewpoint_id in self.tour:
            raise ValueError(f"viewpoint {viewpoint_id!r} is already in the tour")
        if self.tour and not 1 <= position <= len(self.tour):
            raise ValueError(
                f"insertion position {position} outside [1, {len(self.tour)}]"
            )
        self.tour.insert(position, viewpoint_id)

    def select_angles(self, viewpoint_id: str, angles) -> None:
        """Add angles to the selection of a viewpoint."""
        self.selected_angles.setdefault(viewpoint_id, set()).update(angles)

    def angles_for(self, viewpoint_id: str) -> Set[str]:
        return set(self.selected_angles.get(viewpoint_id, ()))

    def edges(self) -> List[tuple]:
        """Directed tour edges including the wrap edge (empty below 2 nodes)."""
        if len(self.tour) < 2:
            return []
        return [
            (self.tour[i], self.tour[(i + 1) % len(self.tour)])
            for i in range(len(self.tour))
        ]

    def copy(self) -> "Solution":
        return Solution(
            tour=list(self.tour),
            selected_angles={k: set(v) for k, v in self.selected_angles.items()},
            total_distance=self.total_distance,
            total_precision=self.total_precision,
            termination=self.termination,
            time_limited=self.time_limited,
            trace=list(self.trace),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (angles sorted)."""
        return {
            "tour": list(self.tour),
            "selected_angles": {
                vp_id: sorted(self.selected_angles.get(vp_id, ()))
                for vp_id in self.tour
            },
            "total_distance": self.total_distance,
            "total_precision": self.total_precision,
            "objective": self.objective,
            "termination": self.termination.value,
            "time_limited": self.time_limited,
            "trace": [record.to_dict() for record in self.trace],
        }
