"""
Incremental coverage accounting for sample points.

Each sample point needs a number of selected covering pairs (three by
default). The tracker keeps an unbounded running count per sample and
answers how much unmet demand a viewpoint could still serve.
"""

from typing import Dict, Iterable, List, Set, Tuple

from viewtour.core.model import SamplePoint

DEFAULT_REQUIRED_COVERAGE = 3


class CoverageTracker:
    """
    Per-sample running count of satisfied covering pairs.

    A viewpoint contributes at most one pair to a sample: the first covering
    pair of that sample on the viewpoint. Counts are not capped, so coverage
    beyond the requirement is recorded but yields no further benefit.

    Args:
        sample_points: Sample points in input order
        required: Coverage count each sample must reach

    Example:
        >>> tracker = CoverageTracker(instance.sample_points)
        >>> tracker.remaining_benefit("v1")
        2
        >>> tracker.apply_selection("v1")
        {'a1'}
    """

    def __init__(
        self,
        sample_points: Iterable[SamplePoint],
        required: int = DEFAULT_REQUIRED_COVERAGE,
    ):
        if required < 1:
            raise ValueError(f"required coverage must be >= 1, got {required}")
        self.required = required

        self._sample_ids: List[str] = []
        self._counts: Dict[str, int] = {}
        # viewpoint id -> [(sample id, first matching angle)] in sample order
        self._by_viewpoint: Dict[str, List[Tuple[str, str]]] = {}

        for sample in sample_points:
            self._sample_ids.append(sample.id)
            self._counts[sample.id] = 0
            seen = set()
            for pair in sample.covering_pairs:
                if pair.viewpoint_id in seen:
                    continue
                seen.add(pair.viewpoint_id)
                self._by_viewpoint.setdefault(pair.viewpoint_id, []).append(
                    (sample.id, pair.angle_id)
                )

    def remaining_benefit(self, viewpoint_id: str) -> int:
        """
        Number of under-covered samples this viewpoint can observe.

        Each sample counts once regardless of how many angles of the
        viewpoint could observe it.
        """
        return sum(
            1
            for sample_id, _ in self._by_viewpoint.get(viewpoint_id, ())
            if self._counts[sample_id] < self.required
        )

    def apply_selection(self, viewpoint_id: str) -> Set[str]:
        """
        Select ``viewpoint_id`` and record the coverage it provides.

        Every sample with a covering pair on the viewpoint gets its count
        incremented, even past the requirement.

        Returns:
            Set of angle ids selected at the viewpoint
        """
        angles = set()
        for sample_id, angle_id in self._by_viewpoint.get(viewpoint_id, ()):
            angles.add(angle_id)
            self._counts[sample_id] += 1
        return angles

    def count(self, sample_id: str) -> int:
        return self._counts[sample_id]

    def counts(self) -> Dict[str, int]:
        """Copy of the per-sample counts in sample order."""
        return {sample_id: self._counts[sample_id] for sample_id in self._sample_ids}

    def deficit(self, sample_id: str) -> int:
        return max(0, self.required - self._counts[sample_id])

    def remaining_demand(self) -> int:
        """Total number of covering pairs still needed across all samples."""
        return sum(self.deficit(sample_id) for sample_id in self._sample_ids)

    def satisfied_count(self) -> int:
        """Number of samples that reached the requirement."""
        return sum(1 for c in self._counts.values() if c >= self.required)

    def is_fully_covered(self) -> bool:
        return all(c >= self.required for c in self._counts.values())

    def uncovered_samples(self) -> List[str]:
        """Ids of samples below the requirement, in sample order."""
        return [s for s in self._sample_ids if self._counts[s] < self.required]
