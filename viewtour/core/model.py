"""
Problem data model: viewpoints, sample points and the problem instance.

These structures are produced by the decoder and are treated as immutable
for the lifetime of a planning run. Enumeration order of viewpoints is part
of the model: it indexes the adjacency matrix and breaks ties in the builder.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np

from viewtour.core.errors import ShapeMismatchError, UnknownViewpointError
from viewtour.core.geometry import Position, as_position


@dataclass(frozen=True)
class Viewpoint:
    """
    Candidate observation location.

    Attributes:
        id: Unique viewpoint identifier
        position: (x, y, z) location
        is_mandatory: Whether this is the fixed start/end of the tour
        precision: Mapping of viewing-angle id to precision score (>= 0)

    Example:
        >>> vp = Viewpoint("v0", (0.0, 0.0, 0.0), is_mandatory=True, precision={"a1": 0.9})
        >>> vp.angle_precision("a1")
        0.9
    """
    id: str
    position: Position
    is_mandatory: bool = False
    precision: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "position", as_position(self.position))

    @property
    def angles(self) -> List[str]:
        """Viewing-angle ids in declaration order."""
        return list(self.precision)

    def angle_precision(self, angle_id: str) -> float:
        """Precision score of an angle, 0.0 for angles without a score."""
        return float(self.precision.get(angle_id, 0.0))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        x, y, z = self.position
        return {
            "id": self.id,
            "coordinates": {"x": x, "y": y, "z": z},
            "is_mandatory": self.is_mandatory,
            "precision": dict(self.precision),
        }


@dataclass(frozen=True)
class CoveringPair:
    """A (viewpoint, viewing-angle) combination able to observe a sample."""
    viewpoint_id: str
    angle_id: str


@dataclass(frozen=True)
class SamplePoint:
    """
    Scene location that needs observational coverage.

    Attributes:
        id: Unique sample identifier
        position: (x, y, z) location, informational only
        covering_pairs: Ordered covering pairs able to observe this sample
    """
    id: str
    position: Position
    covering_pairs: Tuple[CoveringPair, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "position", as_position(self.position))
        object.__setattr__(self, "covering_pairs", tuple(self.covering_pairs))

    def first_angle_for(self, viewpoint_id: str) -> Optional[str]:
        """Angle of the first covering pair on ``viewpoint_id``, if any."""
        for pair in self.covering_pairs:
            if pair.viewpoint_id == viewpoint_id:
                return pair.angle_id
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        x, y, z = self.position
        return {
            "id": self.id,
            "coordinates": {"x": x, "y": y, "z": z},
            "coverage_pairs": [[p.viewpoint_id, p.angle_id] for p in self.covering_pairs],
        }


@dataclass(frozen=True)
class ProblemInstance:
    """
    A fully decoded tour planning problem.

    Attributes:
        viewpoints: Viewpoints in stable enumeration order
        sample_points: Sample points in input order
        adjacency: Boolean (N, N) matrix; entry (i, j) permits edge i -> j
        name: Optional instance name for logging/visualization

    The adjacency array is copied and made read-only on construction.
    """
    viewpoints: Tuple[Viewpoint, ...]
    sample_points: Tuple[SamplePoint, ...]
    adjacency: np.ndarray = field(compare=False)
    name: str = "instance"

    # Internal state (set in __post_init__)
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "viewpoints", tuple(self.viewpoints))
        object.__setattr__(self, "sample_points", tuple(self.sample_points))

        adjacency = np.array(self.adjacency, dtype=bool)
        n = len(self.viewpoints)
        if adjacency.ndim != 2 or adjacency.shape != (n, n):
            raise ShapeMismatchError(adjacency.shape, n)
        adjacency.setflags(write=False)
        object.__setattr__(self, "adjacency", adjacency)

        object.__setattr__(
            self, "_index", {vp.id: i for i, vp in enumerate(self.viewpoints)}
        )

    @property
    def num_viewpoints(self) -> int:
        return len(self.viewpoints)

    @property
    def num_samples(self) -> int:
        return len(self.sample_points)

    @property
    def viewpoint_ids(self) -> List[str]:
        """Viewpoint ids in enumeration order."""
        return [vp.id for vp in self.viewpoints]

    @property
    def mandatory_viewpoints(self) -> List[Viewpoint]:
        return [vp for vp in self.viewpoints if vp.is_mandatory]

    def index_of(self, viewpoint_id: str) -> int:
        """Enumeration index of a viewpoint."""
        try:
            return self._index[viewpoint_id]
        except KeyError:
            raise UnknownViewpointError(viewpoint_id) from None

    def viewpoint(self, viewpoint_id: str) -> Viewpoint:
        """Look up a viewpoint by id."""
        return self.viewpoints[self.index_of(viewpoint_id)]

    def has_viewpoint(self, viewpoint_id: str) -> bool:
        return viewpoint_id in self._index

    def positions(self) -> List[Position]:
        """Viewpoint positions in enumeration order."""
        return [vp.position for vp in self.viewpoints]

    def to_dict(self) -> dict:
        """Convert to the JSON instance document layout."""
        return {
            "viewpoints": [vp.to_dict() for vp in self.viewpoints],
            "sample_points": [sp.to_dict() for sp in self.sample_points],
            "collision_matrix": self.adjacency.astype(int).tolist(),
        }


def covering_pairs(pairs: Sequence[Tuple[str, str]]) -> Tuple[CoveringPair, ...]:
    """Build covering pairs from (viewpoint_id, angle_id) tuples."""
    return tuple(CoveringPair(vp, angle) for vp, angle in pairs)
