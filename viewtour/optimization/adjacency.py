"""
Directed connectivity queries between viewpoints.
"""

from typing import Dict, List, Sequence
import numpy as np

from viewtour.core.errors import ShapeMismatchError, UnknownViewpointError
from viewtour.core.model import ProblemInstance


class AdjacencyOracle:
    """
    O(1) "can A connect to B" lookups over the adjacency matrix.

    The matrix is indexed by viewpoint enumeration order. It is never assumed
    to be symmetric: ``can_connect(a, b)`` and ``can_connect(b, a)`` are
    independent questions.

    Args:
        matrix: (N, N) array-like; truthy entry (i, j) permits edge i -> j
        viewpoint_ids: N viewpoint ids in enumeration order

    Raises:
        ShapeMismatchError: If the matrix is not exactly N x N

    Example:
        >>> oracle = AdjacencyOracle([[0, 1], [0, 0]], ["a", "b"])
        >>> oracle.can_connect("a", "b"), oracle.can_connect("b", "a")
        (True, False)
    """

    def __init__(self, matrix, viewpoint_ids: Sequence[str]):
        self._ids: List[str] = list(viewpoint_ids)
        n = len(self._ids)

        matrix = np.array(matrix, dtype=bool)
        if matrix.ndim != 2 or matrix.shape != (n, n):
            raise ShapeMismatchError(matrix.shape, n)
        matrix.setflags(write=False)
        self._matrix = matrix

        self._index: Dict[str, int] = {vp_id: i for i, vp_id in enumerate(self._ids)}

    @classmethod
    def from_instance(cls, instance: ProblemInstance) -> "AdjacencyOracle":
        """Build the oracle for a decoded instance."""
        return cls(instance.adjacency, instance.viewpoint_ids)

    @property
    def size(self) -> int:
        return len(self._ids)

    @property
    def matrix(self) -> np.ndarray:
        """Read-only boolean adjacency matrix."""
        return self._matrix

    def index_of(self, viewpoint_id: str) -> int:
        try:
            return self._index[viewpoint_id]
        except KeyError:
            raise UnknownViewpointError(viewpoint_id) from None

    def __contains__(self, viewpoint_id: str) -> bool:
        return viewpoint_id in self._index

    def can_connect(self, from_id: str, to_id: str) -> bool:
        """Whether the directed tour edge ``from_id -> to_id`` is permitted."""
        return bool(self._matrix[self.index_of(from_id), self.index_of(to_id)])

    def successors(self, viewpoint_id: str) -> List[str]:
        """Viewpoints reachable by one edge, in enumeration order."""
        row = self._matrix[self.index_of(viewpoint_id)]
        return [self._ids[j] for j in np.flatnonzero(row)]

    def predecessors(self, viewpoint_id: str) -> List[str]:
        """Viewpoints with an edge into ``viewpoint_id``, in enumeration order."""
        col = self._matrix[:, self.index_of(viewpoint_id)]
        return [self._ids[i] for i in np.flatnonzero(col)]
