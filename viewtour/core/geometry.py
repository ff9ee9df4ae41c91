"""
Position and distance utilities for 3D viewpoints.
"""

from typing import Sequence, Tuple
import numpy as np

Position = Tuple[float, float, float]


def as_position(values: Sequence[float]) -> Position:
    """Convert a 3-element sequence to a float position tuple."""
    if len(values) != 3:
        raise ValueError(f"position must have 3 coordinates, got {len(values)}")
    x, y, z = (float(v) for v in values)
    return (x, y, z)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Euclidean distance between two 3D points.

    Args:
        a: (x, y, z) of the first point
        b: (x, y, z) of the second point

    Returns:
        Distance as a Python float

    Example:
        >>> distance((0, 0, 0), (3, 4, 0))
        5.0
    """
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def pairwise_distances(positions: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Compute the symmetric N x N Euclidean distance matrix.

    Args:
        positions: N positions in enumeration order

    Returns:
        float64 array of shape (N, N) with a zero diagonal
    """
    points = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    diff = points[:, None, :] - points[None, :, :]
    return np.sqrt((diff ** 2).sum(axis=-1))
