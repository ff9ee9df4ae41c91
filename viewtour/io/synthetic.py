"""
Synthetic problem instances for testing and development.

This module provides generators for small hand-checkable instances and for
reproducible random instances.
"""

from typing import Optional
import numpy as np

from viewtour.core.model import ProblemInstance, SamplePoint, Viewpoint, covering_pairs


def generate_square_instance(mode: str = 'cycle') -> ProblemInstance:
    """
    Four viewpoints on the unit square with two sample points.

    Viewpoints v0 (mandatory), v1, v2, v3 sit at (0,0,0), (1,0,0), (1,1,0),
    (0,1,0). Each sample has three covering pairs spread over v1, v2, v3 at
    distinct angles.

    Args:
        mode: Adjacency layout:
            - 'cycle': Directed cycle v0->v1->v2->v3->v0 with its reverse
              edges forbidden; the diagonals v0<->v2 and v1<->v3 are
              permitted in both directions (default)
            - 'isolated': Only the identity diagonal; no tour edges at all

    Returns:
        ProblemInstance

    Example:
        >>> instance = generate_square_instance('cycle')
        >>> instance.viewpoint_ids
        ['v0', 'v1', 'v2', 'v3']
    """
    positions = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]
    precision = {"a1": 0.5, "a2": 0.25, "a3": 0.25}
    viewpoints = tuple(
        Viewpoint(f"v{i}", pos, is_mandatory=(i == 0), precision=dict(precision))
        for i, pos in enumerate(positions)
    )

    samples = (
        SamplePoint("s0", (0.5, 0.5, 1.0), covering_pairs([("v1", "a1"), ("v2", "a2"), ("v3", "a3")])),
        SamplePoint("s1", (0.5, 0.5, 2.0), covering_pairs([("v1", "a2"), ("v2", "a3"), ("v3", "a1")])),
    )

    if mode == 'cycle':
        adjacency = np.zeros((4, 4), dtype=bool)
        for i in range(4):
            adjacency[i, (i + 1) % 4] = True
        adjacency[0, 2] = adjacency[2, 0] = True
        adjacency[1, 3] = adjacency[3, 1] = True
    elif mode == 'isolated':
        adjacency = np.eye(4, dtype=bool)
    else:
        raise ValueError(f"Unknown square mode: {mode}. Choose from: 'cycle', 'isolated'")

    return ProblemInstance(viewpoints, samples, adjacency, name=f"square-{mode}")


def generate_random_instance(
    num_viewpoints: int = 20,
    num_samples: int = 30,
    angles_per_viewpoint: int = 3,
    pairs_per_sample: int = 4,
    edge_probability: float = 0.5,
    extent: float = 10.0,
    seed: Optional[int] = None,
) -> ProblemInstance:
    """
    Generate a reproducible random instance.

    Viewpoint ``v0`` is mandatory. Covering pairs of every sample use
    distinct non-mandatory viewpoints, so each sample can in principle reach
    ``pairs_per_sample`` coverage.

    Args:
        num_viewpoints: Number of viewpoints (>= 2)
        num_samples: Number of sample points
        angles_per_viewpoint: Viewing angles per viewpoint
        pairs_per_sample: Covering pairs per sample (< num_viewpoints)
        edge_probability: Probability of each directed edge being permitted
        extent: Side length of the cube positions are drawn from
        seed: Random seed for reproducibility

    Returns:
        ProblemInstance
    """
    if num_viewpoints < 2:
        raise ValueError(f"num_viewpoints must be >= 2, got {num_viewpoints}")
    if not 1 <= pairs_per_sample < num_viewpoints:
        raise ValueError(
            f"pairs_per_sample must be in [1, {num_viewpoints - 1}], got {pairs_per_sample}"
        )

    rng = np.random.default_rng(seed)

    angle_ids = [f"a{k}" for k in range(angles_per_viewpoint)]
    positions = rng.uniform(0.0, extent, size=(num_viewpoints, 3))
    viewpoints = tuple(
        Viewpoint(
            f"v{i}",
            tuple(positions[i]),
            is_mandatory=(i == 0),
            precision={a: round(float(rng.uniform(0.0, 1.0)), 3) for a in angle_ids},
        )
        for i in range(num_viewpoints)
    )

    samples = []
    for s in range(num_samples):
        chosen = rng.choice(np.arange(1, num_viewpoints), size=pairs_per_sample, replace=False)
        pairs = [(f"v{int(i)}", angle_ids[int(rng.integers(angles_per_viewpoint))]) for i in chosen]
        samples.append(SamplePoint(f"s{s}", tuple(rng.uniform(0.0, extent, size=3)), covering_pairs(pairs)))

    adjacency = rng.random((num_viewpoints, num_viewpoints)) < edge_probability
    np.fill_diagonal(adjacency, False)

    return ProblemInstance(viewpoints, tuple(samples), adjacency, name=f"random-{seed}")
