"""
Static plotting functions for tour visualization.
"""

from typing import Optional, Tuple, Union
from pathlib import Path
import numpy as np
import matplotlib.pyplot as plt

from viewtour.core.model import ProblemInstance
from viewtour.optimization.metrics import compute_coverage_counts
from viewtour.optimization.solution import Solution


def plot_tour(
    instance: ProblemInstance,
    solution: Solution,
    ax: Optional[plt.Axes] = None,
    show_labels: bool = True,
    show_samples: bool = True,
    title: Optional[str] = None,
) -> plt.Axes:
    """
    Plot viewpoints and the closed tour in 3D.

    Unvisited viewpoints are drawn in gray, visited ones in blue and the
    mandatory viewpoint in red. Tour edges include the wrap edge back to the
    start.

    Args:
        instance: Problem instance
        solution: Solution to draw
        ax: 3D matplotlib axes (creates new figure if None)
        show_labels: Whether to annotate visited viewpoints with their ids
        show_samples: Whether to draw sample points
        title: Optional title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig = plt.figure(figsize=(8, 8))
        ax = fig.add_subplot(111, projection='3d')

    positions = np.array(instance.positions(), dtype=float)
    visited = set(solution.tour)
    mask = np.array([vp.id in visited for vp in instance.viewpoints])

    if (~mask).any():
        ax.scatter(*positions[~mask].T, color='lightgray', s=15, label='Unvisited')
    if mask.any():
        ax.scatter(*positions[mask].T, color='tab:blue', s=30, label='Visited')

    for vp in instance.mandatory_viewpoints:
        ax.scatter(*vp.position, color='red', s=80, marker='*', label='Start')

    if show_samples and instance.sample_points:
        samples = np.array([sp.position for sp in instance.sample_points], dtype=float)
        ax.scatter(*samples.T, color='tab:green', s=8, marker='^', alpha=0.5, label='Samples')

    if len(solution.tour) >= 2:
        loop = [instance.viewpoint(vp_id).position for vp_id in solution.tour]
        loop.append(loop[0])
        loop = np.array(loop, dtype=float)
        ax.plot(loop[:, 0], loop[:, 1], loop[:, 2], '-', color='tab:blue', linewidth=1.5)

    if show_labels:
        for order, vp_id in enumerate(solution.tour):
            x, y, z = instance.viewpoint(vp_id).position
            ax.text(x, y, z, f'{order}:{vp_id}', fontsize=7)

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title(title or f'Tour ({len(solution.tour)} viewpoints, d={solution.total_distance:.2f})',
                 fontweight='bold')
    ax.legend(loc='upper right', fontsize=8)

    return ax


def plot_coverage_counts(
    instance: ProblemInstance,
    solution: Solution,
    required: int = 3,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """
    Bar chart of selected covering pairs per sample point.

    Args:
        instance: Problem instance
        solution: Solution whose angle selection is replayed
        required: Coverage requirement drawn as a reference line
        ax: Matplotlib axes (creates new figure if None)

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 4))

    counts = compute_coverage_counts(instance, solution)
    values = np.array(list(counts.values()), dtype=int)
    colors = np.where(values >= required, 'tab:green', 'tab:red')

    ax.bar(range(len(values)), values, color=colors)
    ax.axhline(required, color='black', linestyle='--', linewidth=1, label=f'Required ({required})')

    if len(values) <= 30:
        ax.set_xticks(range(len(values)))
        ax.set_xticklabels(list(counts), rotation=90, fontsize=7)

    satisfied = int((values >= required).sum())
    ax.set_xlabel('Sample point')
    ax.set_ylabel('Selected covering pairs')
    ax.set_title(f'Coverage: {satisfied}/{len(values)} samples satisfied', fontweight='bold')
    ax.legend(loc='upper right', fontsize=8)
    ax.grid(axis='y', alpha=0.3)

    return ax


def plot_solution(
    instance: ProblemInstance,
    solution: Solution,
    required: int = 3,
    output_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[int, int] = (14, 6),
) -> plt.Figure:
    """
    Two-panel figure: 3D tour and per-sample coverage.

    Args:
        instance: Problem instance
        solution: Finalized solution
        required: Coverage requirement
        output_path: Optional path to save figure
        figsize: Figure size

    Returns:
        Matplotlib figure
    """
    fig = plt.figure(figsize=figsize)
    ax1 = fig.add_subplot(1, 2, 1, projection='3d')
    ax2 = fig.add_subplot(1, 2, 2)

    plot_tour(instance, solution, ax=ax1)
    plot_coverage_counts(instance, solution, required=required, ax=ax2)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches='tight')

    return fig
