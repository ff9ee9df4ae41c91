#!/usr/bin/env python3
"""
Basic usage example for the viewtour observation tour planner.

This script demonstrates the core functionality of the viewtour package:
1. Building problem instances (unit square and random)
2. Planning a tour under a time budget
3. Inspecting validation results
4. Encoding and visualizing the solution
"""

import json
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

from viewtour import plan_tour
from viewtour.config import PlannerConfig
from viewtour.io import (
    encode_result,
    generate_random_instance,
    generate_square_instance,
)
from viewtour.logging_config import setup_logging
from viewtour.optimization import MetricsCalculator
from viewtour.visualization import plot_solution


def example_square():
    """Example: Plan a tour on the four-viewpoint unit square."""
    print("=" * 60)
    print("UNIT SQUARE EXAMPLE")
    print("=" * 60)

    instance = generate_square_instance('cycle')
    print(f"\n1. Instance: {instance.num_viewpoints} viewpoints, {instance.num_samples} samples")

    result = plan_tour(instance, time_budget=10.0)

    print("\n2. Results:")
    print(f"   Tour: {' -> '.join(result.solution.tour)}")
    print(f"   Distance: {result.solution.total_distance:.3f}")
    print(f"   Precision: {result.solution.total_precision:.3f}")
    print(f"   Valid: {result.is_valid}")

    print("\n   Insertion trace:")
    for record in result.solution.trace:
        print(f"   {record.viewpoint_id} at {record.position} "
              f"(benefit={record.benefit}, satisfied={record.satisfied_samples})")

    print("\n3. Solution document:")
    print(json.dumps(encode_result(result), indent=2))

    return instance, result


def example_disconnected():
    """Example: A mandatory viewpoint without outgoing edges."""
    print("\n" + "=" * 60)
    print("DISCONNECTED EXAMPLE")
    print("=" * 60)

    instance = generate_square_instance('isolated')
    result = plan_tour(instance)

    print(f"\n   Tour: {result.solution.tour}")
    print(f"   Termination: {result.solution.termination.value}")
    for reason in result.validation.reasons:
        print(f"   - {reason}")

    return instance, result


def example_random(output_dir: Path):
    """Example: Random instance with relaxed coverage and a plot."""
    print("\n" + "=" * 60)
    print("RANDOM INSTANCE EXAMPLE")
    print("=" * 60)

    instance = generate_random_instance(
        num_viewpoints=40,
        num_samples=60,
        edge_probability=0.35,
        seed=42,
    )

    for required in (1, 3):
        config = PlannerConfig(time_budget_seconds=5.0, required_coverage=required)
        result = plan_tour(instance, config=config)
        summary = MetricsCalculator(instance).summary(result.solution)
        print(f"\n   required={required}: {summary['num_viewpoints']} viewpoints, "
              f"distance={summary['total_distance']:.2f}, "
              f"min coverage={summary['min_coverage']}, valid={result.is_valid}")

    output_dir.mkdir(parents=True, exist_ok=True)
    figure_path = output_dir / "random_tour.png"
    plot_solution(instance, result.solution, output_path=figure_path)
    print(f"\n   Figure saved to {figure_path}")

    return instance, result


def main():
    """Run all examples."""
    setup_logging("WARNING")

    print("VIEWTOUR OBSERVATION TOUR PLANNING EXAMPLES")
    print("=" * 60)

    example_square()
    example_disconnected()
    example_random(Path("outputs"))

    print("\n" + "=" * 60)
    print("All examples completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
