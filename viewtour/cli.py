"""
Command line entry point.

Reads a problem instance (file or stdin), plans a tour and writes the
solution document (file or stdout). Diagnostics go to stderr.

Usage:
    viewtour instance.json
    viewtour instance.json -o solution.json --time-budget 60
    cat instance.json | viewtour - --config viewtour.yaml -v

Exit status:
    0  valid solution
    1  planning error (malformed instance or configuration, missing/ambiguous mandatory)
    2  solution produced but time limited or failing validation
"""

from dataclasses import asdict
from typing import List, Optional
import argparse
import logging
import sys

from viewtour import __version__
from viewtour.api.schemas import error_to_schema
from viewtour.config.settings import OutputConfig, load_config
from viewtour.core.errors import TourPlanningError
from viewtour.io.decoder import load_instance
from viewtour.io.encoder import dump_document, encode_result, save_document
from viewtour.logging_config import setup_logging
from viewtour.optimization.runner import plan_tour

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PLANNING_ERROR = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="viewtour",
        description="Plan a closed observation tour over 3D viewpoints.",
    )
    parser.add_argument("instance", help="Instance JSON file, or '-' for stdin")
    parser.add_argument("-o", "--output", default="-",
                        help="Solution JSON file, or '-' for stdout (default)")
    parser.add_argument("-t", "--time-budget", type=float, default=None,
                        help="Wall-clock budget in seconds (overrides config)")
    parser.add_argument("-c", "--config", default=None,
                        help="YAML or JSON configuration file")
    parser.add_argument("--plot", default=None,
                        help="Save a tour/coverage figure to this path")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _write(document: dict, output: str, output_config) -> None:
    if output == "-":
        dump_document(document, sys.stdout, output_config)
    else:
        save_document(document, output, output_config)
        logger.info("Solution written to %s", output)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        if args.time_budget is not None:
            config.planner.time_budget_seconds = args.time_budget
        config.planner.validate()
    except (TourPlanningError, FileNotFoundError) as e:
        logger.error("Invalid configuration: %s", e)
        _write({"error": asdict(error_to_schema(e))}, args.output, OutputConfig())
        return EXIT_PLANNING_ERROR

    setup_logging(
        "DEBUG" if args.verbose else config.logging.level,
        args.log_file or config.logging.log_file,
    )

    try:
        instance = load_instance(args.instance)
    except (TourPlanningError, FileNotFoundError) as e:
        logger.error("Could not load instance: %s", e)
        _write({"error": asdict(error_to_schema(e))}, args.output, config.output)
        return EXIT_PLANNING_ERROR

    result = plan_tour(instance, config=config.planner)
    _write(encode_result(result, config.output), args.output, config.output)

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from viewtour.visualization.plotting import plot_solution

        plot_solution(
            instance, result.solution,
            required=config.planner.required_coverage,
            output_path=args.plot,
        )
        logger.info("Figure saved to %s", args.plot)

    if not result.success:
        return EXIT_PLANNING_ERROR
    if result.time_limited or not result.is_valid:
        return EXIT_INVALID
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
