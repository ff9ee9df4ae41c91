"""
Solution encoding to JSON documents.
"""

from dataclasses import asdict
from pathlib import Path
from typing import Optional, TextIO, Union
import json

from viewtour.api.schemas import APIError, solution_to_schema
from viewtour.config.settings import OutputConfig
from viewtour.optimization.runner import PlanningResult
from viewtour.optimization.solution import Solution
from viewtour.optimization.validation import ValidationReport


def encode_solution(
    solution: Solution,
    validation: Optional[ValidationReport] = None,
    config: Optional[OutputConfig] = None,
) -> dict:
    """
    Convert a finalized solution to its JSON document layout.

    The sequence keeps the tour order; angle sets are sorted so the output
    is reproducible.

    Args:
        solution: Finalized solution
        validation: Optional validator report to embed
        config: Output settings (defaults if None)

    Returns:
        JSON-serializable dict
    """
    if config is None:
        config = OutputConfig()
    if not config.include_validation:
        validation = None
    return solution_to_schema(solution, validation, decimals=config.decimals).to_dict()


def encode_result(result: PlanningResult, config: Optional[OutputConfig] = None) -> dict:
    """Encode a planning result, adding an error block if planning failed."""
    document = encode_solution(result.solution, result.validation, config)
    if result.error_kind is not None:
        document["error"] = asdict(APIError(error=result.message, code=result.error_kind))
    return document


def dump_document(document: dict, stream: TextIO, config: Optional[OutputConfig] = None) -> None:
    """Write an encoded document to a text stream."""
    indent = (config or OutputConfig()).indent
    json.dump(document, stream, indent=indent)
    stream.write("\n")


def save_document(document: dict, path: Union[str, Path], config: Optional[OutputConfig] = None) -> None:
    """Write an encoded document to a file."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        dump_document(document, f, config)
