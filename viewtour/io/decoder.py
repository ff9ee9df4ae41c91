"""
Problem instance decoding from JSON documents.

Malformed documents are rejected with InstanceFormatError rather than
patched with empty defaults: an instance without viewpoints or samples
would otherwise look trivially solved.
"""

from pathlib import Path
from typing import Any, Dict, List, TextIO, Union
import json
import logging
import sys

import numpy as np

from viewtour.core.errors import InstanceFormatError, ShapeMismatchError
from viewtour.core.model import CoveringPair, ProblemInstance, SamplePoint, Viewpoint

logger = logging.getLogger(__name__)


def _require(data: dict, key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise InstanceFormatError(f"expected an object, got {type(data).__name__}", where)
    if key not in data or data[key] is None:
        raise InstanceFormatError(f"missing required field {key!r}", where)
    return data[key]


def _parse_coordinates(entry: dict, where: str) -> tuple:
    coords = _require(entry, "coordinates", where)
    try:
        if isinstance(coords, dict):
            values = [coords[axis] for axis in ("x", "y", "z")]
        else:
            values = list(coords)
            if len(values) != 3:
                raise ValueError(f"expected 3 coordinates, got {len(values)}")
        position = tuple(float(v) for v in values)
    except (KeyError, TypeError, ValueError) as e:
        raise InstanceFormatError(f"malformed coordinates {coords!r} ({e})", where) from None

    if not all(np.isfinite(position)):
        raise InstanceFormatError(f"non-finite coordinates {position}", where)
    return position


def _parse_viewpoint(entry: dict, where: str) -> Viewpoint:
    vp_id = str(_require(entry, "id", where))
    where = f"viewpoint {vp_id!r}"
    position = _parse_coordinates(entry, where)

    raw_precision = entry.get("precision") or {}
    if not isinstance(raw_precision, dict):
        raise InstanceFormatError("precision must map angle ids to scores", where)

    precision = {}
    for angle_id, score in raw_precision.items():
        try:
            score = float(score)
        except (TypeError, ValueError):
            raise InstanceFormatError(f"precision of angle {angle_id!r} is not a number", where) from None
        if score < 0 or not np.isfinite(score):
            raise InstanceFormatError(f"precision of angle {angle_id!r} must be >= 0, got {score}", where)
        precision[str(angle_id)] = score

    is_mandatory = entry.get("is_mandatory", False)
    if not isinstance(is_mandatory, bool):
        raise InstanceFormatError(f"is_mandatory must be true or false, got {is_mandatory!r}", where)

    return Viewpoint(
        id=vp_id,
        position=position,
        is_mandatory=is_mandatory,
        precision=precision,
    )


def _parse_pair(raw: Any, where: str) -> CoveringPair:
    if isinstance(raw, dict):
        vp_id = _require(raw, "viewpoint", where)
        angle_id = _require(raw, "angle", where)
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        vp_id, angle_id = raw
    else:
        raise InstanceFormatError(f"malformed covering pair {raw!r}", where)
    return CoveringPair(str(vp_id), str(angle_id))


def _parse_sample(entry: dict, where: str) -> SamplePoint:
    sample_id = str(_require(entry, "id", where))
    where = f"sample point {sample_id!r}"
    position = _parse_coordinates(entry, where)

    raw_pairs = entry.get("coverage_pairs", [])
    if not isinstance(raw_pairs, list):
        raise InstanceFormatError("coverage_pairs must be a list", where)

    return SamplePoint(
        id=sample_id,
        position=position,
        covering_pairs=tuple(_parse_pair(raw, where) for raw in raw_pairs),
    )


def _parse_list(data: dict, key: str) -> List[dict]:
    entries = _require(data, key, "instance")
    if not isinstance(entries, list):
        raise InstanceFormatError(f"{key!r} must be a list", "instance")
    if not entries:
        raise InstanceFormatError(f"{key!r} is empty", "instance")
    return entries


def _check_unique(ids: List[str], what: str) -> None:
    seen = set()
    duplicates = []
    for item in ids:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    if duplicates:
        raise InstanceFormatError(f"duplicate {what} ids: {duplicates}", "instance")


def _parse_matrix(raw_matrix: Any, num_viewpoints: int) -> np.ndarray:
    where = "collision_matrix"
    if not isinstance(raw_matrix, list) or not all(isinstance(row, list) for row in raw_matrix):
        raise InstanceFormatError("must be a list of rows", where)

    if len(raw_matrix) != num_viewpoints:
        width = len(raw_matrix[0]) if raw_matrix else 0
        raise ShapeMismatchError((len(raw_matrix), width), num_viewpoints)
    for row in raw_matrix:
        if len(row) != num_viewpoints:
            raise ShapeMismatchError((len(raw_matrix), len(row)), num_viewpoints)

    for i, row in enumerate(raw_matrix):
        for j, value in enumerate(row):
            # bool is an int subclass; strings and null are not accepted
            if not isinstance(value, (bool, int, float)) or not np.isfinite(value):
                raise InstanceFormatError(
                    f"entry [{i}][{j}] must be a boolean or finite number, got {value!r}", where,
                )

    return np.array(raw_matrix, dtype=float) != 0


def parse_instance(data: Dict[str, Any], name: str = "instance") -> ProblemInstance:
    """
    Decode a problem instance from a parsed JSON document.

    Args:
        data: Document with "viewpoints", "sample_points" and
            "collision_matrix" entries
        name: Instance name used in logs

    Returns:
        ProblemInstance with viewpoints in document order

    Raises:
        InstanceFormatError: If the document is malformed
        ShapeMismatchError: If the matrix is not N x N for N viewpoints
    """
    viewpoints = [
        _parse_viewpoint(entry, f"viewpoints[{i}]")
        for i, entry in enumerate(_parse_list(data, "viewpoints"))
    ]
    samples = [
        _parse_sample(entry, f"sample_points[{i}]")
        for i, entry in enumerate(_parse_list(data, "sample_points"))
    ]

    _check_unique([vp.id for vp in viewpoints], "viewpoint")
    _check_unique([sp.id for sp in samples], "sample point")

    by_id = {vp.id: vp for vp in viewpoints}
    for sample in samples:
        for pair in sample.covering_pairs:
            if pair.viewpoint_id not in by_id:
                raise InstanceFormatError(
                    f"covering pair references unknown viewpoint {pair.viewpoint_id!r}",
                    f"sample point {sample.id!r}",
                )
            if pair.angle_id not in by_id[pair.viewpoint_id].precision:
                logger.warning(
                    "Sample %s: angle %r has no precision score at viewpoint %s; scoring 0",
                    sample.id, pair.angle_id, pair.viewpoint_id,
                )

    adjacency = _parse_matrix(_require(data, "collision_matrix", "instance"), len(viewpoints))

    return ProblemInstance(
        viewpoints=tuple(viewpoints),
        sample_points=tuple(samples),
        adjacency=adjacency,
        name=name,
    )


def read_instance(stream: TextIO, name: str = "instance") -> ProblemInstance:
    """Decode an instance from a text stream."""
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise InstanceFormatError(f"invalid JSON: {e}", name) from None
    except UnicodeDecodeError as e:
        raise InstanceFormatError(f"not valid UTF-8 text: {e}", name) from None
    return parse_instance(data, name=name)


def load_instance(source: Union[str, Path, None]) -> ProblemInstance:
    """
    Load a problem instance from a JSON file, or stdin for "-" / None.

    Args:
        source: Path to instance file

    Returns:
        Decoded ProblemInstance

    Raises:
        FileNotFoundError: If source file doesn't exist
        InstanceFormatError: If the document is malformed
    """
    if source is None or str(source) == "-":
        return read_instance(sys.stdin, name="stdin")

    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"Instance file not found: {source}")

    with open(source, 'r', encoding='utf-8') as f:
        return read_instance(f, name=source.stem)
