"""
Wire schemas for solution documents.

These schemas define the JSON contract of the solution output consumed by
downstream tools. The tour order in ``sequence`` is the visiting order.
"""

from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field, asdict


@dataclass
class ObjectiveSchema:
    """Objective components of a solution."""
    distance: float = 0.0
    precision: float = 0.0
    value: float = 0.0


@dataclass
class MetadataSchema:
    """Solution metadata."""
    num_viewpoints: int = 0
    objective: ObjectiveSchema = field(default_factory=ObjectiveSchema)
    time_limited: bool = False
    termination: str = "not_started"


@dataclass
class SequenceEntrySchema:
    """One visited viewpoint with its selected angles (sorted)."""
    id: str = ""
    angles: List[str] = field(default_factory=list)


@dataclass
class CheckSchema:
    """Single validation check."""
    name: str = ""
    passed: bool = True
    message: str = ""


@dataclass
class ValidationSchema:
    """Validation block of a solution document."""
    valid: bool = True
    reasons: List[str] = field(default_factory=list)
    checks: List[CheckSchema] = field(default_factory=list)


@dataclass
class SolutionDocument:
    """Top-level solution document."""
    metadata: MetadataSchema = field(default_factory=MetadataSchema)
    sequence: List[SequenceEntrySchema] = field(default_factory=list)
    validation: Optional[ValidationSchema] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.validation is None:
            del data["validation"]
        return data


@dataclass
class APIError:
    """Error document emitted when planning fails before a tour exists."""
    error: str = ""
    code: str = "unknown_error"
    details: Optional[Dict[str, Any]] = None


# Helper functions for conversion

def _round(value: float, decimals: Optional[int]) -> float:
    return float(value) if decimals is None else round(float(value), decimals)


def solution_to_schema(solution, validation=None, decimals: Optional[int] = None) -> SolutionDocument:
    """Convert internal Solution (and optional ValidationReport) to schema."""
    objective = ObjectiveSchema(
        distance=_round(solution.total_distance, decimals),
        precision=_round(solution.total_precision, decimals),
        value=_round(solution.objective, decimals),
    )
    document = SolutionDocument(
        metadata=MetadataSchema(
            num_viewpoints=len(solution.tour),
            objective=objective,
            time_limited=solution.time_limited,
            termination=solution.termination.value,
        ),
        sequence=[
            SequenceEntrySchema(id=vp_id, angles=sorted(solution.selected_angles.get(vp_id, ())))
            for vp_id in solution.tour
        ],
    )
    if validation is not None:
        document.validation = validation_to_schema(validation)
    return document


def validation_to_schema(validation) -> ValidationSchema:
    """Convert internal ValidationReport to schema."""
    return ValidationSchema(
        valid=validation.is_valid,
        reasons=list(validation.reasons),
        checks=[
            CheckSchema(name=c.name, passed=c.passed, message=c.message)
            for c in validation.checks
        ],
    )


def error_to_schema(error) -> APIError:
    """Convert a TourPlanningError to an error document."""
    return APIError(
        error=getattr(error, "message", str(error)),
        code=getattr(error, "kind", type(error).__name__),
    )
