"""
Wire schemas for solution output.

This module provides dataclass schemas defining the JSON contract between
the planner and its consumers.
"""

from viewtour.api.schemas import (
    ObjectiveSchema,
    MetadataSchema,
    SequenceEntrySchema,
    CheckSchema,
    ValidationSchema,
    SolutionDocument,
    APIError,
    solution_to_schema,
    validation_to_schema,
    error_to_schema,
)

__all__ = [
    "ObjectiveSchema",
    "MetadataSchema",
    "SequenceEntrySchema",
    "CheckSchema",
    "ValidationSchema",
    "SolutionDocument",
    "APIError",
    "solution_to_schema",
    "validation_to_schema",
    "error_to_schema",
]
