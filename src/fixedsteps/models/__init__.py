"""Data models for forms-service payloads."""

from fixedsteps.models._base import StepsBaseModel
from fixedsteps.models.step import (
    OPTION_FIELD_TYPES,
    FieldSpec,
    FieldType,
    Step,
    StepDraft,
    StepType,
    normalize_option,
    takes_options,
)

__all__ = [
    "FieldSpec",
    "FieldType",
    "OPTION_FIELD_TYPES",
    "Step",
    "StepDraft",
    "StepType",
    "StepsBaseModel",
    "normalize_option",
    "takes_options",
]
