"""Shared helpers for forms-service endpoint modules.

This module centralizes the repeated patterns:
- building step resource paths
- unwrapping the ``{"data": ...}`` envelope
- turning payloads into models, mapping parse failures to StepsApiError

It is internal to fixedsteps and may change at any time.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from fixedsteps._constants import STEPS_ENDPOINT
from fixedsteps.exceptions import StepsApiError, StepsValidationError
from fixedsteps.models.step import Step


def step_path(step_id: str) -> str:
    step_id = str(step_id).strip()
    if not step_id:
        raise StepsValidationError("step id required")
    return f"{STEPS_ENDPOINT}/{quote(step_id, safe='')}"


def unwrap_data(endpoint: str, body: Any) -> Any:
    """Return ``body["data"]`` when present, else *body* itself."""
    if isinstance(body, dict) and "data" in body and body["data"] is not None:
        return body["data"]
    if body is None:
        raise StepsApiError(f"Empty response from {endpoint}", endpoint=endpoint)
    return body


def parse_step(endpoint: str, value: Any) -> Step:
    if not isinstance(value, dict):
        raise StepsApiError(f"{endpoint} returned {type(value).__name__}, expected an object", endpoint=endpoint)
    try:
        return Step.model_validate(value)
    except ValidationError as exc:
        raise StepsApiError(f"{endpoint} returned an invalid step: {exc}", endpoint=endpoint) from exc
