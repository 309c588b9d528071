"""Step collection endpoints.

``GET /steps`` answers ``{"steps": [...]}``; single-step endpoints answer
``{"data": {...}}`` or the bare step.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fixedsteps._api._common import parse_step, step_path, unwrap_data
from fixedsteps._constants import STEPS_ENDPOINT
from fixedsteps._transport import Transport
from fixedsteps.exceptions import StepsApiError
from fixedsteps.models.step import Step

_logger = logging.getLogger(__name__)


async def fetch_steps(transport: Transport) -> list[Step]:
    """Fetch every fixed step, in the order the service returns them."""
    body = await transport.request_json("GET", STEPS_ENDPOINT)
    if isinstance(body, dict):
        items = body.get("steps")
    else:
        items = body
    if items is None:
        items = []
    if not isinstance(items, list):
        raise StepsApiError(f"{STEPS_ENDPOINT} returned a non-list 'steps'", endpoint=STEPS_ENDPOINT)
    steps = [parse_step(STEPS_ENDPOINT, item) for item in items]
    _logger.debug("Fetched %d steps", len(steps))
    return steps


async def fetch_step(transport: Transport, step_id: str) -> Step:
    endpoint = step_path(step_id)
    body = await transport.request_json("GET", endpoint)
    return parse_step(endpoint, unwrap_data(endpoint, body))


async def create_step(transport: Transport, payload: Mapping[str, Any]) -> Step:
    body = await transport.request_json("POST", STEPS_ENDPOINT, payload)
    return parse_step(STEPS_ENDPOINT, unwrap_data(STEPS_ENDPOINT, body))


async def update_step(transport: Transport, step_id: str, payload: Mapping[str, Any]) -> Step:
    endpoint = step_path(step_id)
    body = await transport.request_json("PUT", endpoint, payload)
    return parse_step(endpoint, unwrap_data(endpoint, body))


async def delete_step(transport: Transport, step_id: str) -> str:
    """Delete a step and return its id.

    The response body is not inspected; the service only confirms.
    """
    endpoint = step_path(step_id)
    await transport.request_json("DELETE", endpoint)
    return str(step_id)
