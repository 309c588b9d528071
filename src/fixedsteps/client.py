"""High-level async client for the fixed steps API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from fixedsteps._api import steps as _steps_api
from fixedsteps._transport import JsonTransport, Transport
from fixedsteps.config import StepsConfig
from fixedsteps.exceptions import StepsError
from fixedsteps.models.step import Step
from fixedsteps.state.store import StepStore

_logger = logging.getLogger(__name__)


class StepsClient:
    """Async client for the forms service's ``/steps`` resource.

    Usage::

        async with StepsClient(config) as client:
            steps = await client.list_steps()

    Methods raise :class:`~fixedsteps.exceptions.StepsError` subclasses.
    Wrap the client in a :class:`~fixedsteps.state.store.StepStore` (see
    :meth:`create_store`) to get captured errors and a mirrored
    collection instead.
    """

    def __init__(
        self,
        config: StepsConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> StepsClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = JsonTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise StepsError("Client not initialized. Use 'async with StepsClient(...) as client:'")
        return self._transport

    @property
    def config(self) -> StepsConfig:
        return self._config

    def create_store(self) -> StepStore:
        """Return a new, empty store backed by this client."""
        return StepStore(self)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def list_steps(self) -> list[Step]:
        """Fetch all fixed steps."""
        return await _steps_api.fetch_steps(self._require_transport())

    async def get_step(self, step_id: str) -> Step:
        """Fetch one step by id."""
        return await _steps_api.fetch_step(self._require_transport(), step_id)

    async def create_step(self, payload: Mapping[str, Any]) -> Step:
        """Create a step from an already-built payload."""
        step = await _steps_api.create_step(self._require_transport(), payload)
        _logger.debug("Created step id=%s", step.id)
        return step

    async def update_step(self, step_id: str, payload: Mapping[str, Any]) -> Step:
        """Replace the step identified by *step_id*."""
        return await _steps_api.update_step(self._require_transport(), step_id, payload)

    async def delete_step(self, step_id: str) -> str:
        """Delete a step; returns the deleted id."""
        deleted = await _steps_api.delete_step(self._require_transport(), step_id)
        _logger.debug("Deleted step id=%s", deleted)
        return deleted
