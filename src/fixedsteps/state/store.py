"""In-memory store mirroring the remote step collection.

This is the only component allowed to change the collection. Views read
:class:`StoreState` snapshots and submit intents through the store's
operations.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict

from fixedsteps.drafts import DraftLike, build_payload, coerce_draft
from fixedsteps.exceptions import StepsApiError, StepsTransportError, StepsValidationError
from fixedsteps.models.step import Step
from fixedsteps.state.events import OperationResult, StoreOperation, StoreStatus
from fixedsteps.state.reducers import begin, reconcile

_logger = logging.getLogger(__name__)

Listener = Callable[["StoreState"], None]


class StepsBackend(Protocol):
    """Remote operations the store drives.

    :class:`fixedsteps.client.StepsClient` is the production
    implementation; methods raise on failure.
    """

    async def list_steps(self) -> list[Step]: ...

    async def get_step(self, step_id: str) -> Step: ...

    async def create_step(self, payload: Mapping[str, Any]) -> Step: ...

    async def update_step(self, step_id: str, payload: Mapping[str, Any]) -> Step: ...

    async def delete_step(self, step_id: str) -> str: ...


class StoreState(BaseModel):
    """Immutable snapshot of the store."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    items: tuple[Step, ...] = ()
    selected: Step | None = None
    status: StoreStatus = StoreStatus.IDLE
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.status == StoreStatus.LOADING


class StepStore:
    """Remote-collection store for fixed steps.

    Usage::

        async with StepsClient(config) as client:
            store = StepStore(client)
            await store.list()
            for step in store.items:
                ...

    Operations return an :class:`OperationResult` and never raise for
    remote failures; the message lands in :attr:`error`. Draft problems
    and blank step ids raise :class:`~fixedsteps.exceptions.StepsValidationError` before any
    request is made. Operations on one store are expected to be issued
    one at a time.
    """

    def __init__(self, backend: StepsBackend, *, initial: StoreState | None = None) -> None:
        self._backend = backend
        self._state = initial or StoreState()
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Snapshot access
    # ------------------------------------------------------------------

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def items(self) -> tuple[Step, ...]:
        return self._state.items

    @property
    def selected(self) -> Step | None:
        return self._state.selected

    @property
    def status(self) -> StoreStatus:
        return self._state.status

    @property
    def error(self) -> str | None:
        return self._state.error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new snapshot. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, state: StoreState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.warning("Store listener %r failed", listener, exc_info=True)

    # ------------------------------------------------------------------
    # Local transitions
    # ------------------------------------------------------------------

    def clear_selected(self) -> None:
        self._set_state(self._state.model_copy(update={"selected": None}))

    def clear_error(self) -> None:
        self._set_state(self._state.model_copy(update={"error": None}))

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    async def _run(
        self,
        operation: StoreOperation,
        call: Callable[[], Awaitable[Any]],
        *,
        target_id: str | None = None,
    ) -> OperationResult:
        self._set_state(begin(self._state, operation))
        try:
            payload = await call()
        except StepsTransportError as exc:
            _logger.debug("Store %s failed: %s", operation, exc)
            result = OperationResult.failure(operation, exc.server_message, target_id=target_id)
        except StepsApiError as exc:
            _logger.debug("Store %s got an unexpected response: %s", operation, exc)
            result = OperationResult.failure(operation, target_id=target_id)
        except BaseException:
            # Never propagate while still loading.
            self._set_state(reconcile(self._state, OperationResult.failure(operation, target_id=target_id)))
            raise
        else:
            result = OperationResult.success(operation, payload, target_id=target_id)
        self._set_state(reconcile(self._state, result))
        _logger.debug("Store %s finished ok=%s items=%d", operation, result.ok, len(self._state.items))
        return result

    @staticmethod
    def _require_id(step_id: str) -> str:
        if step_id is None or not str(step_id).strip():
            raise StepsValidationError("step id required")
        return str(step_id)

    async def list(self) -> OperationResult:
        """Reload the whole collection from the service."""
        return await self._run(StoreOperation.LIST, self._backend.list_steps)

    async def get_by_id(self, step_id: str) -> OperationResult:
        """Fetch one step into :attr:`selected`."""
        step_id = self._require_id(step_id)
        return await self._run(
            StoreOperation.GET,
            lambda: self._backend.get_step(step_id),
            target_id=step_id,
        )

    async def create(self, draft: DraftLike) -> OperationResult:
        """Validate and submit a new step, appending it on success."""
        payload = build_payload(draft, existing_count=len(self._state.items))
        return await self._run(StoreOperation.CREATE, lambda: self._backend.create_step(payload))

    async def update(self, step_id: str, draft: DraftLike) -> OperationResult:
        """Validate and submit changes to the step identified by *step_id*."""
        step_id = self._require_id(step_id)
        payload = build_payload(draft, existing_count=len(self._state.items), for_update=True)
        return await self._run(
            StoreOperation.UPDATE,
            lambda: self._backend.update_step(step_id, payload),
            target_id=step_id,
        )

    async def delete(self, step_id: str) -> OperationResult:
        """Delete a step. Confirmation is the caller's concern."""
        step_id = self._require_id(step_id)
        return await self._run(
            StoreOperation.DELETE,
            lambda: self._backend.delete_step(step_id),
            target_id=step_id,
        )

    async def save(self, draft: DraftLike, *, refresh: bool = True) -> OperationResult:
        """Create or update depending on whether *draft* carries an id.

        With *refresh*, a successful save is followed by :meth:`list`; the
        returned result is still the save's.
        """
        draft = coerce_draft(draft)
        if draft.id is not None:
            result = await self.update(draft.id, draft)
        else:
            result = await self.create(draft)
        if result.ok and refresh:
            await self.list()
        return result
