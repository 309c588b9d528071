"""Deterministic reconciliation of operation results.

Each function maps ``(state, result)`` to a new :class:`StoreState`
and never mutates its input, so a given sequence of results always produces the
same snapshots. The status flip and the collection change land in the
same returned state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from fixedsteps.models.step import Step
from fixedsteps.state.events import OperationResult, StoreOperation, StoreStatus

if TYPE_CHECKING:
    from fixedsteps.state.store import StoreState

_logger = logging.getLogger(__name__)


def begin(state: StoreState, operation: StoreOperation) -> StoreState:
    """Mark *operation* as in flight."""
    _logger.debug("Store %s started", operation)
    return state.model_copy(update={"status": StoreStatus.LOADING, "error": None})


def _list_succeeded(state: StoreState, result: OperationResult) -> StoreState:
    # Replace wholesale; no merge with what was there before.
    items = tuple(result.payload or ())
    return state.model_copy(update={"items": items, "error": None})


def _get_succeeded(state: StoreState, result: OperationResult) -> StoreState:
    return state.model_copy(update={"selected": result.payload, "error": None})


def _create_succeeded(state: StoreState, result: OperationResult) -> StoreState:
    # Appended as returned; ordering by step order is left to the next list().
    return state.model_copy(update={"items": (*state.items, result.payload), "error": None})


def _update_succeeded(state: StoreState, result: OperationResult) -> StoreState:
    updated: Step = result.payload
    step_id = updated.id
    if not any(item.id == step_id for item in state.items):
        _logger.debug("Updated step %s is not in the collection; nothing replaced", step_id)
    items = tuple(updated if item.id == step_id else item for item in state.items)
    selected = state.selected
    if selected is not None and selected.id == step_id:
        selected = updated
    return state.model_copy(update={"items": items, "selected": selected, "error": None})


def _delete_succeeded(state: StoreState, result: OperationResult) -> StoreState:
    step_id = result.target_id if result.target_id is not None else result.payload
    items = tuple(item for item in state.items if item.id != step_id)
    if len(items) == len(state.items):
        _logger.debug("Deleted step %s is not in the collection; nothing removed", step_id)
    selected = state.selected
    if selected is not None and selected.id == step_id:
        selected = None
    return state.model_copy(update={"items": items, "selected": selected, "error": None})


_SUCCESS_REDUCERS: dict[StoreOperation, Callable[[StoreState, OperationResult], StoreState]] = {
    StoreOperation.LIST: _list_succeeded,
    StoreOperation.GET: _get_succeeded,
    StoreOperation.CREATE: _create_succeeded,
    StoreOperation.UPDATE: _update_succeeded,
    StoreOperation.DELETE: _delete_succeeded,
}


def reconcile(state: StoreState, result: OperationResult) -> StoreState:
    """Fold a completed operation into *state* and return to idle.

    A failure keeps the collection and selection untouched and records
    the error message.
    """
    if not result.ok:
        return state.model_copy(update={"status": StoreStatus.IDLE, "error": result.error})
    reduced = _SUCCESS_REDUCERS[result.operation](state, result)
    return reduced.model_copy(update={"status": StoreStatus.IDLE})
