"""Explicit operation results.

Every remote call made by the store is turned into an
:class:`OperationResult` before it touches state. Only the reducers are
allowed to fold results into a snapshot.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StoreOperation(StrEnum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def default_error(self) -> str:
        """Fallback message when a failure carries no server ``message``."""
        return _DEFAULT_ERRORS[self]


_DEFAULT_ERRORS: dict[StoreOperation, str] = {
    StoreOperation.LIST: "Failed to fetch steps",
    StoreOperation.GET: "Failed to fetch step",
    StoreOperation.CREATE: "Failed to create step",
    StoreOperation.UPDATE: "Failed to update step",
    StoreOperation.DELETE: "Failed to delete step",
}


class StoreStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"


class OperationResult(BaseModel):
    """Outcome of one remote round trip: a payload or an error message."""

    model_config = ConfigDict(frozen=True)

    operation: StoreOperation
    ok: bool
    payload: Any = None
    error: str | None = None
    target_id: str | None = Field(default=None, description="Step id the operation addressed, if any.")

    @classmethod
    def success(cls, operation: StoreOperation, payload: Any, *, target_id: str | None = None) -> OperationResult:
        return cls(operation=operation, ok=True, payload=payload, target_id=target_id)

    @classmethod
    def failure(
        cls,
        operation: StoreOperation,
        message: str | None = None,
        *,
        target_id: str | None = None,
    ) -> OperationResult:
        return cls(
            operation=operation,
            ok=False,
            error=message or operation.default_error,
            target_id=target_id,
        )
