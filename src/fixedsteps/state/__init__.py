"""State/store layer.

This package is the single source of truth for how remote step
operations are reconciled into the in-memory collection a view renders.
"""

from fixedsteps.state.events import OperationResult, StoreOperation, StoreStatus
from fixedsteps.state.store import StepsBackend, StepStore, StoreState

__all__ = [
    "OperationResult",
    "StepStore",
    "StepsBackend",
    "StoreOperation",
    "StoreState",
    "StoreStatus",
]
