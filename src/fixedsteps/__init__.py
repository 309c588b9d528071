"""fixedsteps - Async Python client for authoring fixed form steps."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fixedsteps")
except PackageNotFoundError:
    __version__ = "0+local"
from fixedsteps.client import StepsClient
from fixedsteps.config import StepsConfig
from fixedsteps.exceptions import (
    StepsApiError,
    StepsConfigError,
    StepsError,
    StepsNotFoundError,
    StepsTransportError,
    StepsValidationError,
)
from fixedsteps.models import FieldSpec, FieldType, Step, StepDraft, StepType
from fixedsteps.state import OperationResult, StepStore, StoreOperation, StoreState, StoreStatus

__all__ = [
    "__version__",
    "FieldSpec",
    "FieldType",
    "OperationResult",
    "Step",
    "StepDraft",
    "StepStore",
    "StepType",
    "StepsApiError",
    "StepsClient",
    "StepsConfig",
    "StepsConfigError",
    "StepsError",
    "StepsNotFoundError",
    "StepsTransportError",
    "StepsValidationError",
    "StoreOperation",
    "StoreState",
    "StoreStatus",
]
