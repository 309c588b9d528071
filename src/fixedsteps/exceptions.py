"""Custom exception hierarchy for fixedsteps."""

from __future__ import annotations


class StepsError(Exception):
    """Base exception for all fixedsteps errors."""


class StepsConfigError(StepsError):
    """Invalid or missing configuration."""


class StepsValidationError(StepsError):
    """A draft failed local checks and was never submitted."""


class StepsTransportError(StepsError):
    """HTTP-level failure (network, non-2xx, invalid JSON).

    ``server_message`` carries the ``message`` field of the structured
    error body when the service sent one.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        server_message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.server_message = server_message
        super().__init__(message)


class StepsNotFoundError(StepsTransportError):
    """The service answered 404 for the requested step."""


class StepsApiError(StepsError):
    """A successful response did not have the expected shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)
