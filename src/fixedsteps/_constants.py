"""Internal constants shared across the library."""

from __future__ import annotations

USER_AGENT = "fixedsteps/1"
DEFAULT_TIMEOUT: float = 30.0

STEPS_ENDPOINT = "/steps"
