"""Client configuration for fixedsteps."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from fixedsteps._constants import DEFAULT_TIMEOUT, USER_AGENT
from fixedsteps.exceptions import StepsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StepsConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the forms service; ``/steps`` is appended to it.
    auth_token : str or None
        Bearer token sent as ``Authorization`` on every request.
    timeout : float
        Total per-request timeout in seconds. The only timeout policy
        the library applies.
    user_agent : str
        ``User-Agent`` header value.
    api_trace_enabled : bool
        Log redacted request and response bodies at DEBUG level.
    """

    base_url: str
    auth_token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise StepsConfigError("base_url must be non-empty")
        if self.timeout <= 0:
            raise StepsConfigError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> StepsConfig:
        """Create configuration from environment variables.

        Reads ``STEPS_BASE_URL``, ``STEPS_AUTH_TOKEN``, ``STEPS_USER_AGENT``,
        ``STEPS_TIMEOUT`` and ``STEPS_API_TRACE_ENABLED``. Explicit keyword
        arguments that are not ``None`` override environment values.

        Raises
        ------
        StepsConfigError
            When no base URL is available or a numeric value is malformed.
        """
        env = os.environ
        # None means "not given" so CLI flags can be forwarded unconditionally.
        overrides = {k: v for k, v in overrides.items() if v is not None}

        _ENV_CONFIG_MAP = {
            "STEPS_BASE_URL": "base_url",
            "STEPS_AUTH_TOKEN": "auth_token",
            "STEPS_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("STEPS_TIMEOUT")
        if timeout_env is not None and "timeout" not in overrides:
            try:
                config_kwargs["timeout"] = float(timeout_env)
            except ValueError as exc:
                raise StepsConfigError(f"STEPS_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("STEPS_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        if "base_url" not in config_kwargs:
            raise StepsConfigError("STEPS_BASE_URL is not set and no base_url was given")

        return cls(**config_kwargs)
