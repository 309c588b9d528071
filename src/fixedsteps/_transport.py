"""JSON-over-HTTP transport for the forms service."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from fixedsteps._redact import redact_for_log, redact_headers
from fixedsteps.config import StepsConfig
from fixedsteps.exceptions import StepsNotFoundError, StepsTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`JsonTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


def _server_message(text: str) -> str | None:
    """Extract ``message`` from a structured error body, if there is one."""
    try:
        body = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


class JsonTransport:
    """HTTP transport sending and receiving JSON bodies."""

    def __init__(self, config: StepsConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        if self._config.auth_token:
            headers["authorization"] = f"Bearer {self._config.auth_token}"
        return headers

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` for an empty body. Raises
        :class:`StepsTransportError` for network failures, timeouts,
        non-2xx statuses and undecodable bodies.
        """
        url = f"{self._config.base_url.rstrip('/')}{endpoint}"
        headers = self._headers()
        body: str | None = None
        if payload is not None:
            body = json.dumps(payload, separators=(",", ":"))
            headers["content-type"] = "application/json; charset=UTF-8"

        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled:
            _logger.debug(
                "Request %s %s headers=%s body=%s",
                method,
                endpoint,
                redact_headers(headers),
                redact_for_log(payload),
            )

        timeout = aiohttp.ClientTimeout(total=self._config.timeout)
        try:
            async with self._http.request(method, url, data=body, headers=headers, timeout=timeout) as resp:
                status = resp.status
                # Error bodies are decoded leniently; only their message is read.
                text = await resp.text(errors="strict" if 200 <= status < 300 else "replace")
        except asyncio.TimeoutError as exc:
            raise StepsTransportError(
                f"Request to {endpoint} timed out after {self._config.timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise StepsTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except (UnicodeDecodeError, LookupError) as exc:
            raise StepsTransportError(
                f"Undecodable response body from {endpoint}: {exc}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if not 200 <= status < 300:
            error_cls = StepsNotFoundError if status == 404 else StepsTransportError
            raise error_cls(
                f"HTTP {status} from {method} {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
                server_message=_server_message(text),
            )

        if not text.strip():
            return None

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StepsTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("Response %s %s status=%d body=%s", method, endpoint, status, redact_for_log(result))
        return result
