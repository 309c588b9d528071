from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from fixedsteps.client import StepsClient
from fixedsteps.config import StepsConfig
from fixedsteps.exceptions import StepsNotFoundError, StepsTransportError
from fixedsteps.state.store import StepStore


class FakeStepsService:
    """In-memory ``/steps`` service speaking the transport protocol."""

    def __init__(self) -> None:
        self.steps: list[dict[str, Any]] = []
        self.calls: list[tuple[str, str, dict[str, Any] | None]] = []
        self.failures: dict[str, StepsTransportError] = {}
        self._next_id = 1

    def seed(self, title: str, *, step_type: str = "first", order: int | None = None) -> dict[str, Any]:
        step = {
            "_id": f"step-{self._next_id}",
            "stepType": step_type,
            "stepTitle": title,
            "stepDescription": "",
            "stepOrder": order if order is not None else len(self.steps) + 1,
            "fields": [
                {"label": "Name", "name": "name", "type": "text", "placeholder": "", "required": True, "options": []}
            ],
        }
        self._next_id += 1
        self.steps.append(step)
        return step

    def fail(self, method: str, message: str | None = None, *, status: int = 500) -> None:
        self.failures[method] = StepsTransportError(
            f"HTTP {status}",
            status_code=status,
            endpoint="/steps",
            server_message=message,
        )

    def _index(self, step_id: str) -> int | None:
        for index, step in enumerate(self.steps):
            if step["_id"] == step_id:
                return index
        return None

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        self.calls.append((method, endpoint, None if payload is None else dict(payload)))
        failure = self.failures.get(method)
        if failure is not None:
            raise failure

        parts = endpoint.strip("/").split("/")
        if len(parts) == 1:
            if method == "GET":
                return {"steps": [dict(step) for step in self.steps]}
            if method == "POST":
                assert payload is not None
                created = {**payload, "_id": f"step-{self._next_id}"}
                self._next_id += 1
                self.steps.append(created)
                return {"data": dict(created)}
            raise AssertionError(f"unexpected {method} {endpoint}")

        step_id = parts[1]
        index = self._index(step_id)
        if index is None:
            raise StepsNotFoundError(
                f"HTTP 404 from {method} {endpoint}",
                status_code=404,
                endpoint=endpoint,
                server_message="Step not found",
            )
        if method == "GET":
            return {"data": dict(self.steps[index])}
        if method == "PUT":
            assert payload is not None
            updated = {**self.steps[index], **payload, "_id": step_id}
            self.steps[index] = updated
            return {"data": dict(updated)}
        if method == "DELETE":
            del self.steps[index]
            return {"message": "Step deleted successfully"}
        raise AssertionError(f"unexpected {method} {endpoint}")


@pytest.fixture
def service() -> FakeStepsService:
    return FakeStepsService()


@pytest.fixture
def config() -> StepsConfig:
    return StepsConfig(base_url="http://steps.test/api")


@pytest.fixture
def client(config: StepsConfig, service: FakeStepsService) -> StepsClient:
    return StepsClient(config, transport=service)


@pytest.fixture
def store(client: StepsClient) -> StepStore:
    return client.create_store()
