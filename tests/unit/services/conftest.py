"""Shared fakes for service tests."""

import json
from typing import Any

import httpx
import pytest

from baserow_client.services.client import Baserow
from baserow_client.services.factory import create_test_client

BASE_URL = "https://baserow.test"


class FakeBaserowServer:
    """In-process stand-in for the Baserow API.

    Routes are keyed by (method, path). Every request is recorded so tests
    can assert on what was sent, or that nothing was.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, payload: Any = None, status_code: int = 200) -> None:
        self.routes[(method, path)] = (status_code, payload)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "ERROR_NOT_FOUND", "detail": "not found"})
        status_code, payload = route
        if isinstance(payload, str):
            return httpx.Response(status_code, text=payload)
        if payload is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=payload)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


def make_field(field_id: int, name: str, field_type: str = "text", primary: bool = False) -> dict[str, Any]:
    return {
        "id": field_id,
        "table_id": 1234,
        "name": name,
        "order": field_id,
        "type": field_type,
        "primary": primary,
        "read_only": False,
        "description": None,
    }


@pytest.fixture
def server() -> FakeBaserowServer:
    return FakeBaserowServer()


@pytest.fixture
async def client(server: FakeBaserowServer) -> Baserow:
    baserow = create_test_client(server, base_url=BASE_URL, api_key="123")
    yield baserow
    await baserow.aclose()


@pytest.fixture
def schema() -> list[dict[str, Any]]:
    """Three-field table schema: Name (primary), Age, Email."""
    return [
        make_field(1, "Name", primary=True),
        make_field(2, "Age", field_type="number"),
        make_field(3, "Email", field_type="email"),
    ]


@pytest.fixture
def field_factory():
    return make_field
