"""Tests for the client factory module."""

import httpx
import pytest

from baserow_client.config import Configuration
from baserow_client.errors import ConfigurationError
from baserow_client.services.client import Baserow
from baserow_client.services.factory import create_client, create_test_client


class TestCreateClient:
    """Tests for create_client factory."""

    async def test_creates_client_from_configuration(self) -> None:
        configuration = Configuration(base_url="https://baserow.test", api_key="abc")

        client = create_client(configuration)

        assert isinstance(client, Baserow)
        assert client.configuration is configuration
        await client.aclose()

    async def test_reads_environment_when_no_configuration(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BASEROW_BASE_URL", "https://env.baserow.test")
        monkeypatch.setenv("BASEROW_API_KEY", "env-token")

        client = create_client()

        assert client.configuration.base_url == "https://env.baserow.test"
        assert client.auth_headers() == {"Authorization": "Token env-token"}
        await client.aclose()

    def test_missing_base_url_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BASEROW_BASE_URL", raising=False)

        with pytest.raises(ConfigurationError):
            create_client(Configuration(base_url=None))

    async def test_shared_transport_is_not_closed(self) -> None:
        http_client = httpx.AsyncClient()
        client = create_client(Configuration(base_url="https://baserow.test"), http_client=http_client)

        await client.aclose()

        assert not http_client.is_closed
        await http_client.aclose()


class TestCreateTestClient:
    """Tests for create_test_client factory."""

    async def test_routes_requests_to_handler(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with create_test_client(handler) as client:
            fields = await client.table_fields(1)

        assert fields == []
        assert seen[0].url == "https://baserow.test/api/database/fields/table/1/"

    async def test_closes_owned_transport(self) -> None:
        client = create_test_client(lambda request: httpx.Response(200))

        await client.aclose()

        assert client.http_client.is_closed
