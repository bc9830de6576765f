"""Factory functions for creating and wiring Baserow clients.

Provides a production factory that reads configuration from the environment
and a test factory that routes every request to an in-process handler.
"""

from collections.abc import Callable

import httpx
import structlog

from baserow_client.config import Configuration
from baserow_client.services.client import Baserow

_TEST_BASE_URL = "https://baserow.test"
_TEST_API_KEY = "test-token"


def create_client(
    configuration: Configuration | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> Baserow:
    """Create a Baserow client.

    Args:
        configuration: Explicit configuration. When omitted, values are read
            from ``BASEROW_*`` environment variables.
        http_client: Transport to share. When omitted the client creates and
            owns one.

    Returns:
        Configured Baserow client.

    Raises:
        ConfigurationError: If no base URL is configured.
    """
    logger = structlog.get_logger(__name__)
    configuration = configuration or Configuration()

    logger.debug(
        "baserow_client_created",
        base_url=configuration.base_url,
        has_token=configuration.has_token(),
        has_credentials=configuration.has_credentials(),
    )
    return Baserow(configuration, http_client=http_client, logger=logger)


def create_test_client(
    handler: Callable[[httpx.Request], httpx.Response],
    base_url: str = _TEST_BASE_URL,
    api_key: str | None = _TEST_API_KEY,
    **overrides: object,
) -> Baserow:
    """Create a Baserow client whose requests are answered by ``handler``.

    Uses httpx.MockTransport, so no sockets are opened. Each call creates an
    independent transport.

    Args:
        handler: Called with every outgoing request; returns the response.
        base_url: Base URL the client targets.
        api_key: Database token. Pass None to leave the client unauthenticated.
        **overrides: Extra Configuration values (email, password, jwt, ...).

    Returns:
        Baserow client wired to the mock transport.
    """
    configuration = Configuration(base_url=base_url, api_key=api_key, **overrides)
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return Baserow(
        configuration,
        http_client=http_client,
        logger=structlog.get_logger(__name__),
        owns_http_client=True,
    )
