"""Async HTTP client for the Baserow REST API.

Owns the transport and the credentials. Table-level operations live on
BaserowTable; this class handles authentication, schema discovery and
file uploads, and sends every request on behalf of the tables it creates.
"""

import asyncio
import mimetypes
from pathlib import Path
from typing import Any, BinaryIO

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from baserow_client.config import Configuration
from baserow_client.errors import (
    AuthenticationFailure,
    ConfigurationError,
    DeserializationError,
    FileUploadError,
    RequestError,
    TokenAuthError,
)
from baserow_client.models.auth import LoginRequest, TokenAuthErrorResponse, TokenResponse
from baserow_client.models.field import TableField
from baserow_client.models.file import File, UploadFileViaUrlRequest
from baserow_client.services.table import BaserowTable

_FIELD_LIST = TypeAdapter(list[TableField])

QueryParams = list[tuple[str, str]] | dict[str, str] | None


class Baserow:
    """Entry point for talking to a Baserow instance.

    The httpx.AsyncClient is injected so tests can swap in a MockTransport.
    When none is given the client creates one and closes it in aclose().
    No timeout is imposed unless the configuration sets one.
    """

    def __init__(
        self,
        configuration: Configuration,
        http_client: httpx.AsyncClient | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
        owns_http_client: bool | None = None,
    ) -> None:
        if not configuration.base_url:
            raise ConfigurationError("base URL is required")

        self._configuration = configuration
        self._owns_http_client = http_client is None if owns_http_client is None else owns_http_client
        self._http = http_client or httpx.AsyncClient(timeout=configuration.timeout)
        self._logger = logger or structlog.get_logger(__name__)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http

    async def __aenter__(self) -> "Baserow":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    def with_configuration(self, configuration: Configuration) -> "Baserow":
        """Return a client using ``configuration`` and sharing this transport."""
        return Baserow(configuration, http_client=self._http, logger=self._logger)

    def url(self, path: str) -> str:
        return f"{self._configuration.base_url}/{path.lstrip('/')}"

    def auth_headers(self) -> dict[str, str]:
        """Authorization header for the configured credentials. JWT wins over a database token.

        Raises:
            ConfigurationError: If neither a JWT nor an API key is configured.
        """
        if self._configuration.jwt:
            return {"Authorization": f"JWT {self._configuration.jwt}"}
        if self._configuration.api_key:
            return {"Authorization": f"Token {self._configuration.api_key}"}
        raise ConfigurationError("no API key or JWT configured; call token_auth() or set an API key")

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: QueryParams = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Send one request and return the response if its status is 2xx.

        Raises:
            ConfigurationError: If authentication is required but not configured.
            RequestError: On any non-success status.
            httpx.HTTPError: On transport failures.
        """
        headers = self.auth_headers() if authenticated else {}
        url = self.url(path)

        self._logger.debug("baserow_request_started", method=method, url=url)
        response = await self._http.request(
            method,
            url,
            params=params,
            json=json,
            files=files,
            headers=headers,
        )

        if not response.is_success:
            self._logger.warning(
                "baserow_request_failed",
                method=method,
                url=url,
                status_code=response.status_code,
            )
            raise RequestError(response.status_code, response.text)

        self._logger.debug(
            "baserow_request_completed",
            method=method,
            url=url,
            status_code=response.status_code,
        )
        return response

    async def token_auth(self) -> "Baserow":
        """Log in with email and password.

        Returns:
            A new client sharing this transport whose configuration carries
            the JWT, the refresh token and the user.

        Raises:
            ConfigurationError: If email or password is missing.
            TokenAuthError: If the server rejects the credentials.
        """
        if not self._configuration.email:
            raise ConfigurationError("email is required for token authentication")
        if not self._configuration.password:
            raise ConfigurationError("password is required for token authentication")

        login = LoginRequest(email=self._configuration.email, password=self._configuration.password)

        try:
            response = await self.request(
                "POST",
                "/api/user/token-auth/",
                json=login.model_dump(),
                authenticated=False,
            )
        except RequestError as exc:
            failure = _authentication_failure(exc.body)
            self._logger.warning("token_auth_failed", status_code=exc.status_code, failure=failure)
            raise TokenAuthError(exc.status_code, exc.body, failure) from exc

        try:
            tokens = TokenResponse.from_payload(response.json())
        except ValidationError as exc:
            raise DeserializationError(TokenResponse, str(exc)) from exc

        self._logger.info("token_auth_succeeded", username=tokens.user.username)

        configuration = self._configuration.model_copy(
            update={
                "jwt": tokens.access_token,
                "access_token": tokens.access_token,
                "refresh_token": tokens.refresh_token,
                "user": tokens.user,
            }
        )
        return self.with_configuration(configuration)

    async def table_fields(self, table_id: int) -> list[TableField]:
        """Fetch the field list (schema) of a table."""
        response = await self.request("GET", f"/api/database/fields/table/{table_id}/")
        try:
            fields = _FIELD_LIST.validate_python(response.json())
        except ValidationError as exc:
            raise DeserializationError(list[TableField], str(exc)) from exc

        self._logger.debug("table_fields_fetched", table_id=table_id, field_count=len(fields))
        return fields

    def table_by_id(self, table_id: int) -> BaserowTable:
        """Return an unmapped handle for the table with ``table_id``."""
        return BaserowTable(client=self, table_id=table_id, logger=self._logger)

    async def upload_file(
        self,
        file: Path | str | bytes | BinaryIO,
        filename: str | None = None,
    ) -> File:
        """Upload a file as multipart form data.

        Args:
            file: A path, raw bytes, or a binary file object.
            filename: Name sent to the server. Defaults to the path's name.

        Raises:
            FileUploadError: If no filename can be determined or the server rejects the upload.
        """
        if isinstance(file, (str, Path)):
            path = Path(file)
            content = await asyncio.to_thread(path.read_bytes)
            filename = filename or path.name
        elif isinstance(file, bytes):
            content = file
        else:
            content = await asyncio.to_thread(file.read)
            filename = filename or Path(getattr(file, "name", "")).name or None

        if not filename:
            raise FileUploadError("a filename is required to upload raw content")

        mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        try:
            response = await self.request(
                "POST",
                "/api/user-files/upload-file/",
                files={"file": (filename, content, mime_type)},
            )
        except RequestError as exc:
            raise FileUploadError(
                f"upload of {filename} failed with status {exc.status_code}: {exc.body}",
                status_code=exc.status_code,
            ) from exc

        uploaded = _parse_file(response)
        self._logger.info("file_uploaded", name=uploaded.name, size=uploaded.size, mime_type=mime_type)
        return uploaded

    async def upload_file_via_url(self, url: str) -> File:
        """Ask the server to download and store the file at ``url``.

        Raises:
            FileUploadError: If ``url`` is not an absolute http(s) URL or the server rejects it.
        """
        try:
            parsed = httpx.URL(url.strip())
        except httpx.InvalidURL as exc:
            raise FileUploadError(f"invalid URL: {url}") from exc
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise FileUploadError(f"invalid URL: {url}")

        payload = UploadFileViaUrlRequest(url=str(parsed))

        try:
            response = await self.request(
                "POST",
                "/api/user-files/upload-via-url/",
                json=payload.model_dump(),
            )
        except RequestError as exc:
            raise FileUploadError(
                f"upload via URL failed with status {exc.status_code}: {exc.body}",
                status_code=exc.status_code,
            ) from exc

        uploaded = _parse_file(response)
        self._logger.info("file_uploaded_via_url", name=uploaded.name, size=uploaded.size)
        return uploaded


def _parse_file(response: httpx.Response) -> File:
    try:
        return File.from_payload(response.json())
    except ValidationError as exc:
        raise DeserializationError(File, str(exc)) from exc


def _authentication_failure(body: str) -> AuthenticationFailure | None:
    try:
        error = TokenAuthErrorResponse.model_validate_json(body)
    except ValidationError:
        return None
    try:
        return AuthenticationFailure(error.error)
    except ValueError:
        return None


__all__ = ["Baserow"]
