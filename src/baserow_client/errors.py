"""Exceptions raised by the Baserow client.

Transport failures (connection refused, timeouts) are not wrapped; they
surface as ``httpx.HTTPError`` subclasses so callers can apply their own
retry policy.
"""

from enum import StrEnum


class BaserowError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(BaserowError):
    """Missing base URL or credentials. Raised before any network activity."""


class RequestError(BaserowError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, body: str, message: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"request failed with status {status_code}: {body}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class AuthenticationFailure(StrEnum):
    INVALID_CREDENTIALS = "ERROR_INVALID_CREDENTIALS"
    DEACTIVATED_USER = "ERROR_DEACTIVATED_USER"
    AUTH_PROVIDER_DISABLED = "ERROR_AUTH_PROVIDER_DISABLED"
    EMAIL_VERIFICATION_REQUIRED = "ERROR_EMAIL_VERIFICATION_REQUIRED"


class TokenAuthError(RequestError):
    """Login with email and password was rejected."""

    def __init__(
        self,
        status_code: int,
        body: str,
        failure: AuthenticationFailure | None = None,
    ) -> None:
        self.failure = failure
        reason = failure.name.lower().replace("_", " ") if failure else body
        super().__init__(status_code, body, f"authentication failed ({status_code}): {reason}")


class FileUploadError(BaserowError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class QueryValidationError(BaserowError, ValueError):
    """A row request failed client-side validation; nothing was sent."""


class MappingRequiredError(BaserowError):
    """Typed access was requested on a table without a schema mapping."""

    def __init__(self, table_id: int) -> None:
        self.table_id = table_id
        super().__init__("schema mapping required for typed access; perform discovery first")


class DeserializationError(BaserowError):
    """The HTTP call succeeded but a record could not be shaped into the target type."""

    def __init__(self, target: object, detail: str) -> None:
        self.target = target
        self.detail = detail
        name = getattr(target, "__name__", repr(target))
        super().__init__(f"could not deserialize record into {name}: {detail}")


__all__ = [
    "AuthenticationFailure",
    "BaserowError",
    "ConfigurationError",
    "DeserializationError",
    "FileUploadError",
    "MappingRequiredError",
    "QueryValidationError",
    "RequestError",
    "TokenAuthError",
]
