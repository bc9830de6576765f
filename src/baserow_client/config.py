"""Client configuration.

Values can be passed explicitly, assembled with ``ConfigBuilder``, or read
from ``BASEROW_*`` environment variables (``BASEROW_BASE_URL``,
``BASEROW_API_KEY``, ``BASEROW_EMAIL``, ``BASEROW_PASSWORD``, ...).
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from baserow_client.models.auth import User


class Configuration(BaseSettings):
    base_url: str | None = None

    api_key: str | None = None
    email: str | None = None
    password: str | None = None

    jwt: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    user: User | None = None

    timeout: float | None = None

    model_config = SettingsConfigDict(
        env_prefix="BASEROW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None

    def has_credentials(self) -> bool:
        return bool(self.email and self.password)

    def has_token(self) -> bool:
        return bool(self.jwt or self.api_key)


class ConfigBuilder:
    """Fluent construction of a Configuration."""

    def __init__(self) -> None:
        self._values: dict[str, object] = {}

    def base_url(self, base_url: str) -> "ConfigBuilder":
        self._values["base_url"] = base_url
        return self

    def api_key(self, api_key: str) -> "ConfigBuilder":
        self._values["api_key"] = api_key
        return self

    def email(self, email: str) -> "ConfigBuilder":
        self._values["email"] = email
        return self

    def password(self, password: str) -> "ConfigBuilder":
        self._values["password"] = password
        return self

    def jwt(self, jwt: str) -> "ConfigBuilder":
        self._values["jwt"] = jwt
        return self

    def timeout(self, seconds: float) -> "ConfigBuilder":
        self._values["timeout"] = seconds
        return self

    def build(self) -> Configuration:
        return Configuration(**self._values)


__all__ = ["ConfigBuilder", "Configuration"]
