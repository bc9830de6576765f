from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from baserow_client.models.base import WireModel, ensure_non_empty_text


class LoginRequest(BaseModel):
    email: str
    password: str

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("email", "password")
    @classmethod
    def _ensure_non_empty(cls, value: str, info: ValidationInfo) -> str:
        return ensure_non_empty_text(value, info.field_name or "value")


class User(WireModel):
    first_name: str
    username: str
    language: str | None = None


class TokenResponse(WireModel):
    token: str
    access_token: str
    refresh_token: str
    user: User


class TokenAuthErrorResponse(WireModel):
    error: str
    detail: str | dict | None = None


__all__ = ["LoginRequest", "TokenResponse", "TokenAuthErrorResponse", "User"]
