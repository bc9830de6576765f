from pydantic import BaseModel, ConfigDict, Field, field_validator

from baserow_client.models.base import WireModel


class Thumbnail(WireModel):
    url: str
    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)


class Thumbnails(WireModel):
    tiny: Thumbnail
    small: Thumbnail


class File(WireModel):
    """A user file as returned by the upload endpoints."""

    url: str
    thumbnails: Thumbnails | None = None
    name: str
    size: int = Field(ge=0)
    mime_type: str
    is_image: bool
    image_width: int | None = Field(default=None, ge=0)
    image_height: int | None = Field(default=None, ge=0)
    uploaded_at: str


class UploadFileViaUrlRequest(BaseModel):
    url: str

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("url")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


__all__ = ["File", "Thumbnail", "Thumbnails", "UploadFileViaUrlRequest"]
