from pydantic import Field, field_validator

from baserow_client.models.base import WireModel, ensure_non_empty_text


class TableField(WireModel):
    """Schema metadata for one column of a table."""

    id: int = Field(ge=0)
    table_id: int = Field(ge=0)
    name: str
    order: int = 0
    type: str
    primary: bool = False
    read_only: bool = False
    description: str | None = None

    @field_validator("type")
    @classmethod
    def _validate_type(cls, value: str) -> str:
        return ensure_non_empty_text(value, "type")


__all__ = ["TableField"]
