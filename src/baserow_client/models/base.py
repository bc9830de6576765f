from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict

T_Model = TypeVar("T_Model", bound="WireModel")


class WireModel(BaseModel):
    """Base for payloads exchanged with the Baserow API.

    Frozen, and tolerant of extra keys: the server adds type-specific
    attributes to most objects and older clients must keep working.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls: Type[T_Model], data: Mapping[str, Any] | BaseModel) -> T_Model:
        return cls.model_validate(data)


def ensure_non_empty_text(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f"{field_name} cannot be empty")
    return value
