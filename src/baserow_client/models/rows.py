from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class RowsResponse(BaseModel):
    """Paginated envelope returned by the rows endpoint.

    ``count`` is absent for view-scoped queries on some server versions.
    ``next``/``previous`` are opaque; their presence means another page exists.
    """

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: list[dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    def has_next(self) -> bool:
        return self.next is not None


class TypedRowsResponse(BaseModel, Generic[T]):
    """Same envelope as RowsResponse with results shaped into ``T``."""

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: list[T] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def has_next(self) -> bool:
        return self.next is not None


__all__ = ["RowsResponse", "TypedRowsResponse"]
