from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from baserow_client.models.enums import Filter, OrderDirection

DEFAULT_PAGE_SIZE = 100
DEFAULT_PAGE = 1


class FilterTriple(BaseModel):
    """One ``filter__<field>__<operator>=<value>`` condition.

    Values are always sent as strings; the server interprets them according
    to the field type. Booleans become ``"1"``/``"0"``, None becomes an empty
    string, and anything else is passed through ``str()``.
    """

    field: str
    filter: Filter
    value: str

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> str:
        if isinstance(value, bool):
            return "1" if value else "0"
        if value is None:
            return ""
        return str(value)


class RowRequest(BaseModel):
    """Parameters for one row query.

    Nothing here is validated on construction. Pagination bounds are checked
    by the executor before any request is sent; operator/field compatibility
    is left to the server.
    """

    view_id: int | None = None
    order: dict[str, OrderDirection] | None = None
    filters: list[FilterTriple] | None = None
    page_size: int | None = DEFAULT_PAGE_SIZE
    page: int | None = DEFAULT_PAGE
    offset: int | None = None
    user_field_names: bool | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def with_order(self, field: str, direction: OrderDirection) -> "RowRequest":
        order = dict(self.order or {})
        order[field] = direction
        return self.model_copy(update={"order": order})

    def with_filter(self, field: str, filter_op: Filter, value: Any) -> "RowRequest":
        filters = list(self.filters or [])
        filters.append(FilterTriple(field=field, filter=filter_op, value=value))
        return self.model_copy(update={"filters": filters})


__all__ = ["DEFAULT_PAGE", "DEFAULT_PAGE_SIZE", "FilterTriple", "RowRequest"]
