"""Fluent construction of row queries.

Every call returns a new builder; the one it was called on is left as it
was, so partially built queries can be shared and extended independently.
"""

import warnings
from typing import TYPE_CHECKING, Any, TypeVar

from baserow_client.models.enums import Filter, OrderDirection
from baserow_client.models.request import RowRequest
from baserow_client.models.rows import TypedRowsResponse

if TYPE_CHECKING:
    from baserow_client.services.table import BaserowTable

T = TypeVar("T")


class RowRequestBuilder:
    """Builds a RowRequest for a table and executes it.

    No validation happens here. Page bounds are checked when the query is
    executed; operator/field compatibility is checked by the server.

    Example:
        result = await (
            table.query()
            .filter_by("Status", Filter.EQUAL, "Active")
            .order_by("Created", OrderDirection.DESC)
            .size(50)
            .get(Task)
        )
    """

    def __init__(self, table: "BaserowTable", request: RowRequest | None = None) -> None:
        self._table = table
        self._request = request or RowRequest()

    def _with(self, **changes: Any) -> "RowRequestBuilder":
        return RowRequestBuilder(self._table, self._request.model_copy(update=changes))

    def view(self, view_id: int) -> "RowRequestBuilder":
        """Query rows through a view; filters and sorting given here apply on top of it."""
        return self._with(view_id=view_id)

    def size(self, size: int) -> "RowRequestBuilder":
        return self._with(page_size=size)

    def page_size(self, size: int) -> "RowRequestBuilder":
        warnings.warn("page_size() is deprecated, use size() instead", DeprecationWarning, stacklevel=2)
        return self.size(size)

    def page(self, page: int) -> "RowRequestBuilder":
        return self._with(page=page)

    def offset(self, offset: int) -> "RowRequestBuilder":
        """Use legacy offset pagination. Sent alongside ``page`` if both are set."""
        return self._with(offset=offset)

    def user_field_names(self, enabled: bool) -> "RowRequestBuilder":
        """Ask the server for friendly field names.

        Ignored when the table has a schema mapping from auto_map().
        """
        return self._with(user_field_names=enabled)

    def order_by(self, field: str, direction: OrderDirection = OrderDirection.ASC) -> "RowRequestBuilder":
        return RowRequestBuilder(self._table, self._request.with_order(field, direction))

    def filter_by(self, field: str, filter_op: Filter, value: Any) -> "RowRequestBuilder":
        return RowRequestBuilder(self._table, self._request.with_filter(field, filter_op, value))

    def build(self) -> RowRequest:
        return self._request

    async def get(self, target: type[T] = dict[str, Any]) -> TypedRowsResponse[T]:
        """Execute the query against the table. See BaserowTable.get."""
        return await self._table.get(self._request, target)


__all__ = ["RowRequestBuilder"]
