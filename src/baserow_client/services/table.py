"""Table handle: row queries and single-record CRUD.

A table starts unmapped. auto_map() fetches its fields and attaches a
TableMapper; from then on records are sent with ``field_<id>`` keys and
returned with field names, and typed targets can be requested.

Two ways exist to get friendly names back: the server-side
``user_field_names`` flag and the client-side mapping. They are not
combined. When a mapping is attached, ``user_field_names`` is never sent,
because the mapping also enables name-based filters, sorting and typed
records.
"""

import warnings
from typing import TYPE_CHECKING, Any, TypeVar, get_origin

import structlog
from pydantic import ValidationError

from baserow_client.errors import DeserializationError, MappingRequiredError, QueryValidationError
from baserow_client.models.request import RowRequest
from baserow_client.models.rows import RowsResponse, TypedRowsResponse
from baserow_client.services.mapper import TableMapper, type_adapter
from baserow_client.services.query import RowRequestBuilder

if TYPE_CHECKING:
    from baserow_client.services.client import Baserow

T = TypeVar("T")

Record = dict[str, Any]


def is_generic_record(target: Any) -> bool:
    return target is dict or get_origin(target) is dict


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


class BaserowTable:
    """Handle on one remote table."""

    def __init__(
        self,
        client: "Baserow",
        table_id: int,
        name: str | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._client = client
        self._id = table_id
        self.name = name
        self._mapper: TableMapper | None = None
        self._logger = (logger or structlog.get_logger(__name__)).bind(table_id=table_id)

    @property
    def id(self) -> int:
        return self._id

    @property
    def mapper(self) -> TableMapper | None:
        return self._mapper

    @property
    def is_mapped(self) -> bool:
        return self._mapper is not None

    def _rows_path(self, row_id: int | None = None) -> str:
        if row_id is None:
            return f"/api/database/rows/table/{self._id}/"
        return f"/api/database/rows/table/{self._id}/{row_id}/"

    async def auto_map(self) -> "BaserowTable":
        """Fetch the table's fields and (re)build the field mapping.

        Returns the table itself so calls can be chained. Re-running replaces
        the mapping in place; a mapped table never becomes unmapped.
        """
        fields = await self._client.table_fields(self._id)

        if self._mapper is None:
            self._mapper = TableMapper(fields, logger=self._logger)
        else:
            self._mapper.map_fields(fields)

        self._logger.info("table_fields_mapped", field_count=len(fields))
        return self

    def query(self) -> RowRequestBuilder:
        """Start building a row query against this table."""
        return RowRequestBuilder(self)

    def rows(self) -> RowRequestBuilder:
        warnings.warn("rows() is deprecated, use query() instead", DeprecationWarning, stacklevel=2)
        return self.query()

    def build_query_params(self, request: RowRequest) -> list[tuple[str, str]]:
        """Encode ``request`` as query parameters, validating pagination first.

        Raises:
            QueryValidationError: If page size or page number is not positive,
                or the offset is negative.
        """
        return self._encode_params(request, self._mapper)

    def _encode_params(self, request: RowRequest, mapper: TableMapper | None) -> list[tuple[str, str]]:
        validate_row_request(request)

        def token(name: str) -> str:
            return mapper.field_token(name) if mapper is not None else name

        params: list[tuple[str, str]] = []

        if request.view_id is not None:
            params.append(("view_id", str(request.view_id)))

        if request.order:
            order_by = ",".join(f"{direction.prefix}{token(field)}" for field, direction in request.order.items())
            params.append(("order_by", order_by))

        for triple in request.filters or []:
            params.append((f"filter__{token(triple.field)}__{triple.filter.as_str()}", triple.value))

        if request.page_size is not None:
            params.append(("size", str(request.page_size)))
        if request.page is not None:
            params.append(("page", str(request.page)))
        if request.offset is not None:
            params.append(("offset", str(request.offset)))

        if request.user_field_names is not None:
            if mapper is None:
                params.append(("user_field_names", _bool_param(request.user_field_names)))
            else:
                self._logger.debug("user_field_names_suppressed", requested=request.user_field_names)

        return params

    async def get(self, request: RowRequest, target: type[T] = Record) -> TypedRowsResponse[T]:
        """Execute a row query and shape the results into ``target``.

        With a mapping attached every record is converted to field names and
        validated individually. Without one the raw results are validated as
        a whole. Exactly one of the two happens per call.

        Raises:
            QueryValidationError: Before any request, for bad pagination.
            RequestError: If the server answers with a non-success status.
            DeserializationError: If the response cannot be shaped into ``target``.
        """
        mapper = self._mapper.snapshot() if self._mapper is not None else None
        params = self._encode_params(request, mapper)

        self._logger.debug("table_query_started", mapped=mapper is not None, param_count=len(params))
        response = await self._client.request("GET", self._rows_path(), params=params)

        try:
            envelope = RowsResponse.model_validate(response.json())
        except ValidationError as exc:
            raise DeserializationError(RowsResponse, str(exc)) from exc

        if mapper is not None:
            results = [mapper.deserialize_row(row, target) for row in envelope.results]
        else:
            try:
                results = type_adapter(list[target]).validate_python(envelope.results)
            except ValidationError as exc:
                raise DeserializationError(target, str(exc)) from exc

        self._logger.debug(
            "table_query_completed",
            count=envelope.count,
            result_count=len(results),
            has_next=envelope.has_next(),
        )

        return TypedRowsResponse(
            count=envelope.count,
            next=envelope.next,
            previous=envelope.previous,
            results=results,
        )

    def _response_params(self, user_field_names: bool | None) -> dict[str, str] | None:
        if user_field_names is None or self._mapper is not None:
            return None
        return {"user_field_names": _bool_param(user_field_names)}

    def _shape_record(self, record: Record) -> Record:
        if self._mapper is None:
            return record
        return self._mapper.convert_to_field_names(record)

    async def create_one(self, data: Record, user_field_names: bool | None = None) -> Record:
        """Create a record and return it as stored by the server.

        Args:
            data: Field values keyed by field name (mapped tables),
                ``field_<id>`` or whatever the server accepts.
            user_field_names: Ask the server for friendly keys. Only sent
                when the table is unmapped.
        """
        body = self._mapper.convert_to_field_ids(data) if self._mapper is not None else data

        response = await self._client.request(
            "POST",
            self._rows_path(),
            params=self._response_params(user_field_names),
            json=body,
        )
        record = self._shape_record(_record_from(response.json()))
        self._logger.info("record_created", record_id=record.get("id"), field_count=len(data))
        return record

    async def get_one(
        self,
        row_id: int,
        target: type[T] = Record,
        user_field_names: bool | None = None,
    ) -> T:
        """Fetch a single record.

        Generic ``dict`` targets work on any table. Any other target needs a
        mapping attached by auto_map().

        Raises:
            MappingRequiredError: For a custom target on an unmapped table,
                before any request is sent.
        """
        mapper = self._mapper
        if mapper is None and not is_generic_record(target):
            raise MappingRequiredError(self._id)

        response = await self._client.request(
            "GET",
            self._rows_path(row_id),
            params=self._response_params(user_field_names),
        )
        record = _record_from(response.json())

        self._logger.debug("record_fetched", record_id=row_id)
        if mapper is not None:
            return mapper.deserialize_row(record, target)
        try:
            return type_adapter(target).validate_python(record)
        except ValidationError as exc:
            raise DeserializationError(target, str(exc)) from exc

    async def update(self, row_id: int, data: Record, user_field_names: bool | None = None) -> Record:
        """Patch a record and return its new state."""
        body = self._mapper.convert_to_field_ids(data) if self._mapper is not None else data

        response = await self._client.request(
            "PATCH",
            self._rows_path(row_id),
            params=self._response_params(user_field_names),
            json=body,
        )
        record = self._shape_record(_record_from(response.json()))
        self._logger.info("record_updated", record_id=row_id, field_count=len(data))
        return record

    async def delete(self, row_id: int) -> None:
        await self._client.request("DELETE", self._rows_path(row_id))
        self._logger.info("record_deleted", record_id=row_id)


def validate_row_request(request: RowRequest) -> None:
    if request.page_size is not None and request.page_size <= 0:
        raise QueryValidationError("page size must be positive")
    if request.page is not None and request.page <= 0:
        raise QueryValidationError("page number must be positive")
    if request.offset is not None and request.offset < 0:
        raise QueryValidationError("offset must not be negative")


def _record_from(payload: Any) -> Record:
    if not isinstance(payload, dict):
        raise DeserializationError(dict, f"expected a JSON object, got {type(payload).__name__}")
    return payload


__all__ = ["BaserowTable", "is_generic_record", "validate_row_request"]
