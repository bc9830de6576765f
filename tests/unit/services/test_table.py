"""Unit tests for BaserowTable queries and record operations."""

from typing import Any

import pytest
from pydantic import BaseModel

from baserow_client.errors import (
    DeserializationError,
    MappingRequiredError,
    QueryValidationError,
    RequestError,
)
from baserow_client.models.enums import Filter, OrderDirection
from baserow_client.models.request import RowRequest
from baserow_client.services.client import Baserow

ROWS_PATH = "/api/database/rows/table/1234/"
FIELDS_PATH = "/api/database/fields/table/1234/"


class Person(BaseModel):
    Name: str
    Age: int
    Email: str | None = None


def _rows_payload(results: list[dict[str, Any]], count: int | None = None, next_url: str | None = None) -> dict:
    return {
        "count": len(results) if count is None else count,
        "next": next_url,
        "previous": None,
        "results": results,
    }


@pytest.fixture
async def mapped_table(client: Baserow, server, schema):
    server.add("GET", FIELDS_PATH, schema)
    table = await client.table_by_id(1234).auto_map()
    server.requests.clear()
    return table


class TestAutoMap:
    """Tests for schema discovery."""

    async def test_auto_map_attaches_mapper(self, client: Baserow, server, schema) -> None:
        server.add("GET", FIELDS_PATH, schema)
        table = client.table_by_id(1234)
        assert not table.is_mapped

        returned = await table.auto_map()

        assert returned is table
        assert table.is_mapped
        assert table.mapper.get_field_id("Age") == 2
        assert server.last_request.headers["Authorization"] == "Token 123"

    async def test_rerunning_auto_map_replaces_mapping(self, client: Baserow, server, schema, field_factory) -> None:
        server.add("GET", FIELDS_PATH, schema)
        table = await client.table_by_id(1234).auto_map()
        mapper = table.mapper

        server.add("GET", FIELDS_PATH, [field_factory(7, "Title")])
        await table.auto_map()

        assert table.is_mapped
        assert table.mapper is mapper
        assert table.mapper.get_field_id("Title") == 7
        assert table.mapper.get_field_id("Name") is None

    async def test_failed_discovery_leaves_table_unmapped(self, client: Baserow, server) -> None:
        server.add("GET", FIELDS_PATH, {"error": "ERROR_TABLE_DOES_NOT_EXIST"}, status_code=404)
        table = client.table_by_id(1234)

        with pytest.raises(RequestError):
            await table.auto_map()

        assert not table.is_mapped


class TestQueryEncoding:
    """Tests for query parameter encoding."""

    async def test_default_pagination_is_sent(self, client: Baserow, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([]))

        await client.table_by_id(1234).query().get()

        params = server.last_request.url.params
        assert params["size"] == "100"
        assert params["page"] == "1"
        assert "user_field_names" not in params

    async def test_filter_on_mapped_table_uses_field_id(self, mapped_table, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([]))

        await mapped_table.query().filter_by("Age", Filter.HIGHER_THAN, "18").get()

        assert server.last_request.url.params["filter__field_2__higher_than"] == "18"

    async def test_unmapped_filter_field_passes_through(self, mapped_table, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([]))

        await mapped_table.query().filter_by("Unknown", Filter.EQUAL, "x").get()

        assert server.last_request.url.params["filter__Unknown__equal"] == "x"

    async def test_filter_on_unmapped_table_uses_raw_name(self, client: Baserow, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([]))

        await client.table_by_id(1234).query().filter_by("field_2", Filter.LOWER_THAN, "5").get()

        assert server.last_request.url.params["filter__field_2__lower_than"] == "5"

    async def test_order_by_translates_and_prefixes(self, mapped_table, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([]))

        await (
            mapped_table.query()
            .order_by("Age", OrderDirection.DESC)
            .order_by("Name", OrderDirection.ASC)
            .order_by("Unknown", OrderDirection.DESC)
            .get()
        )

        assert server.last_request.url.params["order_by"] == "-field_2,field_1,-Unknown"

    async def test_view_offset_and_page_are_all_sent(self, client: Baserow, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([]))

        await client.table_by_id(1234).query().view(42).page(2).offset(10).size(5).get()

        params = server.last_request.url.params
        assert params["view_id"] == "42"
        assert params["page"] == "2"
        assert params["offset"] == "10"
        assert params["size"] == "5"

    async def test_user_field_names_sent_when_unmapped(self, client: Baserow, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([]))

        await client.table_by_id(1234).query().user_field_names(True).get()

        assert server.last_request.url.params["user_field_names"] == "true"

    async def test_user_field_names_suppressed_when_mapped(self, mapped_table, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([]))

        await mapped_table.query().user_field_names(True).get()

        assert "user_field_names" not in server.last_request.url.params

    async def test_build_query_params_repeats_filters(self, client: Baserow) -> None:
        table = client.table_by_id(1234)
        request = (
            RowRequest()
            .with_filter("Name", Filter.CONTAINS, "a")
            .with_filter("Name", Filter.CONTAINS_NOT, "b")
        )

        params = table.build_query_params(request)

        assert ("filter__Name__contains", "a") in params
        assert ("filter__Name__contains_not", "b") in params


class TestQueryValidation:
    """Pagination checks happen before any request."""

    async def test_zero_page_size_fails_before_request(self, client: Baserow, server) -> None:
        with pytest.raises(QueryValidationError, match="page size must be positive"):
            await client.table_by_id(1234).query().size(0).get()

        assert server.requests == []

    async def test_zero_page_fails_before_request(self, client: Baserow, server) -> None:
        with pytest.raises(QueryValidationError, match="page number must be positive"):
            await client.table_by_id(1234).query().page(0).get()

        assert server.requests == []

    async def test_negative_offset_fails_before_request(self, client: Baserow, server) -> None:
        with pytest.raises(QueryValidationError):
            await client.table_by_id(1234).query().offset(-1).get()

        assert server.requests == []

    async def test_validation_error_is_a_value_error(self, client: Baserow) -> None:
        with pytest.raises(ValueError):
            await client.table_by_id(1234).query().size(-5).get()


class TestQueryResponseShaping:
    """Tests for the mapped and unmapped response paths."""

    async def test_mapped_query_returns_typed_rows(self, mapped_table, server) -> None:
        server.add(
            "GET",
            ROWS_PATH,
            _rows_payload(
                [
                    {"id": 1, "order": "1.00", "field_1": "Ada", "field_2": 36, "field_3": "ada@example.com"},
                    {"id": 2, "order": "2.00", "field_1": "Grace", "field_2": 45, "field_3": None},
                ]
            ),
        )

        response = await mapped_table.query().get(Person)

        assert response.count == 2
        assert response.results == [
            Person(Name="Ada", Age=36, Email="ada@example.com"),
            Person(Name="Grace", Age=45, Email=None),
        ]

    async def test_mapped_query_with_generic_target_returns_named_dicts(self, mapped_table, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([{"id": 1, "field_1": "Ada", "field_99": "x"}]))

        response = await mapped_table.query().get()

        assert response.results == [{"id": 1, "Name": "Ada", "field_99": "x"}]

    async def test_unmapped_query_returns_raw_records(self, client: Baserow, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([{"id": 1, "field_1": "Ada"}], next_url="https://next"))

        response = await client.table_by_id(1234).query().get()

        assert response.results == [{"id": 1, "field_1": "Ada"}]
        assert response.has_next()

    async def test_unmapped_query_validates_friendly_names_directly(self, client: Baserow, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([{"id": 1, "Name": "Ada", "Age": 36}]))

        response = await client.table_by_id(1234).query().user_field_names(True).get(Person)

        assert response.results == [Person(Name="Ada", Age=36)]

    async def test_unmapped_query_with_id_keys_fails_for_typed_target(self, client: Baserow, server) -> None:
        server.add("GET", ROWS_PATH, _rows_payload([{"id": 1, "field_1": "Ada", "field_2": 36}]))

        with pytest.raises(DeserializationError):
            await client.table_by_id(1234).query().get(Person)

    async def test_one_bad_record_fails_the_whole_query(self, mapped_table, server) -> None:
        server.add(
            "GET",
            ROWS_PATH,
            _rows_payload([{"field_1": "Ada", "field_2": 36}, {"field_1": "Grace"}]),
        )

        with pytest.raises(DeserializationError):
            await mapped_table.query().get(Person)

    @pytest.mark.parametrize("record", [1, None, "row"])
    async def test_non_object_record_is_a_deserialization_error(self, client: Baserow, server, record) -> None:
        server.add("GET", ROWS_PATH, {"count": 1, "results": [record]})

        with pytest.raises(DeserializationError):
            await client.table_by_id(1234).query().get()

    async def test_missing_count_is_allowed(self, client: Baserow, server) -> None:
        server.add("GET", ROWS_PATH, {"results": [{"id": 1}]})

        response = await client.table_by_id(1234).query().view(3).get()

        assert response.count is None
        assert response.results == [{"id": 1}]

    async def test_not_found_is_a_request_error(self, client: Baserow, server) -> None:
        with pytest.raises(RequestError) as exc_info:
            await client.table_by_id(9999).query().get()

        assert exc_info.value.status_code == 404
        assert exc_info.value.is_not_found
        assert "ERROR_NOT_FOUND" in exc_info.value.body
        assert not isinstance(exc_info.value, DeserializationError)

    async def test_server_error_body_is_surfaced_unchanged(self, client: Baserow, server) -> None:
        body = '{"error": "ERROR_VIEW_FILTER_TYPE_UNSUPPORTED_FIELD"}'
        server.add("GET", ROWS_PATH, body, status_code=400)

        with pytest.raises(RequestError) as exc_info:
            await client.table_by_id(1234).query().filter_by("Name", Filter.HIGHER_THAN, "1").get()

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == body


class TestRecordOperations:
    """Tests for create, get, update and delete."""

    async def test_create_one_unmapped_sends_data_as_given(self, client: Baserow, server) -> None:
        server.add("POST", ROWS_PATH, {"id": 1234, "field_1": "test"})

        record = await client.table_by_id(1234).create_one({"field_1": "test"})

        assert record == {"id": 1234, "field_1": "test"}
        assert server.last_json() == {"field_1": "test"}
        assert "user_field_names" not in server.last_request.url.params

    async def test_create_one_unmapped_passes_user_field_names(self, client: Baserow, server) -> None:
        server.add("POST", ROWS_PATH, {"id": 1, "Name": "Ada"})

        record = await client.table_by_id(1234).create_one({"Name": "Ada"}, user_field_names=True)

        assert record == {"id": 1, "Name": "Ada"}
        assert server.last_request.url.params["user_field_names"] == "true"

    async def test_create_one_mapped_translates_both_ways(self, mapped_table, server) -> None:
        server.add("POST", ROWS_PATH, {"id": 5, "field_1": "Ada", "field_2": 36})

        record = await mapped_table.create_one({"Name": "Ada", "Age": 36}, user_field_names=True)

        assert server.last_json() == {"field_1": "Ada", "field_2": 36}
        assert "user_field_names" not in server.last_request.url.params
        assert record == {"id": 5, "Name": "Ada", "Age": 36}

    async def test_get_one_unmapped_returns_dict(self, client: Baserow, server) -> None:
        server.add("GET", f"{ROWS_PATH}5678/", {"id": 5678, "field_1": "test"})

        record = await client.table_by_id(1234).get_one(5678)

        assert record == {"id": 5678, "field_1": "test"}
        assert server.last_request.headers["Authorization"] == "Token 123"

    async def test_get_one_typed_requires_mapping(self, client: Baserow, server) -> None:
        with pytest.raises(MappingRequiredError, match="perform discovery first"):
            await client.table_by_id(1234).get_one(1, Person)

        assert server.requests == []

    async def test_get_one_mapped_returns_typed_record(self, mapped_table, server) -> None:
        server.add("GET", f"{ROWS_PATH}1/", {"id": 1, "field_1": "Ada", "field_2": 36, "field_3": None})

        person = await mapped_table.get_one(1, Person)

        assert person == Person(Name="Ada", Age=36, Email=None)

    async def test_get_one_mapped_generic_returns_named_dict(self, mapped_table, server) -> None:
        server.add("GET", f"{ROWS_PATH}1/", {"id": 1, "field_1": "Ada"})

        record = await mapped_table.get_one(1)

        assert record == {"id": 1, "Name": "Ada"}

    async def test_update_mapped_translates_both_ways(self, mapped_table, server) -> None:
        server.add("PATCH", f"{ROWS_PATH}5678/", {"id": 5678, "field_1": "updated"})

        record = await mapped_table.update(5678, {"Name": "updated"})

        assert server.last_request.method == "PATCH"
        assert server.last_json() == {"field_1": "updated"}
        assert record == {"id": 5678, "Name": "updated"}

    async def test_update_unmapped(self, client: Baserow, server) -> None:
        server.add("PATCH", f"{ROWS_PATH}5678/", {"id": 5678, "field_1": "updated"})

        record = await client.table_by_id(1234).update(5678, {"field_1": "updated"}, user_field_names=False)

        assert record == {"id": 5678, "field_1": "updated"}
        assert server.last_request.url.params["user_field_names"] == "false"

    async def test_delete(self, client: Baserow, server) -> None:
        server.add("DELETE", f"{ROWS_PATH}5678/", None, status_code=204)

        result = await client.table_by_id(1234).delete(5678)

        assert result is None
        assert server.last_request.method == "DELETE"

    async def test_delete_missing_row_raises(self, client: Baserow, server) -> None:
        with pytest.raises(RequestError) as exc_info:
            await client.table_by_id(1234).delete(1)

        assert exc_info.value.status_code == 404
