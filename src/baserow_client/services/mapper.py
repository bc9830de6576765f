"""Bidirectional mapping between Baserow field ids and field names.

Baserow addresses columns by ``field_<id>`` keys unless asked for friendly
names. TableMapper keeps both directions of the mapping for one table and
rewrites whole records between the two representations.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError

from baserow_client.errors import DeserializationError
from baserow_client.models.field import TableField

T = TypeVar("T")

FIELD_KEY_PREFIX = "field_"


@dataclass(frozen=True)
class _FieldIndex:
    fields: tuple[TableField, ...] = ()
    ids_to_names: dict[int, str] = field(default_factory=dict)
    names_to_ids: dict[str, int] = field(default_factory=dict)


@lru_cache(maxsize=128)
def _adapter_for(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def type_adapter(target: Any) -> TypeAdapter:
    """Return a cached TypeAdapter for ``target``, building one if it is unhashable."""
    try:
        return _adapter_for(target)
    except TypeError:
        return TypeAdapter(target)


def field_key(field_id: int) -> str:
    return f"{FIELD_KEY_PREFIX}{field_id}"


def parse_field_key(key: str) -> int | None:
    """Extract the numeric id from ``"12"`` or ``"field_12"``; None otherwise."""
    candidate = key[len(FIELD_KEY_PREFIX) :] if key.startswith(FIELD_KEY_PREFIX) else key
    if not (candidate.isascii() and candidate.isdigit()):
        return None
    return int(candidate)


class TableMapper:
    """Field id/name registry for a single table.

    The registry is an immutable snapshot replaced wholesale by map_fields,
    so concurrent readers see either the previous mapping or the new one.
    When two fields share a name the last one wins in name lookups.
    """

    def __init__(
        self,
        fields: list[TableField] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._logger = logger or structlog.get_logger(__name__)
        self._index = _FieldIndex()
        if fields is not None:
            self.map_fields(fields)

    def map_fields(self, fields: list[TableField]) -> None:
        """Replace the registry with one built from ``fields``."""
        ids_to_names: dict[int, str] = {}
        names_to_ids: dict[str, int] = {}
        for table_field in fields:
            ids_to_names[table_field.id] = table_field.name
            names_to_ids[table_field.name] = table_field.id

        self._index = _FieldIndex(
            fields=tuple(fields),
            ids_to_names=ids_to_names,
            names_to_ids=names_to_ids,
        )

        if len(names_to_ids) != len(ids_to_names):
            self._logger.warning(
                "duplicate_field_names",
                field_count=len(ids_to_names),
                distinct_names=len(names_to_ids),
            )

    def snapshot(self) -> "TableMapper":
        """Return a mapper frozen at the current registry, unaffected by later map_fields calls."""
        frozen = TableMapper(logger=self._logger)
        frozen._index = self._index
        return frozen

    def get_field_id(self, name: str) -> int | None:
        return self._index.names_to_ids.get(name)

    def get_field_name(self, field_id: int) -> str | None:
        return self._index.ids_to_names.get(field_id)

    def get_fields(self) -> list[TableField]:
        return list(self._index.fields)

    def field_token(self, name: str) -> str:
        """Return ``field_<id>`` for a known name, or the name unchanged."""
        field_id = self.get_field_id(name)
        if field_id is None:
            return name
        return field_key(field_id)

    def convert_to_field_ids(self, record: dict[str, Any]) -> dict[str, Any]:
        """Rewrite name keys as ``field_<id>`` keys. Values are untouched.

        Keys without a mapping (``id``, ``order``, keys already in
        ``field_<id>`` form) are kept verbatim, so applying this twice is safe.
        """
        index = self._index
        converted: dict[str, Any] = {}
        for key, value in record.items():
            field_id = index.names_to_ids.get(key)
            converted[field_key(field_id) if field_id is not None else key] = value
        return converted

    def convert_to_field_names(self, record: dict[str, Any]) -> dict[str, Any]:
        """Rewrite ``"12"`` and ``"field_12"`` keys as field names.

        Both shapes have been observed in server responses. Keys that do not
        resolve are kept verbatim.
        """
        index = self._index
        converted: dict[str, Any] = {}
        for key, value in record.items():
            field_id = parse_field_key(key)
            name = index.ids_to_names.get(field_id) if field_id is not None else None
            converted[name if name is not None else key] = value
        return converted

    def deserialize_row(self, record: dict[str, Any], target: type[T]) -> T:
        """Convert ``record`` to name keys and validate it into ``target``.

        Raises:
            DeserializationError: If the record does not fit ``target``.
        """
        named = self.convert_to_field_names(record)
        try:
            return type_adapter(target).validate_python(named)
        except ValidationError as exc:
            raise DeserializationError(target, str(exc)) from exc


__all__ = ["FIELD_KEY_PREFIX", "TableMapper", "field_key", "parse_field_key", "type_adapter"]
