"""Baserow command line client.

Reads connection settings from BASEROW_* environment variables and prints
JSON to stdout. Useful for inspecting table schemas and rows.
"""

import asyncio
import json
import sys
from typing import Any, Optional

import structlog
import typer

from baserow_client.config import Configuration
from baserow_client.errors import BaserowError
from baserow_client.models.enums import Filter, OrderDirection
from baserow_client.services.client import Baserow
from baserow_client.services.factory import create_client
from baserow_client.services.query import RowRequestBuilder

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    logger_factory=lambda name: structlog.PrintLogger(file=sys.stderr),
    wrapper_class=structlog.BoundLogger,
    context_class=dict,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="baserow",
    help="""Inspect Baserow tables from the command line.

Connection settings come from the environment:

  BASEROW_BASE_URL, BASEROW_API_KEY (or BASEROW_EMAIL and BASEROW_PASSWORD)

Examples:

  # Show the fields of table 1234
  baserow fields 1234

  # List active rows using field names
  baserow rows 1234 --map --filter Status:equal:Active --order -Created""",
    rich_markup_mode="markdown",
)


def parse_filter(expression: str) -> tuple[str, Filter, str]:
    """Parse ``field:operator:value`` into a filter triple.

    The field may not contain ``:``; the value may.
    """
    parts = expression.split(":", 2)
    if len(parts) != 3:
        raise typer.BadParameter(f"expected field:operator:value, got {expression!r}")
    field, operator, value = parts
    try:
        filter_op = Filter(operator)
    except ValueError as exc:
        raise typer.BadParameter(f"unknown filter operator {operator!r}") from exc
    return field, filter_op, value


def parse_order(expression: str) -> tuple[str, OrderDirection]:
    """Parse ``field`` or ``-field`` into a sort key."""
    if expression.startswith("-"):
        return expression[1:], OrderDirection.DESC
    return expression, OrderDirection.ASC


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, default=str))


async def _authenticated_client() -> Baserow:
    client = create_client(Configuration())
    if not client.configuration.has_token() and client.configuration.has_credentials():
        authenticated = await client.token_auth()
        # transport ownership moves to the authenticated client
        return Baserow(authenticated.configuration, http_client=client.http_client, owns_http_client=True)
    return client


def _run(coroutine: Any) -> Any:
    try:
        return asyncio.run(coroutine)
    except BaserowError as exc:
        logger.error("baserow_command_failed", error=str(exc))
        raise typer.Exit(1) from exc


@app.command()
def fields(
    table_id: int = typer.Argument(..., help="Table to describe"),
) -> None:
    """Show the fields of a table."""

    async def run() -> list[dict[str, Any]]:
        async with await _authenticated_client() as client:
            table_fields = await client.table_fields(table_id)
            return [field.to_payload() for field in table_fields]

    _echo_json(_run(run()))


@app.command()
def rows(
    table_id: int = typer.Argument(..., help="Table to query"),
    auto_map: bool = typer.Option(
        False,
        "--map",
        "-m",
        help="Fetch the schema first and use field names in filters, sorting and output",
    ),
    view: Optional[int] = typer.Option(None, "--view", "-v", help="Query through this view"),
    size: int = typer.Option(100, "--size", "-n", help="Rows per page"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    filters: Optional[list[str]] = typer.Option(
        None,
        "--filter",
        "-f",
        help="Filter as field:operator:value, may be repeated",
    ),
    order: Optional[list[str]] = typer.Option(
        None,
        "--order",
        "-o",
        help="Sort field, prefix with - for descending, may be repeated",
    ),
    user_field_names: bool = typer.Option(
        False,
        "--user-field-names",
        help="Ask the server for field names (ignored with --map)",
    ),
) -> None:
    """List rows of a table."""
    parsed_filters = [parse_filter(expression) for expression in filters or []]
    parsed_order = [parse_order(expression) for expression in order or []]

    async def run() -> dict[str, Any]:
        async with await _authenticated_client() as client:
            table = client.table_by_id(table_id)
            if auto_map:
                await table.auto_map()

            builder: RowRequestBuilder = table.query().size(size).page(page)
            if view is not None:
                builder = builder.view(view)
            if user_field_names:
                builder = builder.user_field_names(True)
            for field, filter_op, value in parsed_filters:
                builder = builder.filter_by(field, filter_op, value)
            for field, direction in parsed_order:
                builder = builder.order_by(field, direction)

            response = await builder.get()
            return response.model_dump()

    logger.info("listing_rows", table_id=table_id, auto_map=auto_map, size=size, page=page)
    _echo_json(_run(run()))


@app.command()
def row(
    table_id: int = typer.Argument(..., help="Table containing the row"),
    row_id: int = typer.Argument(..., help="Row to fetch"),
    auto_map: bool = typer.Option(False, "--map", "-m", help="Return field names instead of field ids"),
) -> None:
    """Fetch a single row."""

    async def run() -> dict[str, Any]:
        async with await _authenticated_client() as client:
            table = client.table_by_id(table_id)
            if auto_map:
                await table.auto_map()
            return await table.get_one(row_id)

    _echo_json(_run(run()))


@app.command()
def version() -> None:
    """Show version information."""
    from baserow_client import __version__

    typer.echo(f"baserow-client {__version__}")
