"""MCP server exposing the cloud documentation search tool.

Run with ``python -m troubledocs.server`` (stdio by default, or
``TROUBLEDOCS__SERVER__TRANSPORT=http``).
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import structlog
from mcp.server.fastmcp import Context, FastMCP
from pydantic import ValidationError

from troubledocs import __version__
from troubledocs.cache import ContentCache
from troubledocs.config import Settings
from troubledocs.errors import ErrorCode, TroubleDocsError
from troubledocs.fetcher import Fetcher, build_http_client
from troubledocs.formatting import format_search_output
from troubledocs.logging_config import configure_logging
from troubledocs.models.tools import SearchDocsInput
from troubledocs.search import CloudDocsSearcher
from troubledocs.state import AppState

log = structlog.get_logger()


def build_state(settings: Settings, http_client: httpx.AsyncClient | None = None) -> AppState:
    client = http_client or build_http_client(settings.fetcher)
    fetcher = Fetcher(client, settings.fetcher)
    cache = ContentCache(ttl_hours=settings.cache.ttl_hours)
    searcher = CloudDocsSearcher(
        fetcher,
        cache,
        max_concurrency=settings.search.max_concurrency,
    )
    return AppState(
        settings=settings,
        http_client=client,
        cache=cache,
        fetcher=fetcher,
        searcher=searcher,
    )


def _invalid_input(exc: ValidationError) -> str:
    message = "; ".join(err["msg"] for err in exc.errors())
    error = TroubleDocsError(ErrorCode.INVALID_INPUT, message)
    return json.dumps(error.to_envelope())


async def run_search_tool(
    state: AppState,
    query: str,
    provider: str = "aws",
    service: str | None = None,
    category: str | None = None,
    max_results: int | None = None,
) -> str:
    """Validate tool arguments, run the search and render Markdown."""
    try:
        request = SearchDocsInput(
            query=query,
            provider=provider,
            service=service,
            category=category,
            max_results=(
                state.settings.search.default_max_results if max_results is None else max_results
            ),
        )
    except ValidationError as exc:
        log.info("invalid_tool_input", errors=exc.error_count())
        return _invalid_input(exc)

    output = await state.searcher.search(request)
    return format_search_output(output)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[AppState]:
    settings = Settings()
    configure_logging(settings.logging)
    state = build_state(settings)
    log.info("server_starting", version=__version__, transport=settings.server.transport)
    try:
        yield state
    finally:
        await state.http_client.aclose()
        log.info("server_stopped")


mcp = FastMCP("troubledocs", lifespan=lifespan)


@mcp.tool()
async def search_cloud_docs(
    ctx: Context,
    query: str,
    provider: str = "aws",
    service: str | None = None,
    category: str | None = None,
    max_results: int | None = None,
) -> str:
    """Search cloud provider troubleshooting documentation.

    Args:
        query: Text to look for in page titles, descriptions and keywords.
        provider: Cloud provider ("aws", "azure", "gcp"). Only "aws" is supported.
        service: Optional service id such as "iam", "s3" or "lambda".
        category: Optional category filter such as "access-denied" or "permissions".
        max_results: Maximum number of pages to return (1-50).
    """
    state: AppState = ctx.request_context.lifespan_context
    return await run_search_tool(state, query, provider, service, category, max_results)


def main() -> None:
    settings = Settings()
    if settings.server.transport == "http":
        mcp.settings.host = settings.server.host
        mcp.settings.port = settings.server.port
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
