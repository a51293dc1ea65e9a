"""End-to-end search through the real fetcher, parser and cache."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import respx

from troubledocs.formatting import NO_RESULTS_MESSAGE
from troubledocs.models.content import CloudProvider, TroubleshootingCategory
from troubledocs.models.tools import SearchDocsInput
from troubledocs.server import run_search_tool

if TYPE_CHECKING:
    from troubledocs.state import AppState

ACCESS_DENIED_URL = (
    "https://docs.aws.amazon.com/IAM/latest/UserGuide/troubleshoot-access-denied.html"
)
DOCS_PREFIX = "https://docs.aws.amazon.com/"


def _mock_docs(router: respx.MockRouter, html: str) -> respx.Route:
    page = router.get(ACCESS_DENIED_URL).mock(
        return_value=httpx.Response(200, text=html)
    )
    router.get(url__startswith=DOCS_PREFIX).mock(return_value=httpx.Response(404))
    return page


class TestSearchFlow:
    async def test_single_page_found_and_parsed(
        self, app_state: AppState, sample_page_html: str
    ) -> None:
        with respx.mock(assert_all_called=False) as router:
            page = _mock_docs(router, sample_page_html)
            output = await app_state.searcher.search(
                SearchDocsInput(query="troubleshoot", service="iam", max_results=1)
            )

        assert output.error is None
        assert output.total_results == 1
        record = output.results[0]
        assert record.url == ACCESS_DENIED_URL
        assert record.service == "iam"
        assert record.category == TroubleshootingCategory.ACCESS_DENIED
        assert record.troubleshooting_steps
        assert page.call_count == 1
        assert app_state.cache.get(ACCESS_DENIED_URL) is not None

    async def test_repeat_search_hits_cache(
        self, app_state: AppState, sample_page_html: str
    ) -> None:
        request = SearchDocsInput(query="troubleshoot", service="iam")
        with respx.mock(assert_all_called=False) as router:
            page = _mock_docs(router, sample_page_html)
            await app_state.searcher.search(request)
            await app_state.searcher.search(request)

        assert page.call_count == 1

    async def test_server_error_page_is_skipped(self, app_state: AppState) -> None:
        with respx.mock(assert_all_called=False) as router:
            router.get(ACCESS_DENIED_URL).mock(return_value=httpx.Response(503))
            router.get(url__startswith=DOCS_PREFIX).mock(return_value=httpx.Response(404))
            output = await app_state.searcher.search(
                SearchDocsInput(query="troubleshoot", service="iam")
            )

        assert output.error is None
        assert output.results == []

    async def test_unsupported_provider_makes_no_requests(self, app_state: AppState) -> None:
        with respx.mock(assert_all_called=False) as router:
            route = router.get(url__startswith=DOCS_PREFIX).mock(
                return_value=httpx.Response(404)
            )
            output = await app_state.searcher.search(
                SearchDocsInput(query="troubleshoot", provider=CloudProvider.AZURE)
            )

        assert output.error
        assert output.results == []
        assert route.call_count == 0


class TestSearchTool:
    async def test_renders_markdown(
        self, app_state: AppState, sample_page_html: str
    ) -> None:
        with respx.mock(assert_all_called=False) as router:
            _mock_docs(router, sample_page_html)
            text = await run_search_tool(app_state, "troubleshoot", service="IAM")

        assert text.startswith("Found 1 result(s) in ")
        assert "Troubleshoot access denied errors" in text
        assert ACCESS_DENIED_URL in text

    async def test_no_results_message(
        self, app_state: AppState, sample_page_html: str
    ) -> None:
        with respx.mock(assert_all_called=False) as router:
            _mock_docs(router, sample_page_html)
            text = await run_search_tool(app_state, "kinesis shard", service="iam")

        assert text == NO_RESULTS_MESSAGE

    async def test_unsupported_provider_rendered_as_error(self, app_state: AppState) -> None:
        text = await run_search_tool(app_state, "troubleshoot", provider="gcp")
        assert text == "Error: Provider gcp not yet supported"

    async def test_empty_query_returns_envelope(self, app_state: AppState) -> None:
        text = await run_search_tool(app_state, "   ")
        envelope = json.loads(text)
        assert envelope["error"]["code"] == "INVALID_INPUT"
        assert envelope["error"]["recoverable"] is False
        assert "query must not be empty" in envelope["error"]["message"]

    async def test_out_of_range_max_results_returns_envelope(self, app_state: AppState) -> None:
        text = await run_search_tool(app_state, "troubleshoot", max_results=99)
        assert json.loads(text)["error"]["code"] == "INVALID_INPUT"

    async def test_zero_max_results_rejected_without_fetching(self, app_state: AppState) -> None:
        with respx.mock(assert_all_called=False) as router:
            route = router.get(url__startswith=DOCS_PREFIX).mock(
                return_value=httpx.Response(404)
            )
            text = await run_search_tool(app_state, "troubleshoot", max_results=0)

        envelope = json.loads(text)
        assert envelope["error"]["code"] == "INVALID_INPUT"
        assert "max_results must be >= 1" in envelope["error"]["message"]
        assert route.call_count == 0

    async def test_omitted_max_results_uses_configured_default(
        self, app_state: AppState, sample_page_html: str
    ) -> None:
        with respx.mock(assert_all_called=False) as router:
            _mock_docs(router, sample_page_html)
            text = await run_search_tool(app_state, "troubleshoot", service="iam")

        assert text.startswith("Found 1 result(s) in ")
