"""Search orchestration over candidate troubleshooting pages.

There is no search index: for each service a fixed list of likely
troubleshooting page URLs is tried, each page is fetched (or served from the
cache), parsed and matched against the query. Most candidates do not exist
for most services, so a 404 is an expected outcome, not an error.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

import structlog

from troubledocs.errors import ErrorCode, TroubleDocsError
from troubledocs.matcher import content_matches_query
from troubledocs.models.content import CloudProvider
from troubledocs.models.tools import SearchDocsOutput
from troubledocs.parser import AwsDocumentParser

if TYPE_CHECKING:
    from troubledocs.cache import ContentCache
    from troubledocs.fetcher import Fetcher
    from troubledocs.models.content import ContentRecord
    from troubledocs.models.tools import SearchDocsInput

log = structlog.get_logger()

AWS_DOCS_BASE_URL = "https://docs.aws.amazon.com"

# service id -> guide base path on docs.aws.amazon.com
AWS_SERVICE_PATTERNS: dict[str, str] = {
    "iam": "/IAM/latest/UserGuide/",
    "s3": "/AmazonS3/latest/userguide/",
    "lambda": "/lambda/latest/dg/",
    "apigateway": "/apigateway/latest/developerguide/",
    "cloudwatch": "/AmazonCloudWatch/latest/",
    "ec2": "/AWSEC2/latest/UserGuide/",
    "rds": "/AmazonRDS/latest/UserGuide/",
    "dynamodb": "/amazondynamodb/latest/developerguide/",
}

TROUBLESHOOTING_PAGES: tuple[str, ...] = (
    "troubleshoot.html",
    "troubleshoot-access-denied.html",
    "troubleshoot-policies.html",
    "troubleshoot-roles.html",
    "security_iam_troubleshoot.html",
    "troubleshoot-403-errors.html",
    "troubleshoot-permissions.html",
)


def candidate_urls(service: str) -> list[str]:
    """Return the troubleshooting page URLs tried for *service*, in order."""
    pattern = AWS_SERVICE_PATTERNS.get(service)
    if pattern is None:
        return []
    base_url = f"{AWS_DOCS_BASE_URL}{pattern}"
    return [f"{base_url}{page}" for page in TROUBLESHOOTING_PAGES]


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class CloudDocsSearcher:
    """Runs a search request against cached or freshly fetched pages.

    ``max_concurrency`` bounds how many candidate pages of one service are
    fetched at once. Results are always assembled in candidate order.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        cache: ContentCache,
        parser: AwsDocumentParser | None = None,
        max_concurrency: int = 1,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._parser = parser or AwsDocumentParser()
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def search(self, request: SearchDocsInput) -> SearchDocsOutput:
        """Search documentation. Never raises; failures come back in ``error``."""
        start = time.perf_counter()
        try:
            if request.provider != CloudProvider.AWS:
                return SearchDocsOutput(
                    results=[],
                    total_results=0,
                    search_time_ms=_elapsed_ms(start),
                    error=f"Provider {request.provider} not yet supported",
                )
            results = await self._search_aws(request)
        except Exception as exc:
            log.error("search_failed", query=request.query, exc_info=True)
            return SearchDocsOutput(
                results=[],
                total_results=0,
                search_time_ms=_elapsed_ms(start),
                error=f"Error searching cloud provider documentation: {exc}",
            )

        log.info(
            "search_complete",
            query=request.query,
            service=request.service,
            results=len(results),
        )
        return SearchDocsOutput(
            results=results,
            total_results=len(results),
            search_time_ms=_elapsed_ms(start),
        )

    async def _search_aws(self, request: SearchDocsInput) -> list[ContentRecord]:
        services = [request.service] if request.service else list(AWS_SERVICE_PATTERNS)
        results: list[ContentRecord] = []

        for service in services:
            if len(results) >= request.max_results:
                break
            if service not in AWS_SERVICE_PATTERNS:
                log.info("unknown_service", service=service)
                continue
            try:
                matches = await self._search_service(service, request)
            except Exception:
                log.warning("service_search_failed", service=service, exc_info=True)
                continue
            results.extend(matches[: request.max_results - len(results)])

        return results

    async def _search_service(
        self, service: str, request: SearchDocsInput
    ) -> list[ContentRecord]:
        records = await asyncio.gather(*(self._load(url) for url in candidate_urls(service)))
        return [
            record
            for record in records
            if record is not None
            and content_matches_query(record, request.query, request.category)
        ]

    async def _load(self, url: str) -> ContentRecord | None:
        """Return the record for *url* from cache, or fetch, parse and cache it."""
        cached = self._cache.get(url)
        if cached is not None:
            log.debug("cache_hit", url=url)
            return cached

        async with self._semaphore:
            try:
                html = await self._fetcher.fetch(url)
            except TroubleDocsError as exc:
                if exc.code == ErrorCode.PAGE_NOT_FOUND:
                    log.debug("page_not_found", url=url)
                else:
                    log.warning("fetch_failed", url=url, code=exc.code, error=exc.message)
                return None
            except Exception:
                log.warning("fetch_failed", url=url, exc_info=True)
                return None

        record = self._parser.parse(html, url)
        if record is None:
            # The parser has already logged the cause.
            return None
        self._cache.put(url, record)
        return record
