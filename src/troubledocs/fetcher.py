"""HTTP fetcher for documentation pages.

Redirects are followed manually so that every hop is re-checked against the
domain allowlist. No retries: a failed fetch raises ``TroubleDocsError`` and
the caller decides what to do with it.
"""

from __future__ import annotations

import ipaddress
from urllib.parse import urlparse

import httpx
import structlog

from troubledocs.config import FetcherSettings
from troubledocs.errors import ErrorCode, TroubleDocsError

log = structlog.get_logger()


def _base_domain(hostname: str) -> str:
    """Reduce a hostname to its last two labels: docs.aws.amazon.com -> amazon.com."""
    labels = hostname.rstrip(".").split(".")
    return ".".join(labels[-2:])


def _is_private_ip(hostname: str) -> bool:
    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return address.is_private or address.is_loopback or address.is_link_local


def build_allowlist(domains: list[str]) -> frozenset[str]:
    return frozenset(_base_domain(d.lower()) for d in domains if d)


def is_url_allowed(url: str, allowlist: frozenset[str]) -> bool:
    """Return True if *url* is http(s), not a private IP literal and allowlisted."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    hostname = parsed.hostname.lower()
    if _is_private_ip(hostname):
        return False
    return _base_domain(hostname) in allowlist


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        timeout=settings.timeout_seconds,
        follow_redirects=False,
        headers={"User-Agent": settings.user_agent},
    )


class Fetcher:
    """Fetches page bodies through a shared ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient, settings: FetcherSettings | None = None) -> None:
        self._client = client
        self._settings = settings or FetcherSettings()
        self._allowlist = build_allowlist(self._settings.allowed_domains)

    async def fetch(self, url: str) -> str:
        """GET *url* and return the body text.

        Raises:
            TroubleDocsError: ``PAGE_NOT_FOUND`` on 404, ``PAGE_FETCH_FAILED`` on
                other non-2xx statuses or transport errors, ``URL_NOT_ALLOWED``
                or ``TOO_MANY_REDIRECTS`` when the redirect chain is rejected.
        """
        current = url
        for _ in range(self._settings.max_redirects + 1):
            if not is_url_allowed(current, self._allowlist):
                raise TroubleDocsError(ErrorCode.URL_NOT_ALLOWED, f"URL not allowed: {current}")

            try:
                response = await self._client.get(current)
            except httpx.HTTPError as exc:
                raise TroubleDocsError(
                    ErrorCode.PAGE_FETCH_FAILED,
                    f"Failed to fetch {current}: {exc}",
                    recoverable=True,
                ) from exc

            if response.is_redirect:
                location = response.headers["location"]
                current = str(httpx.URL(current).join(location))
                log.debug("fetch_redirect", url=url, location=current)
                continue

            if response.status_code == 404:
                raise TroubleDocsError(ErrorCode.PAGE_NOT_FOUND, f"Page not found: {current}")
            if not response.is_success:
                raise TroubleDocsError(
                    ErrorCode.PAGE_FETCH_FAILED,
                    f"HTTP {response.status_code} fetching {current}",
                    recoverable=True,
                )

            log.debug("fetch_complete", url=current, status=response.status_code)
            return response.text

        raise TroubleDocsError(
            ErrorCode.TOO_MANY_REDIRECTS,
            f"Exceeded {self._settings.max_redirects} redirects fetching {url}",
        )
